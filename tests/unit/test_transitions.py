"""Unit tests for pending/paid transitions of bills and rent payments."""

from dataclasses import replace
from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest

from rentbook.engine.records import BillRecord, PaymentStatus, RentPaymentRecord
from rentbook.engine.transitions import mark_bill_paid, mark_paid, toggle, toggle_rent_payment
from rentbook.errors import ConflictError

PAY_DATE = date(2025, 11, 10)


@pytest.fixture
def bill():
    return BillRecord(
        id=7,
        tenant_id=1,
        period="Oct 2025",
        previous_reading=Decimal("1000"),
        current_reading=Decimal("1120"),
        units_consumed=Decimal("120"),
        amount=Decimal("1800"),
        issue_date=date(2025, 11, 5),
    )


@pytest.fixture
def payment():
    return RentPaymentRecord(
        id=3,
        tenant_id=2,
        month="Oct 2025",
        amount=Decimal("8000"),
        due_date=date(2025, 10, 5),
    )


class TestMarkBillPaid:
    def test_marks_pending_bill_paid(self, bill):
        paid = mark_bill_paid(bill, PAY_DATE)

        assert paid.status == PaymentStatus.PAID
        assert paid.paid_date == PAY_DATE

    def test_other_fields_unchanged(self, bill):
        paid = mark_bill_paid(bill, PAY_DATE)
        assert replace(paid, status=PaymentStatus.PENDING, paid_date=None) == bill

    def test_input_record_unchanged(self, bill):
        mark_bill_paid(bill, PAY_DATE)
        assert bill.status == PaymentStatus.PENDING
        assert bill.paid_date is None

    def test_already_paid_bill_is_conflict(self, bill):
        paid = mark_bill_paid(bill, PAY_DATE)
        with pytest.raises(ConflictError):
            mark_bill_paid(paid, date(2025, 11, 12))

    def test_paid_date_defaults_to_today(self, bill):
        with patch("rentbook.engine.clock.today", return_value=date(2025, 11, 20)):
            assert mark_paid(bill).paid_date == date(2025, 11, 20)


class TestToggle:
    def test_pending_to_paid_stamps_date(self, payment):
        toggled = toggle_rent_payment(payment, PAY_DATE)
        assert toggled.status == PaymentStatus.PAID
        assert toggled.paid_date == PAY_DATE

    def test_paid_to_pending_clears_date(self, payment):
        paid = replace(payment, status=PaymentStatus.PAID, paid_date=PAY_DATE)
        toggled = toggle_rent_payment(paid)
        assert toggled.status == PaymentStatus.PENDING
        assert toggled.paid_date is None

    def test_double_toggle_restores_original(self, payment):
        assert toggle(toggle(payment, PAY_DATE), PAY_DATE) == payment

    def test_toggle_keeps_amount_month_and_tenant(self, payment):
        toggled = toggle_rent_payment(payment, PAY_DATE)
        assert (toggled.amount, toggled.month, toggled.tenant_id) == (
            payment.amount,
            payment.month,
            payment.tenant_id,
        )
