"""Unit tests for meter reading to bill translation."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from rentbook.engine.billing import estimate_bill, generate_bill, latest_reading, to_decimal
from rentbook.engine.periods import PeriodPolicy
from rentbook.engine.records import PaymentStatus, TenantRecord
from rentbook.errors import DataValidationError

ISSUE_DATE = date(2025, 11, 5)


@pytest.fixture
def tenant():
    """Electricity tenant: rate 15, initial reading 1000, never billed."""
    return TenantRecord(
        id=1,
        name="Asha Verma",
        flat_no="A-101",
        electricity_service=True,
        electricity_rate=Decimal("15"),
        initial_meter_reading=Decimal("1000"),
    )


class TestLatestReading:
    def test_prefers_current_reading(self, tenant):
        tenant = replace(tenant, current_meter_reading=Decimal("1200"))
        assert latest_reading(tenant) == Decimal("1200")

    def test_falls_back_to_initial_reading(self, tenant):
        assert latest_reading(tenant) == Decimal("1000")

    def test_zero_without_any_reading(self, tenant):
        tenant = replace(tenant, initial_meter_reading=None)
        assert latest_reading(tenant) == Decimal(0)


class TestGenerateBill:
    """Tests for generate_bill."""

    def test_first_bill_from_initial_reading(self, tenant):
        """Reading 1120 against baseline 1000 at rate 15 bills 120 units for 1800."""
        bill, updated = generate_bill(tenant, 1120, PeriodPolicy.PRIOR_MONTH, today=ISSUE_DATE)

        assert bill.tenant_id == 1
        assert bill.previous_reading == Decimal("1000")
        assert bill.current_reading == Decimal("1120")
        assert bill.units_consumed == Decimal("120")
        assert bill.amount == Decimal("1800")
        assert bill.status == PaymentStatus.PENDING
        assert bill.issue_date == ISSUE_DATE
        assert bill.paid_date is None
        assert bill.period == "Oct 2025"
        assert updated.current_meter_reading == Decimal("1120")

    def test_input_tenant_not_modified(self, tenant):
        generate_bill(tenant, 1120, today=ISSUE_DATE)
        assert tenant.current_meter_reading is None

    def test_next_bill_starts_from_current_reading(self, tenant):
        _, updated = generate_bill(tenant, 1120, today=ISSUE_DATE)
        bill, _ = generate_bill(updated, 1200, today=date(2025, 12, 5))

        assert bill.previous_reading == Decimal("1120")
        assert bill.units_consumed == Decimal("80")
        assert bill.amount == Decimal("1200")
        assert bill.period == "Nov 2025"

    def test_same_month_policy_labels_issue_month(self, tenant):
        bill, _ = generate_bill(tenant, 1120, PeriodPolicy.SAME_MONTH, today=ISSUE_DATE)
        assert bill.period == "Nov 2025"

    def test_amount_is_exact_for_fractional_values(self, tenant):
        tenant = replace(tenant, electricity_rate=Decimal("7.25"))
        bill, _ = generate_bill(tenant, "1033.5", today=ISSUE_DATE)

        assert bill.units_consumed == Decimal("33.5")
        assert bill.amount == Decimal("242.875")

    def test_later_rate_change_does_not_alter_issued_bill(self, tenant):
        bill, updated = generate_bill(tenant, 1120, today=ISSUE_DATE)
        replace(updated, electricity_rate=Decimal("20"))

        assert bill.amount == bill.units_consumed * Decimal("15")

    @pytest.mark.parametrize("reading", [1000, 999, 0, "1000.00"])
    def test_rejects_non_increasing_reading(self, tenant, reading):
        with pytest.raises(DataValidationError):
            generate_bill(tenant, reading, today=ISSUE_DATE)

    def test_rejects_reading_equal_to_current(self, tenant):
        tenant = replace(tenant, current_meter_reading=Decimal("1500"))
        with pytest.raises(DataValidationError):
            generate_bill(tenant, 1500, today=ISSUE_DATE)

    def test_rejects_missing_rate(self, tenant):
        with pytest.raises(DataValidationError, match="rate"):
            generate_bill(replace(tenant, electricity_rate=None), 1120, today=ISSUE_DATE)

    def test_rejects_tenant_without_electricity(self, tenant):
        with pytest.raises(DataValidationError):
            generate_bill(replace(tenant, electricity_service=False), 1120, today=ISSUE_DATE)

    def test_rejects_non_numeric_reading(self, tenant):
        with pytest.raises(DataValidationError):
            generate_bill(tenant, "abc", today=ISSUE_DATE)

    @pytest.mark.parametrize("reading", ["NaN", "sNaN", "Infinity", Decimal("-Infinity")])
    def test_rejects_non_finite_reading(self, tenant, reading):
        with pytest.raises(DataValidationError, match="finite"):
            generate_bill(tenant, reading, today=ISSUE_DATE)

    def test_rejects_reading_with_more_than_two_places(self, tenant):
        with pytest.raises(DataValidationError, match="decimal places"):
            generate_bill(tenant, "1120.555", today=ISSUE_DATE)

    def test_rejects_rate_with_more_than_two_places(self, tenant):
        with pytest.raises(DataValidationError, match="decimal places"):
            generate_bill(replace(tenant, electricity_rate=Decimal("15.125")), 1120, today=ISSUE_DATE)

    def test_two_place_reading_bills_exactly(self, tenant):
        result = generate_bill(
            replace(tenant, electricity_rate=Decimal("7.25")), "1120.55", today=ISSUE_DATE
        )

        assert result.bill.units_consumed == Decimal("120.55")
        assert result.bill.amount == Decimal("873.9875")


class TestEstimateBill:
    def test_estimate_for_higher_reading(self, tenant):
        estimate = estimate_bill(tenant, 1050)
        assert estimate.previous_reading == Decimal("1000")
        assert estimate.units_consumed == Decimal("50")
        assert estimate.amount == Decimal("750")

    def test_estimate_is_zero_for_lower_reading(self, tenant):
        estimate = estimate_bill(tenant, 900)
        assert estimate.units_consumed == Decimal(0)
        assert estimate.amount == Decimal(0)


def test_to_decimal_avoids_float_artefacts():
    assert to_decimal(1.1) == Decimal("1.1")
