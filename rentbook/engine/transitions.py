"""Pending/paid state machine shared by bills and rent payments.

States: PENDING (initial) and PAID. ``mark_paid`` only moves forward;
``toggle`` also allows reverting a mis-marked payment. Transitions return a
new record and never touch the amount, the period/month or the tenant.
"""

from dataclasses import replace
from datetime import date
from typing import TypeVar

from rentbook.engine import clock
from rentbook.engine.records import BillRecord, PaymentStatus, RentPaymentRecord
from rentbook.errors import ConflictError

Payable = TypeVar("Payable", BillRecord, RentPaymentRecord)


def mark_paid(record: Payable, today: date | None = None) -> Payable:
    """Move a pending record to PAID and stamp the paid date.

    Raises:
        ConflictError: If the record is already paid
    """
    if record.status == PaymentStatus.PAID:
        raise ConflictError(
            f"{type(record).__name__} {record.id} is already paid (on {record.paid_date})"
        )
    return replace(
        record,
        status=PaymentStatus.PAID,
        paid_date=today if today is not None else clock.today(),
    )


def mark_pending(record: Payable) -> Payable:
    """Revert a record to PENDING and clear the paid date."""
    return replace(record, status=PaymentStatus.PENDING, paid_date=None)


def toggle(record: Payable, today: date | None = None) -> Payable:
    """Flip PENDING -> PAID (stamping the date) or PAID -> PENDING (clearing it)."""
    if record.status == PaymentStatus.PAID:
        return mark_pending(record)
    return mark_paid(record, today)


def mark_bill_paid(bill: BillRecord, today: date | None = None) -> BillRecord:
    """Mark an electricity bill as paid."""
    return mark_paid(bill, today)


def toggle_rent_payment(payment: RentPaymentRecord, today: date | None = None) -> RentPaymentRecord:
    """Toggle a rent payment between pending and paid."""
    return toggle(payment, today)


__all__ = ["mark_paid", "mark_pending", "toggle", "mark_bill_paid", "toggle_rent_payment"]
