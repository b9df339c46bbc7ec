"""Dashboard figures derived from tenants, bills and rent payments.

Every function here is a pure reducer: it reads its arguments, returns a new
value and treats empty collections as zero/empty.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterable, NamedTuple

from rentbook.engine.records import BillRecord, PaymentStatus, RentPaymentRecord, TenantRecord

ZERO = Decimal(0)


class ReadingStatus(str, Enum):
    """Where an electricity tenant stands for a period."""

    PENDING_READING = "pending_reading"
    BILL_GENERATED = "bill_generated"
    PAID = "paid"


class TenantCounts(NamedTuple):
    total: int
    active: int
    electricity: int
    rent: int


@dataclass(frozen=True)
class DashboardSummary:
    """All dashboard figures for one period."""

    period: str
    total_revenue: Decimal
    electricity_revenue: Decimal
    rent_revenue: Decimal
    pending_bills: int
    paid_bills: int
    outstanding_bills_amount: Decimal
    pending_rent: int
    paid_rent: int
    outstanding_rent_amount: Decimal
    total_units_consumed: Decimal
    tenants_needing_reading: list[TenantRecord]
    tenant_counts: TenantCounts


def _period_of(record: BillRecord | RentPaymentRecord) -> str:
    # Bills carry a period, rent payments a month; both use the same labels
    return record.period if isinstance(record, BillRecord) else record.month


def _in_period(records: Iterable, period: str | None) -> list:
    if period is None:
        return list(records)
    return [r for r in records if _period_of(r) == period]


def _sum_amounts(records: Iterable) -> Decimal:
    return sum((r.amount for r in records), ZERO)


def bills_for_period(bills: Iterable[BillRecord], period: str) -> list[BillRecord]:
    return _in_period(bills, period)


def payments_for_month(payments: Iterable[RentPaymentRecord], month: str) -> list[RentPaymentRecord]:
    return _in_period(payments, month)


def pending_count(records: Iterable, period: str | None = None) -> int:
    """Number of pending records, optionally restricted to one period/month."""
    return sum(1 for r in _in_period(records, period) if r.status == PaymentStatus.PENDING)


def paid_count(records: Iterable, period: str | None = None) -> int:
    """Number of paid records, optionally restricted to one period/month."""
    return sum(1 for r in _in_period(records, period) if r.status == PaymentStatus.PAID)


def outstanding_amount(records: Iterable, period: str | None = None) -> Decimal:
    """Sum of amounts still pending."""
    return _sum_amounts(r for r in _in_period(records, period) if r.status == PaymentStatus.PENDING)


def collected_amount(records: Iterable, period: str | None = None) -> Decimal:
    """Sum of amounts already paid."""
    return _sum_amounts(r for r in _in_period(records, period) if r.status == PaymentStatus.PAID)


def electricity_revenue(bills: Iterable[BillRecord], period: str) -> Decimal:
    return collected_amount(bills, period)


def rent_revenue(payments: Iterable[RentPaymentRecord], period: str) -> Decimal:
    return collected_amount(payments, period)


def total_revenue(
    bills: Iterable[BillRecord],
    payments: Iterable[RentPaymentRecord],
    period: str,
) -> Decimal:
    """Paid bill amounts plus paid rent amounts for one period."""
    return electricity_revenue(bills, period) + rent_revenue(payments, period)


def total_units_consumed(bills: Iterable[BillRecord], period: str) -> Decimal:
    return sum((b.units_consumed for b in bills_for_period(bills, period)), ZERO)


def bill_for_tenant(tenant_id, bills: Iterable[BillRecord], period: str) -> BillRecord | None:
    """The tenant's bill for a period, if one was generated."""
    for bill in bills:
        if bill.tenant_id == tenant_id and bill.period == period:
            return bill
    return None


def payment_for_tenant(
    tenant_id, payments: Iterable[RentPaymentRecord], month: str
) -> RentPaymentRecord | None:
    for payment in payments:
        if payment.tenant_id == tenant_id and payment.month == month:
            return payment
    return None


def tenants_needing_reading(
    tenants: Iterable[TenantRecord],
    bills: Iterable[BillRecord],
    period: str,
) -> list[TenantRecord]:
    """Electricity tenants that have no bill yet for ``period``."""
    billed = {b.tenant_id for b in bills_for_period(bills, period)}
    return [t for t in tenants if t.electricity_service and t.id not in billed]


def reading_status(tenant_id, bills: Iterable[BillRecord], period: str) -> ReadingStatus:
    bill = bill_for_tenant(tenant_id, bills, period)
    if bill is None:
        return ReadingStatus.PENDING_READING
    if bill.status == PaymentStatus.PAID:
        return ReadingStatus.PAID
    return ReadingStatus.BILL_GENERATED


def last_reading_date(tenant_id, bills: Iterable[BillRecord]) -> date | None:
    """Issue date of the tenant's most recent bill, None if never billed."""
    dates = [b.issue_date for b in bills if b.tenant_id == tenant_id]
    return max(dates) if dates else None


def payment_history(
    tenant_id,
    payments: Iterable[RentPaymentRecord],
    exclude_month: str | None = None,
    limit: int = 3,
) -> list[RentPaymentRecord]:
    """Most recent rent payments of a tenant, newest due date first."""
    history = [
        p for p in payments if p.tenant_id == tenant_id and p.month != exclude_month
    ]
    history.sort(key=lambda p: p.due_date, reverse=True)
    return history[:limit]


def tenant_counts(tenants: Iterable[TenantRecord]) -> TenantCounts:
    tenants = list(tenants)
    return TenantCounts(
        total=len(tenants),
        active=sum(1 for t in tenants if t.active),
        electricity=sum(1 for t in tenants if t.electricity_service),
        rent=sum(1 for t in tenants if t.rent_service),
    )


def dashboard_summary(
    tenants: Iterable[TenantRecord],
    bills: Iterable[BillRecord],
    payments: Iterable[RentPaymentRecord],
    period: str,
) -> DashboardSummary:
    """Compute every dashboard figure for ``period`` in one pass over the inputs."""
    tenants = list(tenants)
    period_bills = bills_for_period(bills, period)
    period_payments = payments_for_month(payments, period)

    return DashboardSummary(
        period=period,
        total_revenue=total_revenue(period_bills, period_payments, period),
        electricity_revenue=electricity_revenue(period_bills, period),
        rent_revenue=rent_revenue(period_payments, period),
        pending_bills=pending_count(period_bills),
        paid_bills=paid_count(period_bills),
        outstanding_bills_amount=outstanding_amount(period_bills),
        pending_rent=pending_count(period_payments),
        paid_rent=paid_count(period_payments),
        outstanding_rent_amount=outstanding_amount(period_payments),
        total_units_consumed=total_units_consumed(period_bills, period),
        tenants_needing_reading=tenants_needing_reading(tenants, period_bills, period),
        tenant_counts=tenant_counts(tenants),
    )


__all__ = [
    "ReadingStatus",
    "TenantCounts",
    "DashboardSummary",
    "bills_for_period",
    "payments_for_month",
    "pending_count",
    "paid_count",
    "outstanding_amount",
    "collected_amount",
    "electricity_revenue",
    "rent_revenue",
    "total_revenue",
    "total_units_consumed",
    "bill_for_tenant",
    "payment_for_tenant",
    "tenants_needing_reading",
    "reading_status",
    "last_reading_date",
    "payment_history",
    "tenant_counts",
    "dashboard_summary",
]
