"""Billing and payment engine: pure functions over plain records.

Nothing in this package performs I/O or keeps state between calls. Callers
pass every input explicitly and persist the records that come back.
"""

from rentbook.engine.aggregates import (
    DashboardSummary,
    ReadingStatus,
    dashboard_summary,
    outstanding_amount,
    paid_count,
    pending_count,
    tenants_needing_reading,
    total_revenue,
    total_units_consumed,
)
from rentbook.engine.billing import GeneratedBill, estimate_bill, generate_bill, latest_reading
from rentbook.engine.periods import PeriodPolicy, compute_period_label
from rentbook.engine.records import BillRecord, PaymentStatus, RentPaymentRecord, TenantRecord
from rentbook.engine.rent import build_rent_payment
from rentbook.engine.tenants import validate_tenant
from rentbook.engine.transitions import mark_bill_paid, mark_paid, toggle, toggle_rent_payment

__all__ = [
    "BillRecord",
    "DashboardSummary",
    "GeneratedBill",
    "PaymentStatus",
    "PeriodPolicy",
    "ReadingStatus",
    "RentPaymentRecord",
    "TenantRecord",
    "build_rent_payment",
    "compute_period_label",
    "dashboard_summary",
    "estimate_bill",
    "generate_bill",
    "latest_reading",
    "mark_bill_paid",
    "mark_paid",
    "outstanding_amount",
    "paid_count",
    "pending_count",
    "tenants_needing_reading",
    "toggle",
    "toggle_rent_payment",
    "total_revenue",
    "total_units_consumed",
    "validate_tenant",
]
