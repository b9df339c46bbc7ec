"""Monthly rent obligations."""

from datetime import date

from rentbook.engine.periods import parse_period_label
from rentbook.engine.records import PaymentStatus, RentPaymentRecord, TenantRecord
from rentbook.errors import DataValidationError


def rent_due_date(month: str, due_day: int | None) -> date:
    """Due date of rent for a month label; a missing due day means the 1st."""
    year, month_number = parse_period_label(month)
    return date(year, month_number, due_day or 1)


def build_rent_payment(tenant: TenantRecord, month: str) -> RentPaymentRecord:
    """Create the pending rent obligation of a tenant for one month.

    The amount is a snapshot of the tenant's monthly rent at creation time.

    Raises:
        DataValidationError: If the tenant has no rent service or no rent amount
    """
    if not tenant.rent_service:
        raise DataValidationError(f"Tenant {tenant.id} has no rent service")
    if tenant.monthly_rent is None:
        raise DataValidationError(f"Monthly rent not set for tenant {tenant.id}")

    return RentPaymentRecord(
        tenant_id=tenant.id,
        month=month,
        amount=tenant.monthly_rent,
        due_date=rent_due_date(month, tenant.rent_due_day),
        status=PaymentStatus.PENDING,
    )


__all__ = ["rent_due_date", "build_rent_payment"]
