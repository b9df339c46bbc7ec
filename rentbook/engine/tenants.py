"""Tenant record invariants checked on add and edit."""

from decimal import Decimal

from rentbook.engine.billing import MONEY_PLACES, RATE_PLACES, READING_PLACES, to_decimal
from rentbook.engine.records import TenantRecord
from rentbook.errors import DataValidationError

MIN_RENT_DUE_DAY = 1
MAX_RENT_DUE_DAY = 28

DECIMAL_PLACES = {
    "electricity_rate": RATE_PLACES,
    "initial_meter_reading": READING_PLACES,
    "current_meter_reading": READING_PLACES,
    "monthly_rent": MONEY_PLACES,
}


def validate_tenant(tenant: TenantRecord) -> TenantRecord:
    """Check a tenant record before it is persisted.

    Returns the record unchanged so calls can be chained.

    Raises:
        DataValidationError: On the first violated invariant
    """
    if not tenant.name or not tenant.name.strip():
        raise DataValidationError("Tenant name is required")

    for field, places in DECIMAL_PLACES.items():
        value = getattr(tenant, field)
        if value is not None:
            to_decimal(value, field, places=places)

    if tenant.electricity_service:
        if tenant.electricity_rate is None or tenant.electricity_rate < 0:
            raise DataValidationError("Electricity rate must be set and non-negative")
        if tenant.initial_meter_reading is None or tenant.initial_meter_reading < 0:
            raise DataValidationError("Initial meter reading must be set and non-negative")

    if tenant.current_meter_reading is not None and tenant.current_meter_reading < 0:
        raise DataValidationError("Current meter reading cannot be negative")

    if tenant.rent_service:
        if tenant.monthly_rent is None or tenant.monthly_rent < 0:
            raise DataValidationError("Monthly rent must be set and non-negative")
        if tenant.rent_due_day is None or not (
            MIN_RENT_DUE_DAY <= tenant.rent_due_day <= MAX_RENT_DUE_DAY
        ):
            raise DataValidationError(
                f"Rent due day must be between {MIN_RENT_DUE_DAY} and {MAX_RENT_DUE_DAY}"
            )

    return tenant


def check_reading_not_rewound(before: TenantRecord, after: TenantRecord) -> None:
    """Reject an edit that moves the current meter reading backwards."""
    old = before.current_meter_reading
    new = after.current_meter_reading
    if old is None:
        return
    if new is None or Decimal(new) < Decimal(old):
        raise DataValidationError(
            f"Current meter reading cannot go back from {old} to {new}"
        )


__all__ = ["MIN_RENT_DUE_DAY", "MAX_RENT_DUE_DAY", "validate_tenant", "check_reading_not_rewound"]
