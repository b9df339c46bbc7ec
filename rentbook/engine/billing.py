"""Translate a submitted meter reading into an electricity bill."""

from dataclasses import replace
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import NamedTuple

from rentbook.engine import clock
from rentbook.engine.periods import PeriodPolicy, compute_period_label
from rentbook.engine.records import BillRecord, PaymentStatus, TenantRecord
from rentbook.errors import DataValidationError

# Readings, rates and rent are stored with two decimal places
READING_PLACES = 2
RATE_PLACES = 2
MONEY_PLACES = 2


class GeneratedBill(NamedTuple):
    """New pending bill plus the tenant with its meter reading advanced."""

    bill: BillRecord
    tenant: TenantRecord


class BillEstimate(NamedTuple):
    """Preview of consumption and amount for a reading not yet submitted."""

    previous_reading: Decimal
    units_consumed: Decimal
    amount: Decimal


def to_decimal(value, field: str = "value", places: int | None = None) -> Decimal:
    """Coerce ints, strings and floats to Decimal without binary float artefacts.

    Args:
        value: Number or numeric string
        field: Name used in error messages
        places: Maximum decimal places allowed (None: unlimited)

    Raises:
        DataValidationError: If the value is not a finite number or has more
            than ``places`` decimal places
    """
    if isinstance(value, Decimal):
        number = value
    else:
        try:
            number = Decimal(str(value))
        except (InvalidOperation, ValueError) as e:
            raise DataValidationError(f"{field} must be a number, got {value!r}") from e

    if not number.is_finite():
        raise DataValidationError(f"{field} must be a finite number, got {value!r}")
    if places is not None and number.normalize().as_tuple().exponent < -places:
        raise DataValidationError(f"{field} allows at most {places} decimal places, got {value}")
    return number


def latest_reading(tenant: TenantRecord) -> Decimal:
    """Latest known meter reading: current if set, else initial, else 0."""
    if tenant.current_meter_reading is not None:
        return tenant.current_meter_reading
    if tenant.initial_meter_reading is not None:
        return tenant.initial_meter_reading
    return Decimal(0)


def estimate_bill(tenant: TenantRecord, submitted_reading) -> BillEstimate:
    """Preview what a reading would bill, without validating it.

    Readings at or below the previous one estimate to zero units.
    """
    previous = latest_reading(tenant)
    reading = to_decimal(submitted_reading, "reading")
    units = max(reading - previous, Decimal(0))
    rate = tenant.electricity_rate or Decimal(0)
    return BillEstimate(previous_reading=previous, units_consumed=units, amount=units * rate)


def generate_bill(
    tenant: TenantRecord,
    submitted_reading,
    period_policy: PeriodPolicy = PeriodPolicy.PRIOR_MONTH,
    today: date | None = None,
) -> GeneratedBill:
    """Build a pending bill from a new meter reading.

    units = submitted - previous; amount = units * rate. The rate is
    snapshotted into the bill, so later rate edits leave it untouched.

    Args:
        tenant: Tenant the reading belongs to (not modified)
        submitted_reading: New cumulative meter reading
        period_policy: Which month the bill is labelled with
        today: Issue date (default: today)

    Returns:
        GeneratedBill with the new bill and the tenant whose
        current_meter_reading equals the submitted reading

    Raises:
        DataValidationError: If electricity is not enabled, no rate is set,
            the reading is not a finite two-place number, or it does not
            exceed the previous one
    """
    if not tenant.electricity_service:
        raise DataValidationError(f"Tenant {tenant.id} has no electricity service")
    if tenant.electricity_rate is None:
        raise DataValidationError(f"Electricity rate not set for tenant {tenant.id}")
    rate = to_decimal(tenant.electricity_rate, "electricity_rate", places=RATE_PLACES)
    if rate < 0:
        raise DataValidationError("Electricity rate cannot be negative")

    reading = to_decimal(submitted_reading, "reading", places=READING_PLACES)
    previous = latest_reading(tenant)
    if reading <= previous:
        raise DataValidationError(
            f"Reading ({reading}) must be greater than previous reading ({previous})"
        )

    if today is None:
        today = clock.today()

    units = reading - previous
    bill = BillRecord(
        tenant_id=tenant.id,
        period=compute_period_label(today, period_policy),
        previous_reading=previous,
        current_reading=reading,
        units_consumed=units,
        amount=units * rate,
        issue_date=today,
        status=PaymentStatus.PENDING,
    )
    return GeneratedBill(bill=bill, tenant=replace(tenant, current_meter_reading=reading))


__all__ = [
    "READING_PLACES",
    "RATE_PLACES",
    "MONEY_PLACES",
    "GeneratedBill",
    "BillEstimate",
    "to_decimal",
    "latest_reading",
    "estimate_bill",
    "generate_bill",
]
