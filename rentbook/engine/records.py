"""Plain immutable records the billing engine operates on.

The engine never touches the ORM: services convert models to these records,
hand them to the pure functions in this package and persist whatever new
records come back.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class PaymentStatus(str, Enum):
    """Status shared by electricity bills and rent payments."""

    PENDING = "pending"
    PAID = "paid"


@dataclass(frozen=True)
class TenantRecord:
    """Occupant of a rentable unit with optional electricity and rent services."""

    id: int | None
    name: str
    phone: str = ""
    flat_no: str = ""
    active: bool = True

    electricity_service: bool = False
    electricity_rate: Decimal | None = None
    """Currency per consumed unit (kWh)"""
    initial_meter_reading: Decimal | None = None
    """Baseline reading taken at onboarding"""
    current_meter_reading: Decimal | None = None
    """Latest recorded reading; only bill generation advances it"""

    rent_service: bool = False
    monthly_rent: Decimal | None = None
    rent_due_day: int | None = None
    """Day of month rent falls due (1-28)"""


@dataclass(frozen=True)
class BillRecord:
    """One electricity billing event for one tenant in one period."""

    tenant_id: int
    period: str
    previous_reading: Decimal
    current_reading: Decimal
    units_consumed: Decimal
    amount: Decimal
    issue_date: date
    status: PaymentStatus = PaymentStatus.PENDING
    paid_date: date | None = None
    id: int | None = None


@dataclass(frozen=True)
class RentPaymentRecord:
    """One rent obligation for one tenant in one calendar month."""

    tenant_id: int
    month: str
    amount: Decimal
    due_date: date
    status: PaymentStatus = PaymentStatus.PENDING
    paid_date: date | None = None
    id: int | None = None


__all__ = ["PaymentStatus", "TenantRecord", "BillRecord", "RentPaymentRecord"]
