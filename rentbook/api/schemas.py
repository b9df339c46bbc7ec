"""Request and response schemas for the JSON API."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from rentbook.engine.records import PaymentStatus


class TenantCreatePayload(BaseModel):
    """Request payload for POST /api/tenants."""

    name: str = Field(..., min_length=1, description="Tenant's full name")
    phone: str = Field("", description="Contact phone number")
    flat_no: str = Field("", description="Flat/unit label")
    active: bool = True

    electricity_service: bool = False
    electricity_rate: Decimal | None = Field(None, ge=0, description="Rate per kWh")
    initial_meter_reading: Decimal | None = Field(None, ge=0, description="Baseline reading")

    rent_service: bool = False
    monthly_rent: Decimal | None = Field(None, ge=0)
    rent_due_day: int | None = Field(None, ge=1, le=28)


class TenantUpdatePayload(BaseModel):
    """Request payload for PATCH /api/tenants/{id}; only sent fields change."""

    name: str | None = Field(None, min_length=1)
    phone: str | None = None
    flat_no: str | None = None
    active: bool | None = None

    electricity_service: bool | None = None
    electricity_rate: Decimal | None = Field(None, ge=0)
    initial_meter_reading: Decimal | None = Field(None, ge=0)
    current_meter_reading: Decimal | None = Field(None, ge=0)

    rent_service: bool | None = None
    monthly_rent: Decimal | None = Field(None, ge=0)
    rent_due_day: int | None = Field(None, ge=1, le=28)


class TenantResponse(BaseModel):
    id: int
    name: str
    phone: str
    flat_no: str
    active: bool
    electricity_service: bool
    electricity_rate: Decimal | None = None
    initial_meter_reading: Decimal | None = None
    current_meter_reading: Decimal | None = None
    rent_service: bool
    monthly_rent: Decimal | None = None
    rent_due_day: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class ReadingPayload(BaseModel):
    """Request payload for POST /api/tenants/{id}/bills."""

    reading: Decimal = Field(..., ge=0, description="New cumulative meter reading (kWh)")


class BillResponse(BaseModel):
    id: int
    tenant_id: int
    period: str
    previous_reading: Decimal
    current_reading: Decimal
    units_consumed: Decimal
    amount: Decimal
    status: PaymentStatus
    issue_date: date
    paid_date: date | None = None

    model_config = ConfigDict(from_attributes=True)


class BillEstimateResponse(BaseModel):
    previous_reading: Decimal
    units_consumed: Decimal
    amount: Decimal


class RentPaymentResponse(BaseModel):
    id: int
    tenant_id: int
    month: str
    amount: Decimal
    due_date: date
    status: PaymentStatus
    paid_date: date | None = None

    model_config = ConfigDict(from_attributes=True)


class RolloverPayload(BaseModel):
    """Request payload for POST /api/rent-payments/rollover."""

    month: str | None = Field(None, description="Month label such as 'Oct 2025'")


class TenantRef(BaseModel):
    id: int
    name: str
    flat_no: str


class TenantCountsResponse(BaseModel):
    total: int
    active: int
    electricity: int
    rent: int


class DashboardResponse(BaseModel):
    """Response schema for GET /api/dashboard."""

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
    tenants_needing_reading: list[TenantRef]
    tenant_counts: TenantCountsResponse


__all__ = [
    "TenantCreatePayload",
    "TenantUpdatePayload",
    "TenantResponse",
    "ReadingPayload",
    "BillResponse",
    "BillEstimateResponse",
    "RentPaymentResponse",
    "RolloverPayload",
    "TenantRef",
    "TenantCountsResponse",
    "DashboardResponse",
]
