"""Tenant, bill, rent payment and dashboard API routes."""

import logging

from fastapi import APIRouter, Depends, Query, status

from rentbook.api.deps import (
    get_bills_service,
    get_dashboard_service,
    get_rent_service,
    get_tenant_service,
)
from rentbook.api.schemas import (
    BillEstimateResponse,
    BillResponse,
    DashboardResponse,
    ReadingPayload,
    RentPaymentResponse,
    RolloverPayload,
    TenantCountsResponse,
    TenantCreatePayload,
    TenantRef,
    TenantResponse,
    TenantUpdatePayload,
)
from rentbook.services.bills_service import BillsService
from rentbook.services.dashboard_service import DashboardService
from rentbook.services.rent_service import RentService
from rentbook.services.tenant_service import TenantService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["ledger"])


# Tenants


@router.get("/tenants", response_model=list[TenantResponse])
def list_tenants(service: TenantService = Depends(get_tenant_service)):
    return service.list_tenants()


@router.post("/tenants", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
def add_tenant(payload: TenantCreatePayload, service: TenantService = Depends(get_tenant_service)):
    return service.add_tenant(payload.model_dump())


@router.get("/tenants/{tenant_id}", response_model=TenantResponse)
def get_tenant(tenant_id: int, service: TenantService = Depends(get_tenant_service)):
    return service.get_tenant(tenant_id)


@router.patch("/tenants/{tenant_id}", response_model=TenantResponse)
def edit_tenant(
    tenant_id: int,
    payload: TenantUpdatePayload,
    service: TenantService = Depends(get_tenant_service),
):
    return service.edit_tenant(tenant_id, payload.model_dump(exclude_unset=True))


@router.delete("/tenants/{tenant_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_tenant(tenant_id: int, service: TenantService = Depends(get_tenant_service)):
    service.remove_tenant(tenant_id)


# Electricity bills


@router.get("/bills", response_model=list[BillResponse])
def list_bills(
    period: str | None = Query(None, description="Period label such as 'Oct 2025'"),
    service: BillsService = Depends(get_bills_service),
):
    return service.list_bills(period)


@router.get("/tenants/{tenant_id}/bills", response_model=list[BillResponse])
def list_tenant_bills(tenant_id: int, service: BillsService = Depends(get_bills_service)):
    return service.list_bills_for_tenant(tenant_id)


@router.post(
    "/tenants/{tenant_id}/bills",
    response_model=BillResponse,
    status_code=status.HTTP_201_CREATED,
)
def generate_bill(
    tenant_id: int,
    payload: ReadingPayload,
    service: BillsService = Depends(get_bills_service),
):
    return service.generate_bill(tenant_id, payload.reading)


@router.post("/tenants/{tenant_id}/bills/estimate", response_model=BillEstimateResponse)
def estimate_bill(
    tenant_id: int,
    payload: ReadingPayload,
    service: BillsService = Depends(get_bills_service),
):
    return BillEstimateResponse(**service.estimate_bill(tenant_id, payload.reading)._asdict())


@router.post("/bills/{bill_id}/pay", response_model=BillResponse)
def mark_bill_paid(bill_id: int, service: BillsService = Depends(get_bills_service)):
    return service.mark_bill_paid(bill_id)


# Rent payments


@router.get("/rent-payments", response_model=list[RentPaymentResponse])
def list_rent_payments(
    month: str | None = Query(None, description="Month label such as 'Oct 2025'"),
    service: RentService = Depends(get_rent_service),
):
    return service.list_payments(month)


@router.post("/rent-payments/rollover", response_model=list[RentPaymentResponse])
def rollover_rent_payments(
    payload: RolloverPayload,
    service: RentService = Depends(get_rent_service),
):
    return service.ensure_month_payments(payload.month)


@router.post("/rent-payments/{payment_id}/toggle", response_model=RentPaymentResponse)
def toggle_rent_payment(payment_id: int, service: RentService = Depends(get_rent_service)):
    return service.toggle_payment(payment_id)


# Dashboard


@router.get("/dashboard", response_model=DashboardResponse)
def dashboard(
    period: str | None = Query(None, description="Period label (default: current period)"),
    service: DashboardService = Depends(get_dashboard_service),
):
    summary = service.summary(period)
    return DashboardResponse(
        period=summary.period,
        total_revenue=summary.total_revenue,
        electricity_revenue=summary.electricity_revenue,
        rent_revenue=summary.rent_revenue,
        pending_bills=summary.pending_bills,
        paid_bills=summary.paid_bills,
        outstanding_bills_amount=summary.outstanding_bills_amount,
        pending_rent=summary.pending_rent,
        paid_rent=summary.paid_rent,
        outstanding_rent_amount=summary.outstanding_rent_amount,
        total_units_consumed=summary.total_units_consumed,
        tenants_needing_reading=[
            TenantRef(id=t.id, name=t.name, flat_no=t.flat_no)
            for t in summary.tenants_needing_reading
        ],
        tenant_counts=TenantCountsResponse(**summary.tenant_counts._asdict()),
    )


__all__ = ["router"]
