"""FastAPI dependencies: per-request session and services."""

from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from rentbook.config import Settings
from rentbook.services.bills_service import BillsService
from rentbook.services.dashboard_service import DashboardService
from rentbook.services.rent_service import RentService
from rentbook.services.tenant_service import TenantService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request) -> Generator[Session, None, None]:
    """Get database session from the app's session factory."""
    db = request.app.state.session_factory()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_tenant_service(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> TenantService:
    return TenantService(db, settings.tenant_delete_policy)


def get_bills_service(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> BillsService:
    return BillsService(db, settings.billing_period_policy)


def get_rent_service(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> RentService:
    return RentService(db, settings.billing_period_policy)


def get_dashboard_service(
    db: Session = Depends(get_db), settings: Settings = Depends(get_settings)
) -> DashboardService:
    return DashboardService(db, settings.billing_period_policy)
