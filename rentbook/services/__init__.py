"""Orchestration services.

Each service receives its SQLAlchemy session explicitly; see
``rentbook.services.db`` for building session factories.
"""

from rentbook.services.audit_service import AuditService
from rentbook.services.bills_service import BillsService
from rentbook.services.dashboard_service import DashboardService
from rentbook.services.rent_service import RentService
from rentbook.services.tenant_service import TenantService

__all__ = [
    "AuditService",
    "BillsService",
    "DashboardService",
    "RentService",
    "TenantService",
]
