"""Tenant management service: add, edit, list and remove tenants."""

import logging
from dataclasses import fields, replace
from decimal import Decimal

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from rentbook.config import TenantDeletePolicy
from rentbook.engine.billing import to_decimal
from rentbook.engine.records import TenantRecord
from rentbook.engine.tenants import check_reading_not_rewound, validate_tenant
from rentbook.errors import ConflictError, DataValidationError, NotFoundError
from rentbook.models.bill import Bill
from rentbook.models.rent_payment import RentPayment
from rentbook.models.tenant import Tenant
from rentbook.services.audit_service import AuditService

logger = logging.getLogger(__name__)

DECIMAL_FIELDS = (
    "electricity_rate",
    "initial_meter_reading",
    "current_meter_reading",
    "monthly_rent",
)
EDITABLE_FIELDS = frozenset(f.name for f in fields(TenantRecord)) - {"id"}


def _coerce(data: dict) -> dict:
    """Reject unknown fields and turn numeric inputs into Decimal."""
    unknown = set(data) - EDITABLE_FIELDS
    if unknown:
        raise DataValidationError(f"Unknown tenant fields: {', '.join(sorted(unknown))}")

    coerced = dict(data)
    for name in DECIMAL_FIELDS:
        if coerced.get(name) is not None:
            coerced[name] = to_decimal(coerced[name], name)
    return coerced


def _jsonable(values: dict) -> dict:
    return {k: str(v) if isinstance(v, Decimal) else v for k, v in values.items()}


class TenantService:
    """Service for tenant database operations.

    Validation is delegated to the engine; this class only loads, persists
    and audits.
    """

    def __init__(
        self,
        db_session: Session,
        delete_policy: TenantDeletePolicy = TenantDeletePolicy.BLOCK,
    ):
        self.db = db_session
        self.delete_policy = TenantDeletePolicy(delete_policy)

    def list_tenants(self) -> list[Tenant]:
        """All tenants, newest first."""
        stmt = select(Tenant).order_by(Tenant.created_at.desc(), Tenant.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_tenant(self, tenant_id: int) -> Tenant:
        """Get tenant by ID.

        Raises:
            NotFoundError: If no tenant has this ID
        """
        tenant = self.db.get(Tenant, tenant_id)
        if tenant is None:
            raise NotFoundError(f"Tenant {tenant_id} not found")
        return tenant

    def add_tenant(self, data: dict) -> Tenant:
        """Validate and persist a new tenant.

        Args:
            data: TenantRecord fields (without id)

        Returns:
            Created Tenant

        Raises:
            DataValidationError: If the tenant breaks a record invariant
        """
        record = validate_tenant(TenantRecord(id=None, **_coerce(data)))

        tenant = Tenant()
        tenant.apply_record(record)
        self.db.add(tenant)
        self.db.flush()

        AuditService.log(self.db, "tenant", tenant.id, "create", {"name": tenant.name})
        self.db.commit()

        logger.info("Created tenant: id=%d, name=%s, flat=%s", tenant.id, tenant.name, tenant.flat_no)
        return tenant

    def edit_tenant(self, tenant_id: int, changes: dict) -> Tenant:
        """Apply a partial update to a tenant.

        The current meter reading may be corrected upwards but never rewound;
        it normally only advances through bill generation.

        Raises:
            NotFoundError: If the tenant does not exist
            DataValidationError: If the edited tenant breaks an invariant
        """
        tenant = self.get_tenant(tenant_id)
        before = tenant.to_record()
        after = validate_tenant(replace(before, **_coerce(changes)))
        check_reading_not_rewound(before, after)

        changed = {
            name: getattr(after, name)
            for name in EDITABLE_FIELDS
            if getattr(after, name) != getattr(before, name)
        }
        if not changed:
            return tenant

        tenant.apply_record(after)
        AuditService.log(self.db, "tenant", tenant.id, "update", _jsonable(changed))
        self.db.commit()

        logger.info("Updated tenant %d: fields=%s", tenant.id, sorted(changed))
        return tenant

    def count_dependents(self, tenant_id: int) -> tuple[int, int]:
        """Number of (bills, rent payments) referencing a tenant."""
        bills = self.db.execute(
            select(func.count(Bill.id)).where(Bill.tenant_id == tenant_id)
        ).scalar()
        payments = self.db.execute(
            select(func.count(RentPayment.id)).where(RentPayment.tenant_id == tenant_id)
        ).scalar()
        return int(bills or 0), int(payments or 0)

    def remove_tenant(self, tenant_id: int) -> None:
        """Delete a tenant according to the configured delete policy.

        Raises:
            NotFoundError: If the tenant does not exist
            ConflictError: Under BLOCK, if bills or payments still reference the tenant
        """
        tenant = self.get_tenant(tenant_id)
        bill_count, payment_count = self.count_dependents(tenant_id)

        if self.delete_policy is TenantDeletePolicy.BLOCK and (bill_count or payment_count):
            logger.warning(
                "Refused to delete tenant %d: %d bills, %d rent payments",
                tenant_id,
                bill_count,
                payment_count,
            )
            raise ConflictError(
                f"Tenant {tenant_id} has {bill_count} bills and {payment_count} rent payments"
            )

        if self.delete_policy is TenantDeletePolicy.CASCADE:
            self.db.execute(delete(Bill).where(Bill.tenant_id == tenant_id))
            self.db.execute(delete(RentPayment).where(RentPayment.tenant_id == tenant_id))

        self.db.delete(tenant)
        AuditService.log(
            self.db,
            "tenant",
            tenant_id,
            "delete",
            {
                "policy": self.delete_policy.value,
                "bills": bill_count,
                "rent_payments": payment_count,
            },
        )
        self.db.commit()

        logger.info(
            "Deleted tenant %d (policy=%s, bills=%d, rent_payments=%d)",
            tenant_id,
            self.delete_policy.value,
            bill_count,
            payment_count,
        )


__all__ = ["TenantService"]
