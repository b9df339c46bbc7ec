"""Electricity bill service: generate bills from readings and record payments."""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from rentbook.engine import billing, transitions
from rentbook.engine.billing import BillEstimate
from rentbook.engine.periods import PeriodPolicy
from rentbook.errors import ConflictError, NotFoundError
from rentbook.models.bill import Bill
from rentbook.models.tenant import Tenant
from rentbook.services.audit_service import AuditService

logger = logging.getLogger(__name__)


class BillsService:
    """Service for bill database operations.

    Bill amounts and status changes are computed by the engine; this service
    loads the inputs, enforces one bill per tenant per period and persists
    the result in a single commit.
    """

    def __init__(
        self,
        db_session: Session,
        period_policy: PeriodPolicy = PeriodPolicy.PRIOR_MONTH,
    ):
        self.db = db_session
        self.period_policy = PeriodPolicy(period_policy)

    def list_bills(self, period: str | None = None) -> list[Bill]:
        """All bills (optionally for one period), newest first."""
        stmt = select(Bill).order_by(Bill.created_at.desc(), Bill.id.desc())
        if period is not None:
            stmt = stmt.where(Bill.period == period)
        return list(self.db.execute(stmt).scalars().all())

    def list_bills_for_period(self, period: str) -> list[Bill]:
        return self.list_bills(period)

    def list_bills_for_tenant(self, tenant_id: int) -> list[Bill]:
        stmt = (
            select(Bill)
            .where(Bill.tenant_id == tenant_id)
            .order_by(Bill.created_at.desc(), Bill.id.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_bill(self, bill_id: int) -> Bill:
        """Get bill by ID.

        Raises:
            NotFoundError: If no bill has this ID
        """
        bill = self.db.get(Bill, bill_id)
        if bill is None:
            raise NotFoundError(f"Bill {bill_id} not found")
        return bill

    def find_bill(self, tenant_id: int, period: str) -> Bill | None:
        stmt = select(Bill).where(Bill.tenant_id == tenant_id, Bill.period == period)
        return self.db.execute(stmt).scalar_one_or_none()

    def _lock_tenant(self, tenant_id: int) -> Tenant:
        # Row lock serializes concurrent readings for the same tenant (no-op on SQLite)
        stmt = select(Tenant).where(Tenant.id == tenant_id).with_for_update()
        tenant = self.db.execute(stmt).scalar_one_or_none()
        if tenant is None:
            raise NotFoundError(f"Tenant {tenant_id} not found")
        return tenant

    def estimate_bill(self, tenant_id: int, reading) -> BillEstimate:
        """Preview the bill a reading would produce, without saving anything."""
        tenant = self.db.get(Tenant, tenant_id)
        if tenant is None:
            raise NotFoundError(f"Tenant {tenant_id} not found")
        return billing.estimate_bill(tenant.to_record(), reading)

    def generate_bill(self, tenant_id: int, reading, today: date | None = None) -> Bill:
        """Create a pending bill from a new meter reading.

        Persists the bill and the tenant's advanced meter reading together.

        Args:
            tenant_id: Tenant the reading belongs to
            reading: New cumulative meter reading
            today: Issue date (default: today)

        Returns:
            Created Bill

        Raises:
            NotFoundError: If the tenant does not exist
            DataValidationError: If the tenant has no rate or the reading does
                not exceed the previous one
            ConflictError: If the tenant already has a bill for the period
        """
        tenant = self._lock_tenant(tenant_id)
        result = billing.generate_bill(tenant.to_record(), reading, self.period_policy, today)

        existing = self.find_bill(tenant_id, result.bill.period)
        if existing is not None:
            self.db.rollback()
            logger.warning(
                "Rejected duplicate bill for tenant %d in %s (existing bill %d)",
                tenant_id,
                result.bill.period,
                existing.id,
            )
            raise ConflictError(
                f"Tenant {tenant_id} already has a bill for {result.bill.period}"
            )

        bill = Bill.from_record(result.bill)
        self.db.add(bill)
        tenant.current_meter_reading = result.tenant.current_meter_reading

        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(
                f"Tenant {tenant_id} already has a bill for {result.bill.period}"
            ) from e

        AuditService.log(
            self.db,
            "bill",
            bill.id,
            "create",
            {
                "tenant_id": tenant_id,
                "period": bill.period,
                "previous_reading": str(result.bill.previous_reading),
                "current_reading": str(result.bill.current_reading),
                "amount": str(result.bill.amount),
            },
        )
        self.db.commit()

        logger.info(
            "Generated bill %d for tenant %d: period=%s, units=%s, amount=%s",
            bill.id,
            tenant_id,
            bill.period,
            result.bill.units_consumed,
            result.bill.amount,
        )
        return bill

    def mark_bill_paid(self, bill_id: int, today: date | None = None) -> Bill:
        """Mark a pending bill as paid.

        Raises:
            NotFoundError: If the bill does not exist
            ConflictError: If the bill is already paid
        """
        bill = self.get_bill(bill_id)
        try:
            paid = transitions.mark_bill_paid(bill.to_record(), today)
        except ConflictError:
            logger.warning("Rejected payment of already paid bill %d", bill_id)
            raise

        bill.status = paid.status
        bill.paid_date = paid.paid_date
        AuditService.log(
            self.db, "bill", bill.id, "paid", {"paid_date": paid.paid_date.isoformat()}
        )
        self.db.commit()

        logger.info("Bill %d marked paid on %s", bill.id, paid.paid_date)
        return bill


__all__ = ["BillsService"]
