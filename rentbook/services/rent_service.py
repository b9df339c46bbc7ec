"""Rent payment service: monthly obligations and payment toggling."""

import logging
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from rentbook.engine import aggregates, rent, transitions
from rentbook.engine.periods import PeriodPolicy, compute_period_label, parse_period_label
from rentbook.errors import NotFoundError
from rentbook.models.rent_payment import RentPayment
from rentbook.models.tenant import Tenant
from rentbook.services.audit_service import AuditService

logger = logging.getLogger(__name__)


class RentService:
    """Service for rent payment database operations."""

    def __init__(
        self,
        db_session: Session,
        period_policy: PeriodPolicy = PeriodPolicy.PRIOR_MONTH,
    ):
        self.db = db_session
        self.period_policy = PeriodPolicy(period_policy)

    def current_month(self, today: date | None = None) -> str:
        return compute_period_label(today, self.period_policy)

    def list_payments(self, month: str | None = None) -> list[RentPayment]:
        """All rent payments (optionally for one month), newest first."""
        stmt = select(RentPayment).order_by(RentPayment.created_at.desc(), RentPayment.id.desc())
        if month is not None:
            stmt = stmt.where(RentPayment.month == month)
        return list(self.db.execute(stmt).scalars().all())

    def list_payments_for_tenant(self, tenant_id: int) -> list[RentPayment]:
        stmt = (
            select(RentPayment)
            .where(RentPayment.tenant_id == tenant_id)
            .order_by(RentPayment.due_date.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_payment(self, payment_id: int) -> RentPayment:
        """Get rent payment by ID.

        Raises:
            NotFoundError: If no payment has this ID
        """
        payment = self.db.get(RentPayment, payment_id)
        if payment is None:
            raise NotFoundError(f"Payment {payment_id} not found")
        return payment

    def ensure_month_payments(
        self,
        month: str | None = None,
        today: date | None = None,
    ) -> list[RentPayment]:
        """Create the missing rent obligations of a month.

        One pending payment per active rent tenant; tenants that already have
        a payment for the month are skipped, so calling this twice is safe.

        Args:
            month: Month label (default: current month under the billing policy)
            today: Reference date used when month is omitted

        Returns:
            Newly created payments (empty if nothing was missing)
        """
        if month is None:
            month = self.current_month(today)
        else:
            parse_period_label(month)

        tenants = self.db.execute(
            select(Tenant).where(Tenant.rent_service == True, Tenant.active == True)  # noqa: E712
        ).scalars().all()
        existing = set(
            self.db.execute(
                select(RentPayment.tenant_id).where(RentPayment.month == month)
            ).scalars().all()
        )

        created = []
        for tenant in tenants:
            if tenant.id in existing or tenant.monthly_rent is None:
                continue
            payment = RentPayment.from_record(rent.build_rent_payment(tenant.to_record(), month))
            self.db.add(payment)
            created.append(payment)

        if not created:
            return []

        self.db.flush()
        for payment in created:
            AuditService.log(
                self.db,
                "rent_payment",
                payment.id,
                "create",
                {"tenant_id": payment.tenant_id, "month": month, "amount": str(payment.amount)},
            )
        self.db.commit()

        logger.info("Created %d rent payments for %s", len(created), month)
        return created

    def toggle_payment(self, payment_id: int, today: date | None = None) -> RentPayment:
        """Flip a rent payment between pending and paid.

        Raises:
            NotFoundError: If the payment does not exist
        """
        payment = self.get_payment(payment_id)
        toggled = transitions.toggle_rent_payment(payment.to_record(), today)

        payment.status = toggled.status
        payment.paid_date = toggled.paid_date
        AuditService.log(
            self.db,
            "rent_payment",
            payment.id,
            "toggle",
            {
                "status": toggled.status.value,
                "paid_date": toggled.paid_date.isoformat() if toggled.paid_date else None,
            },
        )
        self.db.commit()

        logger.info("Rent payment %d is now %s", payment.id, toggled.status.value)
        return payment

    def payment_history(
        self,
        tenant_id: int,
        exclude_month: str | None = None,
        limit: int = 3,
    ) -> list[RentPayment]:
        """Most recent payments of a tenant outside ``exclude_month``."""
        payments = self.list_payments_for_tenant(tenant_id)
        by_id = {p.id: p for p in payments}
        history = aggregates.payment_history(
            tenant_id, [p.to_record() for p in payments], exclude_month, limit
        )
        return [by_id[r.id] for r in history]


__all__ = ["RentService"]
