"""Dashboard figures loaded from the database."""

from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from rentbook.engine import aggregates
from rentbook.engine.aggregates import DashboardSummary
from rentbook.engine.periods import PeriodPolicy, compute_period_label, parse_period_label
from rentbook.models.bill import Bill
from rentbook.models.rent_payment import RentPayment
from rentbook.models.tenant import Tenant


class DashboardService:
    """Loads a period's records and hands them to the aggregation functions."""

    def __init__(
        self,
        db_session: Session,
        period_policy: PeriodPolicy = PeriodPolicy.PRIOR_MONTH,
    ):
        self.db = db_session
        self.period_policy = PeriodPolicy(period_policy)

    def summary(self, period: str | None = None, today: date | None = None) -> DashboardSummary:
        """Dashboard summary for a period (default: current period under the policy)."""
        if period is None:
            period = compute_period_label(today, self.period_policy)
        else:
            parse_period_label(period)

        tenants = self.db.execute(select(Tenant)).scalars().all()
        bills = self.db.execute(select(Bill).where(Bill.period == period)).scalars().all()
        payments = self.db.execute(
            select(RentPayment).where(RentPayment.month == period)
        ).scalars().all()

        return aggregates.dashboard_summary(
            [t.to_record() for t in tenants],
            [b.to_record() for b in bills],
            [p.to_record() for p in payments],
            period,
        )


__all__ = ["DashboardService"]
