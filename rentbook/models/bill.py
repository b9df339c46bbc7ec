"""Bill ORM model for monthly electricity bills."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from rentbook.engine.records import BillRecord, PaymentStatus
from rentbook.models import Base, BaseModel


class Bill(Base, BaseModel):
    """One electricity bill for one tenant in one billing period.

    Amount is a snapshot taken at generation time (units x rate); later rate
    changes on the tenant never touch it.
    """

    __tablename__ = "bills"

    tenant_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Tenant reference (no FK: rows may outlive the tenant)",
    )
    period: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
        comment="Period label, e.g. 'Oct 2025'",
    )

    previous_reading: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    current_reading: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    units_consumed: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(14, 4),
        nullable=False,
        comment="units_consumed x rate at generation time",
    )

    status: Mapped[PaymentStatus] = mapped_column(
        SQLEnum(PaymentStatus),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    issue_date: Mapped[date] = mapped_column(Date, nullable=False)
    paid_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (
        UniqueConstraint("tenant_id", "period", name="uq_bill_tenant_period"),
        Index("idx_bill_period_status", "period", "status"),
    )

    @classmethod
    def from_record(cls, record: BillRecord) -> "Bill":
        return cls(
            tenant_id=record.tenant_id,
            period=record.period,
            previous_reading=record.previous_reading,
            current_reading=record.current_reading,
            units_consumed=record.units_consumed,
            amount=record.amount,
            status=record.status,
            issue_date=record.issue_date,
            paid_date=record.paid_date,
        )

    def to_record(self) -> BillRecord:
        return BillRecord(
            id=self.id,
            tenant_id=self.tenant_id,
            period=self.period,
            previous_reading=self.previous_reading,
            current_reading=self.current_reading,
            units_consumed=self.units_consumed,
            amount=self.amount,
            status=PaymentStatus(self.status),
            issue_date=self.issue_date,
            paid_date=self.paid_date,
        )

    def __repr__(self) -> str:
        return (
            f"<Bill(id={self.id}, tenant_id={self.tenant_id}, period={self.period!r}, "
            f"units_consumed={self.units_consumed}, amount={self.amount}, status={self.status})>"
        )


__all__ = ["Bill"]
