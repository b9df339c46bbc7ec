"""RentPayment ORM model for monthly rent obligations."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from rentbook.engine.records import PaymentStatus, RentPaymentRecord
from rentbook.models import Base, BaseModel


class RentPayment(Base, BaseModel):
    """One month of rent owed by one tenant."""

    __tablename__ = "rent_payments"

    tenant_id: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        index=True,
        comment="Tenant reference (no FK: rows may outlive the tenant)",
    )
    month: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        index=True,
        comment="Month label, e.g. 'Oct 2025'",
    )
    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        comment="Snapshot of monthly rent when the obligation was created",
    )
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[PaymentStatus] = mapped_column(
        SQLEnum(PaymentStatus),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    paid_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    __table_args__ = (
        UniqueConstraint("tenant_id", "month", name="uq_rent_payment_tenant_month"),
        Index("idx_rent_month_status", "month", "status"),
    )

    @classmethod
    def from_record(cls, record: RentPaymentRecord) -> "RentPayment":
        return cls(
            tenant_id=record.tenant_id,
            month=record.month,
            amount=record.amount,
            due_date=record.due_date,
            status=record.status,
            paid_date=record.paid_date,
        )

    def to_record(self) -> RentPaymentRecord:
        return RentPaymentRecord(
            id=self.id,
            tenant_id=self.tenant_id,
            month=self.month,
            amount=self.amount,
            due_date=self.due_date,
            status=PaymentStatus(self.status),
            paid_date=self.paid_date,
        )

    def __repr__(self) -> str:
        return (
            f"<RentPayment(id={self.id}, tenant_id={self.tenant_id}, month={self.month!r}, "
            f"amount={self.amount}, status={self.status})>"
        )


__all__ = ["RentPayment"]
