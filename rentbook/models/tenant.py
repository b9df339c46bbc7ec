"""Tenant ORM model with optional electricity and rent subscriptions."""

from decimal import Decimal

from sqlalchemy import Boolean, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from rentbook.engine.records import TenantRecord
from rentbook.models import Base, BaseModel


class Tenant(Base, BaseModel):
    """Occupant of a flat.

    Electricity and rent are independent services. Bills and rent payments
    reference the tenant by id; there is no back-reference collection, lookups
    go through the bills and rent_payments tables.
    """

    __tablename__ = "tenants"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    flat_no: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    # Electricity subscription
    electricity_service: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    electricity_rate: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2),
        nullable=True,
        comment="Rate per consumed unit (kWh)",
    )
    initial_meter_reading: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2),
        nullable=True,
        comment="Baseline meter reading at onboarding",
    )
    current_meter_reading: Mapped[Decimal | None] = mapped_column(
        Numeric(12, 2),
        nullable=True,
        comment="Latest meter reading, advanced by bill generation",
    )

    # Rent subscription
    rent_service: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    monthly_rent: Mapped[Decimal | None] = mapped_column(Numeric(12, 2), nullable=True)
    rent_due_day: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Day of month rent falls due (1-28)",
    )

    __table_args__ = (Index("idx_tenant_services", "electricity_service", "rent_service"),)

    def to_record(self) -> TenantRecord:
        return TenantRecord(
            id=self.id,
            name=self.name,
            phone=self.phone or "",
            flat_no=self.flat_no or "",
            active=self.active,
            electricity_service=self.electricity_service,
            electricity_rate=self.electricity_rate,
            initial_meter_reading=self.initial_meter_reading,
            current_meter_reading=self.current_meter_reading,
            rent_service=self.rent_service,
            monthly_rent=self.monthly_rent,
            rent_due_day=self.rent_due_day,
        )

    def apply_record(self, record: TenantRecord) -> None:
        """Copy every editable field from a record onto this row."""
        self.name = record.name
        self.phone = record.phone
        self.flat_no = record.flat_no
        self.active = record.active
        self.electricity_service = record.electricity_service
        self.electricity_rate = record.electricity_rate
        self.initial_meter_reading = record.initial_meter_reading
        self.current_meter_reading = record.current_meter_reading
        self.rent_service = record.rent_service
        self.monthly_rent = record.monthly_rent
        self.rent_due_day = record.rent_due_day

    def __repr__(self) -> str:
        return (
            f"<Tenant(id={self.id}, name={self.name!r}, flat_no={self.flat_no!r}, "
            f"active={self.active}, electricity_service={self.electricity_service}, "
            f"rent_service={self.rent_service})>"
        )


__all__ = ["Tenant"]
