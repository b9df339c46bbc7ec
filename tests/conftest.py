"""Shared pytest fixtures: in-memory database and sample tenants."""

from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rentbook.models import Base
from rentbook.models.tenant import Tenant


@pytest.fixture
def db_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db_session(session_factory):
    """Create test database session."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def electricity_tenant(db_session):
    """Tenant billed for electricity at 15 per unit from a 1000 kWh baseline."""
    tenant = Tenant(
        name="Asha Verma",
        phone="9800000001",
        flat_no="A-101",
        active=True,
        electricity_service=True,
        electricity_rate=Decimal("15"),
        initial_meter_reading=Decimal("1000"),
        rent_service=False,
    )
    db_session.add(tenant)
    db_session.commit()
    return tenant


@pytest.fixture
def rent_tenant(db_session):
    """Tenant paying 8000 rent due on the 5th, no electricity service."""
    tenant = Tenant(
        name="Rohan Mehta",
        phone="9800000002",
        flat_no="B-202",
        active=True,
        electricity_service=False,
        rent_service=True,
        monthly_rent=Decimal("8000"),
        rent_due_day=5,
    )
    db_session.add(tenant)
    db_session.commit()
    return tenant
