"""Contract tests for the JSON API."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from rentbook.config import Settings
from rentbook.engine.periods import PeriodPolicy, compute_period_label
from rentbook.main import create_app

TENANT_PAYLOAD = {
    "name": "Asha Verma",
    "phone": "9800000001",
    "flat_no": "A-101",
    "electricity_service": True,
    "electricity_rate": 15,
    "initial_meter_reading": 1000,
    "rent_service": True,
    "monthly_rent": 8000,
    "rent_due_day": 5,
}


@pytest.fixture
def client(session_factory):
    """Create FastAPI test client bound to the in-memory database."""
    settings = Settings(_env_file=None, database_url="sqlite://")
    app = create_app(settings=settings, session_factory=session_factory)
    return TestClient(app)


@pytest.fixture
def tenant_id(client):
    response = client.post("/api/tenants", json=TENANT_PAYLOAD)
    assert response.status_code == 201
    return response.json()["id"]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


class TestTenantEndpoints:
    def test_create_and_list(self, client, tenant_id):
        tenants = client.get("/api/tenants").json()

        assert [t["id"] for t in tenants] == [tenant_id]
        assert Decimal(tenants[0]["electricity_rate"]) == Decimal("15")
        assert tenants[0]["current_meter_reading"] is None

    def test_create_rejects_bad_due_day(self, client):
        response = client.post("/api/tenants", json={**TENANT_PAYLOAD, "rent_due_day": 30})
        assert response.status_code == 422

    def test_create_without_rate_is_validation_error(self, client):
        payload = {**TENANT_PAYLOAD, "electricity_rate": None}
        response = client.post("/api/tenants", json=payload)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "validation"

    def test_edit(self, client, tenant_id):
        response = client.patch(f"/api/tenants/{tenant_id}", json={"flat_no": "A-105"})

        assert response.status_code == 200
        assert response.json()["flat_no"] == "A-105"
        assert response.json()["name"] == "Asha Verma"

    def test_get_missing_tenant(self, client):
        response = client.get("/api/tenants/999")

        assert response.status_code == 404
        assert response.json() == {"error": {"code": "not_found", "message": "Tenant 999 not found"}}

    def test_delete_blocked_when_billed(self, client, tenant_id):
        client.post(f"/api/tenants/{tenant_id}/bills", json={"reading": 1120})

        response = client.delete(f"/api/tenants/{tenant_id}")

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "conflict"

    def test_delete_without_history(self, client, tenant_id):
        assert client.delete(f"/api/tenants/{tenant_id}").status_code == 204
        assert client.get(f"/api/tenants/{tenant_id}").status_code == 404


class TestBillEndpoints:
    def test_generate_and_pay(self, client, tenant_id):
        response = client.post(f"/api/tenants/{tenant_id}/bills", json={"reading": 1120})

        assert response.status_code == 201
        bill = response.json()
        assert bill["period"] == compute_period_label(policy=PeriodPolicy.PRIOR_MONTH)
        assert Decimal(bill["previous_reading"]) == Decimal("1000")
        assert Decimal(bill["units_consumed"]) == Decimal("120")
        assert Decimal(bill["amount"]) == Decimal("1800")
        assert bill["status"] == "pending"
        assert bill["paid_date"] is None

        paid = client.post(f"/api/bills/{bill['id']}/pay").json()
        assert paid["status"] == "paid"
        assert paid["paid_date"] is not None
        assert paid["amount"] == bill["amount"]

        again = client.post(f"/api/bills/{bill['id']}/pay")
        assert again.status_code == 409

    def test_reading_must_increase(self, client, tenant_id):
        response = client.post(f"/api/tenants/{tenant_id}/bills", json={"reading": 1000})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "validation"

    def test_reading_with_three_places_is_validation_error(self, client, tenant_id):
        response = client.post(f"/api/tenants/{tenant_id}/bills", json={"reading": "1120.555"})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "validation"
        assert client.get("/api/bills").json() == []

    def test_duplicate_bill_in_period(self, client, tenant_id):
        client.post(f"/api/tenants/{tenant_id}/bills", json={"reading": 1120})
        response = client.post(f"/api/tenants/{tenant_id}/bills", json={"reading": 1200})

        assert response.status_code == 409
        tenant = client.get(f"/api/tenants/{tenant_id}").json()
        assert Decimal(tenant["current_meter_reading"]) == Decimal("1120")

    def test_estimate(self, client, tenant_id):
        response = client.post(f"/api/tenants/{tenant_id}/bills/estimate", json={"reading": 1050})

        assert Decimal(response.json()["amount"]) == Decimal("750")
        assert client.get("/api/bills").json() == []

    def test_list_filtered_by_period(self, client, tenant_id):
        client.post(f"/api/tenants/{tenant_id}/bills", json={"reading": 1120})

        assert len(client.get("/api/bills").json()) == 1
        assert client.get("/api/bills", params={"period": "Jan 1999"}).json() == []
        assert len(client.get(f"/api/tenants/{tenant_id}/bills").json()) == 1

    def test_pay_missing_bill(self, client):
        assert client.post("/api/bills/31337/pay").status_code == 404


class TestRentEndpoints:
    def test_rollover_and_toggle(self, client, tenant_id):
        created = client.post("/api/rent-payments/rollover", json={"month": "Oct 2025"}).json()

        assert len(created) == 1
        assert created[0]["due_date"] == "2025-10-05"
        assert created[0]["status"] == "pending"

        payment_id = created[0]["id"]
        paid = client.post(f"/api/rent-payments/{payment_id}/toggle").json()
        assert paid["status"] == "paid"
        assert paid["paid_date"] is not None

        pending = client.post(f"/api/rent-payments/{payment_id}/toggle").json()
        assert pending["status"] == "pending"
        assert pending["paid_date"] is None

    def test_rollover_twice_creates_nothing(self, client, tenant_id):
        client.post("/api/rent-payments/rollover", json={"month": "Oct 2025"})

        assert client.post("/api/rent-payments/rollover", json={"month": "Oct 2025"}).json() == []
        assert len(client.get("/api/rent-payments", params={"month": "Oct 2025"}).json()) == 1

    def test_rollover_rejects_bad_month(self, client, tenant_id):
        response = client.post("/api/rent-payments/rollover", json={"month": "10/2025"})
        assert response.status_code == 422


class TestDashboardEndpoint:
    def test_dashboard_for_current_period(self, client, tenant_id):
        period = compute_period_label(policy=PeriodPolicy.PRIOR_MONTH)
        bill = client.post(f"/api/tenants/{tenant_id}/bills", json={"reading": 1120}).json()
        client.post(f"/api/bills/{bill['id']}/pay")
        payment = client.post("/api/rent-payments/rollover", json={}).json()[0]
        client.post(f"/api/rent-payments/{payment['id']}/toggle")

        summary = client.get("/api/dashboard").json()

        assert summary["period"] == period
        assert Decimal(summary["total_revenue"]) == Decimal("9800")
        assert summary["tenants_needing_reading"] == []
        assert summary["tenant_counts"] == {"total": 1, "active": 1, "electricity": 1, "rent": 1}

    def test_dashboard_lists_tenants_needing_reading(self, client, tenant_id):
        summary = client.get("/api/dashboard", params={"period": "Oct 2025"}).json()

        assert summary["tenants_needing_reading"] == [
            {"id": tenant_id, "name": "Asha Verma", "flat_no": "A-101"}
        ]
        assert Decimal(summary["outstanding_bills_amount"]) == 0
