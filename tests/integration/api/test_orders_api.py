"""API tests for order endpoints

Tests cover:
- POST /api/orders derives next_invoice_date
- Validation errors map to 400 with the error envelope
- Status changes, schedule preview and deletion
- POST /api/orders/{id}/generate-invoice
"""

import pytest

API = "/api"


async def create_client(client, name="Acme Corp", email="billing@acme.test"):
    response = await client.post(f"{API}/clients", json={"name": name, "email": email})
    assert response.status_code == 201
    return response.json()


async def create_company(client):
    response = await client.post(
        f"{API}/companies", json={"name": "Billing Co", "email": "ar@billing.test"}
    )
    assert response.status_code == 201
    return response.json()


def order_payload(client_id, **overrides):
    payload = {
        "client_id": client_id,
        "description": "Website maintenance",
        "amount": "100.00",
        "frequency": "monthly",
        "start_date": "2025-02-01",
        "lead_time_days": 15,
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
class TestCreateOrderAPI:
    """POST /api/orders"""

    async def test_create_monthly_order(self, client):
        # Arrange
        acme = await create_client(client)

        # Act
        response = await client.post(f"{API}/orders", json=order_payload(acme["id"]))

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "active"
        assert data["next_invoice_date"] == "2025-03-01"
        assert data["frequency_display"] == "Monthly"
        assert data["client_name"] == "Acme Corp"

    async def test_custom_frequency_requires_days(self, client):
        acme = await create_client(client)

        response = await client.post(
            f"{API}/orders", json=order_payload(acme["id"], frequency="custom")
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_FREQUENCY_CUSTOM_DAYS"

    async def test_start_date_in_past(self, client):
        acme = await create_client(client)

        response = await client.post(
            f"{API}/orders", json=order_payload(acme["id"], start_date="2025-01-31")
        )

        assert response.status_code == 400
        assert response.json()["error"] == {
            "code": "INVALID_START_DATE",
            "message": "Start date cannot be in the past",
        }

    async def test_negative_amount_rejected_by_schema(self, client):
        acme = await create_client(client)

        response = await client.post(
            f"{API}/orders", json=order_payload(acme["id"], amount="-5")
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_unknown_client(self, client):
        response = await client.post(f"{API}/orders", json=order_payload(999))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CLIENT_NOT_FOUND"


@pytest.mark.asyncio
class TestOrderLifecycleAPI:
    """Status, schedule, listing and deletion"""

    async def test_pause_and_cancel(self, client):
        acme = await create_client(client)
        order = (await client.post(f"{API}/orders", json=order_payload(acme["id"]))).json()

        paused = await client.patch(f"{API}/orders/{order['id']}/status", json={"status": "paused"})
        cancelled = await client.patch(f"{API}/orders/{order['id']}/status", json={"status": "cancelled"})
        resumed = await client.patch(f"{API}/orders/{order['id']}/status", json={"status": "active"})

        assert paused.json()["status"] == "paused"
        assert cancelled.json()["status"] == "cancelled"
        assert resumed.status_code == 409
        assert resumed.json()["error"]["code"] == "INVALID_STATUS_TRANSITION"

    async def test_schedule_preview(self, client):
        acme = await create_client(client)
        order = (await client.post(f"{API}/orders", json=order_payload(acme["id"]))).json()

        response = await client.get(f"{API}/orders/{order['id']}/schedule", params={"count": 3})

        assert response.status_code == 200
        dates = [entry["scheduled_date"] for entry in response.json()["schedule"]]
        assert dates == ["2025-03-01", "2025-04-01", "2025-05-01"]

    async def test_list_orders_filters_by_status(self, client):
        acme = await create_client(client)
        first = (await client.post(f"{API}/orders", json=order_payload(acme["id"]))).json()
        await client.post(f"{API}/orders", json=order_payload(acme["id"], description="Hosting"))
        await client.patch(f"{API}/orders/{first['id']}/status", json={"status": "paused"})

        response = await client.get(f"{API}/orders", params={"status": "paused"})

        assert response.status_code == 200
        data = response.json()
        assert [order["id"] for order in data["orders"]] == [first["id"]]
        assert data["pagination"]["total_count"] == 1

    async def test_delete_order_without_invoices(self, client):
        acme = await create_client(client)
        order = (await client.post(f"{API}/orders", json=order_payload(acme["id"]))).json()

        response = await client.delete(f"{API}/orders/{order['id']}")

        assert response.status_code == 200
        assert response.json()["deleted"] is True
        assert (await client.get(f"{API}/orders/{order['id']}")).status_code == 404


@pytest.mark.asyncio
class TestGenerateInvoiceAPI:
    """POST /api/orders/{id}/generate-invoice"""

    async def test_generate_when_due(self, client, clock):
        """
        Given: Monthly order with next invoice on 2025-03-01
        When: The invoice is generated on 2025-03-01
        Then: 201 with a draft invoice, order advanced to 2025-04-01
        """
        # Arrange
        await create_company(client)
        acme = await create_client(client)
        order = (await client.post(f"{API}/orders", json=order_payload(acme["id"]))).json()
        clock.set(clock.today().replace(month=3))

        # Act
        response = await client.post(f"{API}/orders/{order['id']}/generate-invoice")

        # Assert
        assert response.status_code == 201
        invoice = response.json()
        assert invoice["invoice_number"] == "INV-2025-000001"
        assert invoice["status"] == "draft"
        assert invoice["due_date"] == "2025-03-16"

        refreshed = (await client.get(f"{API}/orders/{order['id']}")).json()
        assert refreshed["next_invoice_date"] == "2025-04-01"
        assert refreshed["invoice_count"] == 1

    async def test_generate_before_due(self, client):
        await create_company(client)
        acme = await create_client(client)
        order = (await client.post(f"{API}/orders", json=order_payload(acme["id"]))).json()

        response = await client.post(f"{API}/orders/{order['id']}/generate-invoice")

        assert response.status_code == 409
        assert response.json()["error"]["message"] == "Next invoice is not due until 2025-03-01"
