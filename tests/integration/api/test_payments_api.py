"""API tests for payment endpoints

Tests cover:
- Partial and completing payments reconcile invoice status
- Overpayment returns 400 with the maximum additional amount
- Deleting a payment reopens a paid invoice
- Sub-cent amounts and repeated deletes are rejected cleanly
- Invoice payment history
"""

import pytest

API = "/api"


async def sent_invoice(client, amount="100.00"):
    await client.post(f"{API}/companies", json={"name": "Billing Co", "email": "ar@billing.test"})
    acme = (await client.post(f"{API}/clients", json={"name": "Acme Corp", "email": "billing@acme.test"})).json()
    invoice = (await client.post(f"{API}/invoices", json={"client_id": acme["id"], "amount": amount})).json()
    await client.patch(f"{API}/invoices/{invoice['id']}/status", json={"status": "sent"})
    return invoice


def payment(invoice_id, amount, **overrides):
    payload = {"invoice_id": invoice_id, "amount": amount, "method": "bank_transfer"}
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
class TestRecordPaymentAPI:
    """POST /api/payments"""

    async def test_partial_then_completing_payment(self, client):
        """
        Given: Sent invoice of 100.00
        When: 60.00 then 40.00 are paid
        Then: Invoice stays sent after the first and is paid after the second
        """
        # Arrange
        invoice = await sent_invoice(client)

        # Act
        first = await client.post(f"{API}/payments", json=payment(invoice["id"], "60.00", paid_date="2025-02-10"))
        second = await client.post(f"{API}/payments", json=payment(invoice["id"], "40.00", paid_date="2025-02-20"))

        # Assert
        assert first.status_code == 201
        assert first.json()["invoice"]["status"] == "sent"
        assert first.json()["payment_summary"]["remaining_amount"] == "40.00"
        assert second.status_code == 201
        assert second.json()["invoice"]["status"] == "paid"
        assert second.json()["invoice"]["paid_date"] == "2025-02-20"
        assert second.json()["payment_summary"]["is_fully_paid"] is True

    async def test_overpayment(self, client):
        invoice = await sent_invoice(client)
        await client.post(f"{API}/payments", json=payment(invoice["id"], "60.00"))

        response = await client.post(f"{API}/payments", json=payment(invoice["id"], "50.00"))

        assert response.status_code == 400
        assert response.json()["error"] == {
            "code": "OVERPAYMENT",
            "message": (
                "Payment amount would exceed invoice total. Invoice amount: $100.00, "
                "Already paid: $60.00, Maximum additional payment: $40.00"
            ),
        }

    async def test_zero_amount(self, client):
        invoice = await sent_invoice(client)

        response = await client.post(f"{API}/payments", json=payment(invoice["id"], "0"))

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Payment amount must be greater than 0"

    async def test_unknown_invoice(self, client):
        response = await client.post(f"{API}/payments", json=payment(999, "10.00"))

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "INVOICE_NOT_FOUND"

    async def test_cancelled_invoice(self, client):
        invoice = await sent_invoice(client)
        await client.patch(f"{API}/invoices/{invoice['id']}/status", json={"status": "cancelled"})

        response = await client.post(f"{API}/payments", json=payment(invoice["id"], "10.00"))

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVOICE_CANCELLED"


@pytest.mark.asyncio
class TestPaymentCorrectionsAPI:
    """PUT and DELETE /api/payments/{id}"""

    async def test_delete_full_payment_reopens_invoice(self, client):
        # Arrange
        invoice = await sent_invoice(client)
        paid = (await client.post(f"{API}/payments", json=payment(invoice["id"], "100.00"))).json()
        assert paid["invoice"]["status"] == "paid"

        # Act
        response = await client.delete(f"{API}/payments/{paid['payment']['id']}")

        # Assert
        assert response.status_code == 200
        assert response.json()["invoice_status"] == "sent"
        detail = (await client.get(f"{API}/invoices/{invoice['id']}")).json()
        assert detail["status"] == "sent"
        assert detail["paid_date"] is None
        assert detail["payments"] == []

    async def test_update_amount_to_full(self, client):
        invoice = await sent_invoice(client)
        partial = (await client.post(f"{API}/payments", json=payment(invoice["id"], "30.00"))).json()

        response = await client.put(f"{API}/payments/{partial['payment']['id']}", json={"amount": "100.00"})

        assert response.status_code == 200
        assert response.json()["invoice"]["status"] == "paid"

    async def test_payment_history(self, client):
        invoice = await sent_invoice(client)
        await client.post(f"{API}/payments", json=payment(invoice["id"], "25.00", paid_date="2025-01-20"))
        await client.post(f"{API}/payments", json=payment(invoice["id"], "25.00", paid_date="2025-01-25"))

        response = await client.get(f"{API}/payments/invoice/{invoice['id']}")

        assert response.status_code == 200
        data = response.json()
        assert len(data["payments"]) == 2
        assert data["summary"]["total_paid"] == "50.00"
        assert data["summary"]["payment_count"] == 2

    async def test_update_overpayment(self, client):
        invoice = await sent_invoice(client)
        await client.post(f"{API}/payments", json=payment(invoice["id"], "60.00"))
        second = (await client.post(f"{API}/payments", json=payment(invoice["id"], "10.00"))).json()

        response = await client.put(f"{API}/payments/{second['payment']['id']}", json={"amount": "50.00"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "OVERPAYMENT"
        assert "Other payments total: $60.00, Maximum payment amount: $40.00" in response.json()["error"]["message"]
        detail = (await client.get(f"{API}/invoices/{invoice['id']}")).json()
        assert detail["status"] == "sent"

    async def test_update_on_cancelled_invoice(self, client):
        invoice = await sent_invoice(client)
        partial = (await client.post(f"{API}/payments", json=payment(invoice["id"], "30.00"))).json()
        await client.patch(f"{API}/invoices/{invoice['id']}/status", json={"status": "cancelled"})

        response = await client.put(f"{API}/payments/{partial['payment']['id']}", json={"amount": "20.00"})

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "INVOICE_CANCELLED"

    async def test_sub_cent_amount(self, client):
        """
        Given: Sent invoice of 100.00
        When: A payment of 99.999 is recorded
        Then: 400 and the invoice has no payments
        """
        invoice = await sent_invoice(client)

        response = await client.post(f"{API}/payments", json=payment(invoice["id"], "99.999"))

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        detail = (await client.get(f"{API}/invoices/{invoice['id']}")).json()
        assert detail["status"] == "sent"
        assert detail["payments"] == []

    async def test_delete_twice(self, client):
        invoice = await sent_invoice(client)
        paid = (await client.post(f"{API}/payments", json=payment(invoice["id"], "40.00"))).json()

        first = await client.delete(f"{API}/payments/{paid['payment']['id']}")
        second = await client.delete(f"{API}/payments/{paid['payment']['id']}")

        assert first.status_code == 200
        assert second.status_code == 404
        assert second.json()["error"]["code"] == "PAYMENT_NOT_FOUND"
