"""Integration tests for the ledger HTTP API"""

import pytest

INVOICE_PAYLOAD = {
    "issue_date": "2025-03-01",
    "line_items": [
        {"name": "Consulting hours", "quantity": "3", "unit_price": "19.99", "tax_rate": "8.25"}
    ],
}


class TestInvoiceEndpoints:
    """Test invoice creation, payments and errors"""

    @pytest.mark.asyncio
    async def test_create_invoice(self, client):
        # Act
        response = await client.post("/api/ledger/invoices", json=INVOICE_PAYLOAD)

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["number"] == "INV-2025-00001"
        assert data["status"] == "draft"
        assert data["total"] == "64.92"
        assert data["balance_due"] == "64.92"

    @pytest.mark.asyncio
    async def test_full_payment_marks_invoice_paid(self, client):
        # Arrange
        invoice = (await client.post("/api/ledger/invoices", json=INVOICE_PAYLOAD)).json()

        # Act
        response = await client.post(
            f"/api/ledger/invoices/{invoice['id']}/payments", json={"amount": "64.92", "method": "card"}
        )

        # Assert
        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "paid"
        assert data["balance_due"] == "0.00"
        assert data["transitions"][0]["from_status"] == "draft"
        assert data["transitions"][0]["to_status"] == "paid"
        assert data["transitions"][0]["changed_by"] == "user_1"

        history = await client.get(f"/api/ledger/invoices/{invoice['id']}/history")
        assert [row["to_status"] for row in history.json()] == ["paid"]

    @pytest.mark.asyncio
    async def test_get_unknown_invoice_returns_404(self, client):
        # Act
        response = await client.get("/api/ledger/invoices/999")

        # Assert
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "DOCUMENT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_invoice_for_unknown_order_is_rejected(self, client):
        # Act
        response = await client.post("/api/ledger/invoices", json={**INVOICE_PAYLOAD, "order_id": 999})

        # Assert
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_PARENT_DOCUMENT"

    @pytest.mark.asyncio
    async def test_zero_payment_is_rejected(self, client):
        # Arrange
        invoice = (await client.post("/api/ledger/invoices", json=INVOICE_PAYLOAD)).json()

        # Act
        response = await client.post(f"/api/ledger/invoices/{invoice['id']}/payments", json={"amount": "0"})

        # Assert
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_missing_tenant_is_rejected(self, client):
        # Act
        response = await client.post(
            "/api/ledger/invoices", json=INVOICE_PAYLOAD, headers={"X-Tenant-ID": ""}
        )

        # Assert
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "TENANT_REQUIRED"


class TestLineItemEndpoints:

    @pytest.mark.asyncio
    async def test_add_line_item_resyncs_invoice(self, client):
        # Arrange
        invoice = (await client.post("/api/ledger/invoices", json=INVOICE_PAYLOAD)).json()

        # Act
        response = await client.post(
            f"/api/ledger/invoices/{invoice['id']}/line-items",
            json={"name": "Travel", "quantity": "1", "unit_price": "35.08"},
        )

        # Assert
        assert response.status_code == 201
        assert response.json()["total"] == "100.00"

        detail = (await client.get(f"/api/ledger/invoices/{invoice['id']}")).json()
        assert [line["name"] for line in detail["line_items"]] == ["Consulting hours", "Travel"]
        assert detail["payments"] == []

    @pytest.mark.asyncio
    async def test_line_items_on_unknown_document_return_404(self, client):
        # Act
        response = await client.post(
            "/api/ledger/orders/999/line-items", json={"name": "Widget", "quantity": "1", "unit_price": "5"}
        )

        # Assert
        assert response.status_code == 404
        assert response.json()["error"]["code"] == "DOCUMENT_NOT_FOUND"


class TestQuoteEndpoints:

    @pytest.mark.asyncio
    async def test_quote_accept_flow(self, client):
        # Arrange
        quote = (
            await client.post(
                "/api/ledger/quotes",
                json={
                    "title": "Website redesign",
                    "line_items": [{"name": "Design", "quantity": "2", "unit_price": "50.00"}],
                },
            )
        ).json()

        # Act
        sent = await client.post(f"/api/ledger/quotes/{quote['id']}/send")
        accepted = await client.post(f"/api/ledger/quotes/{quote['id']}/accept", json={"note": "Signed"})

        # Assert
        assert sent.json()["status"] == "sent"
        assert accepted.json()["status"] == "accepted"
        detail = (await client.get(f"/api/ledger/quotes/{quote['id']}")).json()
        assert detail["decision_note"] == "Signed"
