"""
Tests for account API endpoints.

These test the HTTP layer: status codes, response format,
and error handling. Ledger logic is tested in
tests/services/.
"""

import uuid
from decimal import Decimal

USER_ID = "123e4567-e89b-12d3-a456-426614174000"


def create_account(client, currency="USD"):
    response = client.post("/api/accounts", json={
        "user_id": USER_ID,
        "currency": currency,
    })
    assert response.status_code == 201
    return response.json()["account_id"]


def add_money(client, account_id, amount, currency="USD"):
    return client.post("/api/accounts/add-money", json={
        "user_id": USER_ID,
        "account_id": account_id,
        "amount": amount,
        "currency": currency,
    })


def transfer_money(client, source_id, target_id, amount, currency="USD"):
    return client.post("/api/accounts/transfer-money", json={
        "user_id": USER_ID,
        "source_account_id": source_id,
        "target_account_id": target_id,
        "amount": amount,
        "currency": currency,
    })


class TestCreateAccount:

    def test_create_account_returns_201(self, client):
        response = client.post("/api/accounts", json={
            "user_id": USER_ID,
            "currency": "USD",
        })
        assert response.status_code == 201

    def test_create_account_returns_data(self, client):
        response = client.post("/api/accounts", json={
            "user_id": USER_ID,
            "currency": "USD",
        })
        data = response.json()
        assert data["user_id"] == USER_ID
        assert data["currency"] == "USD"
        assert Decimal(data["amount"]) == 0
        assert uuid.UUID(data["account_id"])
        assert data["created_at"]

    def test_missing_currency_returns_400(self, client):
        response = client.post("/api/accounts", json={"user_id": USER_ID})
        assert response.status_code == 400
        assert response.json() == {"detail": "Invalid input"}

    def test_malformed_body_returns_400(self, client):
        response = client.post(
            "/api/accounts",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    def test_get_not_allowed(self, client):
        response = client.get("/api/accounts")
        assert response.status_code == 405


class TestAddMoney:

    def test_add_money_returns_new_total(self, client):
        account_id = create_account(client)

        response = add_money(client, account_id, 100.0)

        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == USER_ID
        assert data["account_id"] == account_id
        assert Decimal(data["total_amount"]) == Decimal("100")
        assert data["currency"] == "USD"

    def test_total_amount_is_exact_decimal_string(self, client):
        account_id = create_account(client)

        add_money(client, account_id, "0.1")
        data = add_money(client, account_id, "0.2").json()

        # Encoded as a string so no float rounding creeps in
        assert isinstance(data["total_amount"], str)
        assert Decimal(data["total_amount"]) == Decimal("0.3")

    def test_currency_mismatch_returns_500_without_detail(self, client):
        account_id = create_account(client, currency="USD")

        response = add_money(client, account_id, 100.0, currency="EUR")

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to update account balance"}

    def test_unknown_account_returns_500(self, client):
        response = add_money(client, str(uuid.uuid4()), 10)
        assert response.status_code == 500

    def test_invalid_account_id_returns_400(self, client):
        response = add_money(client, "not-a-uuid", 10)
        assert response.status_code == 400


class TestTransferMoney:

    def test_transfer_returns_both_balances(self, client):
        source_id = create_account(client)
        target_id = create_account(client)
        add_money(client, source_id, 150.0)

        response = transfer_money(client, source_id, target_id, 50.0)

        assert response.status_code == 200
        data = response.json()
        assert data["user_id"] == USER_ID
        assert data["source_account_id"] == source_id
        assert data["target_account_id"] == target_id
        assert Decimal(data["source_total_amount"]) == Decimal("100")
        assert Decimal(data["target_total_amount"]) == Decimal("50")
        assert isinstance(data["source_total_amount"], str)
        assert isinstance(data["target_total_amount"], str)
        assert data["source_currency"] == "USD"
        assert data["target_currency"] == "USD"

    def test_wrong_currency_leaves_balances(self, client):
        source_id = create_account(client)
        target_id = create_account(client)
        add_money(client, source_id, 100.0)
        transfer_money(client, source_id, target_id, 50.0)

        response = transfer_money(client, source_id, target_id, 999, "EUR")
        assert response.status_code == 500

        # A zero deposit reads back the current balance
        source = add_money(client, source_id, 0).json()
        target = add_money(client, target_id, 0).json()
        assert Decimal(source["total_amount"]) == Decimal("50")
        assert Decimal(target["total_amount"]) == Decimal("50")
