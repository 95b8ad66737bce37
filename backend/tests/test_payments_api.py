"""API tests for interactive charges, transactions and invoices."""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from rentbill.core.database import get_db
from rentbill.main import app
from rentbill.repositories.customer_repository import CustomerRepository
from tests.conftest import create_customer

PELECARD_CLIENT = "rentbill.services.payment_providers.pelecard.httpx.Client"


@pytest.fixture
def client():
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def db_session():
    """Create a database session for direct repository testing."""
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


def _mock_pelecard(mock_client_cls, body):
    mock_response = MagicMock()
    mock_response.status_code = 200
    mock_response.text = ""
    mock_response.json.return_value = body

    mock_client = MagicMock()
    mock_client.__enter__ = MagicMock(return_value=mock_client)
    mock_client.__exit__ = MagicMock(return_value=False)
    mock_client.post.return_value = mock_response
    mock_client_cls.return_value = mock_client
    return mock_client


SUCCESS_BODY = {
    "StatusCode": "000",
    "ResultData": {
        "PelecardTransactionId": "PT-100",
        "Token": "tok_new",
        "CreditCardNumber": "458000******1234",
        "CreditCardExpDate": "1228",
    },
}


class TestChargeEndpoint:
    def test_card_charge(self, client: TestClient, gateway_credentials):
        with patch(PELECARD_CLIENT) as mock_client_cls:
            mock_client = _mock_pelecard(mock_client_cls, SUCCESS_BODY)
            response = client.post(
                "/v1/payments/charge",
                json={
                    "transaction_id": "pos-1",
                    "amount": "99.90",
                    "customer_name": "Dana Levi",
                    "card_number": "4580000000001234",
                    "card_expiry": "1228",
                    "cvv": "123",
                },
            )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["transaction_id"] == "pos-1"
        assert data["gateway_transaction_id"] == "PT-100"
        assert data["invoice_number"] == 1
        assert data["replayed"] is False
        payload = mock_client.post.call_args.kwargs["json"]
        assert payload["total"] == "9990"
        assert payload["creditCard"] == "4580000000001234"

    def test_repeat_request_is_replayed(self, client: TestClient, gateway_credentials):
        body = {
            "transaction_id": "pos-2",
            "amount": "10",
            "customer_name": "Dana",
            "token": "tok_abc",
        }
        with patch(PELECARD_CLIENT) as mock_client_cls:
            mock_client = _mock_pelecard(mock_client_cls, SUCCESS_BODY)
            first = client.post("/v1/payments/charge", json=body)
            second = client.post("/v1/payments/charge", json=body)

        assert first.json()["replayed"] is False
        assert second.status_code == 200
        assert second.json()["replayed"] is True
        assert second.json()["invoice_number"] == first.json()["invoice_number"]
        assert mock_client.post.call_count == 1

    def test_decline_returns_402(self, client: TestClient, gateway_credentials):
        with patch(PELECARD_CLIENT) as mock_client_cls:
            _mock_pelecard(mock_client_cls, {"StatusCode": "033", "ErrorMessage": "Declined"})
            response = client.post(
                "/v1/payments/charge",
                json={
                    "transaction_id": "pos-3",
                    "amount": "10",
                    "customer_name": "Dana",
                    "token": "tok_abc",
                },
            )

        assert response.status_code == 402
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Declined"
        assert data["error_code"] == "033"
        assert data["invoice_number"] is None

    def test_stored_token_is_renewed(self, client: TestClient, db_session, gateway_credentials):
        customer = create_customer(db_session, payment_token="tok_old")
        with patch(PELECARD_CLIENT) as mock_client_cls:
            mock_client = _mock_pelecard(mock_client_cls, SUCCESS_BODY)
            response = client.post(
                "/v1/payments/charge",
                json={
                    "transaction_id": "pos-4",
                    "amount": "10",
                    "customer_name": customer.name,
                    "customer_id": str(customer.id),
                    "use_stored_token": True,
                },
            )

        assert response.status_code == 200
        assert mock_client.post.call_args.kwargs["json"]["token"] == "tok_old"
        db_session.expire_all()
        refreshed = CustomerRepository(db_session).get_by_id(customer.id)
        assert refreshed.payment_token == "tok_new"
        assert refreshed.payment_token_last4 == "1234"

    def test_missing_stored_token_returns_400(
        self, client: TestClient, db_session, gateway_credentials
    ):
        customer = create_customer(db_session, payment_token=None)
        response = client.post(
            "/v1/payments/charge",
            json={
                "transaction_id": "pos-5",
                "amount": "10",
                "customer_name": customer.name,
                "customer_id": str(customer.id),
                "use_stored_token": True,
            },
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "No payment token found for customer"

    def test_unsupported_currency_returns_400_and_keeps_id_usable(
        self, client: TestClient, gateway_credentials
    ):
        with patch(PELECARD_CLIENT) as mock_client_cls:
            mock_client = _mock_pelecard(mock_client_cls, SUCCESS_BODY)
            rejected = client.post(
                "/v1/payments/charge",
                json={
                    "transaction_id": "pos-gbp",
                    "amount": "10",
                    "customer_name": "Dana",
                    "currency": "GBP",
                    "token": "tok_abc",
                },
            )
            retried = client.post(
                "/v1/payments/charge",
                json={
                    "transaction_id": "pos-gbp",
                    "amount": "10",
                    "customer_name": "Dana",
                    "currency": "ILS",
                    "token": "tok_abc",
                },
            )

        assert rejected.status_code == 400
        assert rejected.json()["detail"] == "Unsupported currency: GBP"
        assert retried.status_code == 200
        assert retried.json()["success"] is True
        assert mock_client.post.call_count == 1

    def test_missing_credential_returns_422(self, client: TestClient):
        response = client.post(
            "/v1/payments/charge",
            json={"transaction_id": "pos-6", "amount": "10", "customer_name": "Dana"},
        )
        assert response.status_code == 422

    def test_non_positive_amount_returns_422(self, client: TestClient):
        response = client.post(
            "/v1/payments/charge",
            json={
                "transaction_id": "pos-7",
                "amount": "0",
                "customer_name": "Dana",
                "token": "tok_abc",
            },
        )
        assert response.status_code == 422

    def test_unconfigured_gateway_returns_500(self, client: TestClient):
        with patch("rentbill.core.config.settings.pelecard_terminal", ""):
            response = client.post(
                "/v1/payments/charge",
                json={
                    "transaction_id": "pos-8",
                    "amount": "10",
                    "customer_name": "Dana",
                    "token": "tok_abc",
                },
            )
        assert response.status_code == 500
        assert response.json()["detail"] == "Pelecard credentials not configured"


class TestTransactionEndpoint:
    def test_get_transaction(self, client: TestClient, gateway_credentials):
        with patch(PELECARD_CLIENT) as mock_client_cls:
            _mock_pelecard(mock_client_cls, SUCCESS_BODY)
            client.post(
                "/v1/payments/charge",
                json={
                    "transaction_id": "pos-9",
                    "amount": "42.50",
                    "customer_name": "Dana",
                    "token": "tok_abc",
                },
            )

        response = client.get("/v1/payments/transactions/pos-9")
        assert response.status_code == 200
        data = response.json()
        assert data["transaction_id"] == "pos-9"
        assert data["status"] == "success"
        assert Decimal(data["amount"]) == Decimal("42.50")
        assert data["gateway_transaction_id"] == "PT-100"
        assert "gateway_response" not in data

    def test_get_transaction_not_found(self, client: TestClient):
        response = client.get("/v1/payments/transactions/nope")
        assert response.status_code == 404
        assert response.json()["detail"] == "Transaction not found"


class TestInvoicesEndpoint:
    def test_list_and_get(self, client: TestClient, gateway_credentials):
        with patch(PELECARD_CLIENT) as mock_client_cls:
            _mock_pelecard(mock_client_cls, SUCCESS_BODY)
            for i in range(2):
                client.post(
                    "/v1/payments/charge",
                    json={
                        "transaction_id": f"inv-{i}",
                        "amount": "10",
                        "customer_name": "Dana",
                        "token": "tok_abc",
                    },
                )

        response = client.get("/v1/invoices/")
        assert response.status_code == 200
        assert [inv["invoice_number"] for inv in response.json()] == [2, 1]

        response = client.get("/v1/invoices/1")
        assert response.status_code == 200
        data = response.json()
        assert data["transaction_id"] == "inv-0"
        assert data["status"] == "issued"

    def test_get_invoice_not_found(self, client: TestClient):
        response = client.get("/v1/invoices/999")
        assert response.status_code == 404
        assert response.json()["detail"] == "Invoice not found"
