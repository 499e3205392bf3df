"""
Unit tests for API v1 routes.

Tests endpoint responses and error translation with mocked dependencies.
"""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.api.dependencies import get_account_service, get_session_issuer
from src.api.errors import register_exception_handlers
from src.api.v1.routes import REGISTERED_MESSAGE, router
from src.domain.accounts import AccountService
from src.domain.exceptions import (
    AuthenticationError,
    ConflictError,
    InternalError,
    NotFoundError,
    UnverifiedAccountError,
    ValidationError,
)
from src.domain.ports import Account
from src.domain.sessions import SessionTokenIssuer

REGISTER_BODY = {"name": "Ada", "email": "ada@x.com", "password": "Secret123!"}


@pytest.fixture
def mock_service() -> MagicMock:
    return MagicMock(spec=AccountService)


@pytest.fixture
def app(mock_service: MagicMock) -> FastAPI:
    """Create test FastAPI application with the service mocked."""
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router, prefix="/v1")
    test_app.dependency_overrides[get_account_service] = lambda: mock_service
    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


class TestRegisterEndpoint:
    """Tests for POST /v1/auth/register."""

    def test_register_success_returns_201(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.register.return_value = Account(
            id=1, name="Ada", email="ada@x.com", password_hash="h", verification_token="tok-secret"
        )

        response = client.post("/v1/auth/register", json=REGISTER_BODY)

        assert response.status_code == 201
        assert response.json() == {"message": REGISTERED_MESSAGE}
        assert "verify your email" in response.json()["message"]
        mock_service.register.assert_called_once_with("Ada", "ada@x.com", "Secret123!")

    def test_register_response_never_contains_token(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.register.return_value = Account(
            id=1, name="Ada", email="ada@x.com", password_hash="h", verification_token="tok-secret"
        )
        response = client.post("/v1/auth/register", json=REGISTER_BODY)
        assert "tok-secret" not in response.text

    def test_register_duplicate_returns_409(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.register.side_effect = ConflictError()

        response = client.post("/v1/auth/register", json=REGISTER_BODY)

        assert response.status_code == 409
        assert response.json() == {"detail": "User with that email already registered"}

    def test_register_internal_error_returns_500_without_detail(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.register.side_effect = InternalError("Could not register the user")

        response = client.post("/v1/auth/register", json=REGISTER_BODY)

        assert response.status_code == 500
        assert response.json() == {"detail": "Could not register the user"}

    def test_domain_validation_error_returns_400_with_fields(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.register.side_effect = ValidationError(errors={"name": "Name is required"})

        response = client.post("/v1/auth/register", json=REGISTER_BODY)

        assert response.status_code == 400
        assert response.json() == {
            "detail": "Validation failed",
            "errors": {"name": "Name is required"},
        }

    @pytest.mark.parametrize(
        "body,field",
        [
            ({"name": "Ada", "email": "invalid-email", "password": "Secret123!"}, "email"),
            ({"name": "Ada", "email": "ada@x.com", "password": "short"}, "password"),
            ({"email": "ada@x.com", "password": "Secret123!"}, "name"),
            ({"name": "Ada", "password": "Secret123!"}, "email"),
        ],
    )
    def test_schema_validation_returns_400(
        self, client: TestClient, mock_service: MagicMock, body: dict, field: str
    ) -> None:
        response = client.post("/v1/auth/register", json=body)

        assert response.status_code == 400
        assert response.json()["detail"] == "Validation failed"
        assert field in response.json()["errors"]
        mock_service.register.assert_not_called()

    def test_invalid_json_returns_400(self, client: TestClient) -> None:
        response = client.post(
            "/v1/auth/register",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400


class TestLoginEndpoint:
    """Tests for POST /v1/auth/login."""

    def test_login_success_returns_token(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.login.return_value = "a.b.c"

        response = client.post("/v1/auth/login", json={"email": "ada@x.com", "password": "pw"})

        assert response.status_code == 200
        assert response.json() == {"token": "a.b.c"}
        mock_service.login.assert_called_once_with("ada@x.com", "pw")

    def test_invalid_credentials_returns_401(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.login.side_effect = AuthenticationError()

        response = client.post("/v1/auth/login", json={"email": "ada@x.com", "password": "pw"})

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid email or password"}

    def test_unverified_returns_403(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.login.side_effect = UnverifiedAccountError()

        response = client.post("/v1/auth/login", json={"email": "ada@x.com", "password": "pw"})

        assert response.status_code == 403
        assert response.json() == {"detail": "Please verify your email first"}

    def test_signing_failure_returns_500(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.login.side_effect = InternalError("Could not generate JWT Token")

        response = client.post("/v1/auth/login", json={"email": "ada@x.com", "password": "pw"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Could not generate JWT Token"}

    def test_missing_fields_returns_400(self, client: TestClient, mock_service: MagicMock) -> None:
        response = client.post("/v1/auth/login", json={"email": "ada@x.com"})
        assert response.status_code == 400
        mock_service.login.assert_not_called()


class TestVerifyEmailEndpoint:
    """Tests for GET /v1/auth/verify-email."""

    def test_verify_success(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.verify_email.return_value = Account(
            id=1, name="Ada", email="ada@x.com", password_hash="h", verified=True
        )

        response = client.get("/v1/auth/verify-email", params={"token": "tok-1"})

        assert response.status_code == 200
        assert response.json() == {"message": "User with email ada@x.com verified successfully"}
        mock_service.verify_email.assert_called_once_with("tok-1")

    def test_missing_token_passed_as_empty(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.verify_email.side_effect = ValidationError("Token required")

        response = client.get("/v1/auth/verify-email")

        assert response.status_code == 400
        assert response.json() == {"detail": "Token required"}
        mock_service.verify_email.assert_called_once_with("")

    def test_unknown_token_returns_404(self, client: TestClient, mock_service: MagicMock) -> None:
        mock_service.verify_email.side_effect = NotFoundError()

        response = client.get("/v1/auth/verify-email", params={"token": "nope"})

        assert response.status_code == 404
        assert response.json() == {"detail": "Invalid token"}

    def test_update_failure_returns_500(
        self, client: TestClient, mock_service: MagicMock
    ) -> None:
        mock_service.verify_email.side_effect = InternalError("Error updating the user")

        response = client.get("/v1/auth/verify-email", params={"token": "tok-1"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Error updating the user"}


class TestMeEndpoint:
    """Tests for GET /v1/auth/me session token verification."""

    @pytest.fixture
    def issuer(self, app: FastAPI) -> SessionTokenIssuer:
        issuer = SessionTokenIssuer(secret="route-secret")
        app.dependency_overrides[get_session_issuer] = lambda: issuer
        return issuer

    def test_valid_token_returns_claims(
        self, client: TestClient, issuer: SessionTokenIssuer
    ) -> None:
        token = issuer.issue("ada@x.com", 7)

        response = client.get("/v1/auth/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["email"] == "ada@x.com"
        assert response.json()["user_id"] == 7

    def test_missing_token_returns_401(self, client: TestClient, issuer: SessionTokenIssuer) -> None:
        response = client.get("/v1/auth/me")
        assert response.status_code == 401

    def test_forged_token_returns_401(self, client: TestClient, issuer: SessionTokenIssuer) -> None:
        forged = SessionTokenIssuer(secret="attacker-secret").issue("ada@x.com", 7)

        response = client.get("/v1/auth/me", headers={"Authorization": f"Bearer {forged}"})

        assert response.status_code == 401
        assert response.json() == {"detail": "Could not validate credentials"}
