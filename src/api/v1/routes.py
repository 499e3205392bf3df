"""
API v1 routes.

Defines REST endpoints for the account authentication API:
- POST /v1/auth/register     - Create an unverified account
- POST /v1/auth/login        - Exchange credentials for a session token
- GET  /v1/auth/verify-email - Redeem an email verification token
- GET  /v1/auth/me           - Inspect the presented session token

Domain errors propagate to the handlers in src.api.errors.
"""

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_account_service, get_session_claims
from src.api.models import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    SessionResponse,
    VerifyEmailResponse,
)
from src.domain.accounts import AccountService
from src.domain.sessions import SessionClaims

router = APIRouter(prefix="/auth", tags=["v1"])

REGISTERED_MESSAGE = "User registered successfully. Please verify your email."


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        409: {"model": ErrorResponse, "description": "User already exists"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Register a new user",
    description="Create a new, unverified account. "
    "A verification link is sent to the provided email.",
)
def register(
    request_data: RegisterRequest,
    service: AccountService = Depends(get_account_service),
) -> RegisterResponse:
    """
    Register a new user and send a verification link.

    - **name**: Display name
    - **email**: Valid email address to register
    - **password**: Password (minimum 8 characters)
    """
    service.register(request_data.name, request_data.email, request_data.password)
    return RegisterResponse(message=REGISTERED_MESSAGE)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid data"},
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
        403: {"model": ErrorResponse, "description": "Email not verified"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="User login",
    description="Authenticate a verified user and return a signed session token.",
)
def login(
    request_data: LoginRequest,
    service: AccountService = Depends(get_account_service),
) -> LoginResponse:
    token = service.login(request_data.email, request_data.password)
    return LoginResponse(token=token)


@router.get(
    "/verify-email",
    response_model=VerifyEmailResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Token required"},
        404: {"model": ErrorResponse, "description": "Invalid token"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Verify user email",
    description="Redeem the one-time verification token sent by email.",
)
def verify_email(
    token: str = Query("", description="Verification token"),
    service: AccountService = Depends(get_account_service),
) -> VerifyEmailResponse:
    account = service.verify_email(token)
    return VerifyEmailResponse(message=f"User with email {account.email} verified successfully")


@router.get(
    "/me",
    response_model=SessionResponse,
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
    summary="Current session",
    description="Return the identity asserted by the Bearer session token.",
)
def me(claims: SessionClaims = Depends(get_session_claims)) -> SessionResponse:
    return SessionResponse(email=claims.email, user_id=claims.user_id, expires_at=claims.expires_at)
