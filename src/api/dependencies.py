"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresAccountRepository
from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.smtp import SmtpEmailSender
from src.config.settings import get_settings
from src.domain.accounts import AccountService
from src.domain.exceptions import InvalidSessionToken
from src.domain.hashing import PasswordHasher
from src.domain.ports import EmailSender
from src.domain.sessions import SessionClaims, SessionTokenIssuer


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresAccountRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresAccountRepository(pool)


@lru_cache
def get_email_sender() -> EmailSender:
    """Get the configured email sender (singleton)."""
    settings = get_settings()
    if settings.email_backend.lower() == "smtp":
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.smtp_sender,
            username=settings.smtp_user,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
        )
    return ConsoleEmailSender()


@lru_cache
def get_password_hasher() -> PasswordHasher:
    """Get the bcrypt password hasher (singleton)."""
    return PasswordHasher(rounds=get_settings().bcrypt_cost)


@lru_cache
def get_session_issuer() -> SessionTokenIssuer:
    """Get the session token issuer configured from settings (singleton)."""
    settings = get_settings()
    return SessionTokenIssuer(
        secret=settings.jwt_secret,
        expiration_minutes=settings.jwt_expiration_minutes,
        algorithm=settings.jwt_algorithm,
    )


def get_account_service(request: Request) -> AccountService:
    """
    Create account service with injected dependencies.

    Wires together the repository, email sender, hasher and session
    issuer. Verification emails go through the app's notification
    executor when one was started by the lifespan.
    """
    settings = get_settings()
    return AccountService(
        repository=get_repository(request),
        email_sender=get_email_sender(),
        session_issuer=get_session_issuer(),
        hasher=get_password_hasher(),
        verification_url=settings.verification_url,
        notification_executor=getattr(request.app.state, "notification_executor", None),
        log_verification_tokens=settings.log_verification_tokens,
    )


# Bearer token security scheme for OpenAPI documentation
http_bearer = HTTPBearer(auto_error=False)


def get_session_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    issuer: SessionTokenIssuer = Depends(get_session_issuer),
) -> SessionClaims:
    """
    Validate the Bearer session token for protected routes.

    Returns 401 for a missing, malformed, badly signed or expired token.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return issuer.decode(credentials.credentials)
    except InvalidSessionToken:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
