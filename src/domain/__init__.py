"""
Domain layer - Account lifecycle business logic.

This package contains the core authentication state machine: password
hashing, verification token generation, session token issuing and the
account service. It defines its own port interfaces for infrastructure
abstraction, so adapters stay swappable.
"""

from .accounts import AccountService
from .exceptions import (
    AuthError,
    AuthenticationError,
    ConflictError,
    HashingError,
    InternalError,
    InvalidSessionToken,
    NotFoundError,
    RepositoryError,
    SigningError,
    UnverifiedAccountError,
    ValidationError,
)
from .hashing import PasswordHasher
from .ports import Account, AccountRepository, EmailSender
from .sessions import SessionClaims, SessionTokenIssuer
from .tokens import new_opaque_token

__all__ = [
    "Account",
    "AccountRepository",
    "AccountService",
    "AuthError",
    "AuthenticationError",
    "ConflictError",
    "EmailSender",
    "HashingError",
    "InternalError",
    "InvalidSessionToken",
    "NotFoundError",
    "PasswordHasher",
    "RepositoryError",
    "SessionClaims",
    "SessionTokenIssuer",
    "SigningError",
    "UnverifiedAccountError",
    "ValidationError",
    "new_opaque_token",
]
