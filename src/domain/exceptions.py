"""
Domain exceptions - Semantic error types for the account lifecycle.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Each AuthError carries the fixed, caller-facing message for its kind.
"""


class AuthError(Exception):
    """Base class for caller-facing account lifecycle errors."""

    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AuthError):
    """Malformed or missing input, correctable by the caller."""

    default_message = "Validation failed"

    def __init__(self, message: str | None = None, errors: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or {}


class ConflictError(AuthError):
    """An account with that email already exists."""

    default_message = "User with that email already registered"


class AuthenticationError(AuthError):
    """
    Invalid credentials.

    Raised for both unknown emails and wrong passwords, always with the
    same message, so responses cannot be used to enumerate accounts.
    """

    default_message = "Invalid email or password"


class UnverifiedAccountError(AuthError):
    """Account exists but its email has not been verified yet."""

    default_message = "Please verify your email first"


class NotFoundError(AuthError):
    """Unknown or already redeemed verification token."""

    default_message = "Invalid token"


class InternalError(AuthError):
    """A dependency or cryptographic operation failed."""

    default_message = "Internal server error"


class CryptoError(Exception):
    """Base class for hashing and signing failures."""

    pass


class HashingError(CryptoError):
    """Password hashing failed internally."""

    pass


class SigningError(CryptoError):
    """Session token could not be signed (missing secret or signer failure)."""

    pass


class InvalidSessionToken(Exception):
    """Session token signature, format or expiry check failed."""

    pass


class RepositoryError(Exception):
    """Persistence store failure, distinct from a record not being found."""

    pass
