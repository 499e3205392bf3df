"""
Account lifecycle domain service - registration, login and email verification.

Verification State Machine (Forward-Only)
=========================================

States:
- UNVERIFIED: Initial state after registration (token issued, login refused)
- VERIFIED:   Terminal state after the account's own token is redeemed

Valid Transitions:
    UNVERIFIED -> VERIFIED   (verification token redeemed, token cleared)

Invalid Transitions (never allowed):
    VERIFIED -> any          (VERIFIED is terminal)

Operation preconditions:
- register:     no account holds the email
- login:        account exists AND is VERIFIED AND password matches
- verify_email: an UNVERIFIED account holds the presented token

Note: Cross-request consistency (email uniqueness, single redemption of a
token) is enforced by the repository, not by locks in this service.
"""

import logging
import re
from concurrent.futures import Executor
from dataclasses import dataclass, field

from .exceptions import (
    AuthenticationError,
    ConflictError,
    HashingError,
    InternalError,
    NotFoundError,
    RepositoryError,
    SigningError,
    UnverifiedAccountError,
    ValidationError,
)
from .hashing import PasswordHasher
from .ports import Account, AccountRepository, EmailSender
from .sessions import SessionTokenIssuer
from .tokens import new_opaque_token

logger = logging.getLogger(__name__)

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass
class AccountService:
    """
    Domain service for the account authentication lifecycle.

    Orchestrates registration (hash, token, persist, notify), login
    (lookup, verified check, password check, session token) and email
    verification (atomic token redemption).
    """

    repository: AccountRepository
    email_sender: EmailSender
    session_issuer: SessionTokenIssuer
    hasher: PasswordHasher = field(default_factory=PasswordHasher)
    verification_url: str = "http://localhost:8000/v1/auth/verify-email"
    notification_executor: Executor | None = None
    log_verification_tokens: bool = False

    def register(self, name: str, email: str, password: str) -> Account:
        """
        Register a new, unverified account and send its verification link.

        Args:
            name: Display name
            email: Email address (will be normalized)
            password: Plaintext password (will be hashed)

        Returns:
            The created account

        Raises:
            ValidationError: If a field is missing or the email is malformed
            ConflictError: If the email is already registered
            InternalError: If hashing or persistence fails
        """
        name = (name or "").strip()
        normalized_email = self._normalize_email(email)
        self._validate_registration(name, normalized_email, password)

        try:
            if self.repository.get_by_email(normalized_email) is not None:
                raise ConflictError()
        except RepositoryError as e:
            logger.error("Account lookup failed during registration: %s", e)
            raise InternalError("Could not register the user") from e

        try:
            password_hash = self.hasher.hash(password)
        except HashingError as e:
            logger.error("Password hashing failed: %s", e)
            raise InternalError("Error encrypting password") from e

        verification_token = new_opaque_token()

        try:
            account = self.repository.create_account(
                name, normalized_email, password_hash, verification_token
            )
        except RepositoryError as e:
            logger.error("Could not persist account for %s: %s", normalized_email, e)
            raise InternalError("Could not register the user") from e
        if account is None:
            # Lost a concurrent race for the same email
            raise ConflictError()

        logger.info("Registered account id=%s email=%s", account.id, account.email)
        if self.log_verification_tokens:
            logger.debug("Verification token for %s: %s", account.email, verification_token)

        self._dispatch_verification(account.email, self._verification_link(verification_token))
        return account

    def login(self, email: str, password: str) -> str:
        """
        Authenticate a verified account and issue a session token.

        The verified check runs before the password comparison. Unknown
        email and wrong password raise the same AuthenticationError.

        Returns:
            Signed session token

        Raises:
            AuthenticationError: Unknown email or wrong password
            UnverifiedAccountError: Email not verified yet
            InternalError: If lookup or signing fails
        """
        normalized_email = self._normalize_email(email)
        password = password or ""

        try:
            account = self.repository.get_by_email(normalized_email) if normalized_email else None
        except RepositoryError as e:
            logger.error("Account lookup failed during login: %s", e)
            raise InternalError() from e

        if account is None:
            # A miss still costs one bcrypt check, like a wrong password.
            self.hasher.verify(self.hasher.dummy_hash(), password)
            raise AuthenticationError()

        if not account.verified:
            raise UnverifiedAccountError()

        if not self.hasher.verify(account.password_hash, password):
            logger.info("Failed login for account id=%s", account.id)
            raise AuthenticationError()

        try:
            token = self.session_issuer.issue(account.email, account.id)
        except SigningError as e:
            logger.error("Session token signing failed: %s", e)
            raise InternalError("Could not generate JWT Token") from e

        logger.info("Account id=%s logged in", account.id)
        return token

    def verify_email(self, token: str) -> Account:
        """
        Redeem a verification token, activating its account.

        A redeemed token is cleared, so a second redemption fails.

        Returns:
            The verified account

        Raises:
            ValidationError: If the token is empty
            NotFoundError: If no unverified account holds the token
            InternalError: If the update could not be persisted
        """
        token = (token or "").strip()
        if not token:
            raise ValidationError("Token required")

        try:
            account = self.repository.redeem_verification_token(token)
        except RepositoryError as e:
            logger.error("Could not persist email verification: %s", e)
            raise InternalError("Error updating the user") from e

        if account is None:
            raise NotFoundError()

        logger.info("Account id=%s verified email %s", account.id, account.email)
        return account

    def _dispatch_verification(self, email: str, link: str) -> None:
        """Send the verification link as a best-effort side effect."""
        if self.notification_executor is None:
            self._deliver(email, link)
            return
        try:
            self.notification_executor.submit(self._deliver, email, link)
        except RuntimeError:
            # Executor already shut down; the account is persisted regardless.
            logger.exception("Could not schedule verification email to %s", email)

    def _deliver(self, email: str, link: str) -> bool:
        # Delivery outcome goes to the log only; registration already succeeded.
        try:
            delivered = self.email_sender.send_verification_link(email, link)
        except Exception:
            logger.exception("Could not send verification email to %s", email)
            return False
        if not delivered:
            logger.warning("Could not send verification email to %s", email)
        return bool(delivered)

    def _verification_link(self, token: str) -> str:
        return f"{self.verification_url}?token={token}"

    def _validate_registration(self, name: str, email: str, password: str) -> None:
        errors: dict[str, str] = {}
        if not name:
            errors["name"] = "Name is required"
        if not email:
            errors["email"] = "Email is required"
        elif not _EMAIL_PATTERN.match(email):
            errors["email"] = "Email must be a valid email address"
        if not password:
            errors["password"] = "Password is required"
        if errors:
            raise ValidationError(errors=errors)

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return (email or "").strip().lower()
