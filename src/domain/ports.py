"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the Account record and the interfaces (ports) that
the domain requires from infrastructure. Adapters implement these protocols.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class Account:
    """
    A registered account as stored by the repository.

    Verification lifecycle (forward-only):
    - unverified: verification_token is set, verified is False
    - verified:   verification_token is None, verified is True (terminal)
    """

    id: int
    name: str
    email: str
    password_hash: str
    verified: bool = False
    verification_token: str | None = None
    created_at: datetime | None = None
    verified_at: datetime | None = None


class AccountRepository(Protocol):
    """Port interface for account persistence."""

    def get_by_email(self, email: str) -> Account | None:
        """
        Look up an account by normalized email.

        Returns:
            The account, or None if no account uses that email

        Raises:
            RepositoryError: On storage failure
        """
        ...

    def create_account(
        self, name: str, email: str, password_hash: str, verification_token: str
    ) -> Account | None:
        """
        Insert a new unverified account.

        The email uniqueness check and the insert happen atomically, so two
        concurrent calls for the same email can never both succeed.

        Returns:
            The created account, or None if the email is already taken

        Raises:
            RepositoryError: On storage failure
        """
        ...

    def redeem_verification_token(self, token: str) -> Account | None:
        """
        Mark the account holding this token verified and clear the token.

        Must be a single atomic read-modify-write: of two concurrent
        redemptions of the same token, at most one returns an account.

        Returns:
            The now-verified account, or None if no unverified account holds the token

        Raises:
            RepositoryError: On storage failure (nothing is committed)
        """
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send_verification_link(self, email: str, link: str) -> bool:
        """
        Deliver a verification link to an email address.

        Args:
            email: Recipient email address
            link: Verification URL including the token

        Returns:
            True if the message was handed off, False otherwise
        """
        ...
