"""
In-memory repository adapter - Implements AccountRepository protocol.

Used for local runs without PostgreSQL and for tests. A single lock
guards every read-modify-write, giving the same uniqueness and
single-redemption guarantees the database constraints provide.
"""

import threading
from dataclasses import replace
from datetime import datetime, timezone

from src.domain.ports import Account


class InMemoryAccountRepository:
    """
    Implements AccountRepository protocol with dictionaries.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._accounts: dict[int, Account] = {}
        self._ids_by_email: dict[str, int] = {}
        self._ids_by_token: dict[str, int] = {}
        self._next_id = 1

    def get_by_email(self, email: str) -> Account | None:
        with self._lock:
            account_id = self._ids_by_email.get(email)
            return self._accounts.get(account_id) if account_id is not None else None

    def create_account(
        self, name: str, email: str, password_hash: str, verification_token: str
    ) -> Account | None:
        with self._lock:
            if email in self._ids_by_email:
                return None
            account = Account(
                id=self._next_id,
                name=name,
                email=email,
                password_hash=password_hash,
                verified=False,
                verification_token=verification_token,
                created_at=datetime.now(timezone.utc),
            )
            self._next_id += 1
            self._accounts[account.id] = account
            self._ids_by_email[email] = account.id
            self._ids_by_token[verification_token] = account.id
            return account

    def redeem_verification_token(self, token: str) -> Account | None:
        with self._lock:
            account_id = self._ids_by_token.pop(token, None)
            if account_id is None:
                return None
            verified = replace(
                self._accounts[account_id],
                verified=True,
                verification_token=None,
                verified_at=datetime.now(timezone.utc),
            )
            self._accounts[account_id] = verified
            return verified

    def __len__(self) -> int:
        with self._lock:
            return len(self._accounts)
