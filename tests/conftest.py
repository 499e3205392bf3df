"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- A session token issuer with a test secret
- An in-memory account repository
- A mock email sender
- An account service wired from the above
"""

from unittest.mock import Mock

import pytest

from src.adapters.repository.memory import InMemoryAccountRepository
from src.domain.accounts import AccountService
from src.domain.hashing import PasswordHasher
from src.domain.sessions import SessionTokenIssuer

TEST_SECRET = "test-signing-secret"


@pytest.fixture
def issuer() -> SessionTokenIssuer:
    """Session token issuer with a known secret."""
    return SessionTokenIssuer(secret=TEST_SECRET, expiration_minutes=60)


@pytest.fixture
def repository() -> InMemoryAccountRepository:
    """Fresh in-memory repository for each test."""
    return InMemoryAccountRepository()


@pytest.fixture
def sender() -> Mock:
    """Email sender that accepts every message."""
    sender = Mock()
    sender.send_verification_link.return_value = True
    return sender


@pytest.fixture
def service(
    repository: InMemoryAccountRepository, sender: Mock, issuer: SessionTokenIssuer
) -> AccountService:
    """Account service backed by the in-memory repository."""
    return AccountService(
        repository=repository,
        email_sender=sender,
        session_issuer=issuer,
        hasher=PasswordHasher(rounds=10),
        verification_url="http://testserver/v1/auth/verify-email",
    )

