"""Mock identity provider for local development without AWS Cognito."""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from beacon.core.identity_provider import IdentityProvider
from beacon.exceptions import AccountExistsError, AccountNotFoundError
from beacon.models import Account


class MockIdentityProvider(IdentityProvider):
    """
    Mock identity provider for local development.

    Keeps accounts and passwords in memory. Useful for local development
    and testing; all data is lost when the process exits.
    """

    def __init__(self, accounts: Optional[Iterable[tuple[Account, str]]] = None) -> None:
        # In-memory account store: {user_id: Account}
        self._accounts: Dict[str, Account] = {}
        # Passwords for check_password: {user_id: password}
        self._passwords: Dict[str, str] = {}
        # user_id -> number of times revoke_sessions was called
        self.revoked_sessions: Dict[str, int] = {}

        for account, password in accounts or ():
            self._accounts[account.user_id] = account
            self._passwords[account.user_id] = password

    def _require(self, user_id: str) -> Account:
        account = self._accounts.get(user_id)
        if account is None:
            raise AccountNotFoundError(user_id)
        return account

    def _replace(self, user_id: str, **changes: Any) -> None:
        self._accounts[user_id] = dataclasses.replace(self._require(user_id), **changes)

    # ==================== Lookup ====================

    async def find_by_email(self, email: str) -> Optional[Account]:
        """Get account by email."""
        for account in self._accounts.values():
            if account.email.lower() == email.lower():
                return account
        return None

    async def find_by_id(self, user_id: str) -> Optional[Account]:
        """Get account by ID."""
        return self._accounts.get(user_id)

    # ==================== Mutation ====================

    async def create(
        self,
        user_id: str,
        email: str,
        password: str,
        display_name: Optional[str] = None,
    ) -> Account:
        """Create an account in memory."""
        if user_id in self._accounts or await self.find_by_email(email):
            raise AccountExistsError(email)

        account = Account(
            user_id=user_id,
            email=email,
            display_name=display_name,
            created_at=datetime.now(timezone.utc),
        )
        self._accounts[user_id] = account
        self._passwords[user_id] = password
        return account

    async def set_password(self, user_id: str, password: str) -> None:
        self._require(user_id)
        self._passwords[user_id] = password

    async def set_metadata(self, user_id: str, metadata: dict[str, Any]) -> None:
        account = self._require(user_id)
        self._replace(user_id, metadata={**account.metadata, **metadata})

    async def set_enabled(self, user_id: str, enabled: bool) -> None:
        self._replace(user_id, enabled=enabled)

    async def set_email_verified(self, user_id: str, verified: bool) -> None:
        self._replace(user_id, email_verified=verified)

    async def revoke_sessions(self, user_id: str) -> None:
        self._require(user_id)
        self.revoked_sessions[user_id] = self.revoked_sessions.get(user_id, 0) + 1

    async def delete(self, user_id: str) -> bool:
        if user_id not in self._accounts:
            return False
        del self._accounts[user_id]
        self._passwords.pop(user_id, None)
        return True

    # ==================== Helper Methods ====================

    def check_password(self, user_id: str, password: str) -> bool:
        """Return True if ``password`` is the account's current password."""
        return user_id in self._passwords and self._passwords[user_id] == password
