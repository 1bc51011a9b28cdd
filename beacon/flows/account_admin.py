"""Admin account status operations."""

from __future__ import annotations

from typing import Optional

import structlog

from beacon.core.identity_provider import IdentityProvider
from beacon.exceptions import AccountNotFoundError, IdentityProviderError
from beacon.flows.common import require_user_id, utc_timestamp
from beacon.models import IS_VERIFIED, MUST_CHANGE_PASSWORD, VERIFIED_AT, VERIFIED_BY

log = structlog.get_logger()


class AccountAdminFlow:
    """Enable/disable, verify and delete accounts in the identity provider."""

    def __init__(self, provider: IdentityProvider):
        self._provider = provider

    async def set_auth_status(self, user_id: Optional[str], is_active: bool) -> bool:
        """Allow or block login for an account.

        A missing account is reported as success since there is nothing left
        to block. Deactivation also signs the user out everywhere on a
        best-effort basis.

        Returns:
            The requested status
        """
        user_id = require_user_id(user_id)

        account = await self._provider.find_by_id(user_id)
        if account is None:
            log.info("auth_status_account_missing", user_id=user_id)
            return is_active

        await self._provider.set_enabled(user_id, is_active)

        if not is_active:
            try:
                await self._provider.revoke_sessions(user_id)
            except IdentityProviderError as e:
                log.warning("session_revoke_failed", user_id=user_id, error=e.message)

        log.info("auth_status_updated", user_id=user_id, enabled=is_active)
        return is_active

    async def verify_user(self, user_id: Optional[str]) -> None:
        """Mark an account verified after the user changed their password.

        Raises:
            ValidationError: If user_id is missing
            AccountNotFoundError: If the account does not exist
            IdentityProviderError: If either update fails
        """
        user_id = require_user_id(user_id)

        account = await self._provider.find_by_id(user_id)
        if account is None:
            raise AccountNotFoundError(user_id)

        await self._provider.set_email_verified(user_id, True)
        await self._provider.set_metadata(
            user_id,
            {
                MUST_CHANGE_PASSWORD: False,
                IS_VERIFIED: True,
                VERIFIED_AT: utc_timestamp(),
                VERIFIED_BY: "password_change",
            },
        )
        log.info("user_verified", user_id=user_id)

    async def delete_user(self, user_id: Optional[str]) -> bool:
        """Delete an account.

        Returns:
            True if deleted, False if it was already gone
        """
        user_id = require_user_id(user_id)
        deleted = await self._provider.delete(user_id)
        log.info("auth_user_deleted", user_id=user_id, existed=deleted)
        return deleted
