"""Self-service password reset flow.

Issuance never reveals whether an email is registered. Consumption is
one-time: the token store hands a record to exactly one caller, and once
taken the record is gone even if the provider update then fails.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode

import structlog

from beacon.core.identity_provider import IdentityProvider
from beacon.core.notifier import Notifier
from beacon.exceptions import (
    InvalidOrExpiredTokenError,
    InvalidPasswordError,
    ValidationError,
)
from beacon.flows.common import normalize_email, update_metadata_best_effort, utc_timestamp
from beacon.models import (
    IS_VERIFIED,
    MUST_CHANGE_PASSWORD,
    VERIFIED_AT,
    VERIFIED_BY,
    ResetConfirmation,
    ResetRequest,
)
from beacon.templates import get_password_reset_email, password_reset_email_subject
from beacon.tokens import codec
from beacon.tokens.store import ResetTokenStore

log = structlog.get_logger()

MINIMUM_PASSWORD_LENGTH = 8
RESET_PATH = "/auth/reset-password"


class PasswordResetFlow:
    """Issues and consumes password reset tokens.

    Args:
        provider: Identity provider holding the accounts
        notifier: Delivers the reset email
        store: Token store shared by every request in the process
        app_origin: Frontend origin used to build reset links
        app_name: Product name used in emails
    """

    def __init__(
        self,
        provider: IdentityProvider,
        notifier: Notifier,
        store: ResetTokenStore,
        app_origin: str,
        app_name: str = "WorkloadHub",
    ):
        self._provider = provider
        self._notifier = notifier
        self._store = store
        self._app_origin = app_origin.rstrip("/")
        self._app_name = app_name

    def build_reset_url(self, raw_secret: str) -> str:
        return f"{self._app_origin}{RESET_PATH}?{urlencode({'token': raw_secret})}"

    async def request_reset(self, email: Optional[str]) -> None:
        """Send a reset link if the email belongs to an account.

        Returns nothing in every case so that callers cannot tell registered
        and unregistered addresses apart.

        Raises:
            ValidationError: If email is missing
            IdentityProviderError: If the account lookup fails
            NotificationError: If the email could not be sent (the issued
                token stays valid)
        """
        email = normalize_email(email)

        account = await self._provider.find_by_email(email)
        if account is None:
            log.info("password_reset_unknown_email")
            return

        user_id = (account.user_id or "").strip()
        if not user_id:
            log.warning("password_reset_unresolved_account")
            return

        issued = codec.issue()
        now = self._store.now()
        self._store.put(
            ResetRequest(
                token_hash=issued.storage_key,
                user_id=user_id,
                email=email,
                expires_at=self._store.expiry_from(now),
            )
        )
        log.info("password_reset_issued", user_id=user_id)

        ttl_minutes = int(self._store.ttl.total_seconds() // 60)
        await self._notifier.send(
            email,
            password_reset_email_subject(self._app_name),
            get_password_reset_email(
                reset_url=self.build_reset_url(issued.raw_secret),
                app_name=self._app_name,
                ttl_minutes=ttl_minutes,
            ),
        )

    async def confirm_reset(
        self,
        raw_secret: Optional[str],
        new_password: Optional[str],
        password_confirm: Optional[str] = None,
    ) -> ResetConfirmation:
        """Consume a reset token and set the new password.

        Input is validated before the token is touched, so a rejected
        password leaves the link usable.

        Raises:
            ValidationError: If token or password input is invalid
            InvalidOrExpiredTokenError: If the token is unknown, used or expired
            IdentityProviderError: If the password update fails (the token is
                not restored)
        """
        raw_secret = (raw_secret or "").strip()
        new_password = (new_password or "").strip()

        if not raw_secret:
            raise ValidationError("Token is required.", field="token")
        if not new_password:
            raise ValidationError("Password is required.", field="password")
        if len(new_password) < MINIMUM_PASSWORD_LENGTH:
            raise InvalidPasswordError()
        if password_confirm is not None and new_password != password_confirm.strip():
            raise ValidationError("Passwords do not match.", field="passwordConfirm")

        record = self._store.take_if_valid(codec.digest(raw_secret))
        if record is None:
            log.info("password_reset_token_rejected")
            raise InvalidOrExpiredTokenError()

        await self._provider.set_password(record.user_id, new_password)
        await self._provider.set_email_verified(record.user_id, True)
        await update_metadata_best_effort(
            self._provider,
            record.user_id,
            {
                MUST_CHANGE_PASSWORD: False,
                IS_VERIFIED: True,
                VERIFIED_AT: utc_timestamp(),
                VERIFIED_BY: "password_reset",
            },
            operation="confirm_reset",
        )

        log.info("password_reset_confirmed", user_id=record.user_id)
        return ResetConfirmation(user_id=record.user_id, email=record.email)
