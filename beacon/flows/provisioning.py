"""Admin-driven credential provisioning.

Decides per request whether to create an account or re-issue credentials for
an existing one:

    existing  resend  outcome
    --------  ------  ---------------------------------------------
    yes       no      AccountExistsError (nothing is changed)
    yes       yes     new temporary password -> RESENT
    no        yes     AccountNotFoundError
    no        no      account created -> CREATED

With ``implicit_resend`` enabled the first row behaves like the second.
Re-issued credentials are sent to the email stored on the account, never to
the address given in the request.
"""

from __future__ import annotations

import uuid
from typing import Optional

import structlog

from beacon.core.identity_provider import IdentityProvider
from beacon.core.notifier import Notifier
from beacon.credentials import DEFAULT_LENGTH, generate_temporary_password
from beacon.exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    IdentityProviderError,
)
from beacon.flows.common import normalize_email, update_metadata_best_effort, utc_timestamp
from beacon.models import (
    CREATED_AT,
    CREATED_BY_ADMIN,
    IS_VERIFIED,
    MUST_CHANGE_PASSWORD,
    RESENT_AT,
    Account,
    ProvisioningAction,
    ProvisioningOutcome,
)
from beacon.templates import credentials_email_subject, get_credentials_email

log = structlog.get_logger()

LOGIN_PATH = "/auth/login"


class ProvisioningFlow:
    """Creates accounts or re-issues temporary credentials on admin request.

    Args:
        provider: Identity provider holding the accounts
        notifier: Delivers the credentials email
        app_origin: Frontend origin used to build the login link
        app_name: Product name used in emails
        implicit_resend: Treat "exists, resend not requested" as a resend
            instead of rejecting it
        password_length: Length of generated temporary passwords
    """

    def __init__(
        self,
        provider: IdentityProvider,
        notifier: Notifier,
        app_origin: str,
        app_name: str = "WorkloadHub",
        implicit_resend: bool = False,
        password_length: int = DEFAULT_LENGTH,
    ):
        self._provider = provider
        self._notifier = notifier
        self._app_origin = app_origin.rstrip("/")
        self._app_name = app_name
        self.implicit_resend = implicit_resend
        self._password_length = password_length

    @property
    def login_url(self) -> str:
        return f"{self._app_origin}{LOGIN_PATH}"

    async def _resolve_existing(self, email: str, user_id: Optional[str]) -> Optional[Account]:
        """Look up by explicit id first, then by email."""
        if user_id:
            try:
                account = await self._provider.find_by_id(user_id)
            except IdentityProviderError as e:
                log.warning("provision_lookup_by_id_failed", user_id=user_id, error=e.message)
                account = None
            if account is not None:
                return account
        return await self._provider.find_by_email(email)

    async def provision(
        self,
        email: Optional[str],
        name: Optional[str] = None,
        user_id: Optional[str] = None,
        resend: bool = False,
    ) -> ProvisioningOutcome:
        """Issue or re-issue login credentials and email them to the user.

        Args:
            email: Account email address
            name: Optional display name (used on creation and in the email)
            user_id: Optional identifier of an existing account
            resend: Whether the admin asked to re-issue credentials

        Returns:
            ProvisioningOutcome with the action taken and the new password

        Raises:
            ValidationError: If email is missing
            AccountExistsError: If the account exists and resend is off
            AccountNotFoundError: If resend was requested for an unknown account
            IdentityProviderError: If create or password update fails
            NotificationError: If the credentials email could not be sent
        """
        email = normalize_email(email)
        name = (name or "").strip() or None
        user_id = (user_id or "").strip() or None

        existing = await self._resolve_existing(email, user_id)

        if existing is not None and not resend and not self.implicit_resend:
            log.info("provision_rejected_existing", user_id=existing.user_id)
            raise AccountExistsError(email)
        if existing is None and resend:
            log.info("provision_rejected_missing")
            raise AccountNotFoundError(
                user_id or email, message="User not found. Cannot resend credentials."
            )

        temporary_password = generate_temporary_password(self._password_length)

        if existing is not None:
            resolved_id = (existing.user_id or "").strip()
            if not resolved_id:
                raise IdentityProviderError("Failed to resolve userId.", "provision")
            # Credentials only ever go to the address on record
            recipient = (existing.email or "").strip().lower()
            if not recipient:
                raise IdentityProviderError("Account has no email address.", "provision")
            action = ProvisioningAction.RESENT
            await self._provider.set_password(resolved_id, temporary_password)
            await update_metadata_best_effort(
                self._provider,
                resolved_id,
                {
                    MUST_CHANGE_PASSWORD: True,
                    IS_VERIFIED: False,
                    RESENT_AT: utc_timestamp(),
                },
                operation="provision_resend",
            )
        else:
            recipient = email
            action = ProvisioningAction.CREATED
            created = await self._provider.create(
                user_id=uuid.uuid4().hex,
                email=email,
                password=temporary_password,
                display_name=name,
            )
            resolved_id = created.user_id
            await update_metadata_best_effort(
                self._provider,
                resolved_id,
                {
                    MUST_CHANGE_PASSWORD: True,
                    IS_VERIFIED: False,
                    CREATED_BY_ADMIN: True,
                    CREATED_AT: utc_timestamp(),
                },
                operation="provision_create",
            )

        log.info("credentials_issued", action=action.value, user_id=resolved_id)

        resent = action is ProvisioningAction.RESENT
        await self._notifier.send(
            recipient,
            credentials_email_subject(resent, self._app_name),
            get_credentials_email(
                email=recipient,
                login_url=self.login_url,
                temporary_password=temporary_password,
                resent=resent,
                display_name=name,
                app_name=self._app_name,
            ),
        )

        return ProvisioningOutcome(
            action=action,
            user_id=resolved_id,
            email=recipient,
            temporary_password=temporary_password,
        )
