"""Abstract factory for creating credential service components."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from beacon.config import DEFAULT_APP_NAME, DEFAULT_APP_ORIGIN, Settings
from beacon.core.identity_provider import IdentityProvider
from beacon.core.notifier import Notifier
from beacon.flows.account_admin import AccountAdminFlow
from beacon.flows.password_reset import PasswordResetFlow
from beacon.flows.provisioning import ProvisioningFlow
from beacon.tokens.store import ResetTokenStore


class BeaconFactory(ABC):
    """Abstract factory for credential service components.

    Provider-specific subclasses supply the IdentityProvider and Notifier;
    this base class wires them into the flows. The identity provider,
    notifier and token store are cached, so every flow created by one factory
    shares them. Sharing the token store matters: a reset issued through one
    PasswordResetFlow must be consumable through any other.

    Usage:
        Do not instantiate this class directly. Use create_factory() instead:

        >>> from beacon import create_factory
        >>> factory = create_factory("cognito", region="us-east-1", ...)

    Args:
        app_origin: Frontend origin used for links inside emails
        app_name: Product name used in email copy
        implicit_resend: Provisioning policy switch (see ProvisioningFlow)
    """

    def __init__(
        self,
        app_origin: str = DEFAULT_APP_ORIGIN,
        app_name: str = DEFAULT_APP_NAME,
        implicit_resend: bool = False,
    ):
        self.app_origin = app_origin
        self.app_name = app_name
        self.implicit_resend = implicit_resend
        self._token_store: Optional[ResetTokenStore] = None

    @abstractmethod
    def create_identity_provider(self) -> IdentityProvider:
        """Create or return the cached identity provider."""

    @abstractmethod
    def create_notifier(self) -> Notifier:
        """Create or return the cached notifier."""

    def create_token_store(self) -> ResetTokenStore:
        """Create or return the process-wide reset token store."""
        if self._token_store is None:
            self._token_store = ResetTokenStore()
        return self._token_store

    def create_password_reset_flow(self) -> PasswordResetFlow:
        return PasswordResetFlow(
            provider=self.create_identity_provider(),
            notifier=self.create_notifier(),
            store=self.create_token_store(),
            app_origin=self.app_origin,
            app_name=self.app_name,
        )

    def create_provisioning_flow(self) -> ProvisioningFlow:
        return ProvisioningFlow(
            provider=self.create_identity_provider(),
            notifier=self.create_notifier(),
            app_origin=self.app_origin,
            app_name=self.app_name,
            implicit_resend=self.implicit_resend,
        )

    def create_account_admin_flow(self) -> AccountAdminFlow:
        return AccountAdminFlow(provider=self.create_identity_provider())


def create_factory(provider_type: str, **kwargs) -> BeaconFactory:
    """Create a factory for the specified provider type.

    Args:
        provider_type: The identity provider type to use.
            Valid values: "cognito", "mock"

        **kwargs: Provider-specific configuration arguments.

            For both provider types:
                app_origin (str, optional), app_name (str, optional),
                implicit_resend (bool, optional)

            For provider_type="cognito":
                region (str, required): AWS region for Cognito and SES.
                user_pool_id (str, required): Pool holding the accounts.
                sender (str, required): Verified SES sender address.
                endpoint_url (str, optional): Custom endpoint URL for testing
                    with LocalStack or other AWS-compatible services.

    Returns:
        BeaconFactory: A configured factory instance.

    Raises:
        ValueError: If provider_type is unknown or required arguments are missing.

    Examples:
        >>> factory = create_factory(
        ...     "cognito",
        ...     region="us-east-1",
        ...     user_pool_id="us-east-1_ABC123",
        ...     sender="no-reply@example.com",
        ... )
        >>> flow = factory.create_password_reset_flow()

        >>> factory = create_factory("mock")
    """
    if provider_type == "cognito":
        from beacon.factories.cognito import CognitoFactory

        missing = [name for name in ("region", "user_pool_id", "sender") if not kwargs.get(name)]
        if missing:
            raise ValueError(
                f"Missing required argument(s) {missing} for provider_type='cognito'. "
                "Example: create_factory('cognito', region='us-east-1', "
                "user_pool_id='us-east-1_ABC123', sender='no-reply@example.com')"
            )
        return CognitoFactory(**kwargs)
    elif provider_type == "mock":
        from beacon.factories.mock import MockFactory

        return MockFactory(**kwargs)
    else:
        raise ValueError(
            f"Unknown provider type: '{provider_type}'. "
            f"Valid types: 'cognito', 'mock'."
        )


def create_factory_from_settings(settings: Settings) -> BeaconFactory:
    """Create a factory from environment-driven Settings."""
    common = {
        "app_origin": settings.app_origin,
        "app_name": settings.app_name,
        "implicit_resend": settings.implicit_resend,
    }
    if settings.provider == "cognito":
        return create_factory(
            "cognito",
            region=settings.region,
            user_pool_id=settings.user_pool_id,
            sender=settings.mail_sender,
            endpoint_url=settings.endpoint_url,
            **common,
        )
    return create_factory(settings.provider, **common)
