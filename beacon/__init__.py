"""Beacon - Credential lifecycle service.

Beacon issues and consumes self-service password reset tokens and
provisions admin-created accounts with emailed temporary credentials,
backed by AWS Cognito and SES out of the box.

Features:
- One-time, expiring password reset links (hashed at rest)
- Admin create-or-resend credential provisioning
- Account enable/disable, verification and deletion
- HTTP API (see beacon.api)
"""

from beacon.core.factory import BeaconFactory, create_factory, create_factory_from_settings
from beacon.core.identity_provider import IdentityProvider
from beacon.core.notifier import Notifier
from beacon.config import Settings
from beacon.credentials import generate_temporary_password
from beacon.factories import CognitoFactory, MockFactory
from beacon.flows import AccountAdminFlow, PasswordResetFlow, ProvisioningFlow
from beacon.identity_providers import (
    CognitoIdentityProvider,
    MockIdentityProvider,
    NAME_ATTRIBUTE,
)
from beacon.notifiers import MockNotifier, SesNotifier
from beacon.tokens import RESET_TOKEN_TTL, ResetTokenStore
from beacon.exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    BeaconError,
    IdentityProviderError,
    InvalidOrExpiredTokenError,
    InvalidPasswordError,
    NotificationError,
    ValidationError,
)
from beacon.models import (
    Account,
    IssuedToken,
    ProvisioningAction,
    ProvisioningOutcome,
    ResetConfirmation,
    ResetRequest,
)

__version__ = "0.1.0"

__all__ = [
    # Core interfaces
    "IdentityProvider",
    "Notifier",
    # Factory (recommended entry point)
    "create_factory",
    "create_factory_from_settings",
    "BeaconFactory",
    "CognitoFactory",
    "MockFactory",
    "Settings",
    # Flows
    "AccountAdminFlow",
    "PasswordResetFlow",
    "ProvisioningFlow",
    # Tokens and credentials
    "RESET_TOKEN_TTL",
    "ResetTokenStore",
    "generate_temporary_password",
    # Models
    "Account",
    "IssuedToken",
    "ProvisioningAction",
    "ProvisioningOutcome",
    "ResetConfirmation",
    "ResetRequest",
    # Constants
    "NAME_ATTRIBUTE",
    # Exceptions
    "BeaconError",
    "ValidationError",
    "InvalidPasswordError",
    "AccountExistsError",
    "AccountNotFoundError",
    "InvalidOrExpiredTokenError",
    "IdentityProviderError",
    "NotificationError",
    # Identity Providers
    "CognitoIdentityProvider",
    "MockIdentityProvider",
    # Notifiers
    "MockNotifier",
    "SesNotifier",
]
