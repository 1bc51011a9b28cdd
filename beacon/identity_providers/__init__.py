"""Identity provider implementations for account lookup and credential updates."""

from beacon.identity_providers.cognito import (
    CognitoIdentityProvider,
    METADATA_ATTRIBUTES,
    NAME_ATTRIBUTE,
    create_user_pool,
)
from beacon.identity_providers.mock import MockIdentityProvider

__all__ = [
    "CognitoIdentityProvider",
    "MockIdentityProvider",
    "METADATA_ATTRIBUTES",
    "NAME_ATTRIBUTE",
    "create_user_pool",
]
