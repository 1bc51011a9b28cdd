"""Core abstractions for the Beacon credential service."""

from beacon.core.factory import BeaconFactory, create_factory, create_factory_from_settings
from beacon.core.identity_provider import IdentityProvider
from beacon.core.notifier import Notifier

__all__ = [
    "IdentityProvider",
    "Notifier",
    "BeaconFactory",
    "create_factory",
    "create_factory_from_settings",
]
