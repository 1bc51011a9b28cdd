"""Factory implementations for creating Beacon components."""

from beacon.factories.cognito import CognitoFactory
from beacon.factories.mock import MockFactory

__all__ = [
    "CognitoFactory",
    "MockFactory",
]
