"""Notifier implementations for outbound email."""

from beacon.notifiers.mock import MockNotifier, SentMessage
from beacon.notifiers.ses import SesNotifier

__all__ = [
    "MockNotifier",
    "SentMessage",
    "SesNotifier",
]
