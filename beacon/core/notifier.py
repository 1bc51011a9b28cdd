"""Abstract notifier interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class Notifier(ABC):
    """Delivers a rendered HTML message to a single recipient.

    Implementations:
        - SesNotifier: Amazon SES
        - MockNotifier: Records messages in memory
    """

    @abstractmethod
    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        """Send a message.

        Args:
            to_address: Recipient email address
            subject: Message subject
            html_body: Rendered HTML body

        Raises:
            NotificationError: If the message could not be delivered
        """
