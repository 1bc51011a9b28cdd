"""Mock notifier that keeps messages in memory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import structlog

from beacon.core.notifier import Notifier
from beacon.exceptions import NotificationError

log = structlog.get_logger()


@dataclass
class SentMessage:
    to_address: str
    subject: str
    html_body: str


class MockNotifier(Notifier):
    """Records every message instead of delivering it.

    Set ``fail_with`` to make subsequent sends raise NotificationError.
    """

    def __init__(self) -> None:
        self.sent: List[SentMessage] = []
        self.fail_with: Optional[str] = None

    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        if self.fail_with:
            raise NotificationError(self.fail_with, recipient=to_address)
        self.sent.append(SentMessage(to_address=to_address, subject=subject, html_body=html_body))
        log.debug("mock_email_recorded", subject=subject)

    def messages_to(self, address: str) -> List[SentMessage]:
        return [m for m in self.sent if m.to_address == address]
