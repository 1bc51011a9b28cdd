"""Amazon SES implementation of Notifier."""

from __future__ import annotations

from typing import Any, Optional

import boto3
import structlog
from botocore.exceptions import ClientError

from beacon.core.notifier import Notifier
from beacon.exceptions import NotificationError

log = structlog.get_logger()


class SesNotifier(Notifier):
    """Sends HTML email through Amazon SES.

    Args:
        region: AWS region for SES
        sender: Verified sender address, optionally with a display name
            (e.g. ``"WorkloadHub <no-reply@example.com>"``)
        endpoint_url: Custom endpoint URL for LocalStack or other AWS-compatible services
    """

    def __init__(
        self,
        region: str,
        sender: str,
        endpoint_url: Optional[str] = None,
    ):
        self.region = region
        self.sender = sender

        client_kwargs: dict[str, Any] = {"region_name": region}
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("ses", **client_kwargs)

    async def send(self, to_address: str, subject: str, html_body: str) -> None:
        to_address = (to_address or "").strip().lower()
        subject = (subject or "").strip()
        if not to_address:
            raise NotificationError("Missing recipient address.")
        if not subject:
            raise NotificationError("Missing subject.", recipient=to_address)

        try:
            response = self._client.send_email(
                Source=self.sender,
                Destination={"ToAddresses": [to_address]},
                Message={
                    "Subject": {"Data": subject, "Charset": "UTF-8"},
                    "Body": {"Html": {"Data": html_body, "Charset": "UTF-8"}},
                },
            )
            log.info("email_sent", message_id=response.get("MessageId"), subject=subject)
        except ClientError as e:
            log.error("ses_send_error", error=str(e), subject=subject)
            raise NotificationError(f"Failed to send email: {e}", recipient=to_address)
