"""Environment-driven settings.

Secrets (AWS credentials) are left to the usual boto3 credential chain; only
deployment shape is read here.

Variables:
    BEACON_PROVIDER: "cognito" (default) or "mock"
    AWS_REGION: AWS region (required for cognito)
    BEACON_USER_POOL_ID: Cognito user pool ID (required for cognito)
    BEACON_MAIL_SENDER: Verified SES sender address (required for cognito)
    BEACON_AWS_ENDPOINT_URL: Optional LocalStack/moto endpoint
    BEACON_APP_ORIGIN: Frontend origin for links in emails
    BEACON_APP_NAME: Product name used in emails
    BEACON_IMPLICIT_RESEND: "true" to treat existing-account creation as resend
    BEACON_API_PREFIX: Path prefix for HTTP routes (default "/api")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import urlsplit

DEFAULT_APP_ORIGIN = "http://127.0.0.1:5173"
DEFAULT_APP_NAME = "WorkloadHub"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _optional(env: Mapping[str, str], name: str) -> Optional[str]:
    value = (env.get(name) or "").strip()
    return value or None


def _required(env: Mapping[str, str], name: str) -> str:
    value = _optional(env, name)
    if value is None:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def normalize_url(name: str, value: str) -> str:
    """Validate an absolute http(s) URL and drop any trailing slash.

    Raises:
        ValueError: If the value is not an absolute http(s) URL
    """
    parts = urlsplit(value)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ValueError(f"Invalid URL for {name}: {value}")
    return value.rstrip("/")


@dataclass(frozen=True)
class Settings:
    """Deployment settings for the credential service."""

    provider: str = "cognito"
    region: Optional[str] = None
    user_pool_id: Optional[str] = None
    mail_sender: Optional[str] = None
    endpoint_url: Optional[str] = None
    app_origin: str = DEFAULT_APP_ORIGIN
    app_name: str = DEFAULT_APP_NAME
    implicit_resend: bool = False
    api_prefix: str = "/api"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ValueError: If a required variable is missing or a URL is invalid
        """
        env = os.environ if env is None else env
        provider = (_optional(env, "BEACON_PROVIDER") or "cognito").lower()

        app_origin = normalize_url(
            "BEACON_APP_ORIGIN", _optional(env, "BEACON_APP_ORIGIN") or DEFAULT_APP_ORIGIN
        )
        endpoint_url = _optional(env, "BEACON_AWS_ENDPOINT_URL")
        if endpoint_url:
            endpoint_url = normalize_url("BEACON_AWS_ENDPOINT_URL", endpoint_url)

        implicit_resend = (
            (_optional(env, "BEACON_IMPLICIT_RESEND") or "false").lower() in _TRUE_VALUES
        )

        if provider == "cognito":
            region = _required(env, "AWS_REGION")
            user_pool_id = _required(env, "BEACON_USER_POOL_ID")
            mail_sender = _required(env, "BEACON_MAIL_SENDER")
        else:
            region = _optional(env, "AWS_REGION")
            user_pool_id = _optional(env, "BEACON_USER_POOL_ID")
            mail_sender = _optional(env, "BEACON_MAIL_SENDER")

        prefix = (_optional(env, "BEACON_API_PREFIX") or "/api").strip("/")

        return cls(
            provider=provider,
            region=region,
            user_pool_id=user_pool_id,
            mail_sender=mail_sender,
            endpoint_url=endpoint_url,
            app_origin=app_origin,
            app_name=_optional(env, "BEACON_APP_NAME") or DEFAULT_APP_NAME,
            implicit_resend=implicit_resend,
            api_prefix=f"/{prefix}" if prefix else "",
        )
