"""Helpers shared by the credential flows."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

import structlog

from beacon.core.identity_provider import IdentityProvider
from beacon.exceptions import IdentityProviderError, ValidationError

log = structlog.get_logger()


def normalize_email(email: Optional[str]) -> str:
    """Trim and lowercase an email address.

    Raises:
        ValidationError: If the address is missing or blank
    """
    normalized = (email or "").strip().lower()
    if not normalized:
        raise ValidationError("Email is required.", field="email")
    return normalized


def require_user_id(user_id: Optional[str]) -> str:
    normalized = (user_id or "").strip()
    if not normalized:
        raise ValidationError("userId is required.", field="userId")
    return normalized


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


async def update_metadata_best_effort(
    provider: IdentityProvider,
    user_id: str,
    metadata: dict[str, Any],
    operation: str,
) -> bool:
    """Write account metadata without failing the calling operation.

    Returns:
        True if the metadata was stored, False if the provider rejected it
    """
    try:
        await provider.set_metadata(user_id, metadata)
        return True
    except IdentityProviderError as e:
        log.warning(
            "account_metadata_update_failed",
            operation=operation,
            user_id=user_id,
            keys=sorted(metadata),
            error=e.message,
        )
        return False
