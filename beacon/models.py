"""Credential lifecycle models - provider-agnostic data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

# Account metadata keys (stored by the identity provider next to the account)
MUST_CHANGE_PASSWORD = "must_change_password"
IS_VERIFIED = "is_verified"
CREATED_BY_ADMIN = "created_by_admin"
CREATED_AT = "created_at"
RESENT_AT = "resent_at"
VERIFIED_AT = "verified_at"
VERIFIED_BY = "verified_by"


class ProvisioningAction(str, Enum):
    """What a provisioning request did to the account."""

    CREATED = "created"
    RESENT = "resent"


@dataclass
class Account:
    """Account representation from the identity provider."""

    user_id: str
    email: str
    display_name: Optional[str] = None
    enabled: bool = True
    email_verified: bool = False
    created_at: Optional[datetime] = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class IssuedToken:
    """A freshly issued reset secret and the key it is stored under.

    ``raw_secret`` is the bearer capability and is only ever handed to the
    user; ``storage_key`` is what the token store keeps.
    """

    raw_secret: str
    storage_key: str

    def __repr__(self) -> str:
        return f"IssuedToken(storage_key={self.storage_key!r})"


@dataclass(frozen=True)
class ResetRequest:
    """A pending password reset held in the token store."""

    token_hash: str
    user_id: str
    email: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at


@dataclass
class ResetConfirmation:
    """Result of a successful password reset."""

    user_id: str
    email: str


@dataclass
class ProvisioningOutcome:
    """Result of an admin credential issuance request."""

    action: ProvisioningAction
    user_id: str
    email: str
    temporary_password: str

    def __repr__(self) -> str:
        return (
            f"ProvisioningOutcome(action={self.action.value!r}, "
            f"user_id={self.user_id!r}, email={self.email!r})"
        )
