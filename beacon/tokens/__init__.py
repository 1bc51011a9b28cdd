"""Reset token issuance and storage."""

from beacon.tokens.codec import RESET_TOKEN_BYTES, digest, issue
from beacon.tokens.store import RESET_TOKEN_TTL, ResetTokenStore

__all__ = [
    "RESET_TOKEN_BYTES",
    "RESET_TOKEN_TTL",
    "ResetTokenStore",
    "digest",
    "issue",
]
