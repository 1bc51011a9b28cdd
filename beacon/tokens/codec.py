"""Reset token codec.

A reset token is a 256-bit random secret handed to the user once, inside the
reset link. Only its SHA-256 digest is ever kept server-side, so a dump of the
token store does not yield usable links.
"""

from __future__ import annotations

import hashlib
import secrets

from beacon.models import IssuedToken

# 32 bytes = 256 bits of entropy
RESET_TOKEN_BYTES = 32


def digest(raw_secret: str) -> str:
    """Compute the storage key for a raw secret.

    Args:
        raw_secret: The secret as presented by the user

    Returns:
        Hex-encoded SHA-256 digest of the secret
    """
    return hashlib.sha256(raw_secret.encode("utf-8")).hexdigest()


def issue() -> IssuedToken:
    """Generate a new secret and its storage key.

    Returns:
        IssuedToken with the hex-encoded secret and its digest
    """
    raw_secret = secrets.token_hex(RESET_TOKEN_BYTES)
    return IssuedToken(raw_secret=raw_secret, storage_key=digest(raw_secret))
