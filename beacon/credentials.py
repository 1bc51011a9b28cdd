"""Temporary password generation."""

from __future__ import annotations

import secrets

# Visually ambiguous glyphs (I, O, l, 0, 1) are left out
UPPERCASE = "ABCDEFGHJKLMNPQRSTUVWXYZ"
LOWERCASE = "abcdefghijkmnopqrstuvwxyz"
DIGITS = "23456789"
SYMBOLS = "!@#$%^&*_-+=?"
ALL_CHARACTERS = UPPERCASE + LOWERCASE + DIGITS + SYMBOLS

DEFAULT_LENGTH = 14
MINIMUM_LENGTH = 8


def generate_temporary_password(length: int = DEFAULT_LENGTH) -> str:
    """Generate a temporary password handed to a user by email.

    The result contains at least one uppercase letter, lowercase letter,
    digit and symbol, and is ``max(length, 8)`` characters long.
    """
    _random = secrets.SystemRandom()
    # Ensure we have at least one of each required type
    password = [
        secrets.choice(UPPERCASE),
        secrets.choice(LOWERCASE),
        secrets.choice(DIGITS),
        secrets.choice(SYMBOLS),
    ]
    # Fill the rest with random characters
    remaining = max(length, MINIMUM_LENGTH) - len(password)
    password.extend(secrets.choice(ALL_CHARACTERS) for _ in range(remaining))
    # Shuffle to avoid predictable pattern
    _random.shuffle(password)
    return "".join(password)
