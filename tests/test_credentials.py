"""Tests for temporary password generation."""

import pytest

from beacon.credentials import (
    ALL_CHARACTERS,
    DIGITS,
    LOWERCASE,
    SYMBOLS,
    UPPERCASE,
    generate_temporary_password,
)


@pytest.mark.parametrize("length", [8, 14, 32])
def test_length_and_composition(length):
    """Test every character class is present at the requested length."""
    for _ in range(50):
        password = generate_temporary_password(length)
        assert len(password) == length
        assert any(c in UPPERCASE for c in password)
        assert any(c in LOWERCASE for c in password)
        assert any(c in DIGITS for c in password)
        assert any(c in SYMBOLS for c in password)
        assert all(c in ALL_CHARACTERS for c in password)


def test_default_length():
    """Test the default length is 14."""
    assert len(generate_temporary_password()) == 14


def test_short_length_is_raised_to_minimum():
    """Test lengths below 8 are raised to 8."""
    assert len(generate_temporary_password(4)) == 8


def test_ambiguous_characters_excluded():
    """Test look-alike glyphs are never used."""
    assert not set("IOl01") & set(ALL_CHARACTERS)


def test_passwords_differ():
    """Test successive passwords are not repeated."""
    passwords = {generate_temporary_password() for _ in range(100)}
    assert len(passwords) == 100
