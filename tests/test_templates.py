"""Tests for email templates."""

from beacon.templates import (
    credentials_email_subject,
    get_credentials_email,
    get_password_reset_email,
    load_template,
    password_reset_email_subject,
)


def test_templates_load():
    """Test packaged templates are readable."""
    assert "{{RESET_URL}}" in load_template("password_reset_email")
    assert "{{TEMPORARY_PASSWORD}}" in load_template("credentials_email")


def test_password_reset_email():
    """Test the reset email carries the link and lifetime."""
    html = get_password_reset_email("https://app.example.com/auth/reset-password?token=abc", app_name="Acme")

    assert "https://app.example.com/auth/reset-password?token=abc" in html
    assert "15 minutes" in html
    assert "Acme" in html
    assert "{{" not in html


def test_credentials_email_escapes_values():
    """Test user-supplied values are HTML-escaped."""
    html = get_credentials_email(
        email="a@example.com",
        login_url="https://app.example.com/auth/login",
        temporary_password="Ab3&<x>",
        resent=False,
        display_name="<script>",
    )

    assert "Ab3&amp;&lt;x&gt;" in html
    assert "&lt;script&gt;" in html
    assert "<script>" not in html
    assert "{{" not in html


def test_credentials_email_variants():
    """Test headings differ for created and resent credentials."""
    created = get_credentials_email("a@example.com", "https://x/auth/login", "pw", resent=False)
    resent = get_credentials_email("a@example.com", "https://x/auth/login", "pw", resent=True)

    assert "Welcome to WorkloadHub" in created
    assert "Credentials Updated" in resent


def test_subjects():
    """Test email subjects."""
    assert credentials_email_subject(False, "Acme") == "Your Acme Account Credentials"
    assert credentials_email_subject(True, "Acme") == "Your Acme Credentials (Updated)"
    assert password_reset_email_subject("Acme") == "Acme Password Reset"
