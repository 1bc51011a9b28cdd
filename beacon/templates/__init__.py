"""Email templates for Beacon credential flows."""

from datetime import datetime, timezone
from html import escape
from pathlib import Path
from typing import Optional

_TEMPLATES_DIR = Path(__file__).parent


def load_template(name: str) -> str:
    """Load an email template by name.

    Args:
        name: Template name without extension (e.g., "password_reset_email")

    Returns:
        Template content as string

    Raises:
        FileNotFoundError: If template doesn't exist
    """
    template_path = _TEMPLATES_DIR / f"{name}.html"
    return template_path.read_text(encoding="utf-8")


def _render(name: str, values: dict[str, str]) -> str:
    template = load_template(name)
    for key, value in values.items():
        template = template.replace("{{" + key + "}}", value)
    return template


def get_password_reset_email(
    reset_url: str,
    app_name: str = "WorkloadHub",
    ttl_minutes: int = 15,
) -> str:
    """Get the HTML password reset email.

    Args:
        reset_url: Link embedding the raw reset secret
        app_name: Product name shown in the email
        ttl_minutes: Link lifetime shown to the user

    Returns:
        Rendered HTML body
    """
    return _render(
        "password_reset_email",
        {
            "APP_NAME": escape(app_name),
            "RESET_URL": escape(reset_url),
            "TTL_MINUTES": str(ttl_minutes),
        },
    )


def get_credentials_email(
    email: str,
    login_url: str,
    temporary_password: str,
    resent: bool,
    display_name: Optional[str] = None,
    app_name: str = "WorkloadHub",
) -> str:
    """Get the HTML login credentials email.

    All user-supplied values are HTML-escaped.

    Args:
        email: Account email address
        login_url: Sign-in page URL
        temporary_password: Generated password
        resent: True when credentials were re-issued for an existing account
        display_name: Optional greeting name
        app_name: Product name shown in the email

    Returns:
        Rendered HTML body
    """
    safe_app = escape(app_name)
    if resent:
        heading = "Credentials Updated"
        intro = (
            "Your login credentials have been updated. "
            "A new temporary password was generated for your account."
        )
    else:
        heading = f"Welcome to {safe_app}"
        intro = (
            f"Your {safe_app} account has been created by the administrator. "
            "Please use the credentials below to sign in."
        )

    greeting_name = ""
    if display_name:
        greeting_name = f' <span style="font-weight:700;">{escape(display_name)}</span>'

    return _render(
        "credentials_email",
        {
            "APP_NAME": safe_app,
            "HEADING": heading,
            "GREETING_NAME": greeting_name,
            "INTRO": intro,
            "LOGIN_URL": escape(login_url),
            "EMAIL": escape(email),
            "TEMPORARY_PASSWORD": escape(temporary_password),
            "YEAR": str(datetime.now(timezone.utc).year),
        },
    )


def credentials_email_subject(resent: bool, app_name: str = "WorkloadHub") -> str:
    if resent:
        return f"Your {app_name} Credentials (Updated)"
    return f"Your {app_name} Account Credentials"


def password_reset_email_subject(app_name: str = "WorkloadHub") -> str:
    return f"{app_name} Password Reset"
