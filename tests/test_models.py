"""Tests for beacon models."""

from datetime import datetime, timedelta, timezone

from beacon.models import (
    Account,
    IssuedToken,
    ProvisioningAction,
    ProvisioningOutcome,
    ResetRequest,
)


def test_account_defaults():
    """Test Account default values."""
    account = Account(user_id="u1", email="a@example.com")
    assert account.enabled is True
    assert account.email_verified is False
    assert account.display_name is None
    assert account.metadata == {}


def test_account_metadata_not_shared():
    """Test each Account gets its own metadata dict."""
    first = Account(user_id="u1", email="a@example.com")
    second = Account(user_id="u2", email="b@example.com")
    first.metadata["is_verified"] = True
    assert second.metadata == {}


def test_reset_request_expiry_boundary():
    """Test a request is still valid at exactly expires_at."""
    expires = datetime(2024, 1, 1, 12, 15, tzinfo=timezone.utc)
    request = ResetRequest(token_hash="h", user_id="u1", email="a@example.com", expires_at=expires)

    assert not request.is_expired(expires)
    assert not request.is_expired(expires - timedelta(seconds=1))
    assert request.is_expired(expires + timedelta(microseconds=1))


def test_issued_token_repr_hides_secret():
    """Test the raw secret does not appear in repr."""
    token = IssuedToken(raw_secret="supersecret", storage_key="digest")
    assert "supersecret" not in repr(token)
    assert "digest" in repr(token)


def test_provisioning_outcome_repr_hides_password():
    """Test the temporary password does not appear in repr."""
    outcome = ProvisioningOutcome(
        action=ProvisioningAction.CREATED,
        user_id="u1",
        email="a@example.com",
        temporary_password="Tmp#Passw0rd",
    )
    assert "Tmp#Passw0rd" not in repr(outcome)
    assert "created" in repr(outcome)


def test_provisioning_action_values():
    """Test ProvisioningAction serializes as plain strings."""
    assert ProvisioningAction.CREATED.value == "created"
    assert ProvisioningAction.RESENT == "resent"
