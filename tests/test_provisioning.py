"""Tests for admin credential provisioning."""

import pytest

from beacon import Account, ProvisioningAction, ProvisioningFlow
from beacon.exceptions import (
    AccountExistsError,
    AccountNotFoundError,
    IdentityProviderError,
    NotificationError,
    ValidationError,
)
from beacon.identity_providers import MockIdentityProvider


@pytest.fixture
def flow(provider, notifier):
    return ProvisioningFlow(
        provider=provider,
        notifier=notifier,
        app_origin="https://app.example.com",
    )


# ==================== Create ====================


@pytest.mark.asyncio
async def test_provision_new_account(flow, provider, notifier):
    """Test a fresh email creates an account and emails credentials."""
    outcome = await flow.provision(" New@Example.com ", name="New User")

    assert outcome.action is ProvisioningAction.CREATED
    assert outcome.email == "new@example.com"
    assert len(outcome.temporary_password) == 14

    account = await provider.find_by_id(outcome.user_id)
    assert account.email == "new@example.com"
    assert account.display_name == "New User"
    assert account.metadata["must_change_password"] is True
    assert account.metadata["is_verified"] is False
    assert account.metadata["created_by_admin"] is True
    assert "created_at" in account.metadata
    assert provider.check_password(outcome.user_id, outcome.temporary_password)

    message = notifier.sent[-1]
    assert message.to_address == "new@example.com"
    assert message.subject == "Your WorkloadHub Account Credentials"
    assert "Welcome to WorkloadHub" in message.html_body
    assert "https://app.example.com/auth/login" in message.html_body
    assert "New User" in message.html_body


@pytest.mark.asyncio
async def test_provision_existing_without_resend_conflicts(flow, provider, notifier):
    """Test an existing account is rejected and left untouched."""
    with pytest.raises(AccountExistsError):
        await flow.provision("alice@example.com")

    assert provider.check_password("user-alice", "OldPassw0rd!")
    assert notifier.sent == []


@pytest.mark.asyncio
async def test_provision_twice_conflicts(flow):
    """Test provisioning the same fresh email twice conflicts the second time."""
    await flow.provision("a@x.com")
    with pytest.raises(AccountExistsError):
        await flow.provision("a@x.com")


# ==================== Resend ====================


@pytest.mark.asyncio
async def test_provision_resend_issues_new_password(flow, provider, notifier):
    """Test resend for an existing account replaces the password."""
    outcome = await flow.provision("alice@example.com", resend=True)

    assert outcome.action is ProvisioningAction.RESENT
    assert outcome.user_id == "user-alice"
    assert provider.check_password("user-alice", outcome.temporary_password)

    account = await provider.find_by_id("user-alice")
    assert account.metadata["must_change_password"] is True
    assert account.metadata["is_verified"] is False
    assert "resent_at" in account.metadata

    message = notifier.sent[-1]
    assert message.subject == "Your WorkloadHub Credentials (Updated)"
    assert "Credentials Updated" in message.html_body


@pytest.mark.asyncio
async def test_provision_resend_changes_password_each_time(flow):
    """Test create then resend yields a different temporary password."""
    created = await flow.provision("a@x.com")
    resent = await flow.provision("a@x.com", resend=True)

    assert resent.action is ProvisioningAction.RESENT
    assert resent.user_id == created.user_id
    assert resent.temporary_password != created.temporary_password


@pytest.mark.asyncio
async def test_provision_resend_unknown_account(flow, notifier):
    """Test resend for an unknown account is not found."""
    with pytest.raises(AccountNotFoundError) as exc_info:
        await flow.provision("nobody@example.com", resend=True)

    assert "Cannot resend" in exc_info.value.message
    assert notifier.sent == []


@pytest.mark.asyncio
async def test_provision_resolves_by_user_id(flow, provider, notifier):
    """Test resend by user id mails the account's own address, not the requested one."""
    outcome = await flow.provision("other@evil.test", user_id="user-alice", resend=True)

    assert outcome.user_id == "user-alice"
    assert outcome.email == "alice@example.com"
    assert notifier.messages_to("other@evil.test") == []
    [message] = notifier.messages_to("alice@example.com")
    assert "other@evil.test" not in message.html_body
    assert provider.check_password("user-alice", outcome.temporary_password)


@pytest.mark.asyncio
async def test_resend_uses_normalized_account_email(notifier):
    """Test the stored address is trimmed and lowercased before sending."""
    provider = MockIdentityProvider(
        accounts=[(Account(user_id="u1", email=" Bob@Example.com "), "pw")]
    )
    flow = ProvisioningFlow(provider, notifier, app_origin="https://app.example.com")

    outcome = await flow.provision("someone@else.test", user_id="u1", resend=True)

    assert outcome.email == "bob@example.com"
    assert notifier.sent[-1].to_address == "bob@example.com"


@pytest.mark.asyncio
async def test_provision_unknown_user_id_falls_back_to_email(flow):
    """Test an unknown user id falls back to the email lookup."""
    outcome = await flow.provision("alice@example.com", user_id="stale-id", resend=True)

    assert outcome.user_id == "user-alice"


@pytest.mark.asyncio
async def test_implicit_resend(provider, notifier):
    """Test implicit_resend turns the conflict into a resend."""
    flow = ProvisioningFlow(
        provider=provider,
        notifier=notifier,
        app_origin="https://app.example.com",
        implicit_resend=True,
    )

    outcome = await flow.provision("alice@example.com")

    assert outcome.action is ProvisioningAction.RESENT


# ==================== Failures ====================


@pytest.mark.asyncio
async def test_provision_requires_email(flow):
    """Test a missing email is a validation error."""
    with pytest.raises(ValidationError):
        await flow.provision(None)


class MetadataFailingProvider(MockIdentityProvider):
    async def set_metadata(self, user_id, metadata):
        raise IdentityProviderError("attribute not in schema", "set_metadata")


class LookupFailingProvider(MockIdentityProvider):
    async def find_by_id(self, user_id):
        raise IdentityProviderError("filter rejected", "find_by_id")


@pytest.mark.asyncio
async def test_metadata_failure_is_best_effort(notifier):
    """Test metadata write failures do not fail provisioning."""
    flow = ProvisioningFlow(
        provider=MetadataFailingProvider(),
        notifier=notifier,
        app_origin="https://app.example.com",
    )

    outcome = await flow.provision("a@x.com")

    assert outcome.action is ProvisioningAction.CREATED
    assert len(notifier.sent) == 1


@pytest.mark.asyncio
async def test_lookup_by_id_failure_falls_back(alice, notifier):
    """Test a failing id lookup falls back to the email lookup."""
    flow = ProvisioningFlow(
        provider=LookupFailingProvider(accounts=[(alice, "pw")]),
        notifier=notifier,
        app_origin="https://app.example.com",
    )

    outcome = await flow.provision("alice@example.com", user_id="user-alice", resend=True)

    assert outcome.user_id == "user-alice"


@pytest.mark.asyncio
async def test_notifier_failure_surfaces(flow, notifier):
    """Test a failed credentials email is reported."""
    notifier.fail_with = "SES unavailable"

    with pytest.raises(NotificationError):
        await flow.provision("a@x.com")
