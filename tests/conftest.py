"""Shared pytest fixtures for beacon tests."""

import os
from datetime import datetime, timedelta, timezone

import boto3
import pytest
from moto import mock_aws

from beacon import Account, MockFactory, MockIdentityProvider, MockNotifier, ResetTokenStore
from beacon.identity_providers import create_user_pool

SENDER = "no-reply@example.com"


@pytest.fixture
def aws_credentials():
    """Mock AWS credentials for testing."""
    os.environ["AWS_ACCESS_KEY_ID"] = "testing"
    os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
    os.environ["AWS_SECURITY_TOKEN"] = "testing"
    os.environ["AWS_SESSION_TOKEN"] = "testing"
    os.environ["AWS_DEFAULT_REGION"] = "us-east-1"


@pytest.fixture
def mock_aws_services(aws_credentials):
    """Mock Cognito and SES."""
    with mock_aws():
        yield


@pytest.fixture
def region():
    """AWS region for tests."""
    return "us-east-1"


@pytest.fixture
def user_pool_id(mock_aws_services, region):
    """A moto user pool with the account metadata schema."""
    return create_user_pool("beacon-test", region=region)


@pytest.fixture
def verified_sender(mock_aws_services, region):
    """SES sender identity verified in moto."""
    boto3.client("ses", region_name=region).verify_email_identity(EmailAddress=SENDER)
    return SENDER


class FakeClock:
    """Settable clock for the token store."""

    def __init__(self, start=None):
        self.current = start or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.current

    def advance(self, **kwargs):
        self.current = self.current + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store(clock):
    return ResetTokenStore(clock=clock)


@pytest.fixture
def alice():
    return Account(user_id="user-alice", email="alice@example.com", display_name="Alice")


@pytest.fixture
def provider(alice):
    """Mock identity provider holding one account."""
    return MockIdentityProvider(accounts=[(alice, "OldPassw0rd!")])


@pytest.fixture
def notifier():
    return MockNotifier()


@pytest.fixture
def mock_factory():
    return MockFactory(app_origin="https://app.example.com", app_name="WorkloadHub")
