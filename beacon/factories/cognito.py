"""Factory for AWS components."""

from typing import Optional

from beacon.core.factory import BeaconFactory
from beacon.core.identity_provider import IdentityProvider
from beacon.core.notifier import Notifier


class CognitoFactory(BeaconFactory):
    """Factory for AWS Cognito and SES components.

    Args:
        region: AWS region where the Cognito pool and SES identity live.
        user_pool_id: The Cognito User Pool holding the application's accounts.
        sender: SES-verified sender address for outgoing email.
        endpoint_url: Optional custom endpoint URL for testing with LocalStack
            or other AWS-compatible services.
        **kwargs: Common factory options (app_origin, app_name, implicit_resend).

    Note:
        AWS credentials must be configured via environment variables, AWS
        config files, or IAM roles.
    """

    def __init__(
        self,
        region: str,
        user_pool_id: str,
        sender: str,
        endpoint_url: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.region = region
        self.user_pool_id = user_pool_id
        self.sender = sender
        self.endpoint_url = endpoint_url
        self._provider: Optional[IdentityProvider] = None
        self._notifier: Optional[Notifier] = None

    def create_identity_provider(self) -> IdentityProvider:
        """Create or return cached Cognito identity provider."""
        if self._provider is None:
            from beacon.identity_providers.cognito import CognitoIdentityProvider

            self._provider = CognitoIdentityProvider(
                region=self.region,
                user_pool_id=self.user_pool_id,
                endpoint_url=self.endpoint_url,
            )
        return self._provider

    def create_notifier(self) -> Notifier:
        """Create or return cached SES notifier."""
        if self._notifier is None:
            from beacon.notifiers.ses import SesNotifier

            self._notifier = SesNotifier(
                region=self.region,
                sender=self.sender,
                endpoint_url=self.endpoint_url,
            )
        return self._notifier
