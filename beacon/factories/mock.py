"""Factory for mock/testing components."""

from typing import Optional

from beacon.core.factory import BeaconFactory
from beacon.identity_providers.mock import MockIdentityProvider
from beacon.notifiers.mock import MockNotifier


class MockFactory(BeaconFactory):
    """Factory for mock/testing components.

    Creates MockIdentityProvider and MockNotifier instances for testing and
    local development. Nothing leaves the process: accounts live in memory
    and emails are recorded on the notifier.

    Examples:
        >>> factory = MockFactory()
        >>> flow = factory.create_provisioning_flow()
        >>> outcome = await flow.provision("user@example.com")
        >>> factory.create_notifier().sent[-1].subject
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._provider: Optional[MockIdentityProvider] = None
        self._notifier: Optional[MockNotifier] = None

    def create_identity_provider(self) -> MockIdentityProvider:
        if self._provider is None:
            self._provider = MockIdentityProvider()
        return self._provider

    def create_notifier(self) -> MockNotifier:
        if self._notifier is None:
            self._notifier = MockNotifier()
        return self._notifier
