"""Abstract identity provider interface.

This module defines the account operations the credential flows need from an
identity provider. The interface is provider-agnostic - implementations can
use Cognito, Appwrite, Keycloak, or any other identity service.

Each implementation commits to exactly one calling convention of its
underlying SDK. Flows never probe alternative call shapes at runtime.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from beacon.models import Account


class IdentityProvider(ABC):
    """Abstract identity provider for account lookup and credential mutation.

    Lookups return ``None`` when the account does not exist. Every other
    failure is raised as ``IdentityProviderError``.

    Implementations:
        - CognitoIdentityProvider: AWS Cognito
        - MockIdentityProvider: In-memory for local development and tests
    """

    # ==================== Lookup ====================

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Account]:
        """Get an account by its (normalized) email address.

        Args:
            email: Lowercased, trimmed email address

        Returns:
            Account if found, None otherwise

        Raises:
            IdentityProviderError: On provider errors
        """

    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[Account]:
        """Get an account by its identifier.

        Args:
            user_id: The account identifier

        Returns:
            Account if found, None otherwise

        Raises:
            IdentityProviderError: On provider errors
        """

    # ==================== Mutation ====================

    @abstractmethod
    async def create(
        self,
        user_id: str,
        email: str,
        password: str,
        display_name: Optional[str] = None,
    ) -> Account:
        """Create an account with an initial password.

        Providers that assign their own identifiers may ignore ``user_id``;
        callers must use the identifier on the returned Account.

        Args:
            user_id: Requested account identifier
            email: Account email address
            password: Initial password
            display_name: Optional display name

        Returns:
            The created Account

        Raises:
            IdentityProviderError: On provider errors (including duplicates)
        """

    @abstractmethod
    async def set_password(self, user_id: str, password: str) -> None:
        """Overwrite the account password.

        Raises:
            IdentityProviderError: On provider errors
        """

    @abstractmethod
    async def set_metadata(self, user_id: str, metadata: dict[str, Any]) -> None:
        """Merge key/value metadata into the account.

        Raises:
            IdentityProviderError: On provider errors
        """

    @abstractmethod
    async def set_enabled(self, user_id: str, enabled: bool) -> None:
        """Enable or disable login for the account.

        Raises:
            IdentityProviderError: On provider errors
        """

    @abstractmethod
    async def set_email_verified(self, user_id: str, verified: bool) -> None:
        """Set the provider's own email verification flag.

        Raises:
            IdentityProviderError: On provider errors
        """

    @abstractmethod
    async def revoke_sessions(self, user_id: str) -> None:
        """Sign the account out everywhere.

        Raises:
            IdentityProviderError: On provider errors
        """

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        """Delete the account.

        Returns:
            True if deleted, False if not found

        Raises:
            IdentityProviderError: On provider errors
        """
