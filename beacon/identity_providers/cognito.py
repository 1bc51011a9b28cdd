"""AWS Cognito implementation of IdentityProvider."""

from __future__ import annotations

from typing import Any, Optional

import boto3
import structlog
from botocore.exceptions import ClientError

from beacon.core.identity_provider import IdentityProvider
from beacon.exceptions import AccountExistsError, AccountNotFoundError, IdentityProviderError
from beacon.models import (
    CREATED_AT,
    CREATED_BY_ADMIN,
    IS_VERIFIED,
    MUST_CHANGE_PASSWORD,
    RESENT_AT,
    VERIFIED_AT,
    VERIFIED_BY,
    Account,
)

log = structlog.get_logger()

# Prefix Cognito requires for non-standard attributes
CUSTOM_PREFIX = "custom:"
# Standard attribute for display name
NAME_ATTRIBUTE = "name"

# Metadata keys stored as custom string attributes
METADATA_ATTRIBUTES = (
    MUST_CHANGE_PASSWORD,
    IS_VERIFIED,
    CREATED_BY_ADMIN,
    CREATED_AT,
    RESENT_AT,
    VERIFIED_AT,
    VERIFIED_BY,
)


def _encode_attribute(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _decode_attribute(value: str) -> Any:
    if value in ("true", "false"):
        return value == "true"
    return value


def create_user_pool(
    pool_name: str,
    region: str,
    endpoint_url: Optional[str] = None,
    minimum_password_length: int = 8,
) -> str:
    """Create a user pool whose schema carries the account metadata attributes.

    Accounts are addressed by email, and Cognito's own invitation messages are
    suppressed at user creation since the credential emails are sent by the
    notifier.

    Args:
        pool_name: Name for the user pool
        region: AWS region
        endpoint_url: Custom endpoint URL for LocalStack or other
            AWS-compatible services
        minimum_password_length: Password policy minimum length

    Returns:
        The new pool ID

    Raises:
        IdentityProviderError: On provider errors
    """
    client_kwargs: dict[str, Any] = {"region_name": region}
    if endpoint_url:
        client_kwargs["endpoint_url"] = endpoint_url
    client = boto3.client("cognito-idp", **client_kwargs)

    schema: list[dict[str, Any]] = [
        {
            "Name": "email",
            "AttributeDataType": "String",
            "Required": True,
            "Mutable": True,
        },
    ]
    schema.extend(
        {
            "Name": name,
            "AttributeDataType": "String",
            "Required": False,
            "Mutable": True,
            "StringAttributeConstraints": {"MinLength": "0", "MaxLength": "64"},
        }
        for name in METADATA_ATTRIBUTES
    )

    try:
        response = client.create_user_pool(
            PoolName=pool_name,
            Policies={
                "PasswordPolicy": {
                    # Length only, matching the reset flow's own check
                    "MinimumLength": minimum_password_length,
                    "RequireUppercase": False,
                    "RequireLowercase": False,
                    "RequireNumbers": False,
                    "RequireSymbols": False,
                }
            },
            UsernameAttributes=["email"],
            UsernameConfiguration={"CaseSensitive": False},
            Schema=schema,
            AdminCreateUserConfig={"AllowAdminCreateUserOnly": True},
        )
    except ClientError as e:
        log.error("cognito_create_pool_error", error=str(e), pool_name=pool_name)
        raise IdentityProviderError(f"Failed to create pool: {e}", "create_user_pool")

    pool_id = response["UserPool"]["Id"]
    log.info("cognito_pool_created", pool_id=pool_id, pool_name=pool_name)
    return pool_id


class CognitoIdentityProvider(IdentityProvider):
    """AWS Cognito implementation of identity provider.

    Accounts live in a single Cognito User Pool. The account identifier is the
    Cognito ``sub``; admin API calls address users by email, which the pool
    uses as its username attribute. Account metadata is kept in ``custom:``
    attributes (see ``create_user_pool``).

    Args:
        region: AWS region for Cognito
        user_pool_id: The pool holding the application's accounts
        endpoint_url: Custom endpoint URL for LocalStack or other AWS-compatible services

    Note:
        Use CognitoFactory.create_identity_provider() instead of instantiating directly.
    """

    def __init__(
        self,
        region: str,
        user_pool_id: str,
        endpoint_url: Optional[str] = None,
    ):
        self.region = region
        self.user_pool_id = user_pool_id
        self._endpoint_url = endpoint_url

        # Create client with optional custom endpoint
        client_kwargs: dict[str, Any] = {"region_name": region}
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url
        self._client = boto3.client("cognito-idp", **client_kwargs)

    def _parse_user_attributes(self, attributes: list[dict[str, str]]) -> dict[str, Any]:
        """Parse Cognito user attributes into a dictionary."""
        return {attr["Name"]: attr["Value"] for attr in attributes}

    def _cognito_user_to_account(self, user: dict[str, Any]) -> Account:
        """Convert Cognito user response to Account model."""
        attrs = self._parse_user_attributes(user.get("Attributes", []))
        metadata = {
            name[len(CUSTOM_PREFIX):]: _decode_attribute(value)
            for name, value in attrs.items()
            if name.startswith(CUSTOM_PREFIX)
        }
        return Account(
            user_id=attrs.get("sub", user.get("Username", "")),
            email=attrs.get("email", ""),
            display_name=attrs.get(NAME_ATTRIBUTE),
            enabled=user.get("Enabled", True),
            email_verified=attrs.get("email_verified", "false").lower() == "true",
            created_at=user.get("UserCreateDate"),
            metadata=metadata,
        )

    async def _require_username(self, user_id: str, operation: str) -> str:
        """Resolve the Cognito username (email) for an account id."""
        account = await self.find_by_id(user_id)
        if account is None:
            log.warning("cognito_account_missing", operation=operation, user_id=user_id)
            raise AccountNotFoundError(user_id)
        return account.email

    # ==================== Lookup ====================

    async def find_by_email(self, email: str) -> Optional[Account]:
        """Get an account by its email address."""
        try:
            response = self._client.admin_get_user(
                UserPoolId=self.user_pool_id,
                Username=email,
            )
            # admin_get_user returns slightly different structure
            user = {
                "Username": response["Username"],
                "Attributes": response.get("UserAttributes", []),
                "Enabled": response.get("Enabled", True),
                "UserCreateDate": response.get("UserCreateDate"),
            }
            return self._cognito_user_to_account(user)

        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            if error_code == "UserNotFoundException":
                return None
            log.error("cognito_find_by_email_error", error=str(e), pool_id=self.user_pool_id)
            raise IdentityProviderError(f"Failed to get user by email: {e}", "find_by_email")

    async def find_by_id(self, user_id: str) -> Optional[Account]:
        """Get an account by its sub (UUID)."""
        try:
            # Cognito requires username, but we have sub
            # Use list_users with filter to find by sub
            response = self._client.list_users(
                UserPoolId=self.user_pool_id,
                Filter=f'sub = "{user_id}"',
                Limit=1,
            )
            users = response.get("Users", [])
            if not users:
                return None
            return self._cognito_user_to_account(users[0])

        except ClientError as e:
            log.error("cognito_find_by_id_error", error=str(e), pool_id=self.user_pool_id, user_id=user_id)
            raise IdentityProviderError(f"Failed to get user: {e}", "find_by_id")

    # ==================== Mutation ====================

    async def create(
        self,
        user_id: str,
        email: str,
        password: str,
        display_name: Optional[str] = None,
    ) -> Account:
        """Create a user with the given password.

        Cognito assigns its own ``sub``; the requested ``user_id`` is not used.

        The password is made permanent right after creation, so created and
        re-issued accounts are both ``CONFIRMED`` in Cognito. The forced
        password change is driven by the ``must_change_password`` metadata,
        not by Cognito's ``NEW_PASSWORD_REQUIRED`` challenge.
        """
        try:
            user_attributes = [
                {"Name": "email", "Value": email},
                {"Name": "email_verified", "Value": "false"},
            ]
            if display_name:
                user_attributes.append({"Name": NAME_ATTRIBUTE, "Value": display_name})

            response = self._client.admin_create_user(
                UserPoolId=self.user_pool_id,
                Username=email,
                UserAttributes=user_attributes,
                TemporaryPassword=password,
                MessageAction="SUPPRESS",
            )
            account = self._cognito_user_to_account(response["User"])

        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            if error_code == "UsernameExistsException":
                raise AccountExistsError(email)
            log.error("cognito_create_user_error", error=str(e), pool_id=self.user_pool_id)
            raise IdentityProviderError(f"Failed to create user: {e}", "create")

        try:
            self._client.admin_set_user_password(
                UserPoolId=self.user_pool_id,
                Username=email,
                Password=password,
                Permanent=True,
            )
        except ClientError as e:
            log.error("cognito_confirm_user_error", error=str(e), pool_id=self.user_pool_id, user_id=account.user_id)
            raise IdentityProviderError(f"Failed to confirm user: {e}", "create")

        log.info("cognito_user_created", pool_id=self.user_pool_id, user_id=account.user_id)
        return account

    async def set_password(self, user_id: str, password: str) -> None:
        """Overwrite the user's password (permanent, no Cognito challenge)."""
        username = await self._require_username(user_id, "set_password")
        try:
            self._client.admin_set_user_password(
                UserPoolId=self.user_pool_id,
                Username=username,
                Password=password,
                Permanent=True,
            )
            log.info("cognito_password_set", pool_id=self.user_pool_id, user_id=user_id)
        except ClientError as e:
            log.error("cognito_set_password_error", error=str(e), pool_id=self.user_pool_id, user_id=user_id)
            raise IdentityProviderError(f"Failed to set password: {e}", "set_password")

    async def set_metadata(self, user_id: str, metadata: dict[str, Any]) -> None:
        """Write metadata into ``custom:`` attributes."""
        username = await self._require_username(user_id, "set_metadata")
        try:
            self._client.admin_update_user_attributes(
                UserPoolId=self.user_pool_id,
                Username=username,
                UserAttributes=[
                    {"Name": f"{CUSTOM_PREFIX}{key}", "Value": _encode_attribute(value)}
                    for key, value in metadata.items()
                ],
            )
            log.info("cognito_metadata_updated", pool_id=self.user_pool_id, user_id=user_id)
        except ClientError as e:
            log.error("cognito_set_metadata_error", error=str(e), pool_id=self.user_pool_id, user_id=user_id)
            raise IdentityProviderError(f"Failed to update metadata: {e}", "set_metadata")

    async def set_enabled(self, user_id: str, enabled: bool) -> None:
        """Enable or disable a user account."""
        username = await self._require_username(user_id, "set_enabled")
        try:
            if enabled:
                self._client.admin_enable_user(UserPoolId=self.user_pool_id, Username=username)
            else:
                self._client.admin_disable_user(UserPoolId=self.user_pool_id, Username=username)
            log.info("cognito_user_status_set", pool_id=self.user_pool_id, user_id=user_id, enabled=enabled)
        except ClientError as e:
            log.error("cognito_set_enabled_error", error=str(e), pool_id=self.user_pool_id, user_id=user_id)
            raise IdentityProviderError(f"Failed to update status: {e}", "set_enabled")

    async def set_email_verified(self, user_id: str, verified: bool) -> None:
        """Set the standard email_verified attribute."""
        username = await self._require_username(user_id, "set_email_verified")
        try:
            self._client.admin_update_user_attributes(
                UserPoolId=self.user_pool_id,
                Username=username,
                UserAttributes=[{"Name": "email_verified", "Value": _encode_attribute(verified)}],
            )
            log.info("cognito_email_verification_set", pool_id=self.user_pool_id, user_id=user_id)
        except ClientError as e:
            log.error("cognito_set_email_verified_error", error=str(e), pool_id=self.user_pool_id, user_id=user_id)
            raise IdentityProviderError(
                f"Failed to update email verification: {e}", "set_email_verified"
            )

    async def revoke_sessions(self, user_id: str) -> None:
        """Invalidate all refresh tokens issued to the user."""
        username = await self._require_username(user_id, "revoke_sessions")
        try:
            self._client.admin_user_global_sign_out(
                UserPoolId=self.user_pool_id,
                Username=username,
            )
            log.info("cognito_sessions_revoked", pool_id=self.user_pool_id, user_id=user_id)
        except ClientError as e:
            log.error("cognito_revoke_sessions_error", error=str(e), pool_id=self.user_pool_id, user_id=user_id)
            raise IdentityProviderError(f"Failed to revoke sessions: {e}", "revoke_sessions")

    async def delete(self, user_id: str) -> bool:
        """Delete a user from the pool."""
        account = await self.find_by_id(user_id)
        if account is None:
            return False

        try:
            self._client.admin_delete_user(
                UserPoolId=self.user_pool_id,
                Username=account.email,
            )
            log.info("cognito_user_deleted", pool_id=self.user_pool_id, user_id=user_id)
            return True

        except ClientError as e:
            error_code = e.response["Error"]["Code"]
            if error_code == "UserNotFoundException":
                return False
            log.error("cognito_delete_user_error", error=str(e), pool_id=self.user_pool_id, user_id=user_id)
            raise IdentityProviderError(f"Failed to delete user: {e}", "delete")
