"""Credential lifecycle flows."""

from beacon.flows.account_admin import AccountAdminFlow
from beacon.flows.password_reset import PasswordResetFlow
from beacon.flows.provisioning import ProvisioningFlow

__all__ = [
    "AccountAdminFlow",
    "PasswordResetFlow",
    "ProvisioningFlow",
]
