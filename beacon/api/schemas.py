"""Request and response bodies for the HTTP API.

Required fields are declared optional here so that a missing value reaches
the flows and is reported as a 400 with a readable message, matching the
rest of the validation errors.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ForgotPasswordRequest(_Body):
    email: Optional[str] = None


class PasswordResetRequest(_Body):
    token: Optional[str] = None
    password: Optional[str] = None
    password_confirm: Optional[str] = Field(default=None, alias="passwordConfirm")


class SendLoginCredentialsRequest(_Body):
    email: Optional[str] = None
    name: Optional[str] = None
    user_id: Optional[str] = Field(default=None, alias="userId")
    resend: bool = False


class SetAuthStatusRequest(_Body):
    user_id: Optional[str] = Field(default=None, alias="userId")
    is_active: bool = Field(default=False, alias="isActive")


class UserIdRequest(_Body):
    user_id: Optional[str] = Field(default=None, alias="userId")


class ErrorResponse(BaseModel):
    ok: bool = False
    code: str
    message: str
