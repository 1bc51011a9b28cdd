"""HTTP routes for the credential lifecycle flows."""

from fastapi import APIRouter, Depends, Request

from beacon.api.schemas import (
    ForgotPasswordRequest,
    PasswordResetRequest,
    SendLoginCredentialsRequest,
    SetAuthStatusRequest,
    UserIdRequest,
)
from beacon.core.factory import BeaconFactory
from beacon.models import ProvisioningAction

FORGOT_PASSWORD_MESSAGE = "If the email exists, a reset link has been sent."

router = APIRouter()


def get_factory(request: Request) -> BeaconFactory:
    return request.app.state.factory


@router.post("/auth/forgot-password")
async def forgot_password(
    body: ForgotPasswordRequest, factory: BeaconFactory = Depends(get_factory)
) -> dict:
    await factory.create_password_reset_flow().request_reset(body.email)
    return {"ok": True, "message": FORGOT_PASSWORD_MESSAGE}


@router.post("/auth/password-reset")
async def password_reset(
    body: PasswordResetRequest, factory: BeaconFactory = Depends(get_factory)
) -> dict:
    confirmation = await factory.create_password_reset_flow().confirm_reset(
        body.token, body.password, body.password_confirm
    )
    return {
        "ok": True,
        "userId": confirmation.user_id,
        "email": confirmation.email,
        "message": "Password has been reset.",
    }


@router.post("/admin/send-login-credentials")
async def send_login_credentials(
    body: SendLoginCredentialsRequest, factory: BeaconFactory = Depends(get_factory)
) -> dict:
    outcome = await factory.create_provisioning_flow().provision(
        body.email, name=body.name, user_id=body.user_id, resend=body.resend
    )
    if outcome.action is ProvisioningAction.RESENT:
        message = "Login credentials re-sent."
    else:
        message = "Account created and login credentials sent."
    return {
        "ok": True,
        "action": outcome.action.value,
        "userId": outcome.user_id,
        "email": outcome.email,
        "message": message,
    }


@router.post("/admin/set-auth-status")
async def set_auth_status(
    body: SetAuthStatusRequest, factory: BeaconFactory = Depends(get_factory)
) -> dict:
    flow = factory.create_account_admin_flow()
    is_active = await flow.set_auth_status(body.user_id, body.is_active)
    return {
        "ok": True,
        "userId": body.user_id.strip(),
        "status": is_active,
        "message": "User activated." if is_active else "User deactivated.",
    }


@router.post("/auth/verify-user")
async def verify_user(
    body: UserIdRequest, factory: BeaconFactory = Depends(get_factory)
) -> dict:
    await factory.create_account_admin_flow().verify_user(body.user_id)
    return {"ok": True, "userId": body.user_id.strip(), "message": "User verified."}


@router.post("/admin/delete-auth-user")
async def delete_auth_user(
    body: UserIdRequest, factory: BeaconFactory = Depends(get_factory)
) -> dict:
    deleted = await factory.create_account_admin_flow().delete_user(body.user_id)
    message = "Auth user deleted." if deleted else "Auth user did not exist."
    return {"ok": True, "userId": body.user_id.strip(), "message": message}
