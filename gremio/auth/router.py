"""
FastAPI router for Auth system endpoints.

Provides endpoints for login and password reset.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends

from common.utils import success_response
from gremio.auth.dependencies import get_login_service, get_password_reset_service
from gremio.auth.services.login_service import LoginService
from gremio.auth.services.password_reset_service import PasswordResetService
from gremio.auth import pipelines
from gremio.schemas.auth import ForgotPasswordRequest, LoginRequest, ResetPasswordRequest

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login")
async def login(
    login_service: Annotated[LoginService, Depends(get_login_service)],
    body: Annotated[Optional[LoginRequest], Body()] = None,
):
    """Log in with email and password."""
    body = body or LoginRequest()
    data = await pipelines.login_pipeline(
        login_service=login_service,
        email=body.email,
        password=body.password,
    )
    return success_response(data)


@router.post("/forgot-password")
async def forgot_password(
    password_reset_service: Annotated[PasswordResetService, Depends(get_password_reset_service)],
    body: Annotated[Optional[ForgotPasswordRequest], Body()] = None,
):
    """
    Request a password reset link.

    Always succeeds, whether or not the email is registered.
    """
    await pipelines.forgot_password_pipeline(
        password_reset_service=password_reset_service,
        email=body.email if body else None,
    )
    return success_response()


@router.post("/reset-password")
async def reset_password(
    password_reset_service: Annotated[PasswordResetService, Depends(get_password_reset_service)],
    body: Annotated[Optional[ResetPasswordRequest], Body()] = None,
):
    """Set a new password with the token from a reset link."""
    body = body or ResetPasswordRequest()
    await pipelines.reset_password_pipeline(
        password_reset_service=password_reset_service,
        token=body.token,
        password=body.password,
    )
    return success_response()
