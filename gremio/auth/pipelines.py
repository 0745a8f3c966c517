"""
Auth system pipeline functions.

Stateless orchestration logic for login and password reset.
"""

import logging

from gremio.auth.services.login_service import LoginService
from gremio.auth.services.password_reset_service import PasswordResetService

logger = logging.getLogger(__name__)


async def login_pipeline(
    login_service: LoginService,
    email: str,
    password: str,
) -> dict:
    """
    Authenticate a user.

    Returns:
        dict with the user's id, email and perfil_completo
    """
    return await login_service.login(email, password)


async def forgot_password_pipeline(
    password_reset_service: PasswordResetService,
    email: str,
) -> None:
    """Send a reset link if the email is registered. Silent otherwise."""
    await password_reset_service.request_reset(email)


async def reset_password_pipeline(
    password_reset_service: PasswordResetService,
    token: str,
    password: str,
) -> None:
    """Set a new password from a reset token."""
    await password_reset_service.reset_password(token, password)
