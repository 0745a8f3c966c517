"""
FastAPI dependencies for Auth system.
"""

from typing import Optional

from common.auth.base import AuthProvider
from common.database.base import DataStore
from gremio.auth.services.login_service import LoginService
from gremio.auth.services.password_reset_service import PasswordResetService
from gremio.services.email.email_service import EmailService


_login_service: LoginService | None = None
_password_reset_service: PasswordResetService | None = None


def init_auth_services(
    store: DataStore,
    auth: AuthProvider,
    email_service: EmailService,
    frontend_url: Optional[str] = None,
    reset_expire_minutes: int = 15,
    min_password_length: int = 8,
) -> None:
    """
    Initialize auth services.

    Called once at application startup.

    Args:
        store: Relational data store
        auth: Identity provider (admin)
        email_service: For reset links
        frontend_url: Base URL of the reset page
        reset_expire_minutes: Reset token lifetime
        min_password_length: Minimum accepted password length
    """
    global _login_service, _password_reset_service

    _login_service = LoginService(store=store)
    _password_reset_service = PasswordResetService(
        store=store,
        auth=auth,
        email_service=email_service,
        frontend_url=frontend_url,
        expire_minutes=reset_expire_minutes,
        min_password_length=min_password_length,
    )


def get_login_service() -> LoginService:
    """Get login service instance."""
    if _login_service is None:
        raise RuntimeError("Auth services not initialized. Call init_auth_services first.")
    return _login_service


def get_password_reset_service() -> PasswordResetService:
    """Get password reset service instance."""
    if _password_reset_service is None:
        raise RuntimeError("Auth services not initialized. Call init_auth_services first.")
    return _password_reset_service
