"""Auth services."""

from gremio.auth.services.login_service import LoginService
from gremio.auth.services.password_reset_service import PasswordResetService

__all__ = ["LoginService", "PasswordResetService"]
