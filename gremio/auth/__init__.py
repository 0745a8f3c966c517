"""
Auth System

Email/password login and password reset by emailed link.
"""

from gremio.auth.services import LoginService, PasswordResetService

__all__ = ["LoginService", "PasswordResetService"]
