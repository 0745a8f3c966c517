"""
Pydantic models for Auth system requests.
"""

from typing import Optional
from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Request body for email/password login."""
    email: Optional[str] = None
    password: Optional[str] = None


class ForgotPasswordRequest(BaseModel):
    """Request body for requesting a password reset link."""
    email: Optional[str] = None


class ResetPasswordRequest(BaseModel):
    """Request body for setting a new password with a reset token."""
    token: Optional[str] = Field(None, description="Token from the reset link")
    password: Optional[str] = None


__all__ = ["LoginRequest", "ForgotPasswordRequest", "ResetPasswordRequest"]
