"""
Pydantic models for Verification system requests.

Fields are optional so that missing values produce the service's own
Spanish messages instead of a validation error.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class SendCodeRequest(BaseModel):
    """Request body for sending a verification code."""
    email: Optional[str] = None


class VerifyCodeRequest(BaseModel):
    """Request body for checking a verification code."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    email: Optional[str] = None
    codigoIngresado: Optional[str] = None


__all__ = ["SendCodeRequest", "VerifyCodeRequest"]
