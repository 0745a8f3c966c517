"""
Pydantic models for Account system requests.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class DeleteUserRequest(BaseModel):
    """Request body for account deletion. A missing userId is reported by the service."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    userId: Optional[str] = Field(None, description="Account to delete; must match the token's user")


__all__ = ["DeleteUserRequest"]
