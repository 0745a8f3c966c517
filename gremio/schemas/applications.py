"""
Pydantic models for Applications system requests.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict


class ApplyRequest(BaseModel):
    """Request body for applying to a job."""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    user_id: Optional[str] = None
    job_id: Optional[str] = None


__all__ = ["ApplyRequest"]
