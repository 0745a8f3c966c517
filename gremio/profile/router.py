"""
FastAPI router for Profile system endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils import success_response
from gremio.profile.dependencies import get_profile_service
from gremio.profile.services.profile_service import ProfileService
from gremio.profile import pipelines

router = APIRouter(tags=["profile"])


@router.get("/users/{user_id}")
async def get_user(
    user_id: str,
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    """Public columns of a user."""
    data = await pipelines.get_user_pipeline(
        profile_service=profile_service,
        user_id=user_id,
    )
    return success_response(data)


@router.get("/perfil-completo/{user_id}")
async def get_full_profile(
    user_id: str,
    profile_service: Annotated[ProfileService, Depends(get_profile_service)],
):
    """User with active résumé, experience, education, links and testimonials."""
    data = await pipelines.get_full_profile_pipeline(
        profile_service=profile_service,
        user_id=user_id,
    )
    return success_response(data)
