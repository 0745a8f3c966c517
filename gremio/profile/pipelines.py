"""
Profile system pipeline functions.
"""

from gremio.profile.services.profile_service import ProfileService


async def get_user_pipeline(
    profile_service: ProfileService,
    user_id: str,
) -> dict:
    """
    Get a user's public profile.

    Returns:
        dict with ``user``
    """
    user = await profile_service.get_user(user_id)
    return {"user": user}


async def get_full_profile_pipeline(
    profile_service: ProfileService,
    user_id: str,
) -> dict:
    """Get a user's profile with résumé, experience, education, links and testimonials."""
    return await profile_service.get_full_profile(user_id)
