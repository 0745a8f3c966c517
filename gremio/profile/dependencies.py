"""
FastAPI dependencies for Profile system.
"""

from common.database.base import DataStore
from gremio.profile.services.profile_service import ProfileService


_profile_service: ProfileService | None = None


def init_profile_services(store: DataStore) -> None:
    """
    Initialize profile services.

    Called once at application startup.
    """
    global _profile_service
    _profile_service = ProfileService(store=store)


def get_profile_service() -> ProfileService:
    """Get profile service instance."""
    if _profile_service is None:
        raise RuntimeError("Profile services not initialized. Call init_profile_services first.")
    return _profile_service
