"""Profile services."""

from gremio.profile.services.profile_service import ProfileService

__all__ = ["ProfileService"]
