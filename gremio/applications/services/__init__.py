"""Application services."""

from gremio.applications.services.application_service import ApplicationService, normalize_status

__all__ = ["ApplicationService", "normalize_status"]
