"""
FastAPI dependencies for Applications system.
"""

from common.database.base import DataStore
from gremio.applications.services.application_service import ApplicationService


_application_service: ApplicationService | None = None


def init_application_services(store: DataStore) -> None:
    """
    Initialize application services.

    Called once at application startup.
    """
    global _application_service
    _application_service = ApplicationService(store=store)


def get_application_service() -> ApplicationService:
    """Get application service instance."""
    if _application_service is None:
        raise RuntimeError("Application services not initialized. Call init_application_services first.")
    return _application_service
