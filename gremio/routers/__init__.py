"""
Gremio API Routers.

All routers are imported here for easy access.
"""

from gremio.account.router import router as account_router
from gremio.applications.router import router as applications_router
from gremio.auth.router import router as auth_router
from gremio.profile.router import router as profile_router
from gremio.verification.router import router as verification_router

__all__ = [
    "account_router",
    "applications_router",
    "auth_router",
    "profile_router",
    "verification_router",
]
