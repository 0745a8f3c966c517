"""
Profile System

Public user profiles and full résumés.
"""

from gremio.profile.services import ProfileService

__all__ = ["ProfileService"]
