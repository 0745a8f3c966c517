"""
Applications System

Workers applying to open jobs, and the list of jobs a worker applied to.
"""

from gremio.applications.services import ApplicationService

__all__ = ["ApplicationService"]
