"""
Account System

Self-service account deletion: removes a user's files, dependent rows,
profile row and identity.
"""

from gremio.account.services.deletion_service import (
    AccountDeletionService,
    DeletionFailurePolicy,
    DeletionReport,
    CleanupWarning,
)

__all__ = [
    "AccountDeletionService",
    "DeletionFailurePolicy",
    "DeletionReport",
    "CleanupWarning",
]
