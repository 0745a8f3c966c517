"""Account services."""

from gremio.account.services.deletion_service import (
    AccountDeletionService,
    DeletionFailurePolicy,
    classify_failure,
)
from gremio.account.services.storage_paths import (
    StorageObjectRef,
    parse_public_object_url,
)

__all__ = [
    "AccountDeletionService",
    "DeletionFailurePolicy",
    "classify_failure",
    "StorageObjectRef",
    "parse_public_object_url",
]
