"""
FastAPI dependencies for Account system.

Provides dependency injection for the account deletion service.
"""

from common.auth.base import AuthProvider
from common.database.base import DataStore
from common.storage.base import ObjectStorage
from config.account_config import JOB_IMAGES_BUCKET, STORAGE_LIST_PAGE_SIZE
from gremio.account.services.deletion_service import (
    AccountDeletionService,
    DeletionFailurePolicy,
)


_deletion_service: AccountDeletionService | None = None


def init_account_services(
    store: DataStore,
    storage: ObjectStorage,
    auth: AuthProvider,
    failure_policy: str = DeletionFailurePolicy.BEST_EFFORT.value,
    job_images_bucket: str = JOB_IMAGES_BUCKET,
    page_size: int = STORAGE_LIST_PAGE_SIZE,
) -> None:
    """
    Initialize account services with backend clients.

    Called once at application startup.

    Args:
        store: Relational data store
        storage: Object storage
        auth: Identity provider
        failure_policy: "best_effort" or "strict"
        job_images_bucket: Bucket holding job images
        page_size: Storage listing page size
    """
    global _deletion_service

    _deletion_service = AccountDeletionService(
        store=store,
        storage=storage,
        auth=auth,
        failure_policy=DeletionFailurePolicy(failure_policy.strip().lower()),
        job_images_bucket=job_images_bucket,
        page_size=page_size,
    )


def get_deletion_service() -> AccountDeletionService:
    """Get account deletion service instance."""
    if _deletion_service is None:
        raise RuntimeError("Account services not initialized. Call init_account_services first.")
    return _deletion_service
