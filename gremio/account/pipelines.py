"""
Account system pipeline functions.

Stateless orchestration logic for account operations.
"""

import logging
from typing import Optional

from gremio.account.services.deletion_service import AccountDeletionService

logger = logging.getLogger(__name__)


async def delete_account_pipeline(
    deletion_service: AccountDeletionService,
    token: Optional[str],
    user_id: Optional[str],
) -> dict:
    """
    Delete the caller's account.

    Args:
        deletion_service: For the cascade
        token: Bearer token from the request, if any
        user_id: Account to delete

    Returns:
        Deletion report dict
    """
    report = await deletion_service.delete_account(token, user_id)

    if report.warnings:
        logger.info(
            f"Account {report.user_id} deleted with {len(report.warnings)} cleanup warning(s)"
        )

    return report.to_dict()
