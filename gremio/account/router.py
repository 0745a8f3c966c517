"""
FastAPI router for Account system endpoints.

Provides the self-service account deletion endpoint.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends

from common.auth import create_token_dependency
from common.utils import success_response
from gremio.account.dependencies import get_deletion_service
from gremio.account.services.deletion_service import AccountDeletionService
from gremio.account import pipelines
from gremio.schemas.account import DeleteUserRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["account"])

get_bearer_token = create_token_dependency()


@router.post("/delete-user")
async def delete_user(
    token: Annotated[Optional[str], Depends(get_bearer_token)],
    deletion_service: Annotated[AccountDeletionService, Depends(get_deletion_service)],
    body: Annotated[Optional[DeleteUserRequest], Body()] = None,
):
    """
    Delete the caller's own account.

    Requires `Authorization: Bearer <token>` for the same user as `userId`.
    Cleanup of related data is best-effort; the request only fails when the
    identity itself cannot be removed.
    """
    report = await pipelines.delete_account_pipeline(
        deletion_service=deletion_service,
        token=token,
        user_id=body.userId if body else None,
    )

    return success_response(report, "Usuario eliminado correctamente")
