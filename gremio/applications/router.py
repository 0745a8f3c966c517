"""
FastAPI router for Applications system endpoints.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends

from common.utils import success_response
from gremio.applications.dependencies import get_application_service
from gremio.applications.services.application_service import ApplicationService
from gremio.applications import pipelines
from gremio.schemas.applications import ApplyRequest

router = APIRouter(tags=["applications"])


@router.post("/postular")
async def apply_to_job(
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
    body: Annotated[Optional[ApplyRequest], Body()] = None,
):
    """Apply to an open job."""
    body = body or ApplyRequest()
    await pipelines.apply_pipeline(
        application_service=application_service,
        user_id=body.user_id,
        job_id=body.job_id,
    )
    return success_response()


@router.get("/mis-trabajos/{user_id}")
async def my_jobs(
    user_id: str,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
):
    """Jobs the worker applied to, newest application first."""
    data = await pipelines.my_jobs_pipeline(
        application_service=application_service,
        user_id=user_id,
    )
    return success_response(data)
