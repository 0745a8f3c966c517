"""
Applications system pipeline functions.
"""

from gremio.applications.services.application_service import ApplicationService


async def apply_pipeline(
    application_service: ApplicationService,
    user_id: str,
    job_id: str,
) -> None:
    """Apply a worker to a job."""
    await application_service.apply(user_id, job_id)


async def my_jobs_pipeline(
    application_service: ApplicationService,
    user_id: str,
) -> dict:
    """
    List the jobs a worker applied to.

    Returns:
        dict with ``jobs``
    """
    jobs = await application_service.my_jobs(user_id)
    return {"jobs": jobs}
