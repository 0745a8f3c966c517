"""
Job applications (postulaciones).

The server uses the service role, so row level security does not protect
these tables; every rule about who may apply to what is enforced here.
"""

import logging
import re
from typing import Any, Dict, List

from common.database.base import DataStore, Eq, In, Order
from common.utils.exceptions import (
    BackendError,
    BadRequestException,
    ConflictException,
    ForbiddenException,
    InternalServerException,
    NotFoundException,
)
from config.account_config import (
    APPLICATION_STATUS_APPLIED,
    APPLICATIONS_TABLE,
    JOB_STATUS_OPEN,
    JOBS_TABLE,
    ROLE_EMPLOYER,
    USERS_TABLE,
)

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION = "23505"


def normalize_status(value: Any) -> str:
    """``" En-Curso "`` -> ``"en_curso"``"""
    text = str(value or "").strip().lower()
    text = re.sub(r"\s+", "_", text)
    return re.sub(r"-+", "_", text)


class ApplicationService:
    """Applying to jobs and listing a worker's applications."""

    def __init__(self, store: DataStore):
        self._store = store

    async def apply(self, user_id, job_id) -> None:
        """
        Apply a worker to an open job.

        Raises:
            BadRequestException: user_id or job_id missing
            ForbiddenException: Caller is an employer, or owns the job
            NotFoundException: Job does not exist
            ConflictException: Job not open, already assigned, or already applied
            InternalServerException: Lookups or insert failed
        """
        user_id = str(user_id or "").strip()
        job_id = str(job_id or "").strip()
        if not user_id or not job_id:
            raise BadRequestException(message="Faltan datos requeridos", code="MISSING_FIELDS")

        try:
            user = await self._store.select_one(USERS_TABLE, "id, role", filters=[Eq("id", user_id)])
        except BackendError as e:
            logger.error(f"Could not read role for user {user_id}: {e}")
            raise InternalServerException(message="No se pudo validar el usuario", code="USER_LOOKUP_FAILED")

        if normalize_status((user or {}).get("role")) == ROLE_EMPLOYER:
            raise ForbiddenException(
                message="Un empleador no puede postularse a ofertas",
                code="EMPLOYER_CANNOT_APPLY",
            )

        try:
            job = await self._store.select_one(
                JOBS_TABLE,
                "id, user_id, estado, trabajador_id",
                filters=[Eq("id", job_id)],
            )
        except BackendError as e:
            logger.error(f"Could not read job {job_id}: {e}")
            raise InternalServerException(message="No se pudo validar el trabajo", code="JOB_LOOKUP_FAILED")

        if not job or job.get("id") is None:
            raise NotFoundException(message="Trabajo no encontrado", code="JOB_NOT_FOUND")

        if str(job.get("user_id")) == user_id:
            raise ForbiddenException(
                message="No podés postularte a tu propia oferta",
                code="OWN_JOB",
            )

        if normalize_status(job.get("estado")) != JOB_STATUS_OPEN:
            raise ConflictException(
                message="Este trabajo ya no acepta postulaciones",
                code="JOB_NOT_OPEN",
            )

        if job.get("trabajador_id"):
            raise ConflictException(
                message="No se puede postular: ya tiene un trabajador asignado",
                code="JOB_ALREADY_ASSIGNED",
            )

        try:
            await self._store.insert(APPLICATIONS_TABLE, {
                "trabajador_id": user_id,
                "trabajo_id": job["id"],
                "estado": APPLICATION_STATUS_APPLIED,
            })
        except BackendError as e:
            if e.code == UNIQUE_VIOLATION:
                raise ConflictException(
                    message="Ya estás postulado a este trabajo",
                    code="ALREADY_APPLIED",
                )
            logger.error(f"Could not insert application of {user_id} to job {job_id}: {e}")
            raise InternalServerException(message="Error al postularse", code="APPLY_FAILED")

        logger.info(f"User {user_id} applied to job {job_id}")

    async def my_jobs(self, user_id) -> List[Dict[str, Any]]:
        """
        Jobs a worker applied to, newest application first.

        Each job row carries its owner's name and avatar plus
        ``postulacion_estado`` and ``postulacion_creada_at``.
        """
        user_id = str(user_id or "").strip()
        if not user_id:
            raise BadRequestException(message="Falta userId", code="USER_ID_REQUIRED")

        try:
            applications = await self._store.select(
                APPLICATIONS_TABLE,
                "trabajo_id, estado, created_at",
                filters=[Eq("trabajador_id", user_id)],
                order=[Order("created_at", descending=True)],
            )
        except BackendError as e:
            logger.error(f"Could not read applications of {user_id}: {e}")
            raise InternalServerException(message="Error obteniendo postulaciones", code="APPLICATIONS_LOOKUP_FAILED")

        job_ids = list(dict.fromkeys(a["trabajo_id"] for a in applications if a.get("trabajo_id")))
        if not job_ids:
            return []

        try:
            jobs = await self._store.select(
                JOBS_TABLE,
                "*, users(name, avatar_url)",
                filters=[In("id", job_ids)],
            )
        except BackendError as e:
            logger.error(f"Could not read jobs for {user_id}: {e}")
            raise InternalServerException(message="Error obteniendo trabajos", code="JOBS_LOOKUP_FAILED")

        jobs_by_id = {str(job["id"]): job for job in jobs}

        merged = []
        for application in applications:
            job = jobs_by_id.get(str(application.get("trabajo_id")))
            if job is None:
                continue
            merged.append({
                **job,
                "postulacion_estado": application.get("estado"),
                "postulacion_creada_at": application.get("created_at"),
            })
        return merged
