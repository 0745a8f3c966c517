"""
Public profile reads.

Profiles are served with the service role so visitors without a browser
session can still see them. Only the public user columns are exposed.
"""

import logging
from typing import Any, Dict, List, Optional

from common.database.base import DataStore, Eq, Order
from common.utils.exceptions import (
    BackendError,
    InternalServerException,
    NotFoundException,
)
from config.account_config import (
    CURRICULUMS_TABLE,
    EDUCATION_TABLE,
    PORTFOLIO_LINKS_TABLE,
    PUBLIC_USER_COLUMNS,
    TESTIMONIALS_TABLE,
    USERS_TABLE,
    WORK_EXPERIENCE_TABLE,
)

logger = logging.getLogger(__name__)


class ProfileService:
    """Reads users and their résumés."""

    def __init__(self, store: DataStore):
        self._store = store

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        """
        Get a user's public columns.

        Raises:
            NotFoundException: User missing or unreadable
        """
        try:
            user = await self._store.select_one(
                USERS_TABLE,
                PUBLIC_USER_COLUMNS,
                filters=[Eq("id", user_id)],
            )
        except BackendError as e:
            logger.warning(f"Could not read user {user_id}: {e}")
            user = None

        if not user:
            raise NotFoundException(message="User no encontrado", code="USER_NOT_FOUND")
        return user

    async def get_full_profile(self, user_id: str) -> Dict[str, Any]:
        """
        Get a user with their active résumé and its sections.

        When several résumés exist the active one wins, then the most
        recently updated. Experience and education come newest first.

        Returns:
            dict with user, curriculum, experiencia, educacion, enlaces, testimonios

        Raises:
            NotFoundException: User does not exist
            InternalServerException: User or résumé could not be read
        """
        try:
            user = await self._store.select_one(
                USERS_TABLE,
                PUBLIC_USER_COLUMNS,
                filters=[Eq("id", user_id)],
            )
        except BackendError as e:
            logger.error(f"Could not read user {user_id}: {e}")
            raise InternalServerException(message="Error leyendo user", code="USER_LOOKUP_FAILED")

        if not user:
            raise NotFoundException(message="User no encontrado", code="USER_NOT_FOUND")

        try:
            curriculum = await self._store.select_one(
                CURRICULUMS_TABLE,
                "*",
                filters=[Eq("user_id", user_id)],
                order=[
                    Order("is_active", descending=True),
                    Order("actualizado_en", descending=True),
                ],
            )
        except BackendError as e:
            logger.error(f"Could not read curriculum of {user_id}: {e}")
            raise InternalServerException(message="Error leyendo currículum", code="CURRICULUM_LOOKUP_FAILED")

        experiencia: List[Dict[str, Any]] = []
        educacion: List[Dict[str, Any]] = []
        if curriculum and curriculum.get("id") is not None:
            experiencia = await self._read_section(
                WORK_EXPERIENCE_TABLE,
                "empresa, puesto, descripcion, inicio, fin",
                curriculum["id"],
                order=[Order("inicio", descending=True)],
            )
            educacion = await self._read_section(
                EDUCATION_TABLE,
                "institucion, titulo, descripcion, inicio, fin",
                curriculum["id"],
                order=[Order("inicio", descending=True)],
            )

        # Links and testimonials are stored with curriculum_id = user id
        enlaces = await self._read_section(PORTFOLIO_LINKS_TABLE, "tipo, url", user_id)
        testimonios = await self._read_section(TESTIMONIALS_TABLE, "autor, mensaje", user_id)

        return {
            "user": user,
            "curriculum": curriculum or None,
            "experiencia": experiencia,
            "educacion": educacion,
            "enlaces": enlaces,
            "testimonios": testimonios,
        }

    async def _read_section(
        self,
        table: str,
        columns: str,
        curriculum_id: Any,
        order: Optional[List[Order]] = None,
    ) -> List[Dict[str, Any]]:
        """Rows keyed by curriculum_id; a read failure yields an empty section."""
        try:
            return await self._store.select(
                table,
                columns,
                filters=[Eq("curriculum_id", curriculum_id)],
                order=order or (),
            )
        except BackendError as e:
            logger.error(f"Could not read {table} for curriculum {curriculum_id}: {e}")
            return []
