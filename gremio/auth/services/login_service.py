"""
Email/password login against the legacy bcrypt hash in the users table.
"""

import logging

from common.database.base import DataStore, Eq
from common.utils.exceptions import (
    BackendError,
    BadRequestException,
    InternalServerException,
    UnauthorizedException,
)
from common.utils.password import verify_password
from config.account_config import USERS_TABLE

logger = logging.getLogger(__name__)


class LoginService:
    """Checks credentials and returns the public part of the user row."""

    def __init__(self, store: DataStore):
        self._store = store

    async def login(self, email, password) -> dict:
        """
        Authenticate with email and password.

        Unknown email, missing hash and wrong password all get the same
        answer so the endpoint does not reveal which accounts exist.

        Returns:
            dict with ``user`` (id, email, perfil_completo)

        Raises:
            BadRequestException: Email or password missing
            UnauthorizedException: Credentials do not match
            InternalServerException: Users table could not be read
        """
        email = str(email or "").strip()
        password = str(password or "")
        if not email or not password:
            raise BadRequestException(message="Faltan datos", code="MISSING_FIELDS")

        try:
            user = await self._store.select_one(
                USERS_TABLE,
                "id, email, password_hash, perfil_completo",
                filters=[Eq("email", email)],
            )
        except BackendError as e:
            logger.error(f"Login lookup failed for {email}: {e}")
            raise InternalServerException(message="Error interno", code="LOGIN_FAILED")

        password_hash = (user or {}).get("password_hash")
        if not password_hash or not verify_password(password, password_hash):
            logger.info(f"Rejected login for {email}")
            raise UnauthorizedException(message="Credenciales inválidas", code="INVALID_CREDENTIALS")

        return {
            "user": {
                "id": user["id"],
                "email": user.get("email"),
                "perfil_completo": user.get("perfil_completo"),
            }
        }
