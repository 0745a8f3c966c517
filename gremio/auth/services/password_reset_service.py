"""
Password reset by emailed link.

Flow:
1. request_reset: store a random token with a short expiry and email a link
   to the frontend reset page. Always looks successful to the caller.
2. reset_password: check the token, set the new password on the identity,
   refresh the legacy bcrypt hash, burn the token.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

from common.auth.base import AuthProvider
from common.database.base import DataStore, Eq
from common.utils.exceptions import (
    BackendError,
    BadRequestException,
    InternalServerException,
)
from common.utils.password import hash_password, validate_password
from config.account_config import PASSWORD_RESETS_TABLE, USERS_TABLE
from gremio.services.email.email_service import EmailService

logger = logging.getLogger(__name__)

DEFAULT_FRONTEND_URL = "https://tusitio.com"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a timestamptz value as returned by PostgREST. Naive values are taken as UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        text = value.strip().replace(" ", "T", 1)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class PasswordResetService:
    """Issues and redeems password reset tokens."""

    def __init__(
        self,
        store: DataStore,
        auth: AuthProvider,
        email_service: EmailService,
        frontend_url: Optional[str] = None,
        expire_minutes: int = 15,
        min_password_length: int = 8,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._store = store
        self._auth = auth
        self._email_service = email_service
        self._frontend_url = (frontend_url or DEFAULT_FRONTEND_URL).rstrip("/")
        self._expire_minutes = expire_minutes
        self._min_password_length = min_password_length
        self._clock = clock

    def build_reset_link(self, token: str) -> str:
        return f"{self._frontend_url}/reset-password.html?token={token}"

    async def request_reset(self, email) -> None:
        """
        Email a reset link if the address belongs to a user.

        Never raises for an unknown address or a delivery problem; those are
        only logged.
        """
        email = str(email or "").strip()
        if not email:
            return

        try:
            user = await self._store.select_one(USERS_TABLE, "id", filters=[Eq("email", email)])
        except BackendError as e:
            logger.warning(f"Password reset lookup failed for {email}: {e}")
            return

        if not user:
            logger.info(f"Password reset requested for unknown email {email}")
            return

        token = secrets.token_hex(32)
        expires_at = self._clock() + timedelta(minutes=self._expire_minutes)

        try:
            await self._store.insert(PASSWORD_RESETS_TABLE, {
                "user_id": user["id"],
                "token": token,
                "expires_at": expires_at.isoformat(),
            })
        except BackendError as e:
            logger.error(f"Could not store reset token for user {user['id']}: {e}")
            return

        result = await self._email_service.send_password_reset(
            email,
            self.build_reset_link(token),
            expires_in_minutes=self._expire_minutes,
        )
        if not result.get("success"):
            logger.error(f"Password reset email to {email} failed: {result.get('error')}")
            return

        logger.info(f"Password reset link sent to user {user['id']}")

    async def reset_password(self, token, password) -> None:
        """
        Set a new password using a reset token.

        Raises:
            BadRequestException: Missing fields, short password, or an
                unknown, used or expired token
            InternalServerException: Identity provider refused the update
        """
        token = str(token or "").strip()
        password = str(password or "")
        if not token or not password:
            raise BadRequestException(message="Faltan datos", code="MISSING_FIELDS")

        is_valid, errors = validate_password(password, min_length=self._min_password_length)
        if not is_valid:
            raise BadRequestException(message=errors[0], code="WEAK_PASSWORD", details=errors)

        reset = await self._find_active_reset(token)
        if reset is None:
            raise BadRequestException(
                message="El enlace es inválido o expiró",
                code="INVALID_RESET_TOKEN",
            )

        user_id = reset["user_id"]

        try:
            await self._auth.update_password(user_id, password)
        except BackendError as e:
            logger.error(f"Identity password update failed for user {user_id}: {e}")
            raise InternalServerException(
                message="No se pudo actualizar la contraseña (auth)",
                code="PASSWORD_UPDATE_FAILED",
            )

        # Legacy hash; the identity is already updated so a failure here is not fatal
        try:
            await self._store.update(
                USERS_TABLE,
                {"password_hash": hash_password(password)},
                filters=[Eq("id", user_id)],
            )
        except BackendError as e:
            logger.warning(f"Could not refresh password_hash for user {user_id}: {e}")

        try:
            await self._store.update(
                PASSWORD_RESETS_TABLE,
                {"used": True},
                filters=[Eq("id", reset["id"])],
            )
        except BackendError as e:
            logger.error(f"Could not mark reset token {reset['id']} as used: {e}")

        logger.info(f"Password reset completed for user {user_id}")

    async def _find_active_reset(self, token: str) -> Optional[Dict[str, Any]]:
        try:
            reset = await self._store.select_one(
                PASSWORD_RESETS_TABLE,
                "*",
                filters=[Eq("token", token), Eq("used", False)],
            )
        except BackendError as e:
            logger.warning(f"Reset token lookup failed: {e}")
            return None

        if not reset:
            return None

        expires_at = parse_timestamp(reset.get("expires_at"))
        if expires_at is None or expires_at < self._clock():
            return None
        return reset
