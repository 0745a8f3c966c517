"""
Email verification codes.

A six digit code is emailed on request and must be entered back within the
code lifetime. Resends are throttled per address.
"""

import hmac
import logging
import math
import secrets

from common.utils.exceptions import (
    BadRequestException,
    InternalServerException,
    RateLimitException,
    UnauthorizedException,
)
from gremio.services.email.email_service import EmailService
from gremio.verification.services.code_store import VerificationCodeStore

logger = logging.getLogger(__name__)


def normalize_email(email) -> str:
    return str(email or "").strip().lower()


def generate_code() -> str:
    """Six digit numeric code, 100000-999999."""
    return str(100000 + secrets.randbelow(900000))


def _seconds_left(seconds: float) -> int:
    return max(0, math.ceil(seconds))


class VerificationService:
    """Issues and checks email verification codes."""

    def __init__(
        self,
        store: VerificationCodeStore,
        email_service: EmailService,
        code_ttl_seconds: int = 300,
        resend_cooldown_seconds: int = 60,
    ):
        self._store = store
        self._email_service = email_service
        self._code_ttl = code_ttl_seconds
        self._cooldown = resend_cooldown_seconds

    async def send_code(self, email) -> dict:
        """
        Generate a code for an address and email it.

        The cooldown starts even if the email cannot be sent; a code that
        was not delivered is discarded.

        Args:
            email: Recipient address (normalized here)

        Returns:
            dict with expiresInSec and resendInSec

        Raises:
            BadRequestException: No email given
            RateLimitException: Previous send is still inside the cooldown
            InternalServerException: Email provider failed
        """
        email = normalize_email(email)
        if not email:
            raise BadRequestException(message="Falta el correo", code="EMAIL_REQUIRED")

        now = self._store.now()
        self._store.prune(now, self._code_ttl, self._cooldown)

        last_sent = self._store.last_sent_at(email)
        if last_sent is not None and now - last_sent < self._cooldown:
            raise RateLimitException(
                message="Esperá antes de reenviar el código.",
                code="RESEND_COOLDOWN",
                retry_after=_seconds_left(self._cooldown - (now - last_sent)),
                details={"expiresInSec": self._code_ttl},
            )

        code = generate_code()
        self._store.put(email, code, issued_at=now)
        self._store.mark_sent(email, now)

        result = await self._email_service.send_verification_code(
            email,
            code,
            expires_in_minutes=max(1, self._code_ttl // 60),
        )
        if not result.get("success"):
            self._store.discard(email)
            logger.error(f"Verification email to {email} failed: {result.get('error')}")
            raise InternalServerException(message="Error al enviar correo", code="EMAIL_SEND_FAILED")

        logger.info(f"Verification code sent to {email}")
        return {
            "expiresInSec": self._code_ttl,
            "resendInSec": self._cooldown,
        }

    def verify_code(self, email, submitted_code) -> None:
        """
        Check a submitted code. A matching or expired code is consumed.

        Raises:
            BadRequestException: Email or code missing
            UnauthorizedException: No pending code, wrong code, or expired code
        """
        email = normalize_email(email)
        submitted = str(submitted_code or "").strip()
        if not email or not submitted:
            raise BadRequestException(message="Faltan datos", code="MISSING_FIELDS")

        pending = self._store.get(email)
        if pending is None:
            raise UnauthorizedException(message="Código incorrecto", code="INVALID_CODE")

        if self._store.now() - pending.issued_at > self._code_ttl:
            self._store.discard(email)
            raise UnauthorizedException(message="Código expirado", code="CODE_EXPIRED")

        if hmac.compare_digest(pending.code.encode(), submitted.encode()):
            self._store.discard(email)
            logger.info(f"Email verified: {email}")
            return

        raise UnauthorizedException(message="Código incorrecto", code="INVALID_CODE")
