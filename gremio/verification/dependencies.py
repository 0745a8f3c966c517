"""
FastAPI dependencies for Verification system.
"""

from gremio.services.email.email_service import EmailService
from gremio.verification.services.code_store import VerificationCodeStore
from gremio.verification.services.verification_service import VerificationService


_verification_service: VerificationService | None = None


def init_verification_services(
    email_service: EmailService,
    code_ttl_seconds: int = 300,
    resend_cooldown_seconds: int = 60,
) -> None:
    """
    Initialize the verification service and its code store.

    Called once at application startup.
    """
    global _verification_service

    _verification_service = VerificationService(
        store=VerificationCodeStore(),
        email_service=email_service,
        code_ttl_seconds=code_ttl_seconds,
        resend_cooldown_seconds=resend_cooldown_seconds,
    )


def get_verification_service() -> VerificationService:
    """Get verification service instance."""
    if _verification_service is None:
        raise RuntimeError("Verification services not initialized. Call init_verification_services first.")
    return _verification_service
