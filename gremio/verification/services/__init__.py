"""Verification services."""

from gremio.verification.services.code_store import PendingCode, VerificationCodeStore
from gremio.verification.services.verification_service import (
    VerificationService,
    generate_code,
    normalize_email,
)

__all__ = [
    "PendingCode",
    "VerificationCodeStore",
    "VerificationService",
    "generate_code",
    "normalize_email",
]
