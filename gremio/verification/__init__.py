"""
Verification System

Email ownership check with short-lived numeric codes.
"""

from gremio.verification.services import VerificationCodeStore, VerificationService

__all__ = ["VerificationCodeStore", "VerificationService"]
