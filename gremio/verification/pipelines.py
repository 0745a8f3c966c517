"""
Verification system pipeline functions.
"""

from gremio.verification.services.verification_service import VerificationService


async def send_code_pipeline(
    verification_service: VerificationService,
    email: str,
) -> dict:
    """Issue and email a verification code."""
    return await verification_service.send_code(email)


async def verify_code_pipeline(
    verification_service: VerificationService,
    email: str,
    code: str,
) -> None:
    """Check a submitted verification code."""
    verification_service.verify_code(email, code)
