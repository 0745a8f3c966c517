"""
FastAPI router for Verification system endpoints.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends

from common.utils import success_response
from gremio.schemas.verification import SendCodeRequest, VerifyCodeRequest
from gremio.verification.dependencies import get_verification_service
from gremio.verification.services.verification_service import VerificationService
from gremio.verification import pipelines

router = APIRouter(tags=["verification"])


@router.post("/enviar-codigo")
async def send_code(
    verification_service: Annotated[VerificationService, Depends(get_verification_service)],
    body: Annotated[Optional[SendCodeRequest], Body()] = None,
):
    """
    Email a six digit verification code.

    Resends are throttled; a throttled request gets 429 with Retry-After.
    """
    data = await pipelines.send_code_pipeline(
        verification_service=verification_service,
        email=body.email if body else None,
    )
    return success_response(data, "Código enviado")


@router.post("/verificar-codigo")
async def verify_code(
    verification_service: Annotated[VerificationService, Depends(get_verification_service)],
    body: Annotated[Optional[VerifyCodeRequest], Body()] = None,
):
    """Check a verification code."""
    await pipelines.verify_code_pipeline(
        verification_service=verification_service,
        email=body.email if body else None,
        code=body.codigoIngresado if body else None,
    )
    return success_response(message="Código correcto")
