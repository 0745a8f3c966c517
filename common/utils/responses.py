"""
Response envelopes shared by every route.

Success bodies carry ``success: True`` plus optional ``data`` and
``message``; error bodies carry ``success: False`` and an ``error`` object
with the same ``message``/``code``/``details`` keys API exceptions use.

Example:
    from common.utils import success_response

    @router.post("/enviar-codigo")
    async def send_code(body: SendCodeRequest):
        data = await send_code_pipeline(verification_service, body.email)
        return success_response(data, "Código enviado")
"""

from typing import Any, Optional, Dict


def success_response(
    data: Any = None,
    message: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build a success envelope.

    ``data`` is omitted when None so empty acknowledgements stay
    ``{"success": true}``.
    """
    response: Dict[str, Any] = {"success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return response


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Any] = None,
) -> Dict[str, Any]:
    """Build an error envelope for handlers that answer without raising."""
    error: Dict[str, Any] = {"message": message}

    if code:
        error["code"] = code

    if details is not None:
        error["details"] = details

    return {"success": False, "error": error}
