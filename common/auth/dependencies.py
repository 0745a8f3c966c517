"""
FastAPI authentication dependencies.

Provides factory functions to create dependencies that read the bearer
token from the request. Verifying the token is left to the service that
consumes it, so routes can validate their body before authentication.

Example:
    from common.auth import create_token_dependency

    get_bearer_token = create_token_dependency()

    @router.post("/delete-user")
    async def delete_user(token: Optional[str] = Depends(get_bearer_token)):
        ...
"""

from typing import Optional
from fastapi import Header


def extract_bearer_token(
    authorization: Optional[str],
    scheme: str = "Bearer",
) -> Optional[str]:
    """
    Pull the token out of an Authorization header value.

    The scheme is matched case-insensitively. Returns None when the header
    is missing, uses another scheme, or carries an empty token.
    """
    header = (authorization or "").strip()
    prefix = f"{scheme.lower()} "
    if not header.lower().startswith(prefix):
        return None

    token = header[len(prefix):].strip()
    return token or None


def create_token_dependency(
    header_name: str = "Authorization",
    scheme: str = "Bearer",
):
    """
    Factory to create a FastAPI dependency returning the raw bearer token.

    Args:
        header_name: Header to extract token from (default: Authorization)
        scheme: Auth scheme prefix (default: Bearer)

    Returns:
        A FastAPI dependency that returns the token or None
    """

    async def get_bearer_token(
        authorization: Optional[str] = Header(None, alias=header_name),
    ) -> Optional[str]:
        return extract_bearer_token(authorization, scheme)

    return get_bearer_token
