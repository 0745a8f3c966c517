"""
Supabase Auth provider.

Uses the service role client: ``get_user`` validates an access token issued
to the browser, and the ``auth.admin`` API deletes identities and sets
passwords.

Example:
    auth = SupabaseAuth(backend.client)

    claims = await auth.verify_token(access_token)
    print(claims["sub"])  # Supabase user ID

    await auth.delete_user(claims["sub"])
"""

import logging
from typing import Dict, Any, Optional

from supabase import AsyncClient

from common.auth.base import AuthProvider
from common.utils.exceptions import IdentityError

logger = logging.getLogger(__name__)


def _to_identity_error(error: Exception) -> IdentityError:
    """Keep the status and code the auth API reported, if any."""
    status: Optional[int] = getattr(error, "status", None)
    code: Optional[str] = getattr(error, "code", None)
    message = getattr(error, "message", None) or str(error)
    try:
        status = int(status) if status is not None else None
    except (TypeError, ValueError):
        status = None
    return IdentityError(message=message, code=code, status=status)


class SupabaseAuth(AuthProvider):
    """Supabase Auth provider backed by the service role client."""

    def __init__(self, client: AsyncClient):
        self._client = client

    async def verify_token(self, token: str) -> Dict[str, Any]:
        """Resolve an access token to its user."""
        try:
            response = await self._client.auth.get_user(token)
        except Exception as e:
            raise ValueError(f"Token verification failed: {e}")

        user = getattr(response, "user", None) if response else None
        user_id = getattr(user, "id", None) if user else None
        if not user_id:
            raise ValueError("Token does not belong to any user")

        return {
            "sub": str(user_id),
            "uid": str(user_id),
            "email": getattr(user, "email", None),
        }

    async def delete_user(self, user_id: str) -> None:
        """Delete a Supabase Auth user."""
        try:
            await self._client.auth.admin.delete_user(user_id)
        except Exception as e:
            raise _to_identity_error(e) from e
        logger.info(f"Identity {user_id} deleted")

    async def update_password(self, user_id: str, password: str) -> None:
        """Set a Supabase Auth user's password."""
        try:
            await self._client.auth.admin.update_user_by_id(
                user_id,
                {"password": password},
            )
        except Exception as e:
            raise _to_identity_error(e) from e
