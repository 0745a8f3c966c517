"""
Abstract authentication provider interface.

Defines the identity operations the service needs from the external
identity system: resolving a bearer token to a user, and the two admin
operations (delete an identity, set a password).

Example:
    from common.auth import AuthProvider, SupabaseAuth

    auth: AuthProvider = SupabaseAuth(backend.client)
    claims = await auth.verify_token(token)
    print(claims["sub"])
"""

from abc import ABC, abstractmethod
from typing import Dict, Any


class AuthProvider(ABC):
    """
    Abstract authentication provider.

    Token problems are reported as ``ValueError`` (the caller is not
    authenticated). Admin failures are reported as
    ``common.utils.exceptions.IdentityError``.
    """

    @abstractmethod
    async def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify an access token.

        Args:
            token: The bearer token presented by the client

        Returns:
            Dictionary of claims; always contains ``sub`` (the user ID)

        Raises:
            ValueError: If token is invalid, expired, or revoked
        """
        pass

    @abstractmethod
    async def delete_user(self, user_id: str) -> None:
        """
        Delete an identity.

        Args:
            user_id: The user's ID to delete

        Raises:
            IdentityError: If the identity system refuses or fails
        """
        pass

    @abstractmethod
    async def update_password(self, user_id: str, password: str) -> None:
        """
        Set a new password for an identity.

        Raises:
            IdentityError: If the identity system refuses or fails
        """
        pass
