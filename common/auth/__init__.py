"""
Authentication module - Identity provider contract and bearer token helpers.
"""

from common.auth.base import AuthProvider
from common.auth.supabase_auth import SupabaseAuth
from common.auth.dependencies import create_token_dependency, extract_bearer_token

__all__ = ["AuthProvider", "SupabaseAuth", "create_token_dependency", "extract_bearer_token"]
