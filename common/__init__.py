"""
Common library for reusable infrastructure components.

This package provides the backend-facing building blocks the application
services are written against:

- database: Relational data store contract + Supabase (PostgREST) implementation
- storage: Object storage contract + Supabase Storage implementation
- auth: Identity provider contract + Supabase Auth, bearer token helpers
- utils: Standard responses, exceptions, password hashing
- config: Base settings class
"""

from common.database import DataStore, SupabaseBackend, SupabaseDataStore
from common.storage import ObjectStorage, SupabaseStorage
from common.auth import AuthProvider, SupabaseAuth, create_token_dependency
from common.utils import (
    success_response,
    error_response,
    APIException,
    BadRequestException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ConflictException,
    InternalServerException,
    BackendError,
    validate_password,
)
from common.config import BaseAppSettings

__all__ = [
    # Database
    "DataStore",
    "SupabaseBackend",
    "SupabaseDataStore",
    # Storage
    "ObjectStorage",
    "SupabaseStorage",
    # Auth
    "AuthProvider",
    "SupabaseAuth",
    "create_token_dependency",
    # Utils
    "success_response",
    "error_response",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "InternalServerException",
    "BackendError",
    "validate_password",
    # Config
    "BaseAppSettings",
]
