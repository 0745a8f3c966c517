"""
Utilities module - Common helpers for API responses, exceptions, and passwords.
"""

from common.utils.responses import success_response, error_response
from common.utils.exceptions import (
    APIException,
    BadRequestException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ConflictException,
    RateLimitException,
    ServerException,
    InternalServerException,
    BackendError,
    DataStoreError,
    StorageError,
    IdentityError,
)
from common.utils.password import validate_password, hash_password, verify_password

__all__ = [
    "success_response",
    "error_response",
    "APIException",
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "RateLimitException",
    "ServerException",
    "InternalServerException",
    "BackendError",
    "DataStoreError",
    "StorageError",
    "IdentityError",
    "validate_password",
    "hash_password",
    "verify_password",
]
