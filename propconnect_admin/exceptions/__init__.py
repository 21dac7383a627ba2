"""
Application exceptions module.

This module provides a clean separation of concerns for error handling:
- Base exceptions define the hierarchy
- CRUD exceptions handle lookups and input validation
- Auth exceptions handle the operator session
- Backend exceptions wrap failures of the PropConnect REST API
- HTTP mapping is handled separately in propconnect_admin/core/error_handlers.py
"""

from propconnect_admin.exceptions.base import AppException
from propconnect_admin.exceptions.crud import (
    NotFoundError,
    ValidationError,
)
from propconnect_admin.exceptions.auth import (
    AuthenticationError,
    InvalidCredentialsError,
    NotAuthenticatedError,
    SessionExpiredError,
    SessionResolvingError,
    InsufficientPermissionsError,
)
from propconnect_admin.exceptions.backend import (
    BackendError,
    BackendUnavailableError,
)

__all__ = [
    # Base
    "AppException",
    # CRUD
    "NotFoundError",
    "ValidationError",
    # Auth
    "AuthenticationError",
    "InvalidCredentialsError",
    "NotAuthenticatedError",
    "SessionExpiredError",
    "SessionResolvingError",
    "InsufficientPermissionsError",
    # Backend
    "BackendError",
    "BackendUnavailableError",
]
