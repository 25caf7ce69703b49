# =============================================================================
# psico_core/errors/__init__.py
# Centralized Error Handling for the PSICO dashboard
# =============================================================================

from .exceptions import (
    PsicoError,
    ApiError,
    NetworkError,
    AuthenticationError,
    NotFoundError,
    ValidationError,
    ConfigurationError,
)

from .handlers import handle_error, error_boundary, user_message_for

__all__ = [
    # Exceptions
    "PsicoError",
    "ApiError",
    "NetworkError",
    "AuthenticationError",
    "NotFoundError",
    "ValidationError",
    "ConfigurationError",
    # Handlers
    "handle_error",
    "error_boundary",
    "user_message_for",
]
