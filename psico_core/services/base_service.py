# =============================================================================
# psico_core/services/base_service.py
# Base Service Class with Common Functionality
# =============================================================================

from __future__ import annotations
from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any, Callable

from psico_core.logging import get_logger, LogContext
from psico_core.errors import (
    PsicoError,
    ApiError,
    AuthenticationError,
    NetworkError,
    NotFoundError,
    ValidationError,
)


class ErrorKind(Enum):
    NETWORK = "network"
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    API = "api"
    UNKNOWN = "unknown"


def error_kind_for(error: Exception) -> ErrorKind:
    """Map an exception onto the error taxonomy"""
    # Order matters: the specific classes all derive from ApiError
    if isinstance(error, NetworkError):
        return ErrorKind.NETWORK
    if isinstance(error, AuthenticationError):
        return ErrorKind.AUTHENTICATION
    if isinstance(error, ValidationError):
        return ErrorKind.VALIDATION
    if isinstance(error, NotFoundError):
        return ErrorKind.NOT_FOUND
    if isinstance(error, ApiError):
        return ErrorKind.API
    return ErrorKind.UNKNOWN


@dataclass
class ServiceResult:
    """
    Standard result container for service operations.

    Every API-backed service call returns one of these instead of raising,
    so pages decide how to present failures.
    """
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    metadata: Optional[Dict[str, Any]] = None

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, data: Any = None, metadata: Dict[str, Any] = None) -> ServiceResult:
        """Create a successful result"""
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def fail(
        cls,
        error: str,
        error_code: str = "UNKNOWN",
        error_kind: ErrorKind = ErrorKind.UNKNOWN,
        metadata: Dict[str, Any] = None
    ) -> ServiceResult:
        """Create a failed result"""
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            error_kind=error_kind,
            metadata=metadata,
        )

    @classmethod
    def from_exception(cls, e: Exception) -> ServiceResult:
        """Create a failed result from an exception"""
        if isinstance(e, PsicoError):
            return cls(
                success=False,
                error=e.message,
                error_code=e.code,
                error_kind=error_kind_for(e),
                metadata=e.details,
            )
        return cls(
            success=False,
            error=str(e),
            error_code="EXCEPTION",
            error_kind=ErrorKind.UNKNOWN,
        )


class BaseService(ABC):
    """
    Abstract base class for all services.

    Usage:
        class MyService(BaseService):
            def do_something(self) -> ServiceResult:
                return self.safe_execute("Doing something", self._do_it)
    """

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    def log_operation(self, operation: str) -> LogContext:
        """
        Create a logging context for an operation.

        Usage:
            with self.log_operation("Listing setores"):
                client.get("/setores")
        """
        return LogContext(self.logger, operation)

    def safe_execute(
        self,
        operation: str,
        func: Callable[..., Any],
        *args,
        **kwargs
    ) -> ServiceResult:
        """
        Execute a function with error handling and logging.

        Failures are already logged by the LogContext.

        Returns:
            ServiceResult with success/failure status
        """
        try:
            with self.log_operation(operation):
                result = func(*args, **kwargs)
            return ServiceResult.ok(result)
        except Exception as e:
            return ServiceResult.from_exception(e)
