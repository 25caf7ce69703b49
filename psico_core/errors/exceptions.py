# =============================================================================
# psico_core/errors/exceptions.py
# Custom Exception Hierarchy for the PSICO dashboard
# =============================================================================

from typing import Optional, Dict, Any


class PsicoError(Exception):
    """
    Base exception for all dashboard errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (e.g., "AUTH_001")
        details: Additional context as a dictionary
        recoverable: Whether the user can retry the operation
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "PSICO_000"
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        base = f"[{self.code}] {self.message}"
        if self.details:
            base += f" | Details: {self.details}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# =============================================================================
# TRANSPORT / API EXCEPTIONS
# =============================================================================

class ApiError(PsicoError):
    """Raised when the API answers with an unexpected status or body"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if status_code is not None:
            details["status_code"] = status_code
        if endpoint:
            details["endpoint"] = endpoint

        kwargs.setdefault("code", "API_001")
        super().__init__(message=message, details=details, **kwargs)

    @property
    def status_code(self) -> Optional[int]:
        return self.details.get("status_code")


class NetworkError(ApiError):
    """Raised when the API cannot be reached (connection refused, DNS, timeout)"""

    def __init__(self, message: str, **kwargs):
        super().__init__(message=message, code="NET_001", **kwargs)


class AuthenticationError(ApiError):
    """Raised when credentials are rejected or a login call cannot complete"""

    def __init__(self, message: str = "Invalid credentials", **kwargs):
        super().__init__(message=message, code="AUTH_001", **kwargs)


class NotFoundError(ApiError):
    """Raised when a looked-up record does not exist"""

    def __init__(
        self,
        message: str,
        resource: Optional[str] = None,
        record_id: Optional[Any] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if resource:
            details["resource"] = resource
        if record_id is not None:
            details["record_id"] = record_id

        super().__init__(message=message, code="API_404", details=details, **kwargs)


# =============================================================================
# FORM EXCEPTIONS
# =============================================================================

class ValidationError(ApiError):
    """Raised when form values are missing or malformed"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        expected: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if field:
            details["field"] = field
        if expected:
            details["expected"] = expected

        super().__init__(message=message, code="FORM_001", details=details, **kwargs)


# =============================================================================
# CONFIGURATION EXCEPTIONS
# =============================================================================

class ConfigurationError(PsicoError):
    """Raised when configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        expected_type: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        if expected_type:
            details["expected_type"] = expected_type

        super().__init__(
            message=message,
            code="CONFIG_001",
            details=details,
            recoverable=False,
            **kwargs,
        )
