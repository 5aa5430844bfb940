"""Custom exceptions for API layer."""

from typing import Any, Dict, Optional


class APIError(Exception):
    """Base class for API errors."""

    def __init__(
        self,
        error_code: str,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "error_code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class NotFoundError(APIError):
    """Resource not found."""

    def __init__(
        self,
        resource_type: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            error_code=f"{resource_type.upper()}_NOT_FOUND",
            message=message,
            status_code=404,
            details=details,
        )


class OutputValidationError(APIError):
    """Generated output failed section validation."""

    def __init__(self, message: str, section: str, issues: list):
        super().__init__(
            error_code="AI_OUTPUT_VALIDATION_FAILED",
            message=message,
            status_code=400,
            details={"section": section, "issues": issues},
        )


class UnsupportedOperationError(APIError):
    """Configured provider cannot perform the operation."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            error_code="PROVIDER_UNSUPPORTED",
            message=message,
            status_code=400,
            details=details,
        )


class ProviderError(APIError):
    """Upstream generation provider failed or returned unusable output."""

    def __init__(
        self,
        message: str,
        error_code: str = "PROVIDER_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=502,
            details=details,
        )


class InternalError(APIError):
    """Internal server error."""

    def __init__(
        self,
        message: str = "An internal error occurred",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            error_code="INTERNAL_ERROR",
            message=message,
            status_code=500,
            details=details,
        )
