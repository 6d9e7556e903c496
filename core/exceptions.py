"""
Custom Exception Classes
"""
from typing import Optional, Dict, Any


class DomainDiscoveryException(Exception):
    """Base exception for all application exceptions"""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "internal_error"
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API response"""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details
        }


BaseAppException = DomainDiscoveryException


# Authentication Exceptions
class AuthenticationError(DomainDiscoveryException):
    """Raised when authentication fails"""

    def __init__(self, message: str = "Authentication failed", **kwargs):
        super().__init__(
            message=message,
            error_code="authentication_failed",
            status_code=401,
            **kwargs
        )


# Authorization Exceptions
class AuthorizationError(DomainDiscoveryException):
    """Raised when user is not authorized"""

    def __init__(self, message: str = "Not authorized", **kwargs):
        super().__init__(
            message=message,
            error_code="not_authorized",
            status_code=403,
            **kwargs
        )


# Validation Exceptions
class ValidationError(DomainDiscoveryException):
    """Raised when input validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        errors: Optional[list] = None,
        error_code: str = "validation_error",
        **kwargs
    ):
        details = kwargs.pop("details", {})
        if errors:
            details["errors"] = errors

        super().__init__(
            message=message,
            error_code=error_code,
            status_code=400,
            details=details,
            **kwargs
        )


class EmptyKeywordError(ValidationError):
    """Raised when a search keyword is blank after trimming"""

    def __init__(self, message: str = "Keyword is required", **kwargs):
        super().__init__(message=message, error_code="empty_keyword", **kwargs)


# Configuration Exceptions
class ConfigurationError(DomainDiscoveryException):
    """Raised when configuration is invalid or missing"""

    def __init__(
        self,
        message: str = "Configuration error",
        error_code: str = "configuration_error",
        **kwargs
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=500,
            **kwargs
        )


class MissingAPIKeyError(ConfigurationError):
    """Raised when required API key is missing"""

    def __init__(
        self,
        api_name: str,
        message: Optional[str] = None,
        **kwargs
    ):
        if not message:
            message = f"API key for {api_name} is missing"

        super().__init__(
            message=message,
            error_code="missing_api_key",
            details={"api": api_name},
            **kwargs
        )


# Database Exceptions
class DatabaseError(DomainDiscoveryException):
    """Raised when database operation fails"""

    def __init__(
        self,
        message: str = "Database operation failed",
        error_code: str = "database_error",
        status_code: int = 500,
        **kwargs
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=status_code,
            **kwargs
        )



class LedgerUnavailableError(DatabaseError):
    """Raised when the credit ledger cannot be read or written"""

    def __init__(self, message: str = "Credit ledger unavailable", **kwargs):
        super().__init__(
            message=message,
            error_code="ledger_unavailable",
            status_code=503,
            **kwargs
        )


# External Service Exceptions
class ExternalServiceError(DomainDiscoveryException):
    """Raised when an external service fails"""

    def __init__(
        self,
        service: str,
        message: Optional[str] = None,
        error_code: str = "external_service_error",
        **kwargs
    ):
        msg = f"External service error: {service}"
        if message:
            msg += f" - {message}"
        details = kwargs.pop("details", {})
        details["service"] = service
        super().__init__(
            message=msg,
            error_code=error_code,
            status_code=502,
            details=details,
            **kwargs
        )


class UpstreamUnavailableError(ExternalServiceError):
    """Raised when an availability authority is unreachable or answers non-2xx"""

    def __init__(
        self,
        service: str,
        message: Optional[str] = None,
        status: str = "error",
        http_status: Optional[int] = None,
        **kwargs
    ):
        details = {"status": status}
        if http_status is not None:
            details["http_status"] = http_status
        super().__init__(
            service=service,
            message=message,
            error_code="upstream_unavailable",
            details=details,
            **kwargs
        )
        self.status = status
        self.http_status = http_status


class AIGenerationError(ExternalServiceError):
    """Raised when the text model call fails or returns nothing usable"""

    def __init__(self, message: str = "AI generation failed", model: Optional[str] = None, **kwargs):
        super().__init__(
            service="text_generation",
            message=message,
            error_code="ai_generation_failed",
            details={"model": model} if model else {},
            **kwargs
        )


# Exports
__all__ = [
    "DomainDiscoveryException",
    "BaseAppException",
    "AuthenticationError",
    "AuthorizationError",
    "ValidationError",
    "EmptyKeywordError",
    "ConfigurationError",
    "MissingAPIKeyError",
    "DatabaseError",
    "LedgerUnavailableError",
    "ExternalServiceError",
    "UpstreamUnavailableError",
    "AIGenerationError"
]
