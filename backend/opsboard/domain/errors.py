"""Domain Errors - Centralized Exception Hierarchy"""
from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base domain error - all errors extend this"""

    error_code: str = "DOMAIN_ERROR"
    http_status: int = 400

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to API response dict: {"error": message, "code", "details"}"""
        return {
            "error": self.message,
            "code": self.error_code,
            "details": self.details
        }


# Configuration Errors
class ConfigurationError(DomainError):
    """Required configuration is missing or invalid"""
    error_code = "CONFIGURATION_ERROR"
    http_status = 500


# Validation Errors
class ValidationError(DomainError):
    """Input validation failed"""
    error_code = "VALIDATION_ERROR"
    http_status = 400


class MalformedFilterError(ValidationError):
    """Array filter parameter is not valid JSON"""
    error_code = "MALFORMED_FILTER"


# Not Found Errors
class NotFoundError(DomainError):
    """Resource not found"""
    error_code = "NOT_FOUND"
    http_status = 404


class BiNotFoundError(NotFoundError):
    """BI not found"""
    error_code = "BI_NOT_FOUND"


class BaseNotFoundError(NotFoundError):
    """Data-source base not found"""
    error_code = "BASE_NOT_FOUND"


class TaskNotFoundError(NotFoundError):
    """Task board entry not found"""
    error_code = "TASK_NOT_FOUND"


class AutomationNotFoundError(NotFoundError):
    """Automation not found"""
    error_code = "AUTOMATION_NOT_FOUND"


# External Service Errors
class ExternalServiceError(DomainError):
    """External service failure"""
    error_code = "EXTERNAL_SERVICE_ERROR"
    http_status = 502


class GlpiError(ExternalServiceError):
    """GLPI API returned an error response"""
    error_code = "GLPI_ERROR"


class GlpiAuthenticationError(GlpiError):
    """GLPI rejected the credentials even after a fresh session"""
    error_code = "GLPI_AUTHENTICATION_ERROR"


class GlpiTimeoutError(GlpiError):
    """GLPI did not answer within the configured timeout"""
    error_code = "GLPI_TIMEOUT"
    http_status = 504
