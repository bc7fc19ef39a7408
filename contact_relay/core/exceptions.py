"""Custom exceptions for domain-specific errors"""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """Base exception for all domain errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


# Configuration Errors
class ConfigurationError(DomainException):
    """Raised when required server configuration is missing or malformed"""

    pass


class DestinationNotConfiguredError(ConfigurationError):
    """Raised when no destination mailbox (TO_EMAIL) is configured"""

    def __init__(self, details: Optional[Dict[str, Any]] = None):
        super().__init__(message="Missing TO_EMAIL env var", details=details)


class MailTransportConfigError(ConfigurationError):
    """Raised when the SMTP transport cannot be built from configuration"""

    pass


# External Service Errors
class ExternalServiceError(DomainException):
    """Raised when external service call fails"""

    pass


class MailDispatchError(ExternalServiceError):
    """Raised when the SMTP server rejects or fails to deliver a message"""

    pass


# Validation Errors
class ValidationError(DomainException):
    """Raised when input validation fails"""

    pass


class UnknownFieldError(ValidationError):
    """Raised when a form update targets a field the form does not have"""

    def __init__(self, field: str):
        self.field = field
        super().__init__(message=f"Unknown contact form field: {field}", details={"field": field})
