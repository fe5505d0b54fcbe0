# src/tcprovider/domain/core/exceptions.py
from typing import Any, Dict, List, Optional


class DomainException(Exception):
    """Base exception for all domain-specific errors."""
    pass


class ValidationError(DomainException):
    """Raised when domain validation fails."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.details = details


class SchemaValidationError(ValidationError):
    """Raised when a declared configuration does not match its schema."""
    def __init__(self, type_name: str, errors: Dict[str, str]):
        summary = "; ".join(f"{key}: {reason}" for key, reason in sorted(errors.items()))
        super().__init__(f"Invalid configuration for {type_name}: {summary}", errors)
        self.type_name = type_name
        self.errors = errors


class ForceNewRequiredError(DomainException):
    """Raised when an update touches fields that can only change by replacement."""
    def __init__(self, type_name: str, fields: List[str]):
        super().__init__(
            f"{type_name} cannot update {', '.join(sorted(fields))} in place; the resource must be replaced"
        )
        self.type_name = type_name
        self.fields = sorted(fields)


class InvalidStateTransitionError(DomainException):
    """Raised when attempting an invalid state transition."""
    def __init__(self, current_state: str, attempted_state: str):
        super().__init__(
            f"Cannot transition from {current_state} to {attempted_state}"
        )
        self.current_state = current_state
        self.attempted_state = attempted_state


class ConfigurationError(DomainException):
    """Raised when there's an issue with configuration."""
    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []
