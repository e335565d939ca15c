"""
Custom error classes for the restore checker.

Provides structured error handling with error codes,
context information, and proper exception chaining.
"""

from typing import Optional, Dict, Any
from dataclasses import dataclass


@dataclass
class ErrorContext:
    """Error context information."""
    component: str
    operation: str
    project_id: Optional[str] = None
    check_id: Optional[str] = None
    metadata: Dict[str, Any] = None

    def __post_init__(self):
        if self.metadata is None:
            self.metadata = {}


class RestoreCheckError(Exception):
    """Base exception for restore checker errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        context: Optional[ErrorContext] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary."""
        result = {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

        if self.context:
            result["context"] = {
                "component": self.context.component,
                "operation": self.context.operation,
                "project_id": self.context.project_id,
                "check_id": self.context.check_id,
                "metadata": self.context.metadata,
            }

        return result


class UnknownProjectError(RestoreCheckError):
    """Error raised when an outcome names a project outside the cached snapshot."""

    def __init__(
        self,
        message: str,
        project_id: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="UNKNOWN_PROJECT",
            context=context,
            details=details or {}
        )
        self.project_id = project_id

        if project_id:
            self.details["project_id"] = project_id


class DuplicateProjectError(RestoreCheckError):
    """Error raised when a snapshot contains the same project twice."""

    def __init__(
        self,
        message: str,
        project_id: Optional[str] = None,
        existing_id: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="DUPLICATE_PROJECT",
            context=context,
            details=details or {}
        )
        self.project_id = project_id
        self.existing_id = existing_id

        if project_id:
            self.details["project_id"] = project_id
        if existing_id:
            self.details["existing_id"] = existing_id


class ConfigurationError(RestoreCheckError):
    """Error raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[ErrorContext] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            context=context,
            details=details or {}
        )
        self.config_key = config_key
        self.config_value = config_value

        if config_key:
            self.details["config_key"] = config_key
        if config_value is not None:
            self.details["config_value"] = str(config_value)


def create_error_context(
    component: str,
    operation: str,
    project_id: Optional[str] = None,
    check_id: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None
) -> ErrorContext:
    """Create error context."""
    return ErrorContext(
        component=component,
        operation=operation,
        project_id=project_id,
        check_id=check_id,
        metadata=metadata or {}
    )
