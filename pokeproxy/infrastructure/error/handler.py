"""
Error handling module for the Pokedex Proxy.
Provides centralized error categorization and logging.
"""
import logging
from typing import Any, Dict, Optional
from enum import Enum
from datetime import datetime, timezone

from pydantic import BaseModel, Field

from pokeproxy.core.exceptions import (
    APIException,
    MalformedUpstreamError,
    NotFoundError,
    TransportError,
    UpstreamError,
    ValidationError,
)


class ErrorCategory(str, Enum):
    """Categorization of errors for processing and reporting."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    CONNECTION = "connection"
    MALFORMED_RESPONSE = "malformed_response"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


class ErrorSeverity(str, Enum):
    """Severity levels for errors."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ErrorDetails(BaseModel):
    """Structured error details for consistency in logging and reporting."""
    timestamp: datetime
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    source: str
    error_code: Optional[str] = None
    http_status_code: Optional[int] = None
    context: Dict[str, Any] = Field(default_factory=dict)


class ErrorHandler:
    """
    Central error processing class that categorizes errors and logs them
    at a level matching their severity.
    """

    def __init__(self, logger: logging.Logger):
        """
        Initialize the error handler.

        Args:
            logger: Logger instance for error logging
        """
        self.logger = logger

        # Map exceptions to categories and severities
        self.exception_map = {
            ValidationError: (ErrorCategory.VALIDATION, ErrorSeverity.LOW),
            NotFoundError: (ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.LOW),
            UpstreamError: (ErrorCategory.EXTERNAL_API, ErrorSeverity.MEDIUM),
            TransportError: (ErrorCategory.CONNECTION, ErrorSeverity.MEDIUM),
            MalformedUpstreamError: (ErrorCategory.MALFORMED_RESPONSE, ErrorSeverity.HIGH),
        }

    def handle_error(
        self,
        exception: Exception,
        source: str,
        context: Optional[Dict[str, Any]] = None,
        severity: Optional[ErrorSeverity] = None,
    ) -> ErrorDetails:
        """
        Categorize and log an error.

        Args:
            exception: The exception that occurred
            source: Source identifier (e.g., "pokemon_lookup", "species_lookup")
            context: Additional context about the error
            severity: Overrides the severity derived from the exception

        Returns:
            ErrorDetails: Structured details about the error
        """
        error_details = self.categorize_error(exception, source, context or {})
        if severity is not None:
            error_details.severity = severity

        self.log_error(error_details)
        return error_details

    def categorize_error(
        self,
        exception: Exception,
        source: str,
        context: Dict[str, Any],
    ) -> ErrorDetails:
        """
        Categorize an error based on the exception type and build error details.

        Args:
            exception: The exception that occurred
            source: Source identifier
            context: Additional context about the error

        Returns:
            ErrorDetails: Structured details about the error
        """
        category = ErrorCategory.UNKNOWN
        severity = ErrorSeverity.HIGH

        for exception_type, mapping in self.exception_map.items():
            if isinstance(exception, exception_type):
                category, severity = mapping
                break
        else:
            if isinstance(exception, APIException):
                category = ErrorCategory.INTERNAL

        http_status_code = None
        error_code = None
        merged_context = dict(context)

        if isinstance(exception, APIException):
            http_status_code = exception.status_code
            error_code = exception.code
            merged_context.update(exception.context)

            # Upstream server faults are more serious than client errors
            if isinstance(exception, UpstreamError) and http_status_code >= 500:
                severity = ErrorSeverity.HIGH

        return ErrorDetails(
            timestamp=datetime.now(timezone.utc),
            category=category,
            severity=severity,
            message=str(exception),
            source=source,
            error_code=error_code,
            http_status_code=http_status_code,
            context=merged_context,
        )

    def log_error(self, error_details: ErrorDetails) -> None:
        """
        Log error details at the appropriate level.

        Args:
            error_details: Structured error information
        """
        log_data = {
            "error_category": error_details.category.value,
            "severity": error_details.severity.value,
            "source": error_details.source,
        }

        if error_details.error_code:
            log_data["error_code"] = error_details.error_code

        if error_details.http_status_code:
            log_data["http_status_code"] = error_details.http_status_code

        if error_details.context:
            log_data["context"] = error_details.context

        if error_details.severity == ErrorSeverity.HIGH:
            self.logger.error(f"ERROR: {error_details.message}", extra=log_data)
        elif error_details.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(f"WARNING: {error_details.message}", extra=log_data)
        else:
            self.logger.info(f"INFO: {error_details.message}", extra=log_data)
