from fastapi import status
from typing import Any, Dict, Optional


class APIException(Exception):
    """
    Base exception for API errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail: str = "An unexpected error occurred",
        code: str = "internal_error",
        context: Optional[Dict[str, Any]] = None
    ):
        self.status_code = status_code
        self.detail = detail
        self.code = code
        self.context = context or {}
        super().__init__(self.detail)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the failure envelope returned to callers."""
        return {
            "ok": False,
            "cached": False,
            "error": self.detail,
        }


class ValidationError(APIException):
    """Exception raised when a lookup key fails validation."""

    def __init__(
        self,
        detail: str = "Validation error",
        code: str = "validation_error",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        merged_context = {"field": field} if field else {}
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            code=code,
            context=merged_context
        )


class NotFoundError(APIException):
    """Exception raised when a requested resource does not exist upstream."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        detail: Optional[str] = None,
        code: str = "not_found_error",
        context: Optional[Dict[str, Any]] = None
    ):
        if detail is None:
            detail = f"{resource_type} not found"

        merged_context = {
            "resource_type": resource_type,
            "resource_id": str(resource_id)
        }
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            code=code,
            context=merged_context
        )


class IntegrationException(APIException):
    """Exception raised when the external API integration fails."""

    def __init__(
        self,
        detail: str = "External API integration error",
        code: str = "integration_error",
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(status_code=status_code, detail=detail, code=code, context=context)
        self.original_exception = original_exception

        # Add original exception info to context if available
        if original_exception is not None:
            self.context["original_error"] = str(original_exception)


class UpstreamError(IntegrationException):
    """
    The upstream API answered with a non-success status.

    The upstream status code is passed through as this error's status code,
    and the raw response body is kept for diagnostics.
    """

    def __init__(
        self,
        status_code: int,
        body: str = "",
        url: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        merged_context: Dict[str, Any] = {"upstream_status": status_code}
        if url:
            merged_context["url"] = url
        if context:
            merged_context.update(context)

        super().__init__(
            detail=f"Upstream returned {status_code}: {body}",
            code="upstream_error",
            status_code=status_code,
            context=merged_context
        )
        self.body = body


class TransportError(IntegrationException):
    """The upstream API could not be reached (DNS, refused connection, timeout)."""

    def __init__(
        self,
        detail: str = "Upstream unreachable",
        url: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(
            detail=detail,
            code="transport_error",
            status_code=status.HTTP_502_BAD_GATEWAY,
            context={"url": url} if url else None,
            original_exception=original_exception
        )


class MalformedUpstreamError(APIException):
    """The upstream answered successfully but the payload breaks the expected schema."""

    def __init__(
        self,
        detail: str = "Malformed upstream response",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        merged_context = {"field": field} if field else {}
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            code="malformed_upstream",
            context=merged_context
        )
