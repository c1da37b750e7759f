from fastapi import status
from typing import Any, Dict, List, Optional


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
        """Convert exception to a dictionary for consistent response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.detail,
                "status_code": self.status_code,
                "context": self.context
            }
        }


class IntegrationException(APIException):
    """Exception raised when an external API integration fails."""

    def __init__(
        self,
        detail: str = "External API integration error",
        code: str = "integration_error",
        status_code: int = status.HTTP_502_BAD_GATEWAY,
        context: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, code=code, context=context)


class UpstreamTransportError(IntegrationException):
    """
    Raised when the upstream catalog API is unreachable or answers with a
    non-success status.

    An upstream 404 is surfaced as 404 so that unknown game ids read as such
    to callers; every other failure is a 502.
    """

    def __init__(
        self,
        detail: str = "Upstream catalog request failed",
        upstream_status: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        merged_context: Dict[str, Any] = {}
        if upstream_status is not None:
            merged_context["upstream_status"] = upstream_status
        if context:
            merged_context.update(context)

        if upstream_status == status.HTTP_404_NOT_FOUND:
            status_code = status.HTTP_404_NOT_FOUND
        else:
            status_code = status.HTTP_502_BAD_GATEWAY

        super().__init__(
            detail=detail,
            code="upstream_error",
            status_code=status_code,
            context=merged_context
        )
        self.upstream_status = upstream_status


class ValidationException(APIException):
    """Exception raised when data validation fails."""

    def __init__(
        self,
        detail: str = "Validation error",
        code: str = "validation_error",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY
    ):
        merged_context = {"field": field} if field else {}
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status_code,
            detail=detail,
            code=code,
            context=merged_context
        )


class SchemaValidationError(ValidationException):
    """
    Raised when a normalized upstream payload does not match the schema the
    rest of the service relies on.

    This is an upstream contract failure rather than a client mistake, so it
    maps to 502.
    """

    def __init__(
        self,
        schema: str,
        errors: Optional[List[Dict[str, Any]]] = None,
        detail: Optional[str] = None
    ):
        super().__init__(
            detail=detail or f"Upstream response failed {schema} validation",
            code="schema_validation_error",
            context={"schema": schema, "errors": errors or []},
            status_code=status.HTTP_502_BAD_GATEWAY
        )
        self.schema = schema
        self.errors = errors or []


class NormalizationError(APIException):
    """Raised when an expected nested field is absent from an upstream payload."""

    def __init__(
        self,
        field_path: str,
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        merged_context: Dict[str, Any] = {"field": field_path}
        if context:
            merged_context.update(context)

        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail or f"Upstream payload is missing '{field_path}'",
            code="normalization_error",
            context=merged_context
        )
        self.field_path = field_path
