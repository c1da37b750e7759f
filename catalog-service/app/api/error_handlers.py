from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.exceptions import (
    APIException,
    NormalizationError,
    SchemaValidationError,
    UpstreamTransportError,
)
from app.core.logging import get_logger

# Initialize logger
logger = get_logger(__name__)

REDACTED_KEYS = ("api_key", "key")


def _safe_context(context: dict) -> dict:
    safe_context = dict(context) if context else {}
    for key in REDACTED_KEYS:
        if key in safe_context:
            safe_context[key] = "[REDACTED]"
    return safe_context


async def handle_api_exception(request: Request, exc: APIException) -> JSONResponse:
    """
    Handle APIException instances.

    Args:
        request: FastAPI request object
        exc: APIException instance

    Returns:
        JSONResponse: Formatted error response
    """
    logger.error(
        f"API Exception: {exc.detail}",
        extra={"data": {
            "status_code": exc.status_code,
            "error_code": exc.code,
            "request_path": request.url.path
        }}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def handle_upstream_payload_exception(request: Request, exc: APIException) -> JSONResponse:
    """
    Handle upstream payloads rejected by normalization or the schema gate.

    Args:
        request: FastAPI request object
        exc: SchemaValidationError or NormalizationError instance

    Returns:
        JSONResponse: Formatted error response
    """
    logger.warning(
        f"Upstream payload rejected: {exc.detail}",
        extra={"data": {
            "error_code": exc.code,
            "request_path": request.url.path,
            "context": exc.context
        }}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def handle_upstream_transport_exception(request: Request, exc: UpstreamTransportError) -> JSONResponse:
    """
    Handle upstream transport errors.

    Args:
        request: FastAPI request object
        exc: UpstreamTransportError instance

    Returns:
        JSONResponse: Formatted integration error response
    """
    logger.error(
        f"Upstream error: {exc.detail}",
        extra={"data": {
            "upstream_status": exc.upstream_status,
            "request_path": request.url.path
        }}
    )

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.code,
                "message": exc.detail,
                "status_code": exc.status_code,
                "context": _safe_context(exc.context)
            }
        }
    )


async def handle_request_validation_exception(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    errors = [
        {"loc": error["loc"], "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": {
                "code": "validation_error",
                "message": "Request validation error",
                "status_code": status.HTTP_422_UNPROCESSABLE_ENTITY,
                "context": {
                    "errors": errors
                }
            }
        }
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "internal_server_error",
                "message": "An unexpected error occurred",
                "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR
            }
        }
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Configure global exception handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(UpstreamTransportError, handle_upstream_transport_exception)
    app.add_exception_handler(SchemaValidationError, handle_upstream_payload_exception)
    app.add_exception_handler(NormalizationError, handle_upstream_payload_exception)
    app.add_exception_handler(APIException, handle_api_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)
