from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pokeproxy.core.exceptions import APIException
from pokeproxy.core.logging import get_logger

# Initialize logger
logger = get_logger(__name__)


def _envelope(message: str) -> dict:
    return {"ok": False, "cached": False, "error": message}


async def handle_api_exception(request: Request, exc: APIException) -> JSONResponse:
    """
    Handle APIException instances that escape a route.

    Args:
        request: FastAPI request object
        exc: APIException instance

    Returns:
        JSONResponse: Failure envelope with the exception's status code
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"API Exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "error_code": exc.code,
            "context": exc.context,
            "request_path": request.url.path,
        }
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request validation errors raised by FastAPI.

    Args:
        request: FastAPI request object
        exc: RequestValidationError instance

    Returns:
        JSONResponse: Failure envelope with status 400
    """
    messages = [error.get("msg", "invalid value") for error in exc.errors()]
    logger.warning(
        f"Request validation error: {'; '.join(messages)}",
        extra={"request_path": request.url.path}
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope("; ".join(messages) or "Request validation error")
    )


async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle any exception nothing else caught.

    Args:
        request: FastAPI request object
        exc: The exception

    Returns:
        JSONResponse: Generic failure envelope with status 500
    """
    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra={"request_path": request.url.path},
        exc_info=exc
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope("An unexpected error occurred")
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Configure global exception handlers for the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(APIException, handle_api_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_exception)
