"""Global exception handlers for FastAPI application.

This module provides the handler that catches unhandled exceptions and
converts them to RFC 7807 Problem Details responses.

Exports:
    register_exception_handlers: Register all exception handlers with FastAPI app
"""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.api.errors.problem_details import ProblemDetails
from src.api.middleware.trace_middleware import TRACE_HEADER, get_trace_id

logger = structlog.get_logger(__name__)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected Python exceptions.

    Converts any unhandled exception into an RFC 7807 Problem Details
    response without leaking stack traces to API consumers.

    Args:
        request: FastAPI Request object
        exc: Unhandled exception

    Returns:
        JSONResponse with RFC 7807 ProblemDetails (500 Internal Server Error)
    """
    # Set by TraceMiddleware
    trace_id = getattr(request.state, "trace_id", None) or get_trace_id()

    problem = ProblemDetails(
        type="about:blank#internal-server-error",
        title="Internal Server Error",
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please contact support with the trace ID.",
        instance=str(request.url.path),
        trace_id=trace_id,
    )

    logger.error(
        "unhandled_exception",
        exc_type=type(exc).__name__,
        exc_message=str(exc),
        trace_id=trace_id,
        request_path=request.url.path,
        request_method=request.method,
    )

    headers = {TRACE_HEADER: trace_id} if trace_id else None
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=problem.model_dump(exclude_none=True),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI application.

    Args:
        app: FastAPI application instance

    Example:
        >>> from fastapi import FastAPI
        >>> app = FastAPI()
        >>> register_exception_handlers(app)
    """
    app.add_exception_handler(Exception, generic_exception_handler)
