"""RFC 7807 Problem Details for HTTP APIs.

RFC 7807: https://tools.ietf.org/html/rfc7807

Exports:
    ProblemDetails: RFC 7807 compliant error response schema
"""

from pydantic import BaseModel, Field


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    Used for unexpected server errors. Expected failures (bad credentials,
    missing auth) keep FastAPI's `{"detail": ...}` body that clients match on.

    Attributes:
        type: URI reference identifying the problem type
        title: Short, human-readable summary of the problem type
        status: HTTP status code for this occurrence
        detail: Human-readable explanation specific to this occurrence
        instance: URI reference identifying the specific occurrence
        trace_id: Optional request trace ID for debugging

    Examples:
        >>> problem = ProblemDetails(
        ...     type="about:blank#internal-server-error",
        ...     title="Internal Server Error",
        ...     status=500,
        ...     detail="An unexpected error occurred.",
        ...     instance="/posts",
        ...     trace_id="550e8400-e29b-41d4-a716-446655440000",
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["about:blank#internal-server-error"],
    )
    title: str = Field(
        ...,
        description="Short, human-readable summary",
        examples=["Internal Server Error"],
    )
    status: int = Field(
        ...,
        description="HTTP status code",
        examples=[500],
    )
    detail: str = Field(
        ...,
        description="Human-readable explanation",
        examples=["An unexpected error occurred."],
    )
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/posts"],
    )
    trace_id: str | None = Field(
        None,
        description="Request trace ID for debugging",
    )
