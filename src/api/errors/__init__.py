"""API error responses (RFC 7807)."""

from src.api.errors.exception_handlers import register_exception_handlers
from src.api.errors.problem_details import ProblemDetails

__all__ = ["ProblemDetails", "register_exception_handlers"]
