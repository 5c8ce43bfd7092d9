"""Base domain error class for Railway-Oriented Programming.

DomainError is the base class for errors that flow through the system as
data (inside Result types) rather than being raised.

Usage:
    from src.core.errors import DomainError
    from src.core.enums import ErrorCode

    @dataclass(frozen=True, slots=True, kw_only=True)
    class MyError(DomainError):
        pass  # Inherits code, message
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable error message.
    """

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
