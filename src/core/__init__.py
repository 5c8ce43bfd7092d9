"""Core shared kernel.

Foundational utilities used across all layers:
- Settings and constants
- Result types for railway-oriented programming
- Base error class for errors carried inside Results
- Database engine/session management and logging setup
"""

from src.core.enums import Environment, ErrorCode
from src.core.errors import DomainError
from src.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "Environment",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
]
