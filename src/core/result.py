"""Result types for railway-oriented programming.

Operations that can fail in expected ways (a pod provider rejecting a login,
an unreachable endpoint) return a Result instead of raising, so callers
handle every branch explicitly.

Usage:
    result = await provider.login(username, password)
    match result:
        case Success(value=session):
            print(session.web_id)
        case Failure(error=error):
            print(error.message)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
