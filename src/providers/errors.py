"""Pod provider error types.

These are the failure cases an ActivityPod provider client returns inside
Result types:

    PodProviderError (base)
    ├── ProviderUnavailableError (timeout, connection refused)
    ├── ProviderResponseError (non-2xx answer, carries the provider's code/message)
    └── ProviderInvalidResponseError (2xx but not a JSON object)

Usage:
    from src.providers.errors import PodProviderError, ProviderResponseError

    match await provider.signup(username, password, email):
        case Failure(error=ProviderResponseError() as error):
            print(error.status_code, error.message)
"""

from dataclasses import dataclass

from src.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class PodProviderError(DomainError):
    """Base pod provider error.

    Attributes:
        code: Domain ErrorCode.
        message: Human-readable message.
        provider_endpoint: Base URL of the provider that failed.
    """

    provider_endpoint: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderUnavailableError(PodProviderError):
    """The provider could not be reached (timeout or connection failure)."""


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderResponseError(PodProviderError):
    """The provider answered with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the provider.
        provider_code: Error code from the provider's JSON body, if any.
    """

    status_code: int
    provider_code: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ProviderInvalidResponseError(PodProviderError):
    """The provider answered 2xx with a body that is not a JSON object.

    Attributes:
        response_body: Truncated raw body for debugging.
    """

    response_body: str | None = None
