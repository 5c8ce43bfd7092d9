"""Base API client for pod provider HTTP communication.

This module provides a base class for pod provider clients that handles:
- HTTP request execution with timeout/connection error handling
- Response status code interpretation (provider `{code, message}` error bodies)
- JSON object parsing with error handling
- Structured logging with provider context

Architecture:
    - Adapter for external identity providers
    - Uses httpx for async HTTP
    - Returns Result types (no exceptions for provider failures)
"""

from typing import Any

import httpx
import structlog

from src.core.constants import PROVIDER_TIMEOUT_DEFAULT, RESPONSE_BODY_MAX_LENGTH
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.providers.errors import (
    PodProviderError,
    ProviderInvalidResponseError,
    ProviderResponseError,
    ProviderUnavailableError,
)


class BaseProviderAPIClient:
    """Base class for pod provider clients with shared HTTP handling.

    Attributes:
        _base_url: Provider base URL (without trailing slash).
        _timeout: HTTP request timeout in seconds.
        _logger: Structured logger bound with the provider endpoint.

    Example:
        >>> class MyPodProvider(BaseProviderAPIClient):
        ...     async def whoami(self, token: str):
        ...         return await self._execute_and_parse_object(
        ...             method="GET",
        ...             path="/auth/me",
        ...             headers={"Authorization": f"Bearer {token}"},
        ...             operation="whoami",
        ...         )
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
    ) -> None:
        """Initialize base provider API client.

        Args:
            base_url: Provider base URL (e.g., "https://mypod.store").
            timeout: HTTP request timeout in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._logger = structlog.get_logger("pod_provider").bind(
            provider_endpoint=self._base_url
        )

    @property
    def base_url(self) -> str:
        """Provider base URL without trailing slash."""
        return self._base_url

    async def _execute_request(
        self,
        *,
        method: str,
        path: str,
        headers: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        operation: str,
    ) -> Result[httpx.Response, PodProviderError]:
        """Execute HTTP request with error handling.

        Args:
            method: HTTP method (GET, POST, etc.).
            path: URL path relative to base_url.
            headers: Optional HTTP headers.
            json_data: Optional JSON body for POST/PUT requests.
            operation: Operation name for logging.

        Returns:
            Success(httpx.Response): Raw HTTP response on success.
            Failure(ProviderUnavailableError): On timeout or connection error.
        """
        url = f"{self._base_url}{path}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.request(
                    method=method,
                    url=url,
                    headers=headers,
                    json=json_data,
                )
            return Success(value=response)

        except httpx.TimeoutException as e:
            self._logger.warning(
                "pod_provider_timeout",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message="Pod provider request timed out",
                    provider_endpoint=self._base_url,
                )
            )

        except httpx.RequestError as e:
            self._logger.warning(
                "pod_provider_connection_error",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ProviderUnavailableError(
                    code=ErrorCode.PROVIDER_UNAVAILABLE,
                    message=f"Failed to connect to pod provider: {e}",
                    provider_endpoint=self._base_url,
                )
            )

    def _check_error_response(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Failure[PodProviderError] | None:
        """Turn a non-2xx response into a ProviderResponseError.

        ActivityPod answers failures with a JSON body `{code, message}`; when
        present both are carried on the error, otherwise the reason phrase is
        used as message.

        Args:
            response: HTTP response to check.
            operation: Operation name for logging.

        Returns:
            Failure(ProviderResponseError) if error detected, None if response is OK.
        """
        status = response.status_code

        if response.is_success:
            return None

        provider_code: str | None = None
        message = response.reason_phrase or f"HTTP {status}"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            if body.get("code") is not None:
                provider_code = str(body["code"])
            if body.get("message"):
                message = str(body["message"])

        self._logger.warning(
            "pod_provider_request_rejected",
            operation=operation,
            status_code=status,
            provider_code=provider_code,
        )
        return Failure(
            error=ProviderResponseError(
                code=ErrorCode.PROVIDER_REQUEST_REJECTED,
                message=message,
                provider_endpoint=self._base_url,
                status_code=status,
                provider_code=provider_code,
            )
        )

    def _parse_json_object(
        self,
        response: httpx.Response,
        operation: str,
    ) -> Result[dict[str, Any], PodProviderError]:
        """Parse response as JSON object with error handling.

        Args:
            response: HTTP response to parse.
            operation: Operation name for logging.

        Returns:
            Success(dict): Parsed JSON object.
            Failure(PodProviderError): On HTTP error or invalid JSON.
        """
        # Check for HTTP errors first
        error_result = self._check_error_response(response, operation)
        if error_result is not None:
            return error_result

        try:
            data = response.json()
        except ValueError as e:
            self._logger.error(
                "pod_provider_invalid_json",
                operation=operation,
                error=str(e),
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message="Invalid JSON response from pod provider",
                    provider_endpoint=self._base_url,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                )
            )

        if not isinstance(data, dict):
            self._logger.warning(
                "pod_provider_unexpected_format",
                operation=operation,
                data_type=type(data).__name__,
            )
            return Failure(
                error=ProviderInvalidResponseError(
                    code=ErrorCode.PROVIDER_INVALID_RESPONSE,
                    message="Expected object response from pod provider",
                    provider_endpoint=self._base_url,
                    response_body=response.text[:RESPONSE_BODY_MAX_LENGTH],
                )
            )

        self._logger.debug("pod_provider_request_succeeded", operation=operation)
        return Success(value=data)

    async def _execute_and_parse_object(
        self,
        *,
        method: str,
        path: str,
        headers: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
        operation: str,
    ) -> Result[dict[str, Any], PodProviderError]:
        """Execute request and parse response as JSON object.

        Combines _execute_request and _parse_json_object for convenience.

        Returns:
            Success(dict): Parsed JSON object.
            Failure(PodProviderError): On any error.
        """
        result = await self._execute_request(
            method=method,
            path=path,
            headers=headers,
            json_data=json_data,
            operation=operation,
        )

        if isinstance(result, Failure):
            return result

        return self._parse_json_object(result.value, operation)
