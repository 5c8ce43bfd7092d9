"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Pod provider errors
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    PROVIDER_REQUEST_REJECTED = "provider_request_rejected"
    PROVIDER_INVALID_RESPONSE = "provider_invalid_response"
