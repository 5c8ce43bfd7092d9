"""Centralized constants for internal implementation details.

These are NOT environment-specific configuration. For environment-specific
settings, use `src/core/config.py` instead.
"""

# =============================================================================
# Timeouts
# =============================================================================

PROVIDER_TIMEOUT_DEFAULT: float = 10.0
"""Default timeout for pod provider calls in seconds."""


# =============================================================================
# Tokens
# =============================================================================

SESSION_TOKEN_TYPE: str = "session"
"""Value of the `type` claim in session JWTs."""

BEARER_PREFIX: str = "Bearer "
"""Optional prefix accepted in front of the session token header value."""


# =============================================================================
# Limits
# =============================================================================

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum length for response body kept in error details (truncation limit)."""

POST_CONTENT_MAX_LENGTH: int = 1000
"""Maximum number of characters in a post."""

POSTS_PAGE_SIZE_DEFAULT: int = 20
"""Default number of posts returned per page."""

POSTS_PAGE_SIZE_MAX: int = 100
"""Largest page size a client may request."""
