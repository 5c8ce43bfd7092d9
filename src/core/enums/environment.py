"""Application environment types.

Used by Settings to determine environment-specific behavior.

Environments:
- DEVELOPMENT: Local development, console log renderer
- TESTING: Automated test execution with a throwaway database
- PRODUCTION: Production deployment (no auto-created tables, real secret key)
"""

from enum import Enum


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"
