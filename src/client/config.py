"""Client configuration using Pydantic Settings.

Environment variables use the PODPOST_ prefix:

    PODPOST_API_URL=https://api.podpost.example
    PODPOST_STORAGE_PATH=~/.podpost/storage.json
    PODPOST_TIMEOUT=10
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Settings for the PodPost client library."""

    api_url: str = Field(
        default="http://localhost:8000",
        description="Base URL of the PodPost API",
    )
    storage_path: Path = Field(
        default_factory=lambda: Path.home() / ".podpost" / "storage.json",
        description="JSON file used as local persistent storage",
    )
    timeout: float = Field(
        default=10.0,
        gt=0,
        description="HTTP timeout in seconds",
    )

    model_config = SettingsConfigDict(
        env_prefix="PODPOST_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("api_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Remove trailing slashes from the API URL."""
        return v.rstrip("/")

    @field_validator("storage_path")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        """Expand `~` in the storage path."""
        return v.expanduser()
