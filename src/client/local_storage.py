"""JSON-file key/value storage.

Persists the client session between runs the way a browser's localStorage
does for the web frontend. Every write rewrites the whole file atomically.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class LocalStorage:
    """Key/value store backed by a JSON file.

    Args:
        path: File holding the JSON object. Created on first write.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get_item(self, key: str, default: Any = None) -> Any:
        """Return the stored value for key, or default."""
        return self._read().get(key, default)

    def set_item(self, key: str, value: Any) -> None:
        """Store a JSON-serializable value under key."""
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        """Delete key if present."""
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def clear(self) -> None:
        """Delete every key."""
        self._write({})

    def _read(self) -> dict[str, Any]:
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return {}
        try:
            text = raw.decode("utf-8")
            data = json.loads(text) if text.strip() else {}
        except (UnicodeDecodeError, json.JSONDecodeError):
            logger.warning("local_storage_corrupt", path=str(self._path))
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
