"""Durable key/value storage for client-side state (cart, admin token).

Values are opaque strings; callers own their encoding.
"""

from __future__ import annotations

import json
import os
import re
from pathlib import Path

import structlog

from storefront.exceptions import StorageCorrupted

logger = structlog.get_logger(__name__)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class MemoryStorage:
    """In-process storage. State lives as long as the object."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage:
    """One file per key under ``directory``; survives process restarts.

    Writes go to a sibling temp file and are moved into place, so a reader
    never sees a half-written value. There is no cross-key transaction.
    """

    def __init__(self, directory: str | os.PathLike):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        """Stored text for ``key``, ``None`` if absent.

        Raises ``StorageCorrupted`` when the file exists but is not UTF-8 text.
        """
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as exc:
            raise StorageCorrupted(f"{path.name} is not valid UTF-8: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        os.replace(tmp, path)
        logger.debug("storage_written", key=key, size=len(value))

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
        logger.debug("storage_removed", key=key)


def dumps(value) -> str:
    """Encode a JSON-compatible value the way every storage key expects it."""
    return json.dumps(value, separators=(",", ":"))
