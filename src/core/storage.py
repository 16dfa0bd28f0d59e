"""Storage port: logical key -> JSON-compatible value."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class Storage(Protocol):
    def get(self, key: str) -> Optional[Any]:
        """Return the stored value for key, or None when absent."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store a JSON-compatible value under key."""
        ...


class MemoryStorage:
    """In-process store. Values round-trip through JSON like the file store."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None) -> None:
        self._data: Dict[str, str] = {}
        for key, value in (initial or {}).items():
            self.set(key, value)

    def get(self, key: str) -> Optional[Any]:
        raw = self._data.get(key)
        if raw is None:
            return None
        return json.loads(raw)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def set_raw(self, key: str, raw: str) -> None:
        self._data[key] = raw


class JsonFileStorage:
    """
    All keys live in one JSON object on disk.

    Reads tolerate a missing or corrupt file (treated as empty). Writes replace the
    file atomically so a crash mid-write leaves the previous state intact.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except Exception:
            logger.exception("Failed to read state from %s; treating as empty", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("State file %s does not hold an object; treating as empty", self.path)
            return {}
        return data

    def get(self, key: str) -> Optional[Any]:
        return self._read_all().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read_all()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(tmp, self.path)
        logger.debug("JsonFileStorage.set: key=%s path=%s", key, self.path)
