"""
Encore - Durable key-value stores.

The tracker persists three things between runs: the onboarding completion
timestamp, the has-returned flag, and the bounded event log. It only needs
synchronous get/set by string key, so that is all a store offers.

Stores are constructed explicitly and passed in. There is no process-wide
default instance.

Missing keys are never an error; callers get their default back.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Synchronous get/set by string key. Values must be JSON-compatible."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        ...

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key. Removing an absent key does nothing."""
        ...

    def __contains__(self, key: str) -> bool:
        sentinel = object()
        return self.get(key, sentinel) is not sentinel


class InMemoryStore(KeyValueStore):
    """Dict-backed store. Lives as long as the process."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, Any]:
        return dict(self._data)


class JsonFileStore(KeyValueStore):
    """
    Store backed by a single JSON document on disk.

    The whole document is rewritten on every set/delete (write to a temp
    file, then replace). A missing file reads as empty. A file that cannot
    be read or parsed is logged and treated as empty, so the next write
    replaces it.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path).expanduser()
        self._data: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if self._data is not None:
            return self._data

        self._data = {}
        if not self.path.exists():
            return self._data

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable store at {self.path}: {e}")
            return self._data

        if isinstance(raw, dict):
            self._data = raw
        else:
            logger.warning(f"Ignoring store at {self.path}: expected a JSON object")
        return self._data

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(self._load(), indent=2), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._load()[key] = value
        self._flush()

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._flush()
