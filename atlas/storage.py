"""Key-value stores for persisted game snapshots.

The session never touches storage directly; a store is injected so the game
can run against a JSON file on disk or an in-memory dict in tests.
"""

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class SnapshotStore(ABC):
    """Abstract flat key-value store."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Return the value stored under key, or None."""
        pass

    @abstractmethod
    def put(self, key: str, value: Any) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Missing keys are ignored."""
        pass


class MemoryStore(SnapshotStore):
    """In-process store backed by a dict."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Optional[Any]:
        return self._data.get(key)

    def put(self, key: str, value: Any) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileStore(SnapshotStore):
    """Store all keys in a single JSON object on disk.

    Each write rewrites the whole file through a temp file and rename, so a
    reader never sees a half-written document.
    """

    def __init__(self, file_path: str):
        self.file_path = Path(file_path)

    def _read_all(self) -> Dict[str, Any]:
        if not self.file_path.exists():
            return {}

        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f"Ignoring unreadable store file {self.file_path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring store file {self.file_path}: top level is not an object")
            return {}
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.file_path.with_name(self.file_path.name + ".tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp_path, self.file_path)
        except OSError as e:
            logger.error(f"Failed to write store file {self.file_path}: {e}")
            if tmp_path.exists():
                tmp_path.unlink()
            raise

    def get(self, key: str) -> Optional[Any]:
        return self._read_all().get(key)

    def put(self, key: str, value: Any) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)
        logger.debug(f"Stored '{key}' in {self.file_path}")

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key not in data:
            return
        del data[key]
        self._write_all(data)
        logger.debug(f"Deleted '{key}' from {self.file_path}")
