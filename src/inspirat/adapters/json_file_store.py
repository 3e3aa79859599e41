"""Key-value store persisted as a local JSON file."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from inspirat.domain.errors import PersistenceWriteFailed
from inspirat.services.collection import KeyValueStore

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Stores all keys in one JSON object on disk."""

    path: Path

    def get(self, key: str) -> object | None:
        """Return the value stored under key."""
        return self._load().get(key)

    def keys(self) -> set[str]:
        """Return all stored keys."""
        return set(self._load())

    def set(self, key: str, value: object) -> None:
        """Write value under key, replacing the file atomically."""
        data = self._load()
        data[key] = value
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(data), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceWriteFailed(f"Failed to write {self.path}: {exc}") from exc

    def _load(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            _logger.warning("Ignoring unreadable store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            _logger.warning("Ignoring store %s: top level is not an object", self.path)
            return {}
        return data
