"""Flat key-value stores.

A key-value store holds one string document per key, the same shape as the
browser's ``localStorage``. The ledger keeps its whole state in one, and the
fallback record store keeps one JSON array per collection in one.
"""

import json
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStore(ABC):
    """Abstract flat key-value store."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string, or None if the key is absent."""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store a string under a key, replacing any previous value."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove a key. Removing an absent key is a no-op."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys."""
        pass

    def get_json(self, key: str, default: Any = None) -> Any:
        """Return the decoded JSON document for a key.

        A corrupted document raises ``json.JSONDecodeError``.
        """
        text = self.get_item(key)
        if text is None:
            return default
        return json.loads(text)

    def set_json(self, key: str, value: Any) -> None:
        """Encode a value as JSON and store it under a key."""
        self.set_item(key, json.dumps(value))


def check_key(key: str) -> str:
    """Return the key if it is usable as a storage name.

    Raises:
        ValueError: If the key contains characters outside [A-Za-z0-9_.-]
    """
    if not _KEY_PATTERN.match(key):
        raise ValueError(f"Invalid storage key '{key}'")
    return key


class MemoryKeyValueStore(KeyValueStore):
    """Process-local key-value store."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(check_key(key))

    def set_item(self, key: str, value: str) -> None:
        self._items[check_key(key)] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(check_key(key), None)

    def keys(self) -> list[str]:
        return sorted(self._items)


class FileKeyValueStore(KeyValueStore):
    """Key-value store keeping one ``<key>.json`` file per key in a directory."""

    SUFFIX = ".json"

    def __init__(self, directory: str | Path):
        """Initialize file-backed store.

        Args:
            directory: Directory holding the documents. Created on first write.
        """
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{check_key(key)}{self.SUFFIX}"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        # Write beside the target and rename so readers never see half a document
        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(value)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        if not self.directory.is_dir():
            return []
        return sorted(p.name[: -len(self.SUFFIX)] for p in self.directory.glob(f"*{self.SUFFIX}"))
