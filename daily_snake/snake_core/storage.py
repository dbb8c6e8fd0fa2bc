"""
Key-Value Storage
=================

Small string key-value stores the high score ledger persists through.

Any object with ``get_item`` and ``set_item`` works; the two stores here
cover tests (memory) and local play (a JSON file).
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, Union

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Browser-storage style interface."""

    def get_item(self, key: str) -> Optional[str]:
        ...

    def set_item(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """Dict-backed store."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def __len__(self) -> int:
        return len(self._items)


class JsonFileStore:
    """
    Store backed by one JSON object file of string values.

    Writes land in a temporary sibling file that replaces the original in a
    single ``os.replace``, so a failed write leaves the previous contents
    intact. A missing or unreadable file reads as empty.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Initialize the store.

        Args:
            path: JSON file location. Parent directories are created on write.
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> Dict[str, str]:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError, RecursionError):
            logger.warning("Discarding unreadable store file %s", self._path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.warning("Discarding store file %s: not a JSON object", self._path)
            return {}
        items = {str(k): v for k, v in data.items() if isinstance(v, str)}
        if len(items) != len(data):
            logger.warning(
                "Dropping %d non-string value(s) from store file %s",
                len(data) - len(items), self._path,
            )
        return items

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = str(value)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=self._path.name, suffix=".tmp", dir=str(self._path.parent)
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(items, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            # Leave the previous file in place and drop the partial write
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
