"""Key/value storage backends for the persisted session."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)


class SessionStorage:
    """String key/value storage, written as whole batches.

    ``set_many`` must apply every key or none, so a token is never persisted
    without its user.
    """

    def get(self, key: str) -> str | None:
        raise NotImplementedError

    def set_many(self, items: Mapping[str, str]) -> None:
        raise NotImplementedError

    def remove(self, *keys: str) -> None:
        raise NotImplementedError


class MemoryStorage(SessionStorage):
    """In-process storage; nothing survives a restart."""

    def __init__(self, initial: Mapping[str, str] | None = None):
        self._items: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._items.get(key)

    def set_many(self, items: Mapping[str, str]) -> None:
        self._items.update(items)

    def remove(self, *keys: str) -> None:
        for key in keys:
            self._items.pop(key, None)


class FileStorage(SessionStorage):
    """JSON object on disk, replaced atomically on every write.

    An unreadable or corrupt file reads as empty.

    Args:
        path: Location of the JSON file; parent directories are created
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable session file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring session file {self.path}: not a JSON object")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".session-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(temp_path, self.path)
        except BaseException:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set_many(self, items: Mapping[str, str]) -> None:
        data = self._read()
        data.update(items)
        self._write(data)

    def remove(self, *keys: str) -> None:
        data = self._read()
        if not any(key in data for key in keys):
            return
        for key in keys:
            data.pop(key, None)
        self._write(data)
