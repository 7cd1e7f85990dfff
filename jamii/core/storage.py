"""
Persisted client storage.

The dashboard keeps a handful of plain string values (bearer token, selected
clinic id, forced-reset flag) across restarts. Every backend exposes the same
three operations; a missing key reads as ``None`` and removing it is a no-op.
"""
import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from jamii.core.config import Settings, settings as default_settings
from jamii.core.logger import logger


class ClientStorage(ABC):
    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        ...


class MemoryStorage(ClientStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage(ClientStorage):
    """JSON file backend. Several processes may share one file."""

    def __init__(self, path: str):
        self.path = Path(path)

    def _load(self) -> Dict[str, str]:
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError:
            logger.warning(f"Ignoring unreadable storage file {self.path}")
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _save(self, data: Dict[str, str]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(data, fh)
        os.replace(tmp, self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = str(value)
        self._save(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)


def get_storage(settings: Optional[Settings] = None) -> ClientStorage:
    settings = settings or default_settings
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "file":
        return FileStorage(settings.STORAGE_PATH)
    if backend == "redis":
        from jamii.core.redis import RedisStorage
        return RedisStorage.from_settings(settings)
    raise ValueError(f"Unknown storage backend: {settings.STORAGE_BACKEND}")
