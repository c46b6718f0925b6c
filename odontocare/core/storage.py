import asyncio
import json
import os
from pathlib import Path
from typing import Dict, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from odontocare.core.config import Settings

# What a storage backend may raise on a failed read or write.
STORAGE_ERRORS = (OSError, ValueError, RedisError)


class SessionStorage:
    """
    Async string key/value store that survives process restarts.

    Only the session store writes to it.
    """

    async def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    async def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    async def remove_item(self, key: str) -> None:
        raise NotImplementedError

    async def close(self) -> None:
        pass


class MemoryStorage(SessionStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    async def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FileStorage(SessionStorage):
    """Keeps every item in a single JSON document on disk."""

    def __init__(self, path: str):
        self.path = Path(os.path.expanduser(path))
        self._lock = asyncio.Lock()

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with self.path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        if not isinstance(data, dict):
            raise ValueError(f"Session file {self.path} does not hold an object")
        return data

    def _write(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as fh:
            json.dump(data, fh)
        os.replace(tmp, self.path)

    def _set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def _remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    # Disk access runs in a worker thread; the lock keeps read-modify-write cycles apart.
    async def get_item(self, key: str) -> Optional[str]:
        async with self._lock:
            data = await asyncio.to_thread(self._read)
        return data.get(key)

    async def set_item(self, key: str, value: str) -> None:
        async with self._lock:
            await asyncio.to_thread(self._set, key, value)

    async def remove_item(self, key: str) -> None:
        async with self._lock:
            await asyncio.to_thread(self._remove, key)


class RedisStorage(SessionStorage):
    def __init__(self, url: Optional[str] = None, client=None):
        if client is None:
            client = redis.from_url(url, encoding="utf-8", decode_responses=True)
        self.redis = client

    async def get_item(self, key: str) -> Optional[str]:
        return await self.redis.get(key)

    async def set_item(self, key: str, value: str) -> None:
        await self.redis.set(key, value)

    async def remove_item(self, key: str) -> None:
        await self.redis.delete(key)

    async def close(self) -> None:
        await self.redis.close()


def build_storage(settings: Settings) -> SessionStorage:
    backend = settings.SESSION_BACKEND.lower()
    if backend == "memory":
        return MemoryStorage()
    if backend == "file":
        return FileStorage(settings.SESSION_FILE)
    if backend == "redis":
        return RedisStorage(settings.REDIS_URL)
    raise ValueError(f"Unknown session backend: {settings.SESSION_BACKEND}")
