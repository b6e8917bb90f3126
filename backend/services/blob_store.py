"""
Blob backends for the local keyed store.

A backend maps string keys to serialized string values, the same contract
as browser local storage. Three implementations:

- MemoryBlobBackend: process-local dict (tests, throwaway sessions)
- FileBlobBackend:   one JSON file per key in a directory
- RedisBlobBackend:  plain GET/SET against a Redis server

Memory and file backends enforce a total byte quota, mirroring the
~5 MiB budget of local storage. A write that would exceed it raises
StorageQuotaExceeded and leaves the previous value in place.
"""
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

import redis.asyncio as redis
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)

SAFE_KEY = re.compile(r'^[A-Za-z0-9_.-]+$')


class StorageError(Exception):
    """Base class for local store failures"""


class StorageQuotaExceeded(StorageError):
    """Raised when a write would push the backend over its byte quota"""

    def __init__(self, key: str, needed: int, quota: int):
        self.key = key
        self.needed = needed
        self.quota = quota
        super().__init__(
            f"Writing '{key}' needs {needed} bytes, quota is {quota} bytes"
        )


class BlobBackend:
    """Interface shared by all blob backends"""

    async def read(self, key: str) -> Optional[str]:
        raise NotImplementedError

    async def write(self, key: str, value: str) -> None:
        raise NotImplementedError

    async def remove(self, key: str) -> None:
        raise NotImplementedError

    async def keys(self, prefix: str = "") -> List[str]:
        raise NotImplementedError

    async def close(self) -> None:
        """Release connections (no-op for local backends)"""


def _check_quota(key: str, value: str, sizes: Dict[str, int], quota: Optional[int]):
    if not quota:
        return
    needed = sum(size for k, size in sizes.items() if k != key) + len(value.encode('utf-8'))
    if needed > quota:
        raise StorageQuotaExceeded(key, needed, quota)


class MemoryBlobBackend(BlobBackend):
    """Dict-backed backend, lives as long as the process"""

    def __init__(self, quota_bytes: Optional[int] = None):
        self.data: Dict[str, str] = {}
        self.quota_bytes = quota_bytes

    async def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def write(self, key: str, value: str) -> None:
        sizes = {k: len(v.encode('utf-8')) for k, v in self.data.items()}
        _check_quota(key, value, sizes, self.quota_bytes)
        self.data[key] = value

    async def remove(self, key: str) -> None:
        self.data.pop(key, None)

    async def keys(self, prefix: str = "") -> List[str]:
        return sorted(k for k in self.data if k.startswith(prefix))


class FileBlobBackend(BlobBackend):
    """
    One file per key under a directory.

    Writes go to a temp file in the same directory and are moved into
    place with os.replace, so a crash mid-write never leaves a torn value.
    """

    suffix = ".json"

    def __init__(self, directory, quota_bytes: Optional[int] = None):
        self.directory = Path(directory).expanduser()
        self.quota_bytes = quota_bytes
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        if not SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}{self.suffix}"

    def _sizes(self) -> Dict[str, int]:
        return {
            p.name[:-len(self.suffix)]: p.stat().st_size
            for p in self.directory.glob(f"*{self.suffix}")
        }

    # Blocking filesystem calls; the async methods run them in a worker thread

    def _read_sync(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding='utf-8')

    def _write_sync(self, key: str, value: str) -> None:
        path = self._path(key)
        _check_quota(key, value, self._sizes(), self.quota_bytes)

        fd, tmp_path = tempfile.mkstemp(dir=self.directory, prefix=".tmp_")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(value)
            os.replace(tmp_path, path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def _remove_sync(self, key: str) -> None:
        path = self._path(key)
        if path.exists():
            path.unlink()

    async def read(self, key: str) -> Optional[str]:
        return await run_in_threadpool(self._read_sync, key)

    async def write(self, key: str, value: str) -> None:
        await run_in_threadpool(self._write_sync, key, value)

    async def remove(self, key: str) -> None:
        await run_in_threadpool(self._remove_sync, key)

    async def keys(self, prefix: str = "") -> List[str]:
        sizes = await run_in_threadpool(self._sizes)
        return sorted(k for k in sizes if k.startswith(prefix))


class RedisBlobBackend(BlobBackend):
    """
    Redis-backed backend (shared between processes)

    No quota: Redis enforces its own maxmemory policy.
    """

    def __init__(self, redis_url: str):
        self.redis_url = redis_url
        self.redis = None

    async def connect(self):
        """Initialize Redis connection"""
        if self.redis is None:
            self.redis = await redis.from_url(self.redis_url, decode_responses=True)
            logger.info(f"Connected local store to Redis at {self.redis_url}")

    async def close(self):
        """Close Redis connection"""
        if self.redis:
            await self.redis.close()
            self.redis = None

    async def read(self, key: str) -> Optional[str]:
        await self.connect()
        return await self.redis.get(key)

    async def write(self, key: str, value: str) -> None:
        await self.connect()
        await self.redis.set(key, value)

    async def remove(self, key: str) -> None:
        await self.connect()
        await self.redis.delete(key)

    async def keys(self, prefix: str = "") -> List[str]:
        await self.connect()
        return sorted([k async for k in self.redis.scan_iter(match=f"{prefix}*")])
