"""
KeyedStore - named collections over a blob backend

Each key holds one JSON document, usually an array of records with an
`id` field. Collections are seeded lazily: the first `get` of a key that
has never been written persists the seed and returns it.

Record ids are normalized to strings (utils.normalize_id) and matched with
strict equality. Read-modify-write operations on a key run under a per-key
asyncio.Lock so two concurrent `add_item` calls in one process cannot
overwrite each other.
"""
import asyncio
import copy
import json
import logging
from typing import Any, Callable, Dict, List, Optional

from services.blob_store import BlobBackend, StorageError
from utils.id_generator import normalize_id

logger = logging.getLogger(__name__)


class SerializationError(StorageError):
    """Raised when a value cannot be stored as JSON"""


class DuplicateIdError(StorageError):
    """Raised when adding a record whose id already exists in the collection"""

    def __init__(self, key: str, record_id: str):
        self.key = key
        self.record_id = record_id
        super().__init__(f"Record '{record_id}' already exists in '{key}'")


def _normalize_record(record: Dict[str, Any], id_field: str) -> Dict[str, Any]:
    if id_field in record:
        record = dict(record)
        record[id_field] = normalize_id(record[id_field])
    return record


def _matches(record: Any, id_field: str, record_id: str) -> bool:
    if not isinstance(record, dict) or id_field not in record:
        return False
    try:
        return normalize_id(record[id_field]) == record_id
    except ValueError:
        return False


class KeyedStore:
    """
    Keyed collection store

    Args:
        backend: Blob backend holding the serialized values
        namespace: Prefix applied to every key in the backend, so the
            store can share a backend with other data
    """

    def __init__(self, backend: BlobBackend, namespace: str = "startupos_"):
        self.backend = backend
        self.namespace = namespace
        self._locks: Dict[str, asyncio.Lock] = {}

    def _storage_key(self, key: str) -> str:
        return f"{self.namespace}{key}"

    def _lock(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = self._locks[key] = asyncio.Lock()
        return lock

    # =========================================================================
    # RAW ACCESS
    # =========================================================================

    async def _read(self, key: str) -> Optional[Any]:
        raw = await self.backend.read(self._storage_key(key))
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise SerializationError(f"Stored value for '{key}' is not valid JSON: {e}") from e

    async def _write(self, key: str, value: Any) -> None:
        try:
            raw = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Cannot serialize value for '{key}': {e}") from e
        await self.backend.write(self._storage_key(key), raw)

    async def _get_or_seed(self, key: str, seed_default: Any) -> Any:
        value = await self._read(key)
        if value is None:
            value = copy.deepcopy(seed_default)
            if isinstance(value, list):
                value = [
                    _normalize_record(r, "id") if isinstance(r, dict) else r
                    for r in value
                ]
            await self._write(key, value)
            logger.info(f"Seeded collection '{key}'")
        return value

    # =========================================================================
    # PUBLIC OPERATIONS
    # =========================================================================

    async def get(self, key: str, seed_default: Any) -> Any:
        """
        Return the value stored under `key`.

        If the key has never been written, `seed_default` is persisted and
        returned. Later calls return the stored value, never the seed.
        """
        async with self._lock(key):
            return await self._get_or_seed(key, seed_default)

    async def set(self, key: str, value: Any) -> None:
        """Overwrite the value under `key` wholesale"""
        async with self._lock(key):
            await self._write(key, value)

    async def add_item(
        self,
        key: str,
        item: Dict[str, Any],
        seed_default: List[Dict[str, Any]],
        id_field: str = "id",
    ) -> List[Dict[str, Any]]:
        """
        Append `item` to the collection and return the new collection.

        Raises:
            DuplicateIdError: if a record with the same id already exists
        """
        async with self._lock(key):
            items = await self._get_or_seed(key, seed_default)
            record = _normalize_record(item, id_field)
            if id_field in record and any(_matches(r, id_field, record[id_field]) for r in items):
                raise DuplicateIdError(key, record[id_field])
            updated = items + [record]
            await self._write(key, updated)
            return updated

    async def modify(
        self,
        key: str,
        fn: Callable[[Any], Any],
        seed_default: Any,
    ) -> Any:
        """
        Replace the value under `key` with `fn(current)` and return it.

        The read, `fn` and the write run under the key's lock, so no other
        operation on the key can interleave. If `fn` raises, nothing is
        written.
        """
        async with self._lock(key):
            current = await self._get_or_seed(key, seed_default)
            updated = fn(current)
            await self._write(key, updated)
            return updated

    async def update_item(
        self,
        key: str,
        record_id: Any,
        patch: Dict[str, Any],
        seed_default: List[Dict[str, Any]],
        id_field: str = "id",
    ) -> List[Dict[str, Any]]:
        """
        Merge `patch` into the record with `record_id`.

        Fields absent from `patch` are left untouched. The id itself is never
        rewritten. An unknown id leaves the collection unchanged.
        """
        record_id = normalize_id(record_id)
        patch = {k: v for k, v in patch.items() if k != id_field}

        async with self._lock(key):
            items = await self._get_or_seed(key, seed_default)
            found = False
            updated = []
            for record in items:
                if _matches(record, id_field, record_id):
                    record = {**record, **patch}
                    found = True
                updated.append(record)

            if not found:
                logger.debug(f"No record '{record_id}' in '{key}', nothing updated")
                return items

            await self._write(key, updated)
            return updated

    async def delete_item(
        self,
        key: str,
        record_id: Any,
        seed_default: List[Dict[str, Any]],
        id_field: str = "id",
    ) -> List[Dict[str, Any]]:
        """Remove every record matching `record_id` and return what remains"""
        record_id = normalize_id(record_id)

        async with self._lock(key):
            items = await self._get_or_seed(key, seed_default)
            remaining = [r for r in items if not _matches(r, id_field, record_id)]
            await self._write(key, remaining)
            return remaining

    # =========================================================================
    # HOUSEKEEPING
    # =========================================================================

    async def keys(self) -> List[str]:
        """Collection keys present in the backend (namespace stripped)"""
        stored = await self.backend.keys(self.namespace)
        return [k[len(self.namespace):] for k in stored]

    async def remove(self, key: str) -> None:
        """Drop a key entirely; the next `get` seeds it again"""
        async with self._lock(key):
            await self.backend.remove(self._storage_key(key))

    async def stats(self) -> Dict[str, int]:
        """Number of keys and total serialized size of this namespace"""
        keys = await self.backend.keys(self.namespace)
        used = 0
        for storage_key in keys:
            raw = await self.backend.read(storage_key)
            used += len((raw or "").encode('utf-8'))
        return {"count": len(keys), "used": used}

    async def clear(self) -> int:
        """Remove every key in this namespace. Returns the number removed."""
        keys = await self.backend.keys(self.namespace)
        for storage_key in keys:
            await self.backend.remove(storage_key)
        self._locks.clear()
        logger.info(f"Cleared {len(keys)} keys from namespace '{self.namespace}'")
        return len(keys)

    async def close(self) -> None:
        await self.backend.close()
