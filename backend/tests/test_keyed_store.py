"""
KeyedStore Tests
================

Key invariants tested:
1. Seeding happens once; later reads return stored data, never the seed
2. add/update/delete keep every other record untouched
3. Ids match by strict string equality after normalization (1 == "1")
4. A failed write (quota, serialization) leaves the previous value in place
5. Concurrent adds on one key lose nothing
"""
import asyncio
import json

import pytest

from services.blob_store import MemoryBlobBackend, StorageQuotaExceeded
from services.keyed_store import DuplicateIdError, KeyedStore, SerializationError

SEED = [
    {"id": "1", "name": "Auth System", "status": "Done"},
    {"id": "2", "name": "Billing", "status": "In Progress"},
]


# ============================================================================
# SEEDING
# ============================================================================

async def test_first_get_persists_seed(store, backend):
    value = await store.get("features", SEED)

    assert value == SEED
    assert json.loads(backend.data["startupos_features"]) == SEED


async def test_seed_is_not_shared_with_caller(store):
    seed = [{"id": "1", "tags": ["a"]}]
    value = await store.get("things", seed)
    value[0]["tags"].append("b")

    assert seed == [{"id": "1", "tags": ["a"]}]


async def test_seeding_is_idempotent(store):
    await store.set("features", [{"id": "9", "name": "Stored"}])

    value = await store.get("features", SEED)

    assert value == [{"id": "9", "name": "Stored"}]


async def test_empty_list_is_stored_not_reseeded(store):
    await store.get("features", SEED)
    await store.delete_item("features", "1", SEED)
    await store.delete_item("features", "2", SEED)

    assert await store.get("features", SEED) == []


async def test_seed_ids_are_normalized(store):
    value = await store.get("tickets", [{"id": 101, "subject": "Login"}])

    assert value == [{"id": "101", "subject": "Login"}]


# ============================================================================
# ITEM OPERATIONS
# ============================================================================

async def test_add_item_appends(store):
    items = await store.add_item("features", {"id": "3", "name": "Dark Mode"}, SEED)

    assert [i["id"] for i in items] == ["1", "2", "3"]
    assert await store.get("features", SEED) == items


async def test_add_item_rejects_duplicate_id(store):
    with pytest.raises(DuplicateIdError) as exc_info:
        await store.add_item("features", {"id": 1, "name": "Again"}, SEED)

    assert exc_info.value.record_id == "1"
    assert len(await store.get("features", SEED)) == 2


async def test_update_item_merges_patch(store):
    items = await store.update_item("features", "2", {"status": "Done"}, SEED)

    assert items[1] == {"id": "2", "name": "Billing", "status": "Done"}
    assert items[0] == SEED[0]


async def test_update_item_never_rewrites_id(store):
    items = await store.update_item("features", "1", {"id": "99", "status": "Backlog"}, SEED)

    assert items[0]["id"] == "1"
    assert items[0]["status"] == "Backlog"


async def test_update_unknown_id_changes_nothing(store, backend):
    await store.get("features", SEED)
    before = backend.data["startupos_features"]

    items = await store.update_item("features", "404", {"status": "Done"}, SEED)

    assert items == SEED
    assert backend.data["startupos_features"] == before


async def test_delete_item_removes_only_match(store):
    items = await store.delete_item("features", "1", SEED)

    assert items == [SEED[1]]


async def test_integer_and_string_ids_match(store):
    await store.add_item("notes", {"id": 7, "text": "int id"}, [])

    updated = await store.update_item("notes", "7", {"text": "patched"}, [])
    assert updated == [{"id": "7", "text": "patched"}]

    remaining = await store.delete_item("notes", 7, [])
    assert remaining == []


async def test_custom_id_field(store):
    seed = [{"table": "users", "rowCount": 1}]

    items = await store.update_item("schemas", "users", {"rowCount": 2}, seed, id_field="table")

    assert items == [{"table": "users", "rowCount": 2}]


async def test_invalid_id_raises_value_error(store):
    with pytest.raises(ValueError):
        await store.update_item("features", None, {"status": "Done"}, SEED)


async def test_modify_rewrites_whole_value(store):
    items = await store.modify("features", lambda items: [i for i in items if i["id"] != "1"], SEED)

    assert items == [SEED[1]]
    assert await store.get("features", SEED) == [SEED[1]]


async def test_modify_failure_writes_nothing(store):
    await store.set("features", SEED)

    def boom(items):
        raise RuntimeError("rejected")

    with pytest.raises(RuntimeError):
        await store.modify("features", boom, SEED)

    assert await store.get("features", SEED) == SEED


# ============================================================================
# FAILURES
# ============================================================================

async def test_quota_exceeded_keeps_previous_value():
    store = KeyedStore(MemoryBlobBackend(quota_bytes=200))
    await store.set("notes", [{"id": "1", "text": "short"}])

    with pytest.raises(StorageQuotaExceeded):
        await store.add_item("notes", {"id": "2", "text": "x" * 500}, [])

    assert await store.get("notes", []) == [{"id": "1", "text": "short"}]


async def test_unserializable_value_raises(store):
    with pytest.raises(SerializationError):
        await store.set("bad", {"when": object()})

    assert await store.keys() == []


async def test_corrupt_stored_value_raises(store, backend):
    backend.data["startupos_broken"] = "{not json"

    with pytest.raises(SerializationError):
        await store.get("broken", [])


# ============================================================================
# CONCURRENCY & HOUSEKEEPING
# ============================================================================

async def test_concurrent_adds_lose_nothing(store):
    await asyncio.gather(*[
        store.add_item("tickets", {"id": str(n), "subject": f"Ticket {n}"}, [])
        for n in range(25)
    ])

    items = await store.get("tickets", [])
    assert sorted(int(i["id"]) for i in items) == list(range(25))


async def test_modify_does_not_lose_concurrent_add():
    class YieldingBackend(MemoryBlobBackend):
        async def read(self, key):
            await asyncio.sleep(0)
            return await super().read(key)

    store = KeyedStore(YieldingBackend())

    def mark_done(items):
        return [{**i, "status": "Done"} for i in items]

    await asyncio.gather(
        store.modify("features", mark_done, SEED),
        store.add_item("features", {"id": "3", "name": "Dark Mode"}, SEED),
    )

    assert [i["id"] for i in await store.get("features", SEED)] == ["1", "2", "3"]


async def test_clear_only_touches_namespace(backend):
    store = KeyedStore(backend)
    other = KeyedStore(backend, namespace="other_")
    await store.set("a", [1])
    await store.set("b", [2])
    await other.set("a", [3])

    removed = await store.clear()

    assert removed == 2
    assert await store.keys() == []
    assert await other.keys() == ["a"]


async def test_stats_counts_keys_and_bytes(store):
    await store.set("a", [1, 2])
    await store.set("b", {"x": "y"})

    stats = await store.stats()

    assert stats["count"] == 2
    assert stats["used"] == len(json.dumps([1, 2])) + len(json.dumps({"x": "y"}))


async def test_stats_counts_utf8_bytes():
    backend = MemoryBlobBackend(quota_bytes=1024)
    store = KeyedStore(backend)
    await store.set("names", ["caf\u00e9"])

    raw = backend.data["startupos_names"]
    assert raw == '["caf\u00e9"]'
    assert (await store.stats())["used"] == len(raw) + 1


async def test_remove_then_get_reseeds(store):
    await store.set("features", [])
    await store.remove("features")

    assert await store.get("features", SEED) == SEED
