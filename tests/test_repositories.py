from __future__ import annotations

import asyncio
import time

import pytest

from ksstore.errors import NotFoundError
from ksstore.interfaces import Term
from ksstore.memory_store import InMemoryStore
from ksstore.repositories import AsyncStore


def test_async_store_roundtrip():
    async def _run():
        store = AsyncStore(InMemoryStore("users"))

        created = await store.set("", {"name": "alice", "role": "admin"})
        uid = created["id"]
        assert (await store.get(uid))["name"] == "alice"

        merged = await store.set(uid, {"role": "owner"})
        assert merged == {"id": uid, "name": "alice", "role": "owner"}

        await store.set("", {"name": "bob", "role": "viewer"})
        assert len(await store.all()) == 2
        owners = await store.query(Term(field="role", op="==", value="owner"))
        assert [r["id"] for r in owners] == [uid]

        removed = await store.delete(uid)
        assert removed["name"] == "alice"
        with pytest.raises(NotFoundError):
            await store.get(uid)

    asyncio.run(_run())


def test_async_store_delegates_table_and_client():
    backing = InMemoryStore("users")
    store = AsyncStore(backing)

    store.set_table("orders")
    assert backing.table == "orders"
    assert store.client() is backing.client()
    assert store.store is backing


def test_async_store_honours_caller_deadline():
    class SlowStore(InMemoryStore):
        def all(self, *, timeout=None):
            time.sleep(0.5)
            return super().all(timeout=timeout)

    async def _run():
        store = AsyncStore(SlowStore("users"))
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(store.all(), timeout=0.05)

    asyncio.run(_run())
