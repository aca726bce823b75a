"""
Tests for the in-memory store and the Store protocol.
"""

from __future__ import annotations

import pytest

from docguard.store import InMemoryStore, Store, supports_shallow_update
from docguard.types import Document


class TestStoreProtocol:
    """Tests for the Store protocol."""

    def test_in_memory_store_is_store(self):
        assert isinstance(InMemoryStore(), Store)

    def test_object_is_not_store(self):
        assert not isinstance(object(), Store)

    def test_supports_shallow_update(self):
        assert supports_shallow_update(InMemoryStore()) is True
        assert supports_shallow_update(object()) is False


class TestInMemoryStore:
    """Tests for InMemoryStore."""

    @pytest.mark.asyncio
    async def test_create_and_read(self):
        store = InMemoryStore()
        created = await store.create("a", {"title": "x"})

        assert created == Document(id="a", attributes={"title": "x"})
        assert await store.read("a") == created

    @pytest.mark.asyncio
    async def test_read_missing_returns_none(self):
        assert await InMemoryStore().read("missing") is None

    @pytest.mark.asyncio
    async def test_create_duplicate_raises(self):
        store = InMemoryStore({"a": {}})
        with pytest.raises(KeyError):
            await store.create("a", {})

    @pytest.mark.asyncio
    async def test_replace(self):
        store = InMemoryStore({"a": {"x": 1, "y": 2}})
        replaced = await store.replace("a", {"x": 3})
        assert replaced.attributes == {"x": 3}

    @pytest.mark.asyncio
    async def test_replace_missing_raises(self):
        with pytest.raises(KeyError):
            await InMemoryStore().replace("a", {})

    @pytest.mark.asyncio
    async def test_shallow_update(self):
        store = InMemoryStore({"a": {"x": 1, "y": 2}})
        updated = await store.shallow_update("a", {"x": 3})
        assert updated.attributes == {"x": 3, "y": 2}

    @pytest.mark.asyncio
    async def test_destroy_is_idempotent(self):
        store = InMemoryStore({"a": {}})
        await store.destroy("a")
        await store.destroy("a")
        assert "a" not in store
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_list_with_query(self):
        store = InMemoryStore({
            "a": {"owner": "alice", "n": 1},
            "b": {"owner": "bob", "n": 2},
            "c": {"n": 3},
        })

        assert [d.id for d in await store.list()] == ["a", "b", "c"]
        assert [d.id for d in await store.list({"owner": "bob"})] == ["b"]
        assert await store.list({"owner": None}) == []

    @pytest.mark.asyncio
    async def test_returned_documents_are_copies(self):
        store = InMemoryStore({"a": {"tags": ["x"]}})

        doc = await store.read("a")
        doc.attributes["tags"].append("y")

        assert (await store.read("a")).attributes == {"tags": ["x"]}
