"""
Pytest fixtures for docguard tests.

Provides common fixtures used across all test modules.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from docguard import (
    AccessController,
    Document,
    InMemoryStore,
    Resource,
    ResourceConfig,
    permissive_access_controller,
)


# ============================================================================
# Session Fixtures
# ============================================================================


@dataclass(frozen=True)
class Session:
    """Minimal session object used by the tests."""
    id: str | None
    roles: tuple[str, ...] = field(default_factory=tuple)


@pytest.fixture
def owner() -> Session:
    """Create the session owning the seeded document."""
    return Session(id="alice", roles=("user",))


@pytest.fixture
def stranger() -> Session:
    """Create a session that owns nothing."""
    return Session(id="mallory", roles=("user",))


@pytest.fixture
def anonymous() -> Session:
    """Create an unauthenticated session."""
    return Session(id=None)


# ============================================================================
# Store Fixtures
# ============================================================================


class SpyStore(InMemoryStore):
    """InMemoryStore recording every call made to it."""

    def __init__(self, documents: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        super().__init__(documents)
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    async def create(self, id: str, attributes: Mapping[str, Any]) -> Document:
        self.calls.append(("create", (id, dict(attributes))))
        return await super().create(id, attributes)

    async def read(self, id: str) -> Document | None:
        self.calls.append(("read", (id,)))
        return await super().read(id)

    async def replace(self, id: str, attributes: Mapping[str, Any]) -> Document:
        self.calls.append(("replace", (id, dict(attributes))))
        return await super().replace(id, attributes)

    async def shallow_update(self, id: str, partial: Mapping[str, Any]) -> Document:
        self.calls.append(("shallow_update", (id, dict(partial))))
        return await super().shallow_update(id, partial)

    async def destroy(self, id: str) -> None:
        self.calls.append(("destroy", (id,)))
        await super().destroy(id)

    async def list(self, query: Any = None) -> list[Document]:
        self.calls.append(("list", (query,)))
        return await super().list(query)

    @property
    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


class ReplaceOnlyStore:
    """Store without shallow_update, delegating to an InMemoryStore."""

    def __init__(self, documents: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self.inner = InMemoryStore(documents)
        self.replaced: list[tuple[str, dict[str, Any]]] = []

    async def create(self, id: str, attributes: Mapping[str, Any]) -> Document:
        return await self.inner.create(id, attributes)

    async def read(self, id: str) -> Document | None:
        return await self.inner.read(id)

    async def replace(self, id: str, attributes: Mapping[str, Any]) -> Document:
        self.replaced.append((id, dict(attributes)))
        return await self.inner.replace(id, attributes)

    async def destroy(self, id: str) -> None:
        await self.inner.destroy(id)

    async def list(self, query: Any = None) -> list[Document]:
        return await self.inner.list(query)


DOC_ID = "doc-1"


@pytest.fixture
def seeded_documents() -> dict[str, dict[str, Any]]:
    """Documents present in the store before each test."""
    return {
        DOC_ID: {"title": "First", "secret": "s3cr3t", "owner_id": "alice"},
        "doc-2": {"title": "Second", "secret": "hidden", "owner_id": "bob"},
    }


@pytest.fixture
def spy_store(seeded_documents: dict[str, dict[str, Any]]) -> SpyStore:
    """Create a recording store seeded with two documents."""
    return SpyStore(seeded_documents)


# ============================================================================
# Resource Fixtures
# ============================================================================


@pytest.fixture
def make_resource(spy_store: SpyStore):
    """Factory building a Resource over the spy store."""
    def _make(
        access_controller: AccessController | None = None,
        store: Any = None,
        **config: Any,
    ) -> Resource[Session]:
        return Resource(
            store=store if store is not None else spy_store,
            access_controller=access_controller or permissive_access_controller(),
            config=ResourceConfig(slug="articles", **config),
        )
    return _make


@pytest.fixture
def open_resource(make_resource) -> Resource[Session]:
    """Create a resource with a permissive access controller."""
    return make_resource()
