"""
Store protocol for docguard.

A store persists documents for one resource. The access-control pipeline
only talks to storage through this interface.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from docguard.types import Document


@runtime_checkable
class Store(Protocol):
    """
    Protocol for document stores.

    Stores may additionally define ``shallow_update(id, partial)``, which
    receives only the changed attributes of a patch and returns the updated
    document. Resources use it when present.

    Example:
        >>> class DictStore:
        ...     async def create(self, id, attributes): ...
        ...     async def read(self, id): ...
        ...     async def replace(self, id, attributes): ...
        ...     async def destroy(self, id): ...
        ...     async def list(self, query=None): ...
        >>>
        >>> isinstance(DictStore(), Store)
        True
    """

    async def create(self, id: str, attributes: Mapping[str, Any]) -> Document:
        """Create a new document."""
        ...

    async def read(self, id: str) -> Document | None:
        """Load a document, or None if it does not exist."""
        ...

    async def replace(self, id: str, attributes: Mapping[str, Any]) -> Document:
        """Replace all attributes of an existing document."""
        ...

    async def destroy(self, id: str) -> None:
        """Delete a document."""
        ...

    async def list(self, query: Any = None) -> list[Document]:
        """List documents matching a store-specific query."""
        ...


def supports_shallow_update(store: Any) -> bool:
    """Check whether a store provides the optional ``shallow_update`` method."""
    return callable(getattr(store, "shallow_update", None))
