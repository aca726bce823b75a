"""
In-memory store for docguard.

A reference Store keeping documents in a dictionary. It is intended for
tests, prototypes and as an example for writing real stores.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from collections.abc import Mapping
from typing import Any

from docguard.types import Document

logger = logging.getLogger(__name__)


class InMemoryStore:
    """
    Store keeping documents in process memory.

    Attribute mappings are deep-copied on the way in and on the way out, so
    callers can never modify stored state through a returned document.

    Features:
        - Optional ``shallow_update`` for patches
        - Equality-filter list queries
        - Mutations serialized with an asyncio.Lock

    Example:
        >>> store = InMemoryStore()
        >>> await store.create("a1", {"title": "Hello"})
        Document(id='a1', attributes={'title': 'Hello'})
        >>> await store.list({"title": "Hello"})
        [Document(id='a1', attributes={'title': 'Hello'})]
    """

    def __init__(self, documents: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        """
        Initialize the store.

        Args:
            documents: Optional initial documents keyed by id.
        """
        self._documents: dict[str, dict[str, Any]] = {
            doc_id: copy.deepcopy(dict(attributes))
            for doc_id, attributes in (documents or {}).items()
        }
        self._lock = asyncio.Lock()

    def _snapshot(self, doc_id: str) -> Document:
        return Document(id=doc_id, attributes=copy.deepcopy(self._documents[doc_id]))

    async def create(self, id: str, attributes: Mapping[str, Any]) -> Document:
        async with self._lock:
            if id in self._documents:
                raise KeyError(f"Document '{id}' already exists")
            self._documents[id] = copy.deepcopy(dict(attributes))
            logger.debug(f"Created document '{id}'")
            return self._snapshot(id)

    async def read(self, id: str) -> Document | None:
        if id not in self._documents:
            return None
        return self._snapshot(id)

    async def replace(self, id: str, attributes: Mapping[str, Any]) -> Document:
        async with self._lock:
            if id not in self._documents:
                raise KeyError(f"Document '{id}' does not exist")
            self._documents[id] = copy.deepcopy(dict(attributes))
            logger.debug(f"Replaced document '{id}'")
            return self._snapshot(id)

    async def shallow_update(self, id: str, partial: Mapping[str, Any]) -> Document:
        """Update only the given attributes of an existing document."""
        async with self._lock:
            if id not in self._documents:
                raise KeyError(f"Document '{id}' does not exist")
            self._documents[id].update(copy.deepcopy(dict(partial)))
            logger.debug(f"Updated {len(partial)} attribute(s) of document '{id}'")
            return self._snapshot(id)

    async def destroy(self, id: str) -> None:
        async with self._lock:
            self._documents.pop(id, None)
            logger.debug(f"Destroyed document '{id}'")

    async def list(self, query: Mapping[str, Any] | None = None) -> list[Document]:
        """
        List documents, optionally filtered by attribute equality.

        Args:
            query: Mapping of attribute names to required values. Documents
                missing an attribute never match it.
        """
        criteria = dict(query or {})
        return [
            self._snapshot(doc_id)
            for doc_id, attributes in self._documents.items()
            if all(
                key in attributes and attributes[key] == value
                for key, value in criteria.items()
            )
        ]

    def __len__(self) -> int:
        return len(self._documents)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._documents
