"""
Core type definitions for docguard.

This module defines the document value type, the session type variable and
the names of the built-in actions and pipeline stages.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

# Opaque session supplied by the caller. The core never inspects it.
S = TypeVar("S")

Attributes = Mapping[str, Any]


@dataclass(frozen=True)
class Document:
    """
    A stored document: an id plus a mapping of attribute names to values.

    Documents are never mutated in place. Filtering produces a copy via
    :meth:`with_attributes`.

    Attributes:
        id: Identifier of the document within its collection.
        attributes: Attribute values keyed by name.

    Example:
        >>> doc = Document(id="a1", attributes={"title": "Hello"})
        >>> doc.with_attributes({}).attributes
        {}
    """
    id: str
    attributes: Attributes = field(default_factory=dict)

    def with_attributes(self, attributes: Attributes) -> Document:
        """Return a copy of this document with different attributes."""
        return Document(id=self.id, attributes=dict(attributes))

    def get(self, key: str, default: Any = None) -> Any:
        """Get an attribute value with optional default."""
        return self.attributes.get(key, default)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "attributes": dict(self.attributes),
        }


class Action(str, Enum):
    """Names of the built-in actions passed to authorizers."""

    CREATE = "create"
    READ = "read"
    REPLACE = "replace"
    PATCH = "patch"
    DESTROY = "destroy"
    LIST = "list"

    def __str__(self) -> str:
        return self.value


class Stage(Enum):
    """Stages of the resource pipeline, in the vocabulary of the runner."""

    AUTHORIZE_COLLECTION = "authorize_collection"
    ASSERT_WRITABLE = "assert_writable"
    VALIDATE = "validate"
    LOAD = "load"
    ASSERT_EXISTING_WRITABLE = "assert_existing_writable"
    MERGE = "merge"
    AUTHORIZE_DOCUMENT = "authorize_document"
    STORE_CREATE = "store_create"
    STORE_REPLACE = "store_replace"
    STORE_PATCH = "store_patch"
    STORE_DESTROY = "store_destroy"
    STORE_LIST = "store_list"
    FILTER_READABLE = "filter_readable"
