"""
Document stores for docguard.

Resources reach storage only through the Store protocol. InMemoryStore is a
reference implementation suitable for tests.
"""

from docguard.store.base import Store, supports_shallow_update
from docguard.store.memory import InMemoryStore

__all__ = [
    "InMemoryStore",
    "Store",
    "supports_shallow_update",
]
