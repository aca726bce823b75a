"""
Policy base class for docguard.

This module implements a Pundit-inspired policy pattern, letting developers
write the access rules of a resource as one class instead of four separate
hook functions. A policy class turns into an AccessController with
:meth:`Policy.as_access_controller`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Generic

from docguard.access.controller import AccessController
from docguard.types import S
from docguard.utils import maybe_await

logger = logging.getLogger(__name__)


class Policy(Generic[S]):
    """
    Base class for resource policies.

    A policy instance is created per decision with the session being
    authorized. Methods follow a naming convention:

    - ``can_<action>()`` authorizes a collection action such as "create"
      or "list".
    - ``can_<action>_document(new_attributes, old_attributes)`` authorizes
      a document action. ``old_attributes`` is None in pre-load mode.

    Missing methods deny. Methods may be coroutine functions.

    Attribute access is controlled by the ``readable_attributes`` and
    ``writable_attributes`` class attributes (None allows every attribute),
    or by overriding :meth:`can_read_attribute` and
    :meth:`can_write_attribute`.

    Example:
        >>> class ArticlePolicy(Policy):
        ...     writable_attributes = frozenset({"title", "body"})
        ...
        ...     def can_create(self) -> bool:
        ...         return self.session is not None
        ...
        ...     def can_create_document(self, new_attributes, old_attributes) -> bool:
        ...         return True
        ...
        ...     def can_replace_document(self, new_attributes, old_attributes) -> bool:
        ...         return old_attributes["owner_id"] == self.session.user_id
        >>>
        >>> resource = Resource(store, ArticlePolicy.as_access_controller())
    """

    readable_attributes: frozenset[str] | None = None
    writable_attributes: frozenset[str] | None = None

    def __init__(self, session: S) -> None:
        self.session = session

    def authorize_collection(self, action: str) -> Any:
        """Look up and call ``can_<action>``, denying if it is not defined."""
        method = getattr(self, f"can_{action}", None)
        if method is None:
            logger.debug(f"{type(self).__name__}: no can_{action}, denying")
            return False
        return method()

    def authorize_document(
        self,
        action: str,
        new_attributes: Mapping[str, Any] | None = None,
        old_attributes: Mapping[str, Any] | None = None,
    ) -> Any:
        """Look up and call ``can_<action>_document``, denying if it is not defined."""
        method = getattr(self, f"can_{action}_document", None)
        if method is None:
            logger.debug(f"{type(self).__name__}: no can_{action}_document, denying")
            return False
        return method(new_attributes, old_attributes)

    def can_read_attribute(self, key: str) -> bool:
        if self.readable_attributes is None:
            return True
        return key in self.readable_attributes

    def can_write_attribute(self, key: str) -> bool:
        if self.writable_attributes is None:
            return True
        return key in self.writable_attributes

    @classmethod
    def get_available_actions(cls) -> dict[str, list[str]]:
        """
        Get the collection and document actions defined by this policy.

        Example:
            >>> ArticlePolicy.get_available_actions()
            {'collection': ['create'], 'document': ['create', 'replace']}
        """
        collection: list[str] = []
        document: list[str] = []
        for name in dir(cls):
            if not name.startswith("can_") or not callable(getattr(cls, name)):
                continue
            if name in ("can_read_attribute", "can_write_attribute"):
                continue
            if name.endswith("_document"):
                document.append(name[4:-len("_document")])
            else:
                collection.append(name[4:])
        return {"collection": sorted(collection), "document": sorted(document)}

    @classmethod
    def as_access_controller(cls) -> AccessController:
        """Build an AccessController that consults a fresh policy per decision."""

        async def authorize_collection_action(session: Any, action: str) -> bool:
            return bool(await maybe_await(cls(session).authorize_collection(action)))

        async def authorize_document_action(
            session: Any,
            action: str,
            new_attributes: Mapping[str, Any] | None = None,
            old_attributes: Mapping[str, Any] | None = None,
        ) -> bool:
            policy = cls(session)
            return bool(await maybe_await(
                policy.authorize_document(action, new_attributes, old_attributes)
            ))

        def filter_readable_attributes(session: Any, key: str) -> bool:
            return cls(session).can_read_attribute(key)

        def filter_writable_attributes(session: Any, key: str) -> bool:
            return cls(session).can_write_attribute(key)

        return AccessController(
            authorize_collection_action=authorize_collection_action,
            authorize_document_action=authorize_document_action,
            filter_readable_attributes=filter_readable_attributes,
            filter_writable_attributes=filter_writable_attributes,
        )
