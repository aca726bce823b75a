"""
Collection and document authorizers for docguard.

A collection authorizer decides whether a session may perform an action on a
collection as a whole, before any document is touched::

    authorize(session, action) -> bool

A document authorizer decides whether a session may perform an action on a
single document::

    authorize(session, action, new_attributes=None, old_attributes=None) -> bool

The document authorizer is called in two modes. In pre-load mode only
``new_attributes`` (the incoming payload, if any) is given; in post-load mode
``old_attributes`` holds the stored attributes as well. Both kinds may be
plain functions or coroutine functions.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any, Optional, Union

CollectionAuthorizer = Callable[[Any, str], Union[bool, Awaitable[bool]]]

DocumentAuthorizer = Callable[
    [Any, str, Optional[Mapping[str, Any]], Optional[Mapping[str, Any]]],
    Union[bool, Awaitable[bool]],
]


async def permissive_collection_authorizer(session: Any, action: str) -> bool:
    """Allow every collection action."""
    return True


async def restrictive_collection_authorizer(session: Any, action: str) -> bool:
    """Forbid every collection action."""
    return False


async def permissive_document_authorizer(
    session: Any,
    action: str,
    new_attributes: Mapping[str, Any] | None = None,
    old_attributes: Mapping[str, Any] | None = None,
) -> bool:
    """Allow every document action."""
    return True


async def restrictive_document_authorizer(
    session: Any,
    action: str,
    new_attributes: Mapping[str, Any] | None = None,
    old_attributes: Mapping[str, Any] | None = None,
) -> bool:
    """Forbid every document action."""
    return False


def allow_collection_actions(*actions: str) -> CollectionAuthorizer:
    """
    Build a collection authorizer allowing only the named actions.

    Example:
        >>> controller = create_access_controller(
        ...     authorize_collection_action=allow_collection_actions("list"),
        ... )
    """
    allowed = frozenset(str(action) for action in actions)

    async def _authorize(session: Any, action: str) -> bool:
        return action in allowed

    return _authorize
