"""
Access controller for docguard.

An AccessController bundles the four policy hooks used by a Resource:

- ``authorize_collection_action``: collection authorizer, default deny.
- ``authorize_document_action``: document authorizer, default deny.
- ``filter_readable_attributes``: read filter, default allow.
- ``filter_writable_attributes``: write filter, default allow.

Defaults are resolved when the controller is built. An incompletely
configured controller therefore fails closed on authorization while
leaving field granularity to explicit filters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any

from docguard.access.authorizers import (
    CollectionAuthorizer,
    DocumentAuthorizer,
    permissive_collection_authorizer,
    permissive_document_authorizer,
    restrictive_collection_authorizer,
    restrictive_document_authorizer,
)
from docguard.access.filters import (
    AttributeFilter,
    permissive_attribute_filter,
    restrictive_attribute_filter,
)
from docguard.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessController:
    """
    Immutable bundle of the policy hooks for one resource type.

    Fields left as None are replaced with their defaults in
    ``__post_init__``, so every hook on a constructed controller is callable.

    Example:
        >>> controller = AccessController(
        ...     authorize_collection_action=allow_collection_actions("create", "list"),
        ...     authorize_document_action=owner_only,
        ...     filter_writable_attributes=deny_attributes(["owner_id"]),
        ... )
    """
    authorize_collection_action: CollectionAuthorizer | None = None
    authorize_document_action: DocumentAuthorizer | None = None
    filter_readable_attributes: AttributeFilter | None = None
    filter_writable_attributes: AttributeFilter | None = None

    def __post_init__(self) -> None:
        defaults = {
            "authorize_collection_action": restrictive_collection_authorizer,
            "authorize_document_action": restrictive_document_authorizer,
            "filter_readable_attributes": permissive_attribute_filter,
            "filter_writable_attributes": permissive_attribute_filter,
        }
        for name, default in defaults.items():
            hook = getattr(self, name)
            if hook is None:
                object.__setattr__(self, name, default)
            elif not callable(hook):
                raise ConfigurationError(
                    config_key=name,
                    expected="a callable",
                    received=hook,
                )

    def with_overrides(self, **hooks: Any) -> AccessController:
        """Return a new controller with some hooks replaced."""
        known = {f.name for f in fields(self)}
        unknown = set(hooks) - known
        if unknown:
            raise ConfigurationError(
                config_key=", ".join(sorted(unknown)),
                expected=f"one of: {', '.join(sorted(known))}",
            )
        return replace(self, **hooks)


def create_access_controller(**hooks: Any) -> AccessController:
    """
    Create a complete access controller from a partial set of hooks.

    Unknown hook names raise ConfigurationError rather than being ignored.
    """
    return AccessController().with_overrides(**hooks)


def permissive_access_controller() -> AccessController:
    """
    Create a controller that allows everything.

    WARNING: intended for tests and prototypes only.
    """
    logger.debug("Creating permissive access controller")
    return AccessController(
        authorize_collection_action=permissive_collection_authorizer,
        authorize_document_action=permissive_document_authorizer,
        filter_readable_attributes=permissive_attribute_filter,
        filter_writable_attributes=permissive_attribute_filter,
    )


def restrictive_access_controller() -> AccessController:
    """Create a controller that forbids every action and hides every attribute."""
    return AccessController(
        authorize_collection_action=restrictive_collection_authorizer,
        authorize_document_action=restrictive_document_authorizer,
        filter_readable_attributes=restrictive_attribute_filter,
        filter_writable_attributes=restrictive_attribute_filter,
    )
