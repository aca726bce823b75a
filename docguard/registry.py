"""
Resource registry for docguard.

A routing layer typically serves several resources under their slugs. The
ResourceRegistry maps slugs to Resource instances so that the router can
look up the resource for an incoming request.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

from docguard.exceptions import ResourceNotFoundError
from docguard.resource import Resource

logger = logging.getLogger(__name__)


class ResourceRegistry:
    """
    Registry of resources keyed by slug.

    Features:
        - Registration under the resource's own slug or an explicit one
        - Thread-safe operations
        - Warning when a slug is overwritten

    Example:
        >>> registry = ResourceRegistry()
        >>> registry.register(articles)          # under articles.slug
        >>> registry.get("articles")
        Resource(slug='articles', store=InMemoryStore)

    Thread Safety:
        All operations are thread-safe via internal locking.
    """

    def __init__(self) -> None:
        self._resources: dict[str, Resource[Any]] = {}
        self._lock = threading.RLock()

    def register(self, resource: Resource[Any], slug: str | None = None) -> Resource[Any]:
        """
        Register a resource.

        Args:
            resource: The resource to register.
            slug: Slug to register under. Defaults to ``resource.slug``.

        Returns:
            The registered resource.
        """
        slug = slug or resource.slug
        with self._lock:
            if slug in self._resources and self._resources[slug] is not resource:
                logger.warning(f"Overwriting resource registered under '{slug}'")
            self._resources[slug] = resource
            logger.debug(f"Registered resource under '{slug}'")
        return resource

    def get(self, slug: str) -> Resource[Any]:
        """
        Get the resource registered under a slug.

        Raises:
            ResourceNotFoundError: If no resource is registered under ``slug``.
        """
        with self._lock:
            if slug in self._resources:
                return self._resources[slug]
            raise ResourceNotFoundError(slug, sorted(self._resources))

    def has(self, slug: str) -> bool:
        with self._lock:
            return slug in self._resources

    def unregister(self, slug: str) -> bool:
        """
        Unregister the resource under a slug.

        Returns:
            True if a resource was unregistered, False if none was registered.
        """
        with self._lock:
            if slug in self._resources:
                del self._resources[slug]
                logger.debug(f"Unregistered resource '{slug}'")
                return True
            return False

    def slugs(self) -> list[str]:
        """List registered slugs in sorted order."""
        with self._lock:
            return sorted(self._resources)

    def clear(self) -> None:
        with self._lock:
            self._resources.clear()

    def __contains__(self, slug: object) -> bool:
        return self.has(slug)  # type: ignore[arg-type]

    def __len__(self) -> int:
        with self._lock:
            return len(self._resources)
