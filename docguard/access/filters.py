"""
Attribute filters for docguard.

An attribute filter is a predicate ``(session, key) -> bool`` deciding
whether a session may see (read filter) or set (write filter) a single
attribute. Filters may be plain functions or coroutine functions.

Example:
    >>> def hide_secrets(session, key):
    ...     return key != "secret"
    >>>
    >>> await filter_readable_attributes(session, {"a": 1, "secret": 2}, hide_secrets)
    {'a': 1}
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any, Literal, Union

from docguard.exceptions import (
    ConfigurationError,
    DocguardError,
    ForbiddenError,
    UnwritableAttributesError,
)
from docguard.utils import maybe_await

logger = logging.getLogger(__name__)

AttributeFilter = Callable[[Any, str], Union[bool, Awaitable[bool]]]

# Callback returning the attribute names a session may access, or True for all.
AllowedAttributesFunc = Callable[[Any], Union[Iterable[str], Literal[True]]]


def permissive_attribute_filter(session: Any, key: str) -> bool:
    """Allow every attribute."""
    return True


def restrictive_attribute_filter(session: Any, key: str) -> bool:
    """Allow no attribute."""
    return False


def _key_set(keys: Iterable[str], config_key: str) -> frozenset[str]:
    # A bare string would otherwise become a set of its characters.
    if isinstance(keys, str):
        raise ConfigurationError(
            config_key=config_key,
            expected="an iterable of attribute names, not a string",
            received=keys,
        )
    return frozenset(keys)


def allow_attributes(keys: Iterable[str]) -> AttributeFilter:
    """
    Build a filter allowing only the given attribute names.

    Example:
        >>> readable = allow_attributes(["title", "body"])
        >>> readable(session, "secret")
        False
    """
    allowed = _key_set(keys, "allow_attributes")

    def _filter(session: Any, key: str) -> bool:
        return key in allowed

    return _filter


def deny_attributes(keys: Iterable[str]) -> AttributeFilter:
    """Build a filter allowing every attribute except the given names."""
    denied = _key_set(keys, "deny_attributes")

    def _filter(session: Any, key: str) -> bool:
        return key not in denied

    return _filter


def allow_attributes_for(func: AllowedAttributesFunc) -> AttributeFilter:
    """
    Build a filter from a callback returning a session's allowed attributes.

    The callback receives the session and returns either an iterable of
    attribute names or ``True`` to allow every attribute.

    Example:
        >>> def allowed(session):
        ...     return True if session.is_admin else ["title"]
        >>>
        >>> controller = create_access_controller(
        ...     filter_readable_attributes=allow_attributes_for(allowed),
        ... )
    """

    def _filter(session: Any, key: str) -> bool:
        allowed = func(session)
        if allowed is True:
            return True
        return key in _key_set(allowed, "allow_attributes_for")

    return _filter


async def _is_allowed(
    session: Any,
    key: str,
    attribute_filter: AttributeFilter,
    resource: str | None,
) -> bool:
    """Evaluate a filter, treating an unexpected failure as a denial."""
    try:
        return bool(await maybe_await(attribute_filter(session, key)))
    except DocguardError:
        raise
    except Exception as e:
        logger.warning(f"Attribute filter raised on '{key}': {e}")
        raise ForbiddenError(resource=resource) from e


async def assert_all_attributes_allowed(
    session: Any,
    attributes: Mapping[str, Any],
    attribute_filter: AttributeFilter,
    resource: str | None = None,
) -> None:
    """
    Raise if any attribute key is rejected by the filter.

    Every key is checked before raising, so the error names all rejected
    keys in the order they appear in ``attributes``.

    Args:
        session: The session performing the write.
        attributes: Attributes being written.
        attribute_filter: Write filter to check each key against.
        resource: Slug of the resource, used in the error.

    Raises:
        UnwritableAttributesError: If at least one key is rejected.
        ForbiddenError: If the filter itself fails.
    """
    disallowed = [
        key for key in attributes
        if not await _is_allowed(session, key, attribute_filter, resource)
    ]
    if disallowed:
        logger.debug(f"Rejected unwritable attributes: {disallowed}")
        raise UnwritableAttributesError(disallowed, resource=resource)


async def filter_readable_attributes(
    session: Any,
    attributes: Mapping[str, Any],
    attribute_filter: AttributeFilter,
    resource: str | None = None,
) -> dict[str, Any]:
    """
    Return a new mapping with only the attributes the filter allows.

    Values are kept as they are and ``attributes`` is not modified.

    Raises:
        ForbiddenError: If the filter itself fails.
    """
    result: dict[str, Any] = {}
    for key, value in attributes.items():
        if await _is_allowed(session, key, attribute_filter, resource):
            result[key] = value
    return result
