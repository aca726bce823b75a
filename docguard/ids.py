"""
Document identifier helpers for docguard.

Resources generate identifiers for new documents themselves, so callers
never choose the id of a document they create.
"""

from __future__ import annotations

import re
import uuid
from enum import Enum
from typing import Any

from docguard.exceptions import BadRequestError


class UuidVersion(str, Enum):
    """UUID versions accepted by :func:`is_uuid_string`."""

    V4 = "v4"
    V5 = "v5"
    ANY = "any"


_UUID_PATTERNS: dict[UuidVersion, re.Pattern[str]] = {
    UuidVersion.V4: re.compile(
        r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
        re.IGNORECASE,
    ),
    UuidVersion.V5: re.compile(
        r"^[0-9a-f]{8}-[0-9a-f]{4}-5[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
        re.IGNORECASE,
    ),
    UuidVersion.ANY: re.compile(
        r"^[0-9a-f]{8}-[0-9a-f]{4}-[45][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
        re.IGNORECASE,
    ),
}


def generate_id() -> str:
    """Generate a random lower-case UUID v4 string."""
    return str(uuid.uuid4())


def is_uuid_string(value: Any, version: UuidVersion = UuidVersion.ANY) -> bool:
    """
    Check if a value is a string representation of a UUID.

    Example:
        >>> is_uuid_string("1c8e4d0a-6f1b-4b9e-9f3a-2d2f5c7e8a90")
        True
        >>> is_uuid_string("not-a-uuid")
        False
    """
    return (
        isinstance(value, str)
        and 32 <= len(value) <= 36
        and _UUID_PATTERNS[UuidVersion(version)].match(value) is not None
    )


def assert_uuid(value: Any, version: UuidVersion = UuidVersion.ANY) -> str:
    """
    Return the lower-case form of a UUID string.

    Raises:
        BadRequestError: If ``value`` is not a UUID of the given version.
    """
    if not is_uuid_string(value, version):
        raise BadRequestError(
            "Not a valid UUID",
            details={"value": str(value), "version": UuidVersion(version).value},
        )
    return value.lower()
