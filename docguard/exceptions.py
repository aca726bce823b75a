"""
Custom exceptions for docguard.

This module defines the exception hierarchy raised by the access-control
pipeline. Every exception carries a status code so that a routing layer can
translate it into a protocol response without inspecting its type.
"""

from __future__ import annotations

from typing import Any


class DocguardError(Exception):
    """
    Base exception for all docguard errors.

    Attributes:
        message: Human-readable error description.
        details: Additional context about the error.
        status: HTTP-style status code suggested for the error.

    Example:
        >>> try:
        ...     await resource.read(session, doc_id)
        ... except DocguardError as e:
        ...     return json_response(e.to_dict(), status=e.status)
    """

    status: int = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "status": self.status,
            "message": self.message,
            "details": self.details,
        }


class ForbiddenError(DocguardError):
    """
    Raised when a session is not authorized to perform an action.

    Both collection-level and document-level denials raise this error, as
    does an authorizer that fails with an exception of its own.

    Attributes:
        action: The action that was attempted (e.g. "create", "read").
        resource: Slug of the resource collection, if known.

    Example:
        >>> raise ForbiddenError(action="destroy", resource="articles")
    """

    status = 403

    def __init__(
        self,
        message: str | None = None,
        action: str | None = None,
        resource: str | None = None,
    ) -> None:
        self.action = action
        self.resource = resource

        if message is None:
            message = "Forbidden"
            if action:
                message = f"Forbidden: action '{action}'"
                if resource:
                    message += f" on resource '{resource}'"

        details: dict[str, Any] = {}
        if action:
            details["action"] = action
        if resource:
            details["resource"] = resource
        super().__init__(message, details)


class UnwritableAttributesError(ForbiddenError):
    """
    Raised when submitted attributes fail the write filter.

    The error lists every offending key at once so that callers can fix
    the whole payload in a single round trip.

    Attributes:
        keys: Names of all attributes the session may not write.

    Example:
        >>> raise UnwritableAttributesError(["secret", "owner_id"])
    """

    def __init__(self, keys: list[str], resource: str | None = None) -> None:
        self.keys = list(keys)
        super().__init__(
            f"Unwritable attributes: {','.join(self.keys)}",
            resource=resource,
        )
        self.details["keys"] = self.keys


class NotFoundError(DocguardError):
    """
    Raised when a document operation targets a nonexistent id.

    Attributes:
        document_id: The id that could not be loaded.
        resource: Slug of the resource collection, if known.
    """

    status = 404

    def __init__(self, document_id: str | None = None, resource: str | None = None) -> None:
        self.document_id = document_id
        self.resource = resource

        message = "Not Found"
        if document_id is not None:
            message = f"Document '{document_id}' not found"
            if resource:
                message += f" in resource '{resource}'"

        details: dict[str, Any] = {}
        if document_id is not None:
            details["document_id"] = document_id
        if resource:
            details["resource"] = resource
        super().__init__(message, details)


class BadRequestError(DocguardError):
    """Raised when a request argument is malformed, such as an invalid id."""

    status = 400

    def __init__(self, message: str = "Bad Request", details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)


class SchemaValidationError(BadRequestError):
    """
    Raised when document attributes fail validation.

    Attributes:
        resource: Slug of the resource collection, if known.
        validation_errors: List of all validation errors found.

    Example:
        >>> raise SchemaValidationError(
        ...     resource="articles",
        ...     validation_errors=["title: Field required"],
        ... )
    """

    def __init__(
        self,
        resource: str | None = None,
        validation_errors: list[str] | None = None,
    ) -> None:
        self.resource = resource
        self.validation_errors = validation_errors or []

        message = "Invalid attributes"
        if resource:
            message += f" for resource '{resource}'"

        details = {
            "resource": resource,
            "validation_errors": self.validation_errors,
        }
        super().__init__(message, details)


class ConfigurationError(DocguardError):
    """
    Raised when docguard objects are constructed with invalid arguments.

    Attributes:
        config_key: The configuration key that has an issue.
        expected: What was expected for this configuration.
        received: What was actually provided.

    Example:
        >>> raise ConfigurationError(
        ...     config_key="authorize_collection_action",
        ...     expected="a callable",
        ...     received="yes",
        ... )
    """

    def __init__(
        self,
        config_key: str,
        expected: str | None = None,
        received: Any = None,
    ) -> None:
        self.config_key = config_key
        self.expected = expected
        self.received = received

        message = f"Configuration error for '{config_key}'"
        if expected:
            message += f": expected {expected}"
        if received is not None:
            message += f", got {received!r}"

        details = {
            "config_key": config_key,
            "expected": expected,
            "received": str(received) if received is not None else None,
        }
        super().__init__(message, details)


class ResourceNotFoundError(DocguardError):
    """
    Raised when a registry lookup names an unregistered resource.

    Attributes:
        slug: The slug that was looked up.
        available: Slugs registered at the time of the lookup.
    """

    status = 404

    def __init__(self, slug: str, available: list[str] | None = None) -> None:
        self.slug = slug
        self.available = available or []

        message = f"No resource registered under '{slug}'"
        if self.available:
            message += f". Available resources: {', '.join(self.available)}"

        details = {
            "slug": slug,
            "available": self.available,
        }
        super().__init__(message, details)
