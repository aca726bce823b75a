"""
Attribute validation for docguard.

Resources can be given an attribute validator that checks the shape of
incoming attributes before they are authorized and stored. Validation
failures raise SchemaValidationError.

The Pydantic validator requires the pydantic package to be installed::

    pip install docguard[pydantic]
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from docguard.exceptions import SchemaValidationError

logger = logging.getLogger(__name__)

# Check if Pydantic is available
try:
    from pydantic import BaseModel, ValidationError
    HAS_PYDANTIC = True
except ImportError:
    HAS_PYDANTIC = False
    BaseModel = None  # type: ignore
    ValidationError = None  # type: ignore


@runtime_checkable
class AttributeValidator(Protocol):
    """
    Protocol for attribute validators.

    ``validate`` receives the full attribute mapping that is about to be
    written and raises SchemaValidationError if it is invalid.
    """

    def validate(self, attributes: Mapping[str, Any], resource: str | None = None) -> None:
        ...


class PydanticAttributeValidator:
    """
    Validate document attributes against a Pydantic model.

    Validation only checks the attributes; the original mapping is what gets
    stored, so coercions performed by the model are not persisted.

    Example:
        >>> from pydantic import BaseModel
        >>>
        >>> class Article(BaseModel):
        ...     title: str
        ...     body: str = ""
        >>>
        >>> resource = Resource(
        ...     store=InMemoryStore(),
        ...     validator=PydanticAttributeValidator(Article),
        ... )
    """

    def __init__(self, model: type[BaseModel], strict: bool = False) -> None:
        """
        Initialize the validator.

        Args:
            model: The Pydantic model describing valid attributes.
            strict: If True, use Pydantic strict mode (no type coercion).

        Raises:
            ImportError: If pydantic is not installed.
        """
        if not HAS_PYDANTIC:
            raise ImportError(
                "Pydantic is not installed. Install with: pip install docguard[pydantic]"
            )
        self.model = model
        self.strict = strict

    def validate(self, attributes: Mapping[str, Any], resource: str | None = None) -> None:
        try:
            self.model.model_validate(dict(attributes), strict=self.strict)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(part) for part in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            ]
            logger.debug(f"Attribute validation failed for '{resource}': {errors}")
            raise SchemaValidationError(resource=resource, validation_errors=errors) from e
