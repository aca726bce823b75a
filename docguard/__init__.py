"""
docguard: access-controlled document resources.

docguard puts a layered authorization pipeline in front of a document
store. Every operation passes collection-level authorization, per-document
authorization before and after the document is loaded, and attribute-level
read/write filtering.

Basic Usage:
    >>> from docguard import (
    ...     InMemoryStore, Resource, ResourceConfig,
    ...     allow_collection_actions, create_access_controller, deny_attributes,
    ... )
    >>>
    >>> async def owner_only(session, action, new_attributes=None, old_attributes=None):
    ...     if old_attributes is None:
    ...         return True
    ...     return old_attributes["owner_id"] == session.user_id
    >>>
    >>> articles = Resource(
    ...     store=InMemoryStore(),
    ...     access_controller=create_access_controller(
    ...         authorize_collection_action=allow_collection_actions("create", "list"),
    ...         authorize_document_action=owner_only,
    ...         filter_readable_attributes=deny_attributes(["secret"]),
    ...     ),
    ...     config=ResourceConfig(slug="articles"),
    ... )
    >>>
    >>> doc = await articles.create(session, {"title": "Hello", "owner_id": "alice"})
"""

__version__ = "0.1.0"

from docguard.access import (
    AccessController,
    AttributeFilter,
    CollectionAuthorizer,
    DocumentAuthorizer,
    allow_attributes,
    allow_attributes_for,
    allow_collection_actions,
    assert_all_attributes_allowed,
    create_access_controller,
    deny_attributes,
    filter_readable_attributes,
    permissive_access_controller,
    permissive_attribute_filter,
    permissive_collection_authorizer,
    permissive_document_authorizer,
    restrictive_access_controller,
    restrictive_attribute_filter,
    restrictive_collection_authorizer,
    restrictive_document_authorizer,
)
from docguard.exceptions import (
    BadRequestError,
    ConfigurationError,
    DocguardError,
    ForbiddenError,
    NotFoundError,
    ResourceNotFoundError,
    SchemaValidationError,
    UnwritableAttributesError,
)
from docguard.ids import UuidVersion, assert_uuid, generate_id, is_uuid_string
from docguard.policies import AllowAllPolicy, DenyAllPolicy, OwnerPolicy, Policy
from docguard.registry import ResourceRegistry
from docguard.resource import Resource, ResourceConfig
from docguard.store import InMemoryStore, Store
from docguard.types import Action, Document, Stage
from docguard.validation import AttributeValidator, PydanticAttributeValidator

__all__ = [
    # Version
    "__version__",
    # Resource
    "Resource",
    "ResourceConfig",
    "ResourceRegistry",
    # Types
    "Action",
    "Document",
    "Stage",
    # Access control
    "AccessController",
    "AttributeFilter",
    "CollectionAuthorizer",
    "DocumentAuthorizer",
    "allow_attributes",
    "allow_attributes_for",
    "allow_collection_actions",
    "assert_all_attributes_allowed",
    "create_access_controller",
    "deny_attributes",
    "filter_readable_attributes",
    "permissive_access_controller",
    "permissive_attribute_filter",
    "permissive_collection_authorizer",
    "permissive_document_authorizer",
    "restrictive_access_controller",
    "restrictive_attribute_filter",
    "restrictive_collection_authorizer",
    "restrictive_document_authorizer",
    # Policies
    "Policy",
    "AllowAllPolicy",
    "DenyAllPolicy",
    "OwnerPolicy",
    # Stores
    "Store",
    "InMemoryStore",
    # Validation
    "AttributeValidator",
    "PydanticAttributeValidator",
    # Identifiers
    "UuidVersion",
    "assert_uuid",
    "generate_id",
    "is_uuid_string",
    # Exceptions
    "DocguardError",
    "ForbiddenError",
    "UnwritableAttributesError",
    "NotFoundError",
    "BadRequestError",
    "SchemaValidationError",
    "ConfigurationError",
    "ResourceNotFoundError",
]
