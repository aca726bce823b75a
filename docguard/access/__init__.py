"""
Access-control building blocks for docguard.

This package provides the attribute filters, collection and document
authorizers, and the AccessController that bundles them for a resource.
"""

from docguard.access.authorizers import (
    CollectionAuthorizer,
    DocumentAuthorizer,
    allow_collection_actions,
    permissive_collection_authorizer,
    permissive_document_authorizer,
    restrictive_collection_authorizer,
    restrictive_document_authorizer,
)
from docguard.access.controller import (
    AccessController,
    create_access_controller,
    permissive_access_controller,
    restrictive_access_controller,
)
from docguard.access.filters import (
    AttributeFilter,
    allow_attributes,
    allow_attributes_for,
    assert_all_attributes_allowed,
    deny_attributes,
    filter_readable_attributes,
    permissive_attribute_filter,
    restrictive_attribute_filter,
)

__all__ = [
    # Controller
    "AccessController",
    "create_access_controller",
    "permissive_access_controller",
    "restrictive_access_controller",
    # Authorizers
    "CollectionAuthorizer",
    "DocumentAuthorizer",
    "allow_collection_actions",
    "permissive_collection_authorizer",
    "permissive_document_authorizer",
    "restrictive_collection_authorizer",
    "restrictive_document_authorizer",
    # Attribute filters
    "AttributeFilter",
    "allow_attributes",
    "allow_attributes_for",
    "assert_all_attributes_allowed",
    "deny_attributes",
    "filter_readable_attributes",
    "permissive_attribute_filter",
    "restrictive_attribute_filter",
]
