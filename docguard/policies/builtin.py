"""
Built-in policies for docguard.

This module provides commonly used policy implementations that can be
used directly or extended for custom authorization logic.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from docguard.access.controller import AccessController
from docguard.policies.base import Policy

logger = logging.getLogger(__name__)


class DenyAllPolicy(Policy[Any]):
    """
    Policy that denies every action and hides every attribute.

    This is the safest policy and a useful base class: subclasses open up
    exactly the actions and attributes they define.
    """

    readable_attributes = frozenset()
    writable_attributes = frozenset()

    def authorize_collection(self, action: str) -> bool:
        logger.debug(f"DenyAllPolicy: denying collection action '{action}'")
        return False

    def authorize_document(
        self,
        action: str,
        new_attributes: Mapping[str, Any] | None = None,
        old_attributes: Mapping[str, Any] | None = None,
    ) -> bool:
        logger.debug(f"DenyAllPolicy: denying document action '{action}'")
        return False


class AllowAllPolicy(Policy[Any]):
    """
    Policy that allows every action and every attribute.

    WARNING: This policy should ONLY be used for testing or in
    development environments.
    """

    @classmethod
    def as_access_controller(cls) -> AccessController:
        logger.warning(
            f"{cls.__name__} access controller created. This policy allows ALL "
            "actions and should NOT be used in production!"
        )
        return super().as_access_controller()

    def authorize_collection(self, action: str) -> bool:
        return True

    def authorize_document(
        self,
        action: str,
        new_attributes: Mapping[str, Any] | None = None,
        old_attributes: Mapping[str, Any] | None = None,
    ) -> bool:
        return True


class OwnerPolicy(Policy[Any]):
    """
    Policy allowing document actions only to the document's owner.

    The owner is stored in the ``owner_attribute`` of each document and
    compared with the session's identity, read from ``session_key`` (an
    attribute of the session object, or a key when the session is a
    mapping).

    Before a document exists ("create") the owner attribute of the new
    attributes is checked instead, so sessions can only create documents
    they own. Collection actions listed in ``collection_actions`` are open
    to every session with an identity.

    Attributes:
        owner_attribute: Document attribute holding the owner's id.
        session_key: Session attribute or key holding the session's id.
        collection_actions: Collection actions allowed to identified sessions.

    Example:
        >>> class NotePolicy(OwnerPolicy):
        ...     owner_attribute = "author_id"
        ...     session_key = "user_id"
        >>>
        >>> resource = Resource(store, NotePolicy.as_access_controller())
    """

    owner_attribute: str = "owner_id"
    session_key: str = "id"
    collection_actions: frozenset[str] = frozenset({"create", "list"})

    def get_session_identity(self) -> Any:
        """Get the identity of the session, or None for anonymous sessions."""
        if self.session is None:
            return None
        if isinstance(self.session, Mapping):
            return self.session.get(self.session_key)
        return getattr(self.session, self.session_key, None)

    def authorize_collection(self, action: str) -> bool:
        if self.get_session_identity() is None:
            return False
        return action in self.collection_actions

    def authorize_document(
        self,
        action: str,
        new_attributes: Mapping[str, Any] | None = None,
        old_attributes: Mapping[str, Any] | None = None,
    ) -> bool:
        identity = self.get_session_identity()
        if identity is None:
            return False

        subject = old_attributes if old_attributes is not None else new_attributes
        if subject is None:
            return False

        allowed = subject.get(self.owner_attribute) == identity
        if allowed and new_attributes is not None and old_attributes is not None:
            # Owners may not hand a document over to someone else.
            allowed = new_attributes.get(self.owner_attribute) == identity
        logger.debug(
            f"OwnerPolicy: {'allowing' if allowed else 'denying'} '{action}' "
            f"for session '{identity}'"
        )
        return allowed
