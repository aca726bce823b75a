"""
Resource: the access-controlled front of a document store.

A Resource binds one AccessController to one Store and exposes the CRUD
operations a routing layer calls. Each operation is a fixed sequence of
pipeline stages; any stage that fails aborts the operation with its error
and leaves the store untouched until the final mutation stage.

Operations and their stages:

    create   authorize collection, assert writable, validate,
             authorize document (pre-load), store create, filter readable
    read     load, authorize document (post-load), filter readable
    replace  assert writable, validate, load, assert existing writable,
             authorize document, store replace, filter readable
    patch    assert writable, load, merge, validate, authorize document,
             store patch, filter readable
    destroy  load (missing is a no-op), authorize document, store destroy
    list     authorize collection, store list, filter readable

Example:
    >>> resource = Resource(
    ...     store=InMemoryStore(),
    ...     access_controller=create_access_controller(
    ...         authorize_collection_action=allow_collection_actions("create", "list"),
    ...         authorize_document_action=owner_only,
    ...         filter_writable_attributes=deny_attributes(["owner_id"]),
    ...     ),
    ...     config=ResourceConfig(slug="articles"),
    ... )
    >>> doc = await resource.create(session, {"title": "Hello"})
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic

from docguard.access.controller import AccessController
from docguard.access.filters import (
    assert_all_attributes_allowed,
    filter_readable_attributes,
)
from docguard.exceptions import (
    ConfigurationError,
    DocguardError,
    ForbiddenError,
    NotFoundError,
)
from docguard.ids import UuidVersion, assert_uuid, generate_id
from docguard.store.base import Store, supports_shallow_update
from docguard.types import Action, Document, S, Stage
from docguard.utils import maybe_await
from docguard.validation import AttributeValidator

logger = logging.getLogger(__name__)


PIPELINES: dict[Action, tuple[Stage, ...]] = {
    Action.CREATE: (
        Stage.AUTHORIZE_COLLECTION,
        Stage.ASSERT_WRITABLE,
        Stage.VALIDATE,
        Stage.AUTHORIZE_DOCUMENT,
        Stage.STORE_CREATE,
        Stage.FILTER_READABLE,
    ),
    Action.READ: (
        Stage.LOAD,
        Stage.AUTHORIZE_DOCUMENT,
        Stage.FILTER_READABLE,
    ),
    Action.REPLACE: (
        Stage.ASSERT_WRITABLE,
        Stage.VALIDATE,
        Stage.LOAD,
        Stage.ASSERT_EXISTING_WRITABLE,
        Stage.AUTHORIZE_DOCUMENT,
        Stage.STORE_REPLACE,
        Stage.FILTER_READABLE,
    ),
    Action.PATCH: (
        Stage.ASSERT_WRITABLE,
        Stage.LOAD,
        Stage.MERGE,
        Stage.VALIDATE,
        Stage.AUTHORIZE_DOCUMENT,
        Stage.STORE_PATCH,
        Stage.FILTER_READABLE,
    ),
    Action.DESTROY: (
        Stage.LOAD,
        Stage.AUTHORIZE_DOCUMENT,
        Stage.STORE_DESTROY,
    ),
    Action.LIST: (
        Stage.AUTHORIZE_COLLECTION,
        Stage.STORE_LIST,
        Stage.FILTER_READABLE,
    ),
}


@dataclass
class ResourceConfig:
    """
    Configuration for a Resource.

    Attributes:
        slug: Name of the resource collection, used in errors and logs.
        id_factory: Callable generating ids for new documents.
        validate_ids: If True, document actions reject ids that are not
            UUID strings with BadRequestError before touching the store.
        id_version: UUID version accepted when validate_ids is enabled.
        use_shallow_update: If True, patches use the store's
            ``shallow_update`` method when it has one.
    """
    slug: str = "documents"
    id_factory: Callable[[], str] = generate_id
    validate_ids: bool = False
    id_version: UuidVersion = UuidVersion.ANY
    use_shallow_update: bool = True


@dataclass
class _PipelineState:
    """Values carried between the stages of one operation."""
    session: Any
    action: Action
    document_id: str | None = None
    attributes: dict[str, Any] | None = None
    new_attributes: dict[str, Any] | None = None
    existing: Document | None = None
    document: Document | None = None
    documents: list[Document] = field(default_factory=list)
    query: Any = None
    finished: bool = False


class Resource(Generic[S]):
    """
    Access-controlled wrapper around a Store.

    The session type ``S`` is opaque to the resource; it is handed unchanged
    to every authorizer and filter of the access controller.

    Attributes:
        store: The underlying document store.
        access_controller: Policy hooks consulted by every operation.
        config: Resource configuration.
        validator: Optional attribute validator.
    """

    def __init__(
        self,
        store: Store,
        access_controller: AccessController | Mapping[str, Any] | None = None,
        config: ResourceConfig | None = None,
        validator: AttributeValidator | None = None,
    ) -> None:
        """
        Initialize the resource.

        Args:
            store: Store holding the documents of this resource.
            access_controller: An AccessController, or a mapping of hook
                names to hooks from which one is built. Missing hooks deny
                authorization and allow every attribute.
            config: Resource configuration. Defaults to ResourceConfig().
            validator: Optional validator run on attributes before they are
                authorized and written.

        Raises:
            ConfigurationError: If the store or controller is invalid.
        """
        if not isinstance(store, Store):
            raise ConfigurationError(
                config_key="store",
                expected="an object implementing the Store protocol",
                received=type(store).__name__,
            )

        if access_controller is None:
            access_controller = AccessController()
        elif isinstance(access_controller, Mapping):
            access_controller = AccessController().with_overrides(**access_controller)
        elif not isinstance(access_controller, AccessController):
            raise ConfigurationError(
                config_key="access_controller",
                expected="an AccessController or a mapping of hooks",
                received=type(access_controller).__name__,
            )

        self.store = store
        self.access_controller: AccessController = access_controller
        self.config = config or ResourceConfig()
        self.validator = validator

        logger.debug(f"Resource '{self.slug}' initialized with store {type(store).__name__}")

    @property
    def slug(self) -> str:
        """Name of the resource collection."""
        return self.config.slug

    @staticmethod
    def stages(action: Action | str) -> tuple[Stage, ...]:
        """
        Get the pipeline stages of an operation, in execution order.

        Example:
            >>> Resource.stages("destroy")
            (<Stage.LOAD: 'load'>, <Stage.AUTHORIZE_DOCUMENT: 'authorize_document'>,
             <Stage.STORE_DESTROY: 'store_destroy'>)
        """
        return PIPELINES[Action(action)]

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    async def create(self, session: S, attributes: Mapping[str, Any]) -> Document:
        """
        Create a new document with a freshly generated id.

        Raises:
            ForbiddenError: If the collection or document authorizer denies.
            UnwritableAttributesError: If any attribute is not writable.
            SchemaValidationError: If the validator rejects the attributes.
        """
        submitted = dict(attributes)
        state = _PipelineState(
            session=session,
            action=Action.CREATE,
            attributes=submitted,
            new_attributes=submitted,
        )
        await self._run(state)
        return state.document

    async def read(self, session: S, document_id: str) -> Document:
        """
        Read a document, with unreadable attributes removed.

        Raises:
            NotFoundError: If the document does not exist.
            ForbiddenError: If the document authorizer denies.
        """
        state = _PipelineState(session=session, action=Action.READ, document_id=document_id)
        await self._run(state)
        return state.document

    async def replace(
        self,
        session: S,
        document_id: str,
        attributes: Mapping[str, Any],
    ) -> Document:
        """
        Replace all attributes of a document.

        Attributes missing from the new payload are deleted, so every
        existing attribute must be writable as well as every submitted one.

        Raises:
            NotFoundError: If the document does not exist.
            ForbiddenError: If the document authorizer denies.
            UnwritableAttributesError: If any submitted or existing
                attribute is not writable.
        """
        submitted = dict(attributes)
        state = _PipelineState(
            session=session,
            action=Action.REPLACE,
            document_id=document_id,
            attributes=submitted,
            new_attributes=submitted,
        )
        await self._run(state)
        return state.document

    async def patch(
        self,
        session: S,
        document_id: str,
        attributes: Mapping[str, Any],
    ) -> Document:
        """
        Update some attributes of a document, keeping the others.

        Only the submitted keys need to be writable. The document authorizer
        sees the merged attributes as the new attributes.

        Raises:
            NotFoundError: If the document does not exist.
            ForbiddenError: If the document authorizer denies.
            UnwritableAttributesError: If any submitted attribute is not writable.
        """
        state = _PipelineState(
            session=session,
            action=Action.PATCH,
            document_id=document_id,
            attributes=dict(attributes),
        )
        await self._run(state)
        return state.document

    async def destroy(self, session: S, document_id: str) -> None:
        """
        Delete a document. Deleting a nonexistent document succeeds.

        Raises:
            ForbiddenError: If the document authorizer denies.
        """
        state = _PipelineState(session=session, action=Action.DESTROY, document_id=document_id)
        await self._run(state)

    async def list(self, session: S, query: Any = None) -> list[Document]:
        """
        List documents, each with its unreadable attributes removed.

        Args:
            session: The session performing the action.
            query: Store-specific query, passed through unchanged.

        Raises:
            ForbiddenError: If the collection authorizer denies.
        """
        state = _PipelineState(session=session, action=Action.LIST, query=query)
        await self._run(state)
        return state.documents

    async def authorize_collection_action(self, session: S, action: str) -> None:
        """
        Authorize a custom collection action.

        Routing layers use this to gate collection actions beyond create and
        list before running their own logic.

        Raises:
            ForbiddenError: If the collection authorizer denies.
        """
        await self._authorize_collection(session, str(action))

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    async def _run(self, state: _PipelineState) -> None:
        for stage in PIPELINES[state.action]:
            if state.finished:
                break
            logger.debug(f"{self.slug}.{state.action.value}: {stage.value}")
            await self._execute(stage, state)

    async def _execute(self, stage: Stage, state: _PipelineState) -> None:
        controller = self.access_controller

        if stage is Stage.AUTHORIZE_COLLECTION:
            await self._authorize_collection(state.session, state.action.value)

        elif stage is Stage.ASSERT_WRITABLE:
            await assert_all_attributes_allowed(
                state.session,
                state.attributes,
                controller.filter_writable_attributes,
                resource=self.slug,
            )

        elif stage is Stage.VALIDATE:
            if self.validator is not None:
                await maybe_await(self.validator.validate(state.new_attributes, resource=self.slug))

        elif stage is Stage.LOAD:
            await self._load(state)

        elif stage is Stage.ASSERT_EXISTING_WRITABLE:
            # Replace drops every attribute that is not resubmitted.
            await assert_all_attributes_allowed(
                state.session,
                state.existing.attributes,
                controller.filter_writable_attributes,
                resource=self.slug,
            )

        elif stage is Stage.MERGE:
            state.new_attributes = {**state.existing.attributes, **state.attributes}

        elif stage is Stage.AUTHORIZE_DOCUMENT:
            old_attributes = state.existing.attributes if state.existing is not None else None
            await self._authorize_document(
                state.session,
                state.action.value,
                state.new_attributes,
                old_attributes,
            )

        elif stage is Stage.STORE_CREATE:
            document_id = self.config.id_factory()
            state.document = await self.store.create(document_id, state.new_attributes)
            logger.debug(f"{self.slug}: created document '{document_id}'")

        elif stage is Stage.STORE_REPLACE:
            state.document = await self.store.replace(state.document_id, state.new_attributes)

        elif stage is Stage.STORE_PATCH:
            if self.config.use_shallow_update and supports_shallow_update(self.store):
                state.document = await self.store.shallow_update(
                    state.document_id, state.attributes
                )
            else:
                state.document = await self.store.replace(
                    state.document_id, state.new_attributes
                )

        elif stage is Stage.STORE_DESTROY:
            await self.store.destroy(state.document_id)
            logger.debug(f"{self.slug}: destroyed document '{state.document_id}'")

        elif stage is Stage.STORE_LIST:
            state.documents = list(await self.store.list(state.query))

        elif stage is Stage.FILTER_READABLE:
            if state.action is Action.LIST:
                state.documents = [
                    await self._filter_document(state.session, document)
                    for document in state.documents
                ]
            else:
                state.document = await self._filter_document(state.session, state.document)

        else:
            raise ValueError(f"Unknown pipeline stage: {stage!r}")

    async def _load(self, state: _PipelineState) -> None:
        if self.config.validate_ids:
            state.document_id = assert_uuid(state.document_id, self.config.id_version)

        state.existing = await self.store.read(state.document_id)
        if state.existing is not None:
            state.document = state.existing
            return

        if state.action is Action.DESTROY:
            logger.debug(f"{self.slug}: document '{state.document_id}' already absent")
            state.finished = True
            return
        raise NotFoundError(state.document_id, resource=self.slug)

    async def _authorize_collection(self, session: Any, action: str) -> None:
        hook = self.access_controller.authorize_collection_action
        try:
            allowed = await maybe_await(hook(session, action))
        except DocguardError:
            raise
        except Exception as e:
            logger.warning(f"Collection authorizer for '{self.slug}' raised on '{action}': {e}")
            raise ForbiddenError(action=action, resource=self.slug) from e

        if not allowed:
            logger.debug(f"{self.slug}: collection action '{action}' denied")
            raise ForbiddenError(action=action, resource=self.slug)

    async def _authorize_document(
        self,
        session: Any,
        action: str,
        new_attributes: Mapping[str, Any] | None,
        old_attributes: Mapping[str, Any] | None,
    ) -> None:
        hook = self.access_controller.authorize_document_action
        # Hooks receive read-only views of the attributes.
        new_view = MappingProxyType(new_attributes) if new_attributes is not None else None
        old_view = MappingProxyType(old_attributes) if old_attributes is not None else None
        try:
            allowed = await maybe_await(hook(session, action, new_view, old_view))
        except DocguardError:
            raise
        except Exception as e:
            logger.warning(f"Document authorizer for '{self.slug}' raised on '{action}': {e}")
            raise ForbiddenError(action=action, resource=self.slug) from e

        if not allowed:
            mode = "post-load" if old_attributes is not None else "pre-load"
            logger.debug(f"{self.slug}: document action '{action}' denied ({mode})")
            raise ForbiddenError(action=action, resource=self.slug)

    async def _filter_document(self, session: Any, document: Document) -> Document:
        readable = await filter_readable_attributes(
            session,
            document.attributes,
            self.access_controller.filter_readable_attributes,
            resource=self.slug,
        )
        return document.with_attributes(readable)

    def __repr__(self) -> str:
        return f"Resource(slug={self.slug!r}, store={type(self.store).__name__})"
