"""
Tests for the policy system.

Tests cover:
- Policy base class method lookup
- Conversion of policies to access controllers
- Built-in policies (DenyAllPolicy, AllowAllPolicy, OwnerPolicy)
- Policies driving a Resource end to end
"""

from __future__ import annotations

import logging

import pytest

from docguard import InMemoryStore, Resource, ResourceConfig
from docguard.exceptions import ForbiddenError, UnwritableAttributesError
from docguard.policies import AllowAllPolicy, DenyAllPolicy, OwnerPolicy, Policy


class ArticlePolicy(Policy):
    """Policy used by several tests below."""

    writable_attributes = frozenset({"title", "body", "owner_id"})
    readable_attributes = frozenset({"title", "body", "owner_id"})

    def can_create(self) -> bool:
        return self.session.id is not None

    def can_list(self) -> bool:
        return True

    def can_create_document(self, new_attributes, old_attributes) -> bool:
        return new_attributes.get("owner_id") == self.session.id

    async def can_read_document(self, new_attributes, old_attributes) -> bool:
        return old_attributes.get("owner_id") == self.session.id


class TestPolicyBaseClass:
    """Tests for the Policy base class."""

    def test_policy_keeps_session(self, owner):
        policy = Policy(owner)
        assert policy.session is owner

    def test_missing_methods_deny(self, owner):
        policy = Policy(owner)
        assert policy.authorize_collection("create") is False
        assert policy.authorize_document("destroy", None, {"a": 1}) is False

    def test_attribute_defaults_allow_all(self, owner):
        policy = Policy(owner)
        assert policy.can_read_attribute("anything") is True
        assert policy.can_write_attribute("anything") is True

    def test_attribute_sets_restrict(self, owner):
        policy = ArticlePolicy(owner)
        assert policy.can_write_attribute("title") is True
        assert policy.can_write_attribute("secret") is False

    def test_collection_method_lookup(self, owner, anonymous):
        assert ArticlePolicy(owner).authorize_collection("create") is True
        assert ArticlePolicy(anonymous).authorize_collection("create") is False

    def test_document_method_lookup(self, owner, stranger):
        assert ArticlePolicy(owner).authorize_document(
            "create", {"owner_id": "alice"}, None
        ) is True
        assert ArticlePolicy(stranger).authorize_document(
            "create", {"owner_id": "alice"}, None
        ) is False

    def test_get_available_actions(self):
        assert ArticlePolicy.get_available_actions() == {
            "collection": ["create", "list"],
            "document": ["create", "read"],
        }


class TestPolicyAccessController:
    """Tests for Policy.as_access_controller."""

    @pytest.mark.asyncio
    async def test_controller_delegates_to_policy(self, owner, stranger):
        controller = ArticlePolicy.as_access_controller()

        assert await controller.authorize_collection_action(owner, "create") is True
        assert await controller.authorize_collection_action(owner, "destroy") is False
        assert await controller.authorize_document_action(
            owner, "read", None, {"owner_id": "alice"}
        ) is True
        assert await controller.authorize_document_action(
            stranger, "read", None, {"owner_id": "alice"}
        ) is False
        assert controller.filter_writable_attributes(owner, "secret") is False
        assert controller.filter_readable_attributes(owner, "title") is True

    @pytest.mark.asyncio
    async def test_policy_drives_resource(self, owner, stranger):
        resource = Resource(
            store=InMemoryStore(),
            access_controller=ArticlePolicy.as_access_controller(),
            config=ResourceConfig(slug="articles"),
        )

        doc = await resource.create(owner, {"title": "x", "owner_id": "alice"})
        assert (await resource.read(owner, doc.id)).get("title") == "x"

        with pytest.raises(ForbiddenError):
            await resource.read(stranger, doc.id)
        with pytest.raises(UnwritableAttributesError):
            await resource.create(owner, {"title": "x", "secret": "y", "owner_id": "alice"})
        with pytest.raises(ForbiddenError):
            await resource.destroy(owner, doc.id)


class TestBuiltinPolicies:
    """Tests for the built-in policies."""

    def test_deny_all_policy(self, owner):
        policy = DenyAllPolicy(owner)
        assert policy.authorize_collection("list") is False
        assert policy.authorize_document("read", None, {}) is False
        assert policy.can_read_attribute("title") is False
        assert policy.can_write_attribute("title") is False

    def test_allow_all_policy_allows_everything(self, owner):
        policy = AllowAllPolicy(owner)

        assert policy.authorize_collection("anything") is True
        assert policy.authorize_document("anything") is True

    def test_allow_all_controller_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="docguard.policies.builtin"):
            AllowAllPolicy.as_access_controller()

        assert "AllowAllPolicy" in caplog.text

    @pytest.mark.asyncio
    async def test_allow_all_warns_once_per_controller(self, owner, caplog):
        with caplog.at_level(logging.WARNING, logger="docguard.policies.builtin"):
            resource = Resource(
                store=InMemoryStore({"a": {"x": 1, "y": 2}, "b": {"x": 3}}),
                access_controller=AllowAllPolicy.as_access_controller(),
            )
            documents = await resource.list(owner)

        assert len(documents) == 2
        warnings = [r for r in caplog.records if r.name == "docguard.policies.builtin"]
        assert len(warnings) == 1


class TestOwnerPolicy:
    """Tests for OwnerPolicy."""

    def test_owner_may_act_on_own_document(self, owner):
        policy = OwnerPolicy(owner)
        assert policy.authorize_document("read", None, {"owner_id": "alice"}) is True
        assert policy.authorize_document("destroy", None, {"owner_id": "alice"}) is True

    def test_stranger_is_denied(self, stranger):
        policy = OwnerPolicy(stranger)
        assert policy.authorize_document("read", None, {"owner_id": "alice"}) is False

    def test_anonymous_is_denied(self, anonymous):
        policy = OwnerPolicy(anonymous)
        assert policy.authorize_collection("list") is False
        assert policy.authorize_document("read", None, {"owner_id": None}) is False

    def test_create_checks_new_attributes(self, owner):
        policy = OwnerPolicy(owner)
        assert policy.authorize_document("create", {"owner_id": "alice"}, None) is True
        assert policy.authorize_document("create", {"owner_id": "bob"}, None) is False
        assert policy.authorize_document("create", None, None) is False

    def test_owner_cannot_transfer_document(self, owner):
        policy = OwnerPolicy(owner)
        assert policy.authorize_document(
            "patch", {"owner_id": "bob"}, {"owner_id": "alice"}
        ) is False

    def test_collection_actions(self, owner):
        policy = OwnerPolicy(owner)
        assert policy.authorize_collection("create") is True
        assert policy.authorize_collection("list") is True
        assert policy.authorize_collection("export") is False

    def test_mapping_sessions(self):
        class NotePolicy(OwnerPolicy):
            owner_attribute = "author_id"
            session_key = "user_id"

        policy = NotePolicy({"user_id": "u1"})
        assert policy.authorize_document("read", None, {"author_id": "u1"}) is True
        assert policy.authorize_document("read", None, {"author_id": "u2"}) is False

    @pytest.mark.asyncio
    async def test_owner_policy_resource(self, owner, stranger):
        resource = Resource(
            store=InMemoryStore({"n1": {"owner_id": "alice", "text": "hi"}}),
            access_controller=OwnerPolicy.as_access_controller(),
        )

        patched = await resource.patch(owner, "n1", {"text": "hello"})
        assert patched.attributes == {"owner_id": "alice", "text": "hello"}

        with pytest.raises(ForbiddenError):
            await resource.patch(stranger, "n1", {"text": "pwned"})
