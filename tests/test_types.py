"""
Tests for core types.
"""

from __future__ import annotations

import dataclasses

import pytest

from docguard.types import Action, Document


class TestDocument:
    """Tests for Document."""

    def test_document_is_frozen(self):
        doc = Document(id="a", attributes={"x": 1})
        with pytest.raises(dataclasses.FrozenInstanceError):
            doc.id = "b"

    def test_with_attributes_copies(self):
        doc = Document(id="a", attributes={"x": 1, "y": 2})
        filtered = doc.with_attributes({"x": 1})

        assert filtered == Document(id="a", attributes={"x": 1})
        assert doc.attributes == {"x": 1, "y": 2}

    def test_get_and_to_dict(self):
        doc = Document(id="a", attributes={"x": 1})
        assert doc.get("x") == 1
        assert doc.get("missing", "default") == "default"
        assert doc.to_dict() == {"id": "a", "attributes": {"x": 1}}


class TestAction:
    """Tests for Action."""

    def test_actions_compare_to_strings(self):
        assert Action.CREATE == "create"
        assert str(Action.DESTROY) == "destroy"
        assert Action("patch") is Action.PATCH
