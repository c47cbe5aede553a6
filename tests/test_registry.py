"""
Unit tests for TagRegistry.
"""
import pytest

from backup_tags.services.errors import (
    DuplicateTagError,
    EmptyNameError,
    InvalidColorError,
    TagNotFoundError,
)
from backup_tags.services.models import Tag
from backup_tags.services.registry import TagRegistry


class TestTagRegistryCreate:
    """Tag creation and validation."""

    @pytest.fixture
    def registry(self):
        return TagRegistry()

    def test_create_returns_tag(self, registry):
        tag = registry.create("Important", "#EF4444")
        assert tag == Tag(name="Important", color="#EF4444")
        assert registry.exists("Important")

    def test_list_preserves_insertion_order(self, registry):
        registry.create("b", "#000")
        registry.create("a", "#111")
        registry.create("c", "#222")
        assert [t.name for t in registry.list_all()] == ["b", "a", "c"]

    def test_duplicate_rejected_and_registry_unchanged(self, registry):
        registry.create("test", "#FF0000")
        with pytest.raises(DuplicateTagError):
            registry.create("test", "#00FF00")
        assert registry.list_all() == [Tag(name="test", color="#FF0000")]

    def test_names_are_case_sensitive(self, registry):
        registry.create("Important", "#FF0000")
        registry.create("important", "#00FF00")
        assert len(registry) == 2

    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_empty_name_rejected(self, registry, name):
        with pytest.raises(EmptyNameError):
            registry.create(name, "#FFFFFF")
        assert len(registry) == 0

    def test_invalid_color_rejected(self, registry):
        with pytest.raises(InvalidColorError):
            registry.create("Boss", "123456")
        assert not registry.exists("Boss")

    def test_empty_name_checked_before_color(self, registry):
        with pytest.raises(EmptyNameError):
            registry.create("", "nope")

    def test_name_stored_verbatim(self, registry):
        registry.create(" padded ", "#FFF")
        assert registry.exists(" padded ")
        assert not registry.exists("padded")

    def test_constructor_seeds_tags(self):
        registry = TagRegistry([Tag(name="a", color="#000"), Tag(name="b", color="#FFF")])
        assert [t.name for t in registry.list_all()] == ["a", "b"]


class TestTagRegistryDeleteUpdate:
    """Deletion, update and copy."""

    @pytest.fixture
    def registry(self):
        registry = TagRegistry()
        registry.create("one", "#111111")
        registry.create("two", "#222222")
        registry.create("three", "#333333")
        return registry

    def test_delete(self, registry):
        registry.delete("two")
        assert not registry.exists("two")
        assert registry.get("two") is None
        assert [t.name for t in registry.list_all()] == ["one", "three"]

    def test_delete_missing_raises(self, registry):
        with pytest.raises(TagNotFoundError):
            registry.delete("nonexistent")

    def test_rename_keeps_position(self, registry):
        updated = registry.update("two", new_name="deux")
        assert updated == Tag(name="deux", color="#222222")
        assert [t.name for t in registry.list_all()] == ["one", "deux", "three"]
        assert not registry.exists("two")

    def test_recolor(self, registry):
        updated = registry.update("one", color="#ABC")
        assert updated.color == "#ABC"
        assert registry.get("one").color == "#ABC"

    def test_rename_onto_existing_rejected(self, registry):
        with pytest.raises(DuplicateTagError):
            registry.update("one", new_name="three")
        assert registry.get("one").color == "#111111"

    def test_rename_to_same_name_allowed(self, registry):
        assert registry.update("one", new_name="one").name == "one"

    def test_update_validates(self, registry):
        with pytest.raises(TagNotFoundError):
            registry.update("missing", color="#FFF")
        with pytest.raises(EmptyNameError):
            registry.update("one", new_name=" ")
        with pytest.raises(InvalidColorError):
            registry.update("one", color="red")
        assert registry.get("one") == Tag(name="one", color="#111111")

    def test_copy_is_independent(self, registry):
        clone = registry.copy()
        clone.delete("one")
        clone.create("four", "#444")
        assert registry.exists("one")
        assert not registry.exists("four")
