"""
Unit tests for domain models, color rules and target keys.
"""
import pytest

from backup_tags.services.keys import is_backup_key, target_key
from backup_tags.services.models import (
    BackupTarget,
    SaveTarget,
    TagsDatabase,
    backup_target,
    is_valid_color,
    save_target,
    should_use_light_text,
)


class TestColorValidation:
    """Hex color pattern tests."""

    @pytest.mark.parametrize("color", ["#FF5733", "#F53", "#FF5", "#abc", "#ABCDEF", "#000000", "#aBc123"])
    def test_valid_colors(self, color):
        assert is_valid_color(color)

    @pytest.mark.parametrize("color", [
        "FF5733",        # Missing #
        "123456",        # Missing #
        "#FF57",         # Wrong length
        "#FF57333",      # Wrong length
        "#FF5733AA",     # Alpha channel not accepted
        "#GG5733",       # Not hex
        "",
        "#",
        " #FFF",         # Surrounding whitespace
        "#FFF\n",
    ])
    def test_invalid_colors(self, color):
        assert not is_valid_color(color)

    def test_non_string_is_invalid(self):
        assert not is_valid_color(None)
        assert not is_valid_color(0xFFFFFF)

    def test_light_text_on_dark_background(self):
        assert should_use_light_text("#000000") is True
        assert should_use_light_text("#3B82F6") is True

    def test_dark_text_on_light_background(self):
        assert should_use_light_text("#FFFFFF") is False
        assert should_use_light_text("#EAB308") is False

    def test_short_form_expanded(self):
        assert should_use_light_text("#FFF") == should_use_light_text("#FFFFFF")
        assert should_use_light_text("#000") == should_use_light_text("#000000")


class TestTargetKeys:
    """Target key encoding tests."""

    def test_backup_key_format(self):
        key = target_key(backup_target("Survival", "backup1.zip"))
        assert key == "backup:8:Survival:backup1.zip"
        assert is_backup_key(key)

    def test_save_key_format(self):
        key = target_key(save_target("Survival/world1"))
        assert key == "save:Survival/world1"
        assert not is_backup_key(key)

    def test_deterministic(self):
        assert target_key(backup_target("a", "b")) == target_key(backup_target("a", "b"))

    def test_colons_in_names_do_not_collide(self):
        """Naive "backup:a:b:c" joining would map both targets to the same key."""
        key1 = target_key(backup_target("a:b", "c"))
        key2 = target_key(backup_target("a", "b:c"))
        assert key1 != key2

    def test_backup_and_save_never_collide(self):
        # A save whose path looks like an encoded backup key
        save = save_target("8:Survival:backup1.zip")
        backup = backup_target("Survival", "backup1.zip")
        assert target_key(save) != target_key(backup)

    def test_rejects_non_target(self):
        with pytest.raises(TypeError):
            target_key({"saveName": "a", "backupName": "b"})


class TestTagsDatabaseModel:
    """Serialization shape of the aggregate."""

    def test_defaults_to_empty(self):
        db = TagsDatabase.model_validate({})
        assert db.tags == []
        assert db.associations == []

    def test_discriminated_targets(self, sample_database):
        assert isinstance(sample_database.associations[0].target, BackupTarget)
        assert isinstance(sample_database.associations[1].target, SaveTarget)

    def test_json_uses_camel_case(self, sample_database):
        data = sample_database.to_json_dict()
        first = data["associations"][0]
        assert first["target"] == {"type": "backup", "saveName": "Survival", "backupName": "backup1.zip"}
        assert first["tagNames"] == ["Important", "Boss"]
        assert data["associations"][1]["target"] == {"type": "save", "relativePath": "Survival/world1"}

    def test_json_dict_reloads_identically(self, sample_database):
        reloaded = TagsDatabase.model_validate(sample_database.to_json_dict())
        assert reloaded == sample_database

    def test_targets_are_hashable_values(self):
        assert backup_target("a", "b") == BackupTarget(saveName="a", backupName="b")
        assert len({save_target("x"), save_target("x")}) == 1
