"""
Named commands invoked by the UI layer.

Each command checks the shape of its arguments before touching the store
and returns plain JSON-ready values. Semantics live in TagStore.
"""
import logging
from typing import Any, Dict, List, Optional

from .errors import InvalidArgumentError
from .models import BackupTarget, SaveTarget, Tag, backup_target, save_target
from .store import TagStore

logger = logging.getLogger(__name__)


def _tag_dict(tag: Tag) -> Dict[str, str]:
    return {"name": tag.name, "color": tag.color}


def _require_str(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{field} must be a string, got {type(value).__name__}")
    return value


def _require_identifier(value: Any, field: str) -> str:
    value = _require_str(value, field)
    if not value:
        raise InvalidArgumentError(f"{field} must not be empty")
    return value


def _require_tag_names(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        raise InvalidArgumentError(f"tag_names must be a list, got {type(value).__name__}")
    for item in value:
        _require_str(item, "tag_names item")
    return list(value)


class TagCommands:
    """Command surface over a TagStore."""

    def __init__(self, store: TagStore):
        self.store = store

    # ---------- tags ----------

    def get_all_tags(self) -> List[Dict[str, str]]:
        return [_tag_dict(tag) for tag in self.store.get_all_tags()]

    def create_tag(self, name: str, color: str) -> Dict[str, str]:
        tag = self.store.create_tag(_require_str(name, "name"), _require_str(color, "color"))
        return _tag_dict(tag)

    def delete_tag(self, name: str) -> None:
        self.store.delete_tag(_require_str(name, "name"))

    def update_tag(
        self,
        name: str,
        new_name: Optional[str] = None,
        color: Optional[str] = None
    ) -> Dict[str, str]:
        if new_name is not None:
            _require_str(new_name, "new_name")
        if color is not None:
            _require_str(color, "color")
        if new_name is None and color is None:
            raise InvalidArgumentError("update_tag needs new_name or color")
        tag = self.store.update_tag(_require_str(name, "name"), new_name=new_name, color=color)
        return _tag_dict(tag)

    # ---------- backups ----------

    def get_backup_tags(self, save_name: str, backup_name: str) -> List[Dict[str, str]]:
        target = self._backup(save_name, backup_name)
        return [_tag_dict(tag) for tag in self.store.get_tags_for(target)]

    def add_tags_to_backup(self, save_name: str, backup_name: str, tag_names: List[str]) -> None:
        target = self._backup(save_name, backup_name)
        self.store.add_tags_to_target(target, _require_tag_names(tag_names))

    def remove_tags_from_backup(self, save_name: str, backup_name: str, tag_names: List[str]) -> None:
        target = self._backup(save_name, backup_name)
        self.store.remove_tags_from_target(target, _require_tag_names(tag_names))

    def get_backups_with_tag(self, name: str) -> List[Dict[str, str]]:
        return [
            {"save_name": t.save_name, "backup_name": t.backup_name}
            for t in self.store.get_targets_for_tag(_require_str(name, "name"))
            if isinstance(t, BackupTarget)
        ]

    # ---------- saves ----------

    def get_save_tags(self, relative_path: str) -> List[Dict[str, str]]:
        target = self._save(relative_path)
        return [_tag_dict(tag) for tag in self.store.get_tags_for(target)]

    def add_tags_to_save(self, relative_path: str, tag_names: List[str]) -> None:
        target = self._save(relative_path)
        self.store.add_tags_to_target(target, _require_tag_names(tag_names))

    def remove_tags_from_save(self, relative_path: str, tag_names: List[str]) -> None:
        target = self._save(relative_path)
        self.store.remove_tags_from_target(target, _require_tag_names(tag_names))

    def get_saves_with_tag(self, name: str) -> List[str]:
        return [
            t.relative_path
            for t in self.store.get_targets_for_tag(_require_str(name, "name"))
            if isinstance(t, SaveTarget)
        ]

    def stats(self) -> Dict[str, Any]:
        return self.store.stats()

    @staticmethod
    def _backup(save_name: str, backup_name: str) -> BackupTarget:
        return backup_target(
            _require_identifier(save_name, "save_name"),
            _require_identifier(backup_name, "backup_name"),
        )

    @staticmethod
    def _save(relative_path: str) -> SaveTarget:
        return save_target(_require_identifier(relative_path, "relative_path"))
