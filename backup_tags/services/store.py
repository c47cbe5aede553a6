"""
Transactional tag store.

Composes the registry and the association index behind one API and keeps
them consistent: deleting or renaming a tag cascades to every target, and
attaching tags requires them to be registered.

Every mutation is copy-on-write:
1. Take the writer lock
2. Clone the current state into a draft
3. Apply the change to the draft (validation errors abort here)
4. Persist the draft
5. Swap the draft in as the live state

If step 4 fails the draft is discarded, so memory never diverges from what
was last stored. Readers never lock; they read whichever state reference is
live and therefore see the state before or after a mutation, never a mix.
"""
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar, Union

from .errors import PersistenceError, TagNotFoundError, TagsError
from .index import AssociationIndex
from .keys import is_backup_key, target_key
from .models import BackupTarget, SaveTarget, Tag, TagAssociation, TagsDatabase
from .persistence import TagsPersistence
from .registry import TagRegistry

logger = logging.getLogger(__name__)

Target = Union[BackupTarget, SaveTarget]
T = TypeVar("T")


@dataclass
class TagsState:
    """One consistent version of the tags database."""
    registry: TagRegistry = field(default_factory=TagRegistry)
    index: AssociationIndex = field(default_factory=AssociationIndex)
    # Structured target for each indexed key, needed to persist associations
    targets: Dict[str, Target] = field(default_factory=dict)

    def copy(self) -> "TagsState":
        index = self.index.copy()
        return TagsState(
            registry=self.registry.copy(),
            index=index,
            targets={key: self.targets[key] for key in index.keys()},
        )

    def to_document(self) -> TagsDatabase:
        return TagsDatabase(
            tags=self.registry.list_all(),
            associations=[
                TagAssociation(target=self.targets[key], tag_names=self.index.tags_for(key))
                for key in self.index.keys()
            ],
        )

    @classmethod
    def from_document(cls, db: TagsDatabase) -> "TagsState":
        """
        Build state from a persisted document.

        Unusable tag entries (blank name, bad color, duplicate) are skipped,
        and so are association names missing from the registry.
        """
        state = cls()
        for tag in db.tags:
            try:
                state.registry.create(tag.name, tag.color)
            except TagsError as e:
                logger.warning("Skipping stored tag %r: %s", tag.name, e)

        for association in db.associations:
            key = target_key(association.target)
            for name in association.tag_names:
                if not state.registry.exists(name):
                    logger.warning("Stored association %s references unknown tag %r, dropping it", key, name)
                    continue
                state.index.add(key, name)
            if state.index.tags_for(key):
                state.targets[key] = association.target
        return state


class TagStore:
    """
    Single entry point for reading and mutating tags.

    Usage:
        store = TagStore.load(JsonFileTagsPersistence(path))
        store.create_tag("Important", "#EF4444")
        store.add_tags_to_target(save_target("world1"), ["Important"])
        store.get_tags_for(save_target("world1"))
    """

    def __init__(self, persistence: TagsPersistence, db: Optional[TagsDatabase] = None):
        """
        Initialize the store.

        Args:
            persistence: Capability used to save after every mutation
            db: Initial database contents (empty if None)
        """
        self.persistence = persistence
        self._state = TagsState.from_document(db or TagsDatabase())
        self._write_lock = threading.Lock()

    @classmethod
    def load(cls, persistence: TagsPersistence) -> "TagStore":
        """Create a store from whatever the persistence capability holds."""
        db = persistence.load()
        store = cls(persistence, db)
        logger.info(
            "Loaded tags database: %d tags, %d tagged targets",
            len(store._state.registry),
            len(store._state.targets),
        )
        return store

    # ---------- reads ----------

    def get_all_tags(self) -> List[Tag]:
        return self._state.registry.list_all()

    def get_tags_for(self, target: Target) -> List[Tag]:
        """Tags attached to a target, in attachment order."""
        state = self._state
        tags = []
        for name in state.index.tags_for(target_key(target)):
            tag = state.registry.get(name)
            if tag is not None:
                tags.append(tag)
        return tags

    def get_targets_for_tag(self, name: str) -> List[Target]:
        """
        Targets carrying a tag.

        Raises:
            TagNotFoundError: If the tag is not registered
        """
        state = self._state
        if not state.registry.exists(name):
            raise TagNotFoundError(name)
        return [state.targets[key] for key in state.index.targets_for(name)]

    def to_document(self) -> TagsDatabase:
        return self._state.to_document()

    def stats(self) -> Dict[str, Any]:
        """
        Get store statistics.

        Returns:
            Dict with tag/target counts and per-tag usage
        """
        state = self._state
        keys = state.index.keys()
        backups = sum(1 for key in keys if is_backup_key(key))
        usage = state.index.usage_counts()
        return {
            "total_tags": len(state.registry),
            "tagged_targets": len(keys),
            "tagged_backups": backups,
            "tagged_saves": len(keys) - backups,
            "usage": {tag.name: usage.get(tag.name, 0) for tag in state.registry.list_all()},
        }

    # ---------- mutations ----------

    def create_tag(self, name: str, color: str) -> Tag:
        tag = self._commit(lambda state: state.registry.create(name, color))
        logger.info("Created tag %r (%s)", tag.name, tag.color)
        return tag

    def delete_tag(self, name: str) -> None:
        """Delete a tag and detach it from every target."""

        def mutate(state: TagsState) -> List[str]:
            state.registry.delete(name)
            return state.index.remove_tag_everywhere(name)

        affected = self._commit(mutate)
        logger.info("Deleted tag %r (detached from %d targets)", name, len(affected))

    def update_tag(self, name: str, new_name: Optional[str] = None, color: Optional[str] = None) -> Tag:
        """Rename and/or recolor a tag. A rename follows the tag onto every target."""

        def mutate(state: TagsState) -> Tag:
            updated = state.registry.update(name, new_name=new_name, color=color)
            if updated.name != name:
                state.index.rename_tag_everywhere(name, updated.name)
            return updated

        tag = self._commit(mutate)
        logger.info("Updated tag %r -> %r (%s)", name, tag.name, tag.color)
        return tag

    def add_tags_to_target(self, target: Target, tag_names: Iterable[str]) -> None:
        """
        Attach tags to a target.

        All names are checked before anything changes; one unknown name
        rejects the whole call.

        Raises:
            TagNotFoundError: If any name is not registered
        """
        names = list(tag_names)
        if not names:
            return
        key = target_key(target)

        def mutate(state: TagsState) -> None:
            for name in names:
                if not state.registry.exists(name):
                    raise TagNotFoundError(name)
            for name in names:
                state.index.add(key, name)
            state.targets[key] = target

        self._commit(mutate)
        logger.info("Attached %s to %s", names, key)

    def remove_tags_from_target(self, target: Target, tag_names: Iterable[str]) -> None:
        """Detach tags from a target. Unknown or unattached names are ignored."""
        names = list(tag_names)
        if not names:
            return
        key = target_key(target)

        def mutate(state: TagsState) -> None:
            for name in names:
                state.index.remove(key, name)

        self._commit(mutate)
        logger.info("Detached %s from %s", names, key)

    def _commit(self, mutate: Callable[[TagsState], T]) -> T:
        """Apply a mutation to a draft, persist it, then publish it."""
        with self._write_lock:
            draft = self._state.copy()
            result = mutate(draft)

            try:
                self.persistence.save(draft.to_document())
            except PersistenceError:
                logger.warning("Persisting tags database failed, change discarded")
                raise
            except Exception as e:
                logger.warning("Persisting tags database failed, change discarded: %s", e)
                raise PersistenceError(str(e)) from e

            self._state = draft
            return result
