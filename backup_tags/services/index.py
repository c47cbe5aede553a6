"""
Many-to-many association index between target keys and tag names.

The index is a pure relation: it never checks tag names against the
registry. A forward map (key -> names) and a reverse map (name -> keys)
are kept in sync; dicts with None values serve as insertion-ordered sets.
Targets whose set becomes empty are dropped.
"""
from typing import Dict, List


class AssociationIndex:
    """Set of (target key, tag name) pairs with forward and reverse lookup."""

    def __init__(self):
        self._by_target: Dict[str, Dict[str, None]] = {}
        self._by_tag: Dict[str, Dict[str, None]] = {}

    def __len__(self) -> int:
        """Number of (target, tag) pairs."""
        return sum(len(names) for names in self._by_target.values())

    def tags_for(self, key: str) -> List[str]:
        """Tag names attached to a target, in attachment order (no duplicates)."""
        return list(self._by_target.get(key, ()))

    def targets_for(self, name: str) -> List[str]:
        """Target keys carrying a tag, in attachment order (no duplicates)."""
        return list(self._by_tag.get(name, ()))

    def has(self, key: str, name: str) -> bool:
        return name in self._by_target.get(key, ())

    def keys(self) -> List[str]:
        """All target keys with at least one tag."""
        return list(self._by_target)

    def add(self, key: str, name: str) -> None:
        """Attach a tag to a target. Attaching twice is a no-op."""
        self._by_target.setdefault(key, {})[name] = None
        self._by_tag.setdefault(name, {})[key] = None

    def remove(self, key: str, name: str) -> None:
        """Detach a tag from a target. Detaching an absent pair is a no-op."""
        names = self._by_target.get(key)
        if names is None or name not in names:
            return

        del names[name]
        if not names:
            del self._by_target[key]

        keys = self._by_tag[name]
        del keys[key]
        if not keys:
            del self._by_tag[name]

    def remove_tag_everywhere(self, name: str) -> List[str]:
        """
        Drop a tag from every target.

        Returns:
            Keys of the targets that carried the tag
        """
        affected = self.targets_for(name)
        for key in affected:
            self.remove(key, name)
        return affected

    def rename_tag_everywhere(self, old_name: str, new_name: str) -> List[str]:
        """
        Replace a tag name on every target that carries it.

        Targets already carrying new_name end up with a single entry.
        The renamed tag keeps its position in each target's ordering.

        Returns:
            Keys of the targets that carried old_name
        """
        if old_name == new_name:
            return self.targets_for(old_name)

        affected = self.targets_for(old_name)
        for key in affected:
            names = self._by_target[key]
            rebuilt: Dict[str, None] = {}
            for existing in names:
                rebuilt[new_name if existing == old_name else existing] = None
            self._by_target[key] = rebuilt
            self._by_tag.setdefault(new_name, {})[key] = None

        self._by_tag.pop(old_name, None)
        return affected

    def usage_counts(self) -> Dict[str, int]:
        """Number of targets carrying each tag."""
        return {name: len(keys) for name, keys in self._by_tag.items()}

    def copy(self) -> "AssociationIndex":
        clone = AssociationIndex()
        clone._by_target = {key: dict(names) for key, names in self._by_target.items()}
        clone._by_tag = {name: dict(keys) for name, keys in self._by_tag.items()}
        return clone
