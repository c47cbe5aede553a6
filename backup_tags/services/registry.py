"""
Registry of defined tags.

Names are unique and matched case-sensitively. The registry knows nothing
about associations; cascading to targets is the store's job.
"""
from typing import Dict, List, Optional

from .errors import DuplicateTagError, EmptyNameError, InvalidColorError, TagNotFoundError
from .models import Tag, is_valid_color


class TagRegistry:
    """Insertion-ordered set of tags keyed by name."""

    def __init__(self, tags: Optional[List[Tag]] = None):
        self._tags: Dict[str, Tag] = {}
        for tag in tags or []:
            self.create(tag.name, tag.color)

    def __len__(self) -> int:
        return len(self._tags)

    def __contains__(self, name: str) -> bool:
        return name in self._tags

    def list_all(self) -> List[Tag]:
        """Return all tags in insertion order."""
        return list(self._tags.values())

    def exists(self, name: str) -> bool:
        return name in self._tags

    def get(self, name: str) -> Optional[Tag]:
        return self._tags.get(name)

    def create(self, name: str, color: str) -> Tag:
        """
        Register a new tag.

        Args:
            name: Tag name, must not be blank or already registered
            color: Hex color (#RGB or #RRGGBB)

        Returns:
            The new Tag

        Raises:
            EmptyNameError, InvalidColorError, DuplicateTagError
        """
        self._check_name(name)
        self._check_color(color)
        if name in self._tags:
            raise DuplicateTagError(name)

        tag = Tag(name=name, color=color)
        self._tags[name] = tag
        return tag

    def delete(self, name: str) -> None:
        if name not in self._tags:
            raise TagNotFoundError(name)
        del self._tags[name]

    def update(self, name: str, new_name: Optional[str] = None, color: Optional[str] = None) -> Tag:
        """
        Rename and/or recolor a tag, keeping its position in the listing.

        Args:
            name: Existing tag name
            new_name: Replacement name (None keeps the current one)
            color: Replacement color (None keeps the current one)

        Returns:
            The updated Tag

        Raises:
            TagNotFoundError, EmptyNameError, InvalidColorError, DuplicateTagError
        """
        current = self._tags.get(name)
        if current is None:
            raise TagNotFoundError(name)

        target_name = name if new_name is None else new_name
        target_color = current.color if color is None else color
        self._check_name(target_name)
        self._check_color(target_color)
        if target_name != name and target_name in self._tags:
            raise DuplicateTagError(target_name)

        updated = Tag(name=target_name, color=target_color)
        # Rebuild to keep the renamed entry in its original slot
        self._tags = {
            (target_name if key == name else key): (updated if key == name else tag)
            for key, tag in self._tags.items()
        }
        return updated

    def copy(self) -> "TagRegistry":
        clone = TagRegistry()
        clone._tags = dict(self._tags)
        return clone

    @staticmethod
    def _check_name(name: str) -> None:
        if not isinstance(name, str) or not name.strip():
            raise EmptyNameError(name if isinstance(name, str) else "")

    @staticmethod
    def _check_color(color: str) -> None:
        if not is_valid_color(color):
            raise InvalidColorError(str(color))
