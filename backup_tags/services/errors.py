"""Error taxonomy for tag operations.

Validation errors are raised before any state is touched. PersistenceError
is raised after the in-memory change was prepared but could not be stored;
the store discards the change before re-raising it.
"""


class TagsError(Exception):
    """Base class for all tag engine errors."""


class EmptyNameError(TagsError):
    """Tag name is empty or whitespace only."""

    def __init__(self, name: str = ""):
        self.name = name
        super().__init__("Tag name must not be empty")


class InvalidColorError(TagsError):
    """Color is not a #RGB or #RRGGBB hex string."""

    def __init__(self, color: str):
        self.color = color
        super().__init__(f"Invalid color format: {color!r}")


class DuplicateTagError(TagsError):
    """A tag with the same (case-sensitive) name already exists."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tag already exists: {name}")


class TagNotFoundError(TagsError):
    """No tag with this name is registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tag not found: {name}")


class PersistenceError(TagsError):
    """The tags database could not be loaded or saved."""


class InvalidArgumentError(TagsError):
    """A command was invoked with a malformed argument."""
