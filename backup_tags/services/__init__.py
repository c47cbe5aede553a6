"""Service layer for tag operations."""

from .commands import TagCommands
from .persistence import JsonFileTagsPersistence, MemoryTagsPersistence
from .store import TagStore

__all__ = ["TagCommands", "TagStore", "JsonFileTagsPersistence", "MemoryTagsPersistence"]
