"""
Load/save capabilities for the tags database.

The store only depends on the TagsPersistence protocol. Two implementations
ship with the service:

- JsonFileTagsPersistence: single pretty-printed JSON document, written
  atomically (temp file + rename)
- MemoryTagsPersistence: in-process copy, used by tests and ephemeral sessions
"""
import json
import logging
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError

from .errors import PersistenceError
from .models import TagsDatabase

logger = logging.getLogger(__name__)

# Tag database file name inside the config directory
TAGS_DB_FILE_NAME = "tags.json"


class TagsPersistence(Protocol):
    """Protocol for anything that can load and save the tags database."""

    def load(self) -> TagsDatabase: ...
    def save(self, db: TagsDatabase) -> None: ...


class JsonFileTagsPersistence:
    """
    Stores the tags database as one JSON file.

    A missing file loads as an empty database. A file that exists but cannot
    be parsed raises PersistenceError instead of being silently replaced, so
    a corrupted database is never overwritten with an empty one.
    """

    def __init__(self, path: Path):
        """
        Initialize the file store.

        Args:
            path: Path to the JSON database file
        """
        self.path = Path(path)

    def load(self) -> TagsDatabase:
        """Load the database from disk."""
        if not self.path.exists():
            logger.info("No tags database at %s, starting empty", self.path)
            return TagsDatabase()

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise PersistenceError(f"Cannot read tags database {self.path}: {e}") from e

        try:
            return TagsDatabase.model_validate(raw)
        except ValidationError as e:
            raise PersistenceError(f"Malformed tags database {self.path}: {e}") from e

    def save(self, db: TagsDatabase) -> None:
        """Persist the database to disk atomically."""
        temp_path = self.path.with_suffix('.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)

            # Write to temp file then rename for atomicity
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(db.to_json_dict(), f, indent=2, ensure_ascii=False)
            temp_path.replace(self.path)
        except OSError as e:
            if temp_path.exists():
                temp_path.unlink()
            raise PersistenceError(f"Cannot write tags database {self.path}: {e}") from e

        logger.debug("Saved tags database to %s", self.path)


class MemoryTagsPersistence:
    """Keeps a private copy of the last saved database."""

    def __init__(self, initial: Optional[TagsDatabase] = None):
        self._db = initial.model_copy(deep=True) if initial else TagsDatabase()
        self.fail_saves = False
        self.save_count = 0

    def load(self) -> TagsDatabase:
        return self._db.model_copy(deep=True)

    def save(self, db: TagsDatabase) -> None:
        if self.fail_saves:
            raise PersistenceError("In-memory store is configured to fail")
        self._db = db.model_copy(deep=True)
        self.save_count += 1


def default_db_path(config_dir: Path) -> Path:
    return Path(config_dir) / TAGS_DB_FILE_NAME
