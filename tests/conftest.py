"""
Shared fixtures and mocks for tag service tests.
"""
import pytest
import tempfile
from pathlib import Path

from backup_tags.services.models import TagsDatabase, backup_target, save_target
from backup_tags.services.persistence import MemoryTagsPersistence
from backup_tags.services.store import TagStore


@pytest.fixture
def sample_database():
    """Persisted database with two tags and one association of each kind."""
    return TagsDatabase.model_validate({
        "tags": [
            {"name": "Important", "color": "#EF4444"},
            {"name": "Boss", "color": "#3B82F6"},
        ],
        "associations": [
            {
                "target": {"type": "backup", "saveName": "Survival", "backupName": "backup1.zip"},
                "tagNames": ["Important", "Boss"],
            },
            {
                "target": {"type": "save", "relativePath": "Survival/world1"},
                "tagNames": ["Boss"],
            },
        ],
    })


@pytest.fixture
def temp_db_dir():
    """Create temporary directory for database files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def persistence():
    """Empty in-memory persistence."""
    return MemoryTagsPersistence()


@pytest.fixture
def store(persistence):
    """Empty store backed by in-memory persistence."""
    return TagStore.load(persistence)


@pytest.fixture
def populated_store(sample_database):
    """Store loaded from the sample database."""
    return TagStore.load(MemoryTagsPersistence(sample_database))


@pytest.fixture
def backup1():
    return backup_target("Survival", "backup1.zip")


@pytest.fixture
def world1():
    return save_target("Survival/world1")
