"""
Save Backup Tags API Service.

FastAPI application exposing the tag commands (create/delete/update tags,
attach/detach tags on backups and saves) over HTTP for the desktop UI.

Endpoints are plain ``def`` so FastAPI runs them in its threadpool; the
store serializes writers itself and persistence may block.
"""
# Load .env file if present (for local development)
from dotenv import load_dotenv
load_dotenv()

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from ..services.commands import TagCommands
from ..services.errors import (
    DuplicateTagError,
    EmptyNameError,
    InvalidArgumentError,
    InvalidColorError,
    PersistenceError,
    TagNotFoundError,
    TagsError,
)
from ..services.models import DEFAULT_TAG_COLORS
from ..services.persistence import JsonFileTagsPersistence, default_db_path
from ..services.store import TagStore

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "save-backup-tags"

# HTTP status for each error class; first match wins
ERROR_STATUS = [
    (EmptyNameError, 400),
    (InvalidColorError, 400),
    (InvalidArgumentError, 400),
    (TagNotFoundError, 404),
    (DuplicateTagError, 409),
    (PersistenceError, 503),
]


def resolve_db_path() -> Path:
    """
    Locate the tags database file.

    TAGS_DB_PATH wins; otherwise tags.json inside CONFIG_DIR
    (default ~/.config/save-backup-tags).
    """
    explicit = os.getenv('TAGS_DB_PATH')
    if explicit:
        return Path(explicit)
    config_dir = Path(os.getenv('CONFIG_DIR')) if os.getenv('CONFIG_DIR') else DEFAULT_CONFIG_DIR
    return default_db_path(config_dir)


# Global instances
store: Optional[TagStore] = None
commands: Optional[TagCommands] = None
db_path: Optional[Path] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Loads the tags database once at startup. A corrupted database aborts
    startup instead of being replaced with an empty one.
    """
    global store, commands, db_path

    db_path = resolve_db_path()
    store = TagStore.load(JsonFileTagsPersistence(db_path))
    commands = TagCommands(store)
    logger.info("Tags database: %s", db_path)

    yield

    store = None
    commands = None


app = FastAPI(
    title="Save Backup Tags API",
    description="REST API for labelling save backups and save directories with colored tags",
    version="1.0.0",
    lifespan=lifespan
)


@app.exception_handler(TagsError)
async def tags_error_handler(request: Request, exc: TagsError):
    """Translate engine errors into JSON responses."""
    status_code = next((code for cls, code in ERROR_STATUS if isinstance(exc, cls)), 500)
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "error": type(exc).__name__}
    )


# Request/Response Models

class TagModel(BaseModel):
    """A tag as exchanged with the UI."""
    name: str
    color: str


class UpdateTagRequest(BaseModel):
    """Request model for renaming and/or recoloring a tag."""
    model_config = ConfigDict(populate_by_name=True)

    new_name: Optional[str] = Field(default=None, alias="newName")
    color: Optional[str] = None


class BackupTagsRequest(BaseModel):
    """Request model for attaching/detaching tags on a backup."""
    model_config = ConfigDict(populate_by_name=True)

    save_name: str = Field(alias="saveName")
    backup_name: str = Field(alias="backupName")
    tag_names: list[str] = Field(alias="tagNames")


class SaveTagsRequest(BaseModel):
    """Request model for attaching/detaching tags on a save."""
    model_config = ConfigDict(populate_by_name=True)

    relative_path: str = Field(alias="relativePath")
    tag_names: list[str] = Field(alias="tagNames")


class TagTargetsResponse(BaseModel):
    """Targets carrying a tag."""
    name: str
    backups: list[dict]
    saves: list[str]


class StatsResponse(BaseModel):
    """Response model for store statistics."""
    total_tags: int
    tagged_targets: int
    tagged_backups: int
    tagged_saves: int
    usage: dict[str, int]


class HealthResponse(BaseModel):
    """Response model for health check."""
    status: str
    total_tags: int
    db_path: Optional[str]


# API Endpoints: tags

@app.get("/api/v1/tags", response_model=list[TagModel])
def get_all_tags():
    """List all tags in creation order."""
    return commands.get_all_tags()


@app.post("/api/v1/tags", response_model=TagModel, status_code=201)
def create_tag(req: TagModel):
    """
    Create a tag.

    Raises:
        400 on blank name or invalid color, 409 if the name is taken
    """
    return commands.create_tag(req.name, req.color)


@app.get("/api/v1/tags/targets", response_model=TagTargetsResponse)
def get_tag_targets(name: str):
    """
    List backups and saves carrying a tag.

    Raises:
        404 if the tag does not exist
    """
    return TagTargetsResponse(
        name=name,
        backups=commands.get_backups_with_tag(name),
        saves=commands.get_saves_with_tag(name),
    )


@app.patch("/api/v1/tags/{name:path}", response_model=TagModel)
def update_tag(name: str, req: UpdateTagRequest):
    """Rename and/or recolor a tag; renames follow the tag onto every target."""
    return commands.update_tag(name, new_name=req.new_name, color=req.color)


@app.delete("/api/v1/tags/{name:path}")
def delete_tag(name: str):
    """Delete a tag and detach it from every backup and save."""
    commands.delete_tag(name)
    return {"status": "deleted", "name": name}


# API Endpoints: backups

@app.get("/api/v1/backups/tags", response_model=list[TagModel])
def get_backup_tags(
    save_name: str = Query(alias="saveName"),
    backup_name: str = Query(alias="backupName")
):
    """Tags attached to one backup."""
    return commands.get_backup_tags(save_name, backup_name)


@app.post("/api/v1/backups/tags")
def add_tags_to_backup(req: BackupTagsRequest):
    """Attach tags to a backup. Any unknown tag rejects the whole request."""
    commands.add_tags_to_backup(req.save_name, req.backup_name, req.tag_names)
    return {"status": "updated", "tags": commands.get_backup_tags(req.save_name, req.backup_name)}


@app.post("/api/v1/backups/tags/remove")
def remove_tags_from_backup(req: BackupTagsRequest):
    """Detach tags from a backup."""
    commands.remove_tags_from_backup(req.save_name, req.backup_name, req.tag_names)
    return {"status": "updated", "tags": commands.get_backup_tags(req.save_name, req.backup_name)}


# API Endpoints: saves

@app.get("/api/v1/saves/tags", response_model=list[TagModel])
def get_save_tags(relative_path: str = Query(alias="relativePath")):
    """Tags attached to one save directory."""
    return commands.get_save_tags(relative_path)


@app.post("/api/v1/saves/tags")
def add_tags_to_save(req: SaveTagsRequest):
    """Attach tags to a save. Any unknown tag rejects the whole request."""
    commands.add_tags_to_save(req.relative_path, req.tag_names)
    return {"status": "updated", "tags": commands.get_save_tags(req.relative_path)}


@app.post("/api/v1/saves/tags/remove")
def remove_tags_from_save(req: SaveTagsRequest):
    """Detach tags from a save."""
    commands.remove_tags_from_save(req.relative_path, req.tag_names)
    return {"status": "updated", "tags": commands.get_save_tags(req.relative_path)}


# API Endpoints: misc

@app.get("/api/v1/palette")
def palette():
    """Default quick-pick colors for the tag editor."""
    return DEFAULT_TAG_COLORS


@app.get("/api/v1/stats", response_model=StatsResponse)
def stats():
    """Tag and target counts."""
    return StatsResponse(**commands.stats())


@app.get("/health", response_model=HealthResponse)
def health():
    """
    Health check endpoint.

    Returns:
        HealthResponse with service status and database info
    """
    return HealthResponse(
        status="healthy",
        total_tags=len(store.get_all_tags()) if store else 0,
        db_path=str(db_path) if db_path else None
    )


@app.get("/")
def root():
    """
    Root endpoint with API information.

    Returns:
        API info and available endpoints
    """
    return {
        "name": "Save Backup Tags API",
        "version": "1.0.0",
        "endpoints": {
            "list_tags": "GET /api/v1/tags",
            "create_tag": "POST /api/v1/tags",
            "update_tag": "PATCH /api/v1/tags/{name}",
            "delete_tag": "DELETE /api/v1/tags/{name}",
            "tag_targets": "GET /api/v1/tags/targets?name=",
            "backup_tags": "GET /api/v1/backups/tags?saveName=&backupName=",
            "add_backup_tags": "POST /api/v1/backups/tags",
            "remove_backup_tags": "POST /api/v1/backups/tags/remove",
            "save_tags": "GET /api/v1/saves/tags?relativePath=",
            "add_save_tags": "POST /api/v1/saves/tags",
            "remove_save_tags": "POST /api/v1/saves/tags/remove",
            "palette": "GET /api/v1/palette",
            "stats": "GET /api/v1/stats",
            "health": "GET /health",
        }
    }
