"""
Domain models for the tags database.

The aggregate (TagsDatabase) is the unit of persistence. Field names are
snake_case in Python and camelCase on the wire and on disk:

    {
      "tags": [{"name": "Important", "color": "#EF4444"}],
      "associations": [
        {"target": {"type": "backup", "saveName": "Survival", "backupName": "b1"},
         "tagNames": ["Important"]}
      ]
    }
"""
import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

COLOR_PATTERN = re.compile(r"#([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})")

# Quick-pick colors offered by the tag editor
DEFAULT_TAG_COLORS = [
    {"name": "Red", "value": "#EF4444"},
    {"name": "Orange", "value": "#F97316"},
    {"name": "Yellow", "value": "#EAB308"},
    {"name": "Green", "value": "#22C55E"},
    {"name": "Blue", "value": "#3B82F6"},
    {"name": "Purple", "value": "#A855F7"},
    {"name": "Pink", "value": "#EC4899"},
    {"name": "Gray", "value": "#6B7280"},
]


class Tag(BaseModel):
    """A named, colored label. The name is the identity key."""
    model_config = ConfigDict(frozen=True)

    name: str
    color: str


class BackupTarget(BaseModel):
    """A specific backup of a specific save."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["backup"] = "backup"
    save_name: str = Field(alias="saveName")
    backup_name: str = Field(alias="backupName")


class SaveTarget(BaseModel):
    """A save directory, identified by its path relative to the saves root."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["save"] = "save"
    relative_path: str = Field(alias="relativePath")


TagTarget = Annotated[Union[BackupTarget, SaveTarget], Field(discriminator="type")]


class TagAssociation(BaseModel):
    """Tag names carried by one target."""
    model_config = ConfigDict(populate_by_name=True)

    target: TagTarget
    tag_names: list[str] = Field(default_factory=list, alias="tagNames")


class TagsDatabase(BaseModel):
    """All defined tags plus all associations."""
    model_config = ConfigDict(populate_by_name=True)

    tags: list[Tag] = Field(default_factory=list)
    associations: list[TagAssociation] = Field(default_factory=list)

    def to_json_dict(self) -> dict:
        """Serialize using the on-disk (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)


def backup_target(save_name: str, backup_name: str) -> BackupTarget:
    return BackupTarget(save_name=save_name, backup_name=backup_name)


def save_target(relative_path: str) -> SaveTarget:
    return SaveTarget(relative_path=relative_path)


def is_valid_color(color) -> bool:
    """Check for a '#'-prefixed 3- or 6-digit hex color."""
    return isinstance(color, str) and COLOR_PATTERN.fullmatch(color) is not None


def should_use_light_text(background_color: str) -> bool:
    """
    Decide whether text drawn on a tag chip should be light.

    Args:
        background_color: Valid hex color (#RGB or #RRGGBB)

    Returns:
        True if the background is dark (luminance < 0.5)
    """
    hex_part = background_color.lstrip("#")
    if len(hex_part) == 3:
        hex_part = "".join(c * 2 for c in hex_part)

    r = int(hex_part[0:2], 16)
    g = int(hex_part[2:4], 16)
    b = int(hex_part[4:6], 16)

    # W3C relative luminance approximation
    luminance = (0.299 * r + 0.587 * g + 0.114 * b) / 255
    return luminance < 0.5
