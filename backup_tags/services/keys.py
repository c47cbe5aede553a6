"""
Target key encoding.

Key Format:
    backup:{len(save_name)}:{save_name}:{backup_name}
    save:{relative_path}

Example:
    "backup:8:Survival:2024-01-01_12-00.zip"
    "save:Survival/MySave"

The length prefix marks where save_name ends, so names containing ':'
cannot make two backups collide. Keys are only used for indexing and are
never decoded.
"""
from typing import Union

from .models import BackupTarget, SaveTarget

BACKUP_PREFIX = "backup:"
SAVE_PREFIX = "save:"


def target_key(target: Union[BackupTarget, SaveTarget]) -> str:
    """Build the index key for a backup or save target."""
    if isinstance(target, BackupTarget):
        return f"{BACKUP_PREFIX}{len(target.save_name)}:{target.save_name}:{target.backup_name}"
    if isinstance(target, SaveTarget):
        return f"{SAVE_PREFIX}{target.relative_path}"
    raise TypeError(f"Not a tag target: {type(target).__name__}")


def is_backup_key(key: str) -> bool:
    return key.startswith(BACKUP_PREFIX)
