#!/usr/bin/env python3
"""
Bulk-create tags from a CSV file or from the default palette.

The CSV needs a header row with "name" and "color" columns. Tags that
already exist are skipped, as are rows that fail validation; the database
is written after every created tag.

Usage:
    python scripts/seed_tags.py --csv tags.csv
    python scripts/seed_tags.py --palette

Options:
    --csv PATH      CSV file with name,color columns
    --palette       Create one tag per default palette color (Red, Orange, ...)
    --db PATH       Tags database file (default: TAGS_DB_PATH or CONFIG_DIR/tags.json)
    --dry-run       Show what would be created without saving
    --verbose       Show detailed output for each row
"""

import argparse
import csv
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
load_dotenv()

from backup_tags.api.main import resolve_db_path
from backup_tags.services.errors import DuplicateTagError, PersistenceError, TagsError
from backup_tags.services.models import DEFAULT_TAG_COLORS
from backup_tags.services.persistence import JsonFileTagsPersistence
from backup_tags.services.registry import TagRegistry
from backup_tags.services.store import TagStore

logger = logging.getLogger("seed_tags")


def read_csv_rows(csv_path: Path) -> list[tuple[str, str]]:
    """Read (name, color) pairs from a CSV file."""
    rows = []
    with open(csv_path, "r", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            rows.append(((row.get("name") or ""), (row.get("color") or "").strip()))
    return rows


def palette_rows() -> list[tuple[str, str]]:
    return [(entry["name"], entry["value"]) for entry in DEFAULT_TAG_COLORS]


def main():
    parser = argparse.ArgumentParser(
        description="Bulk-create tags"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--csv",
        type=Path,
        help="Path to CSV file with name,color columns"
    )
    source.add_argument(
        "--palette",
        action="store_true",
        help="Seed one tag per default palette color"
    )
    parser.add_argument(
        "--db",
        type=Path,
        help="Path to tags database file"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be created without saving"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show detailed output"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    db_path = args.db or resolve_db_path()
    rows = palette_rows() if args.palette else read_csv_rows(args.csv)
    print(f"Seeding {len(rows)} tags into: {db_path}")

    try:
        store = TagStore.load(JsonFileTagsPersistence(db_path))
    except PersistenceError:
        logger.exception("Cannot open tags database")
        sys.exit(1)

    # Dry runs validate against a scratch registry so nothing is written
    scratch = TagRegistry(store.get_all_tags())

    created = 0
    skipped_existing = 0
    skipped_invalid = 0

    for name, color in rows:
        try:
            if args.dry_run:
                scratch.create(name, color)
            else:
                store.create_tag(name, color)
        except DuplicateTagError:
            skipped_existing += 1
            if args.verbose:
                print(f"  Skipped {name}: already exists")
            continue
        except PersistenceError:
            logger.exception("Failed to save tag %r", name)
            sys.exit(1)
        except TagsError as e:
            skipped_invalid += 1
            print(f"  Skipped {name!r}: {e}")
            continue

        if args.verbose:
            print(f"  Created {name} ({color})")
        created += 1

    # Summary
    print()
    print("=" * 50)
    print("Tag Seeding Summary")
    print("=" * 50)
    print(f"Total rows:              {len(rows)}")
    print(f"Created:                 {created}")
    print(f"Skipped (exists):        {skipped_existing}")
    print(f"Skipped (invalid):       {skipped_invalid}")
    print()

    if args.dry_run:
        print("DRY RUN - no changes saved")
    else:
        print(f"Total tags: {len(store.get_all_tags())}")


if __name__ == "__main__":
    main()
