#!/usr/bin/env python3
"""
Print a usage report for the tags database.

Shows:
- Tag and tagged-target counts
- Per-tag usage with a bar chart
- Tags that are defined but attached to nothing

Usage:
    python scripts/tags_report.py [--db PATH] [--watch]

Options:
    --db PATH    Tags database file (default: TAGS_DB_PATH or CONFIG_DIR/tags.json)
    --watch      Continuously update the report
"""

import argparse
import sys
import time
from datetime import datetime
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
load_dotenv()

from backup_tags.api.main import resolve_db_path
from backup_tags.services.errors import PersistenceError
from backup_tags.services.persistence import JsonFileTagsPersistence
from backup_tags.services.store import TagStore


def get_store_stats(db_path: Path) -> dict:
    """Load the database read-only and collect statistics."""
    store = TagStore.load(JsonFileTagsPersistence(db_path))
    stats = store.stats()
    stats["colors"] = {tag.name: tag.color for tag in store.get_all_tags()}
    return stats


def print_report(stats: dict, db_path: Path):
    """Print the usage report."""
    print()
    print("=" * 60)
    print("  Save Backup Tags Report")
    print(f"  Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print(f"  Database:  {db_path}")
    print("=" * 60)
    print()

    print("SUMMARY")
    print("-" * 40)
    print(f"  Tags:             {stats['total_tags']:>6}")
    print(f"  Tagged targets:   {stats['tagged_targets']:>6}")
    print(f"  Tagged backups:   {stats['tagged_backups']:>6}")
    print(f"  Tagged saves:     {stats['tagged_saves']:>6}")
    print()

    usage = stats["usage"]
    if not usage:
        print("  No tags defined.")
        print()
        return

    print("USAGE")
    print("-" * 40)
    bar_width = 30
    most = max(usage.values()) or 1
    for name, count in sorted(usage.items(), key=lambda item: (-item[1], item[0])):
        filled = int(bar_width * count / most)
        bar = "█" * filled + "░" * (bar_width - filled)
        print(f"  {name[:16]:<16} {stats['colors'][name]:<8} [{bar}] {count}")
    print()

    unused = [name for name, count in usage.items() if count == 0]
    if unused:
        print(f"  Unused tags: {', '.join(unused)}")
        print()


def main():
    parser = argparse.ArgumentParser(
        description="Generate tag usage report"
    )
    parser.add_argument(
        "--db",
        type=Path,
        help="Path to tags database file"
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Continuously update the report"
    )
    parser.add_argument(
        "--interval",
        type=int,
        default=30,
        help="Update interval in seconds (default: 30)"
    )

    args = parser.parse_args()
    db_path = args.db or resolve_db_path()

    try:
        if args.watch:
            print("Watching tags database (Ctrl+C to stop)...")
            try:
                while True:
                    # Clear screen
                    print("\033[2J\033[H", end="")
                    print_report(get_store_stats(db_path), db_path)
                    print(f"(Refreshing every {args.interval} seconds, Ctrl+C to stop)")
                    time.sleep(args.interval)
            except KeyboardInterrupt:
                print("\nStopped watching.")
        else:
            print_report(get_store_stats(db_path), db_path)
    except PersistenceError as e:
        print(f"ERROR: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
