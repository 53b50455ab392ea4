"""
Show the current Alembic revision of the catalog database.

Example:
    python -m aniplayer.scripts.db_current
"""

from __future__ import annotations

import argparse
import os


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show catalog schema revision")
    parser.add_argument("--db-url", default="", help="sqlite:// URL, defaults to the runtime database")
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    from aniplayer.infrastructure.database.migration import current

    db_url = (args.db_url or os.environ.get("ANIPLAYER_DATABASE_URL") or "").strip()
    if db_url and not db_url.startswith("sqlite://"):
        print("[WARN] Only sqlite:// URLs are supported, ignoring non-SQLite URL")
        db_url = ""

    current(db_url or None, verbose=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
