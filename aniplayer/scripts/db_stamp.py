"""
Set the Alembic revision of the catalog database (no SQL is executed).

Example:
    python -m aniplayer.scripts.db_stamp --revision 20261019_0001
"""

from __future__ import annotations

import argparse
import os


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Stamp catalog schema revision via Alembic")
    parser.add_argument("--revision", required=True, help="Target revision, e.g. head / base / <rev_id>")
    parser.add_argument("--db-url", default="", help="sqlite:// URL, defaults to the runtime database")
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    from aniplayer.infrastructure.database.migration import stamp

    db_url = (args.db_url or os.environ.get("ANIPLAYER_DATABASE_URL") or "").strip()
    if db_url and not db_url.startswith("sqlite://"):
        print("[WARN] Only sqlite:// URLs are supported, ignoring non-SQLite URL")
        db_url = ""

    stamp(db_url or None, args.revision)
    print(f"[DONE] Stamped revision {args.revision}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
