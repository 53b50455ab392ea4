"""
Upgrade the catalog database schema.

Example:
    python -m aniplayer.scripts.db_upgrade
    python -m aniplayer.scripts.db_upgrade --revision 20261019_0001
"""

from __future__ import annotations

import argparse
import os


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Upgrade catalog schema via Alembic")
    parser.add_argument("--revision", default="head", help="Target revision (default: head)")
    parser.add_argument("--db-url", default="", help="sqlite:// URL, defaults to the runtime database")
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    from aniplayer.infrastructure.database.migration import upgrade

    db_url = (args.db_url or os.environ.get("ANIPLAYER_DATABASE_URL") or "").strip()
    if db_url and not db_url.startswith("sqlite://"):
        print("[WARN] Only sqlite:// URLs are supported, ignoring non-SQLite URL")
        db_url = ""

    upgrade(db_url or None, args.revision)
    print(f"[DONE] Upgraded to {args.revision}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
