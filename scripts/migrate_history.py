"""Copy the JSON history log into the SQL history table (or back).

Usage:
  # JSON file -> SQL (DATABASE_URL or sqlite:///./kqxs.db)
  python scripts/migrate_history.py --skip-existing

  # SQL -> JSON file
  python scripts/migrate_history.py --reverse --json-path ./history.json

Notes:
- The source is never modified.
- Use `--drop-target` only if you want to clear the target first.
"""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Sequence

from dotenv import load_dotenv

from kqxs.config import resolve_database_url
from kqxs.db import create_app_engine
from kqxs.repositories.history_store import JsonFileHistoryStore, SqlHistoryStore, copy_documents

logger = logging.getLogger(__name__)


def _get_sql_url(arg: str | None) -> str:
    return str(arg or resolve_database_url())


def _get_json_path(arg: str | None) -> str:
    return str(arg or os.getenv("HISTORY_PATH") or "./history.json")


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Migrate the history log between JSON and SQL stores")
    parser.add_argument("--json-path", dest="json_path", type=str, default=None)
    parser.add_argument("--sql-url", dest="sql_url", type=str, default=None)
    parser.add_argument("--reverse", action="store_true", help="Copy SQL -> JSON instead of JSON -> SQL")
    parser.add_argument("--drop-target", action="store_true", help="Clear the target before import")
    parser.add_argument("--skip-existing", action="store_true", help="Skip documents already in the target")
    args = parser.parse_args(argv)

    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    json_store = JsonFileHistoryStore(_get_json_path(args.json_path))
    sql_store = SqlHistoryStore(create_app_engine(_get_sql_url(args.sql_url)))
    source, target = (sql_store, json_store) if args.reverse else (json_store, sql_store)

    logger.info("Source: %s", type(source).__name__)
    logger.info("Target: %s", type(target).__name__)

    if args.drop_target:
        logger.warning("Clearing target history before import")
        target.clear()

    copied = copy_documents(source, target, skip_existing=args.skip_existing)
    logger.info("Copied history entries: %d", copied)
    logger.info("Done")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
