# This module prepares a catalog store from the command line.
# It exists so operators can create the schema and load demo rows without starting the API.
# Both steps are idempotent and safe to rerun against an existing database.

from __future__ import annotations

import argparse
import logging

from library_catalog.api.api_config import load_api_config
from library_catalog.api.db_access import DatabaseClient
from library_catalog.catalog.ddl import apply_catalog_ddl
from library_catalog.catalog.seed import seed_sample_data
from library_catalog.common.logging import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Library catalog store utilities")
    parser.add_argument("--database-url", default=None, help="Override DATABASE_URL for this run")
    parser.add_argument("--setup", action="store_true", help="Create catalog tables if they are missing")
    parser.add_argument("--seed", action="store_true", help="Insert sample books and members if absent")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = parse_args(argv)
    if not args.setup and not args.seed:
        logger.warning("nothing to do; pass --setup and/or --seed")
        return 1

    config = load_api_config()
    db = DatabaseClient(
        database_url=args.database_url or config.database_url,
        busy_timeout_seconds=config.sqlite_busy_timeout_seconds,
    )
    try:
        if args.setup:
            apply_catalog_ddl(db)
        if args.seed:
            counts = seed_sample_data(db)
            print(f"Seeded {counts['books']} book(s) and {counts['members']} member(s).")
    finally:
        db.dispose()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
