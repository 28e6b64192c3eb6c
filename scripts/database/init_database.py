#!/usr/bin/env python3
"""
Manually initialize the SQLite database for URL shortener.

The service creates the schema on startup as well; this is for provisioning
the file ahead of time. Running it again is a no-op.

Usage:
    python init_database.py --db-path ./database/urlshortener.db
"""

import argparse
import asyncio
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import load_config
from urlshortener.database.sqlite import URLShortenerSQLite
from urlshortener.common.logging_config import setup_logging


async def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Initialize URL shortener database")
    parser.add_argument(
        "--db-path",
        default=load_config().database_file,
        help="SQLite database file (default: DATABASE_PATH/urlshortener.db)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    args = parser.parse_args(argv)

    logger = setup_logging(level="DEBUG" if args.verbose else "INFO")

    db = URLShortenerSQLite(db_path=args.db_path, logger=logger)
    try:
        await db.initialize()

        if not await db.health_check():
            logger.error("Database health check failed")
            return 1

        logger.info(f"Database ready with {await db.count()} records")
        return 0
    finally:
        await db.close()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
