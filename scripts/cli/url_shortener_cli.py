#!/usr/bin/env python3
"""
Command-line interface for URL shortener service.

Works directly against the SQLite store; no running server is needed.

Usage:
    python url_shortener_cli.py shorten <url>
    python url_shortener_cli.py get <short_code>
    python url_shortener_cli.py info <short_code>
    python url_shortener_cli.py health
"""

import argparse
import asyncio
import json
import os
import sys
from typing import Optional

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import load_config
from urlshortener.database.exceptions import StoreError
from urlshortener.database.sqlite import URLShortenerSQLite
from urlshortener.exceptions import URLShortenerError
from urlshortener.service import URLShortenerService
from urlshortener.shortcode import ShortCodeGenerator
from urlshortener.common.logging_config import setup_logging
from urlshortener.common.url_builder import build_short_url


def _print(payload: dict, error: bool = False) -> None:
    print(json.dumps(payload, indent=2), file=sys.stderr if error else sys.stdout)


class URLShortenerCLI:
    """Command-line interface for URL shortener."""

    def __init__(
        self,
        db_path: str,
        short_domain: str,
        code_length: int = 7,
        max_collision_retries: int = 5,
        verbose: bool = False,
    ):
        self.db_path = db_path
        self.short_domain = short_domain
        self.code_length = code_length
        self.max_collision_retries = max_collision_retries
        self.logger = setup_logging(level="DEBUG" if verbose else "ERROR")
        self.service: Optional[URLShortenerService] = None

    async def initialize(self):
        """Open the store and build the service.

        Raises:
            ValueError: If the code length or retry bound is out of range
            StoreError: If the database cannot be opened
        """
        generator = ShortCodeGenerator(default_length=self.code_length)
        db = URLShortenerSQLite(db_path=self.db_path, logger=self.logger)
        await db.initialize()
        self.service = URLShortenerService(
            db=db,
            short_code_generator=generator,
            logger=self.logger,
            max_collision_retries=self.max_collision_retries,
        )

    async def cleanup(self):
        if self.service:
            await self.service.close()

    async def shorten(self, url: str) -> int:
        """Shorten a URL."""
        try:
            short_code = await self.service.shorten(url)
        except URLShortenerError as e:
            _print({"success": False, "error": str(e)}, error=True)
            return 1

        _print({
            "success": True,
            "short_code": short_code,
            "short_url": build_short_url(short_code, self.short_domain),
            "original_url": url,
        })
        return 0

    async def get(self, short_code: str) -> int:
        """Get original URL for a short code."""
        try:
            original_url = await self.service.resolve(short_code)
        except URLShortenerError as e:
            _print({"success": False, "short_code": short_code, "error": str(e)}, error=True)
            return 1

        _print({"success": True, "short_code": short_code, "original_url": original_url})
        return 0

    async def info(self, short_code: str) -> int:
        """Show the stored record for a short code."""
        try:
            record = await self.service.get_url_info(short_code)
        except URLShortenerError as e:
            _print({"success": False, "short_code": short_code, "error": str(e)}, error=True)
            return 1

        _print({"success": True, **record})
        return 0

    async def health(self) -> int:
        """Check store health."""
        health_status = await self.service.health_check()
        total_urls = await self.service.db.count() if health_status["database"] else None
        _print({"success": health_status["overall"], "health": health_status, "total_urls": total_urls})
        return 0 if health_status["overall"] else 1


def build_parser() -> argparse.ArgumentParser:
    config = load_config()

    parser = argparse.ArgumentParser(
        description="URL Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Get original URL
  %(prog)s get n4bQgYh

  # Show the stored record
  %(prog)s info n4bQgYh

  # Check health
  %(prog)s health
        """
    )
    parser.add_argument(
        "--db-path",
        default=config.database_file,
        help="SQLite database file (default: DATABASE_PATH/urlshortener.db)"
    )
    parser.add_argument("--short-domain", default=config.short_domain, help="Domain used in short URLs")
    parser.add_argument("--code-length", type=int, default=config.short_code_length, help="Length of generated codes")
    parser.add_argument(
        "--max-retries",
        type=int,
        default=config.max_collision_retries,
        help="Short code attempts before giving up"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")

    get_parser = subparsers.add_parser("get", help="Get original URL")
    get_parser.add_argument("short_code", help="Short code to lookup")

    info_parser = subparsers.add_parser("info", help="Show the stored record")
    info_parser.add_argument("short_code", help="Short code to lookup")

    subparsers.add_parser("health", help="Check store health")

    return parser


async def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    cli = URLShortenerCLI(
        db_path=args.db_path,
        short_domain=args.short_domain,
        code_length=args.code_length,
        max_collision_retries=args.max_retries,
        verbose=args.verbose,
    )

    try:
        try:
            await cli.initialize()
        except (ValueError, StoreError) as e:
            _print({"success": False, "error": str(e)}, error=True)
            return 1

        if args.command == "shorten":
            return await cli.shorten(args.url)
        elif args.command == "get":
            return await cli.get(args.short_code)
        elif args.command == "info":
            return await cli.info(args.short_code)
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1

    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
