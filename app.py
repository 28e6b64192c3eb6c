#!/usr/bin/env python3
"""
Main entry point for URL shortener service.

Concurrency: requests are served concurrently via async I/O (FastAPI); store
operations run in worker threads against SQLite, whose unique indexes settle
insert races. Set WORKERS > 1 for multi-process scaling.

Usage:
    python app.py

Environment variables:
    SERVER_HOST - Host to bind to (default localhost)
    SERVER_PORT - Port to listen on (default 8080)
    SHORT_DOMAIN - host:port used in rendered short URLs
    DATABASE_PATH - Directory containing urlshortener.db
    SHORT_CODE_LENGTH - Length of generated codes, 4..12 (default 7)
    TEMPLATES_DIR - HTML templates directory
    REDIS_URL - Redis connection URL (optional)
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from pydantic import ValidationError

from config import Config, load_config
from urlshortener.database.sqlite import URLShortenerSQLite
from urlshortener.database.cache import RedisCache
from urlshortener.service import URLShortenerService
from urlshortener.shortcode import ShortCodeGenerator
from urlshortener.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the store at startup and close it, drained, at shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting URL shortener service...")

    db = URLShortenerSQLite(db_path=config.database_file, logger=logger)
    await db.initialize()

    cache = None
    if config.redis_url:
        logger.info(f"Connecting to Redis at {config.redis_url}")
        cache = RedisCache(
            redis_url=config.redis_url,
            ttl_seconds=config.cache_ttl_seconds,
            logger=logger,
        )
        await cache.connect()
    else:
        logger.info("Redis caching disabled")

    service = URLShortenerService(
        db=db,
        cache=cache,
        short_code_generator=ShortCodeGenerator(default_length=config.short_code_length),
        logger=logger,
        max_collision_retries=config.max_collision_retries,
    )

    app.state.db = db
    app.state.cache = cache
    app.state.service = service

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down URL shortener service...")
    await service.close()
    logger.info("Service stopped")


def build_app(config: Config, logger) -> FastAPI:
    """Create the app with store and service wired up by the lifespan."""
    app = create_app(
        db_instance=None,  # Will be set in lifespan
        cache_instance=None,
        service_instance=None,
        config=config,
    )
    app.state.logger = logger
    app.router.lifespan_context = lifespan
    return app


def create_application() -> FastAPI:
    """App factory used by uvicorn worker processes."""
    config = load_config()
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )
    return build_app(config, logger)


def main():
    """Main entry point."""
    try:
        config = load_config()
    except ValidationError as e:
        print(f"Failed to load configuration: {e}", file=sys.stderr)
        sys.exit(1)

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("URL Shortener Service")
    logger.info(f"Configuration: {config.model_dump()}")

    if config.workers > 1:
        # Worker processes need an import string to build their own app
        logger.info(f"Starting {config.workers} workers on http://{config.address}")
        uvicorn.run(
            "app:create_application",
            factory=True,
            host=config.server_host,
            port=config.server_port,
            workers=config.workers,
            log_level=config.log_level.lower(),
        )
        return

    app = build_app(config, logger)

    server = uvicorn.Server(uvicorn.Config(
        app,
        host=config.server_host,
        port=config.server_port,
        log_level=config.log_level.lower(),
        access_log=True,
    ))

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Server starting on http://{config.address}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)

    logger.info("Server stopped")


if __name__ == "__main__":
    main()
