#!/usr/bin/env python3
"""
Main entry point for the shortlink service.

Concurrency: route handlers that touch the link store are synchronous and run
in FastAPI's thread pool. All of them share the single store handle opened at
startup. WORKERS > 1 hands the server to uvicorn's process manager, which
builds the app in every worker through create_server_app; each worker opens
its own handle on the same SQLite file.

Usage:
    python app.py

Environment variables:
    DATABASE_PATH - SQLite file holding the links
    BASE_URL - Origin for short links when the request does not reveal one
    PATH_PREFIX - Optional path prefix for short links
    FALLBACK_LOCATION - Redirect target for unknown links
    HOST / PORT - Address to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortlink.common.logging_config import setup_logging
from shortlink.database.sqlite import SQLiteLinkStore
from shortlink.errors import StoreError
from shortlink.service import ShortenerService, RedirectorService
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the link store at startup and close it at shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info("Starting shortlink service...")
    logger.info(f"Opening link store at {config.database_path}")

    store = SQLiteLinkStore(db_path=config.database_path, logger=logger)

    app.state.store = store
    app.state.shortener = ShortenerService(
        store,
        logger=logger,
        path_prefix=config.path_prefix,
    )
    app.state.redirector = RedirectorService(
        store,
        logger=logger,
        fallback_location=config.fallback_location,
    )

    logger.info("Service started successfully")

    try:
        yield
    finally:
        logger.info("Shutting down shortlink service...")
        store.close()
        logger.info("Service stopped")


def build_app(config: Config) -> FastAPI:
    """Create the app; the store and services are attached by the lifespan handler."""
    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    app = create_app(
        store_instance=None,
        shortener_instance=None,
        redirector_instance=None,
        config=config,
        lifespan=lifespan,
    )
    app.state.logger = logger
    return app


def create_server_app() -> FastAPI:
    """App factory run inside each uvicorn worker process."""
    return build_app(load_config())


def main():
    """Main entry point."""
    config = load_config()

    if config.workers > 1:
        # Worker processes import the app themselves, so uvicorn needs an import string
        logger = setup_logging(
            level=config.log_level,
            log_file=config.log_file,
            json_format=config.log_json,
        )
        logger.info(f"Starting {config.workers} workers on {config.host}:{config.port}")
        uvicorn.run(
            "app:create_server_app",
            factory=True,
            host=config.host,
            port=config.port,
            workers=config.workers,
            log_level=config.log_level.lower(),
            access_log=True,
        )
        return

    app = build_app(config)
    logger = app.state.logger

    logger.info("Shortlink Service")
    logger.info(f"Configuration: {config.model_dump()}")

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except StoreError as e:
        logger.error(f"Link store error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
