"""Command line entry point.

Usage:
    devpulse [--host HOST] [--port PORT] [--db-path PATH] [--log-level LEVEL]
    python -m devpulse ...

Unset options fall back to ``DEVPULSE_*`` environment variables and then to
the defaults in ``devpulse.config.Settings``.
"""

import argparse

import uvicorn

from devpulse.adapters.logging import configure_logging, get_logger
from devpulse.app import create_app
from devpulse.config import Settings

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devpulse", description="Simulated monitoring dashboard API"
    )
    parser.add_argument("--host", help="interface to bind")
    parser.add_argument("--port", type=int, help="port to listen on")
    parser.add_argument("--db-path", help="SQLite database file")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    return parser


def load_settings(argv: list[str] | None = None) -> Settings:
    """Build Settings from the environment with command line overrides."""
    args = build_parser().parse_args(argv)
    overrides = {
        key: value
        for key, value in {
            "host": args.host,
            "port": args.port,
            "db_path": args.db_path,
            "log_level": args.log_level,
        }.items()
        if value is not None
    }
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> None:
    settings = load_settings(argv)
    configure_logging(settings.log_level)
    logger.info("Database: %s", settings.db_path)
    logger.info("API server: http://%s:%d", settings.host, settings.port)
    # uvicorn turns SIGINT/SIGTERM into lifespan shutdown, which closes the store
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
