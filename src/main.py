"""Entry point for the PostgreSQL MCP gateway.

The server speaks MCP over stdio; it is normally spawned as a subprocess by
an MCP client. Logs go to stderr so stdout stays reserved for the protocol.

Usage:
    python main.py
    python main.py --env-file /path/to/.env --log-level DEBUG
"""

import argparse
import asyncio
import logging
import os
import sys

from core.config import AppConfig, load_env_file
from core.exceptions import ConfigurationError, DatabaseConnectionError

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


def configure_logging(level: str):
    """Configure root logging on stderr."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr
    )


async def run_stdio_mode(app_config: AppConfig):
    """Run MCP server in STDIO mode."""
    logger.info(f"Starting {app_config.server_name} against {app_config.database.describe()}")

    from protocol.stdio_server import run_stdio_server
    await run_stdio_server(app_config)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="PostgreSQL MCP Gateway - query, describe_table and list_tables over stdio"
    )
    parser.add_argument(
        "--env-file",
        type=str,
        default=None,
        help="Path to a .env file (default: ENV_FILE_PATH, ./.env, project root .env)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: from LOG_LEVEL env or INFO)"
    )
    return parser


def main(argv=None):
    """Main entry point with argument parsing."""
    args = build_parser().parse_args(argv)

    load_env_file(args.env_file)
    configure_logging(args.log_level or os.getenv("LOG_LEVEL") or "INFO")

    try:
        app_config = AppConfig.from_env()
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e.message}")
        sys.exit(1)

    try:
        asyncio.run(run_stdio_mode(app_config))
    except DatabaseConnectionError as e:
        logger.error(f"STDIO server error: {e.message}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
