#!/usr/bin/env python3
"""
Main CLI entry point for the Contacts API server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from contacts import __version__
from contacts.config import settings
from contacts.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="contacts")
def cli() -> None:
    """Contacts CLI - run the GraphQL server and prepare its database."""
    pass


@cli.command()
@click.option(
    "--host",
    default=settings.api_host,
    show_default=True,
    help="Host to bind to",
)
@click.option(
    "--port",
    default=settings.api_port,
    type=int,
    show_default=True,
    help="Port to bind to",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the Contacts GraphQL server."""

    configure_logging(debug=(log_level == "debug"), log_level=log_level)

    logger.info(
        "Starting Contacts API server",
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )

    # Reload workers import the app in a fresh process and read settings from these
    os.environ["CONTACTS_API_HOST"] = host
    os.environ["CONTACTS_API_PORT"] = str(port)
    os.environ.setdefault("CONTACTS_LOG_LEVEL", log_level)
    if log_level == "debug":
        os.environ["CONTACTS_DEBUG"] = "true"

    try:
        uvicorn.run(
            "contacts.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("init-db")
@click.option(
    "--database-url",
    default=None,
    help="Database URL (default: CONTACTS_DATABASE_URL or settings)",
)
def init_db(database_url: str | None) -> None:
    """Create the contacts table if it does not exist."""
    from contacts.database import create_database
    from contacts.repository import ContactRepository, StorageError

    configure_logging(debug=settings.debug, log_level=settings.log_level)

    async def _init() -> None:
        database = create_database(database_url)
        try:
            await ContactRepository(database).ensure_schema()
        finally:
            await database.dispose()

    try:
        asyncio.run(_init())
    except StorageError as e:
        logger.error("Database initialization failed", error=e.message)
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    click.echo("Contacts table is ready")


if __name__ == "__main__":
    cli()
