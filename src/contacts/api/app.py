"""
Main FastAPI application for the Contacts API
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .. import __version__
from ..config import Settings, settings
from ..database import Database, create_database
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..repository import ContactRepository

# Configure logging before creating logger
configure_logging(debug=settings.debug, log_level=settings.log_level)
logger = get_logger(__name__)

FALLBACK_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def create_app(app_settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use instead of the environment-derived defaults
        database: Pre-built database handle; one is created from the settings otherwise
    """
    app_settings = app_settings or settings
    if database is None:
        database = create_database(app_settings.database_url)
    repository = ContactRepository(database)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Contacts API...")
        await repository.ensure_schema()
        logger.info(
            "GraphQL server running",
            url=f"http://{app_settings.api_host}:{app_settings.api_port}"
            f"{app_settings.graphql_path}",
        )

        yield

        logger.info("Shutting down Contacts API...")
        await database.dispose()

    app = FastAPI(
        title="Contacts API",
        description="GraphQL CRUD API over a single contacts table",
        version=__version__,
        lifespan=lifespan,
        debug=app_settings.debug,
        # Only the GraphQL path is served; everything else gets the fallback body
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = app_settings
    app.state.database = database
    app.state.repository = repository

    app.add_middleware(LoggingContextMiddleware, graphql_path=app_settings.graphql_path)

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials="*" not in app_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from ..graphql.schema import create_graphql_router, validate_schema

    # Fail fast: the server should not start with a broken schema
    logger.info("Validating GraphQL schema...")
    validate_schema()

    graphql_router = create_graphql_router(
        path=app_settings.graphql_path, graphiql=app_settings.graphiql
    )
    app.include_router(graphql_router, prefix="")
    logger.info("GraphQL endpoint initialized successfully", endpoint=app_settings.graphql_path)

    # Registered last so the GraphQL routes match first
    @app.api_route("/{full_path:path}", methods=FALLBACK_METHODS, include_in_schema=False)
    async def fallback(full_path: str) -> PlainTextResponse:  # pyright: ignore [reportUnusedFunction]
        """Static response for every path outside the GraphQL endpoint."""
        _ = full_path
        return PlainTextResponse(app_settings.fallback_body)

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "contacts.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
