"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from contacts.config import Settings
from contacts.database import Database
from contacts.repository import ContactRepository


@pytest.fixture(scope="function")
def database_url(tmp_path: Path) -> str:
    """Return a URL for a fresh SQLite file in the test's temp directory."""
    return f"sqlite:///{tmp_path / 'contacts.db'}"


@pytest_asyncio.fixture(scope="function")
async def database(database_url: str) -> AsyncGenerator[Database, None]:
    db = Database(database_url)
    yield db
    await db.dispose()


@pytest_asyncio.fixture(scope="function")
async def repository(database: Database) -> ContactRepository:
    """Provide a repository whose table already exists."""
    repo = ContactRepository(database)
    await repo.ensure_schema()
    return repo


@pytest.fixture(scope="function")
def app_settings(database_url: str) -> Settings:
    return Settings(database_url=database_url, api_port=3000)


@pytest.fixture(scope="function")
def client(app_settings: Settings) -> Generator[TestClient, None, None]:
    """TestClient with the lifespan running, so the table is created."""
    from contacts.api.app import create_app

    with TestClient(create_app(app_settings)) as test_client:
        yield test_client


@pytest.fixture
def graphql(client: TestClient):
    """Post a GraphQL document and return the decoded response body."""

    def _execute(query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        payload: dict[str, Any] = {"query": query}
        if variables is not None:
            payload["variables"] = variables
        response = client.post("/graphql", json=payload)
        return response.json()

    return _execute


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)
