"""
Configuration management for the Contacts API
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./my.db"
    sql_echo: bool = False

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    api_reload: bool = False
    cors_origins: list[str] = ["*"]

    # GraphQL
    graphql_path: str = "/graphql"
    graphiql: bool = True  # In-browser query console on the GraphQL path

    # Body returned for every path outside the GraphQL endpoint
    fallback_body: str = "Hello World"

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "CONTACTS_"
        case_sensitive = False


# Global settings instance
settings = Settings()


def get_async_database_url(database_url: str) -> str:
    """Map a plain SQLite URL onto the aiosqlite async driver."""
    if database_url.startswith("sqlite:///"):
        return database_url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return database_url
