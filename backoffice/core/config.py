"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode and interactive docs. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        database_url: SQLAlchemy URL of the order store.
        database_echo: Log every SQL statement.
        create_schema: Create missing tables at startup.
        rate_limit_default: Default rate limit for read endpoints.
        rate_limit_orders: Rate limit for order placement.
        max_request_size_bytes: Maximum allowed request body size.
        valuation_workers: Threads used for the concurrent portfolio fetches.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="BACKOFFICE_"
    )

    project_name: str = "Back Office"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    database_url: str = "sqlite:///./backoffice.db"
    database_echo: bool = False
    create_schema: bool = True
    rate_limit_default: str = "60/minute"
    rate_limit_orders: str = "30/minute"
    max_request_size_bytes: int = 65_536  # 64 KB
    valuation_workers: int = 2

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
