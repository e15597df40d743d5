from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ClickHouse (HTTP interface)
    CLICKHOUSE_URL: str = "http://clickhouse:8123"
    CLICKHOUSE_DATABASE: str = "default"
    CLICKHOUSE_USER: str = "default"
    CLICKHOUSE_PASSWORD: str = ""
    CLICKHOUSE_TIMEOUT: float = Field(default=30.0, description="Seconds allowed for one query")
    FLOWS_TABLE: str = "flows"

    # Sankey request bounds
    SANKEY_MAX_LIMIT: int = 50
    SANKEY_MAX_DIMENSIONS: int = 10

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = Field(default="json", description="'json' for production, 'console' for dev")


def get_settings() -> Settings:
    return Settings()
