"""
Configuration settings for the exercise GIF sync.

Uses Pydantic Settings to load environment variables for the ExerciseDB source,
the destination database, pagination/retry tuning and logging. The pipeline
itself never reads settings directly: `Settings.sync_config()` produces an
explicit `SyncConfig` that is passed in at construction.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://exercisedb.p.rapidapi.com/exercises"
DEFAULT_API_HOST = "exercisedb.p.rapidapi.com"


@dataclass(frozen=True)
class Credentials:
    """Secrets needed by the source API and the destination database."""

    api_key: str
    api_host: str
    database_dsn: str


@dataclass(frozen=True)
class SyncConfig:
    """
    Explicit configuration for a single sync run.

    Delays are expressed in milliseconds; `max_retries` is the total number of
    attempts made for one page before the run is aborted.
    """

    api_base_url: str
    limit: int
    total_estimate: int
    delay_ms: int
    retry_delay_ms: int
    max_retries: int
    destination_table: str
    credentials: Credentials
    timeout_seconds: float = 15.0

    def __post_init__(self) -> None:
        if self.limit <= 0:
            raise ValueError(f"limit must be positive, got {self.limit}")
        if self.total_estimate < 0:
            raise ValueError(f"total_estimate must be >= 0, got {self.total_estimate}")
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {self.max_retries}")
        if self.delay_ms < 0 or self.retry_delay_ms < 0:
            raise ValueError("delays must be non-negative")
        if not self.destination_table:
            raise ValueError("destination_table must not be empty")


class Settings(BaseSettings):
    # Source API
    api_base_url: str = Field(DEFAULT_API_BASE_URL, alias="EXERCISEDB_BASE_URL")
    api_key: str = Field("", alias="EXERCISEDB_API_KEY")
    api_host: str = Field(DEFAULT_API_HOST, alias="EXERCISEDB_API_HOST")
    api_timeout_seconds: float = Field(15.0, alias="EXERCISEDB_TIMEOUT_SECONDS")

    # Destination database
    database_url: Optional[str] = Field(None, alias="DATABASE_URL")
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("postgres", alias="DB_NAME")
    db_sslmode: str = Field("prefer", alias="DB_SSLMODE")

    # Sync tuning
    sync_limit: int = Field(100, alias="SYNC_LIMIT")
    sync_total_estimate: int = Field(1300, alias="SYNC_TOTAL_ESTIMATE")
    sync_batch_delay_ms: int = Field(1000, alias="SYNC_BATCH_DELAY_MS")
    sync_retry_delay_ms: int = Field(2000, alias="SYNC_RETRY_DELAY_MS")
    sync_max_retries: int = Field(3, alias="SYNC_MAX_RETRIES")
    sync_destination_table: str = Field("exercise_gifs", alias="SYNC_DESTINATION_TABLE")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    def dsn(self) -> str:
        """Destination DSN; `DATABASE_URL` wins over the individual parts."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}?sslmode={self.db_sslmode}"
        )

    def sync_config(
        self,
        *,
        limit: Optional[int] = None,
        total_estimate: Optional[int] = None,
        destination_table: Optional[str] = None,
    ) -> SyncConfig:
        """
        Build the run configuration, applying optional per-run overrides.
        """
        return SyncConfig(
            api_base_url=self.api_base_url,
            limit=limit or self.sync_limit,
            total_estimate=self.sync_total_estimate if total_estimate is None else total_estimate,
            delay_ms=self.sync_batch_delay_ms,
            retry_delay_ms=self.sync_retry_delay_ms,
            max_retries=self.sync_max_retries,
            destination_table=destination_table or self.sync_destination_table,
            credentials=Credentials(
                api_key=self.api_key,
                api_host=self.api_host,
                database_dsn=self.dsn(),
            ),
            timeout_seconds=self.api_timeout_seconds,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Credentials", "Settings", "SyncConfig", "get_settings"]
