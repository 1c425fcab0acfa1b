"""Application configuration models."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Iterable, Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CORS_ORIGINS: tuple[str, ...] = ("*",)


class Settings(BaseSettings):
    """Settings loaded from environment variables or a .env file."""

    app_name: str = Field(default="Movie Catalog", alias="APP_NAME")
    server_host: str = Field(default="0.0.0.0", alias="HOST")
    server_port: int = Field(default=8000, alias="PORT")

    database_url: str = Field(
        default="sqlite+aiosqlite:///./movies.db", alias="DATABASE_URL"
    )
    catalog_seed_path: Path | None = Field(default=None, alias="CATALOG_SEED_PATH")

    cors_origins: tuple[str, ...] = Field(
        default=DEFAULT_CORS_ORIGINS, alias="CORS_ORIGINS"
    )

    catalog_api_url: HttpUrl = Field(
        default="http://localhost:8000", alias="CATALOG_API_URL"
    )
    client_timeout_seconds: float = Field(
        default=10.0, alias="CLIENT_TIMEOUT", gt=0, le=120
    )

    environment: Literal["development", "production"] = Field(
        default="development", alias="ENVIRONMENT"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, value: object) -> tuple[str, ...]:
        """Normalise allowed origins from comma separated environment values."""

        if value is None:
            return DEFAULT_CORS_ORIGINS
        if isinstance(value, str):
            raw_values = [part.strip() for part in value.split(",")]
        elif isinstance(value, Iterable):
            raw_values = [str(part).strip() for part in value]
        else:
            raise TypeError("CORS_ORIGINS must be a string or iterable of strings")

        cleaned: list[str] = []
        for entry in raw_values:
            origin = entry.rstrip("/")
            if origin and origin not in cleaned:
                cleaned.append(origin)
        if not cleaned:
            return DEFAULT_CORS_ORIGINS
        return tuple(cleaned)

    @property
    def catalog_api_base_url(self) -> str:
        """Return the API base URL without a trailing slash."""

        return str(self.catalog_api_url).rstrip("/")

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()  # type: ignore[call-arg]


settings = get_settings()
