from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "greeting-service"
    app_env: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Runtime environment: development|production.",
    )

    # Listen address. Containers must bind all interfaces so the pod port is reachable.
    host: str = Field(
        default="0.0.0.0",
        validation_alias=AliasChoices("HOST", "host"),
        description="Interface the HTTP server binds to.",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("PORT", "port"),
        description="TCP port the HTTP server listens on (declared as containerPort).",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
        description="Root log level (DEBUG|INFO|WARNING|ERROR).",
    )

    @property
    def is_development(self) -> bool:
        return str(self.app_env).strip().lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
