from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Local dev: load from .env automatically.
    # In production: you typically inject real env vars instead.
    model_config = SettingsConfigDict(env_prefix="", extra="ignore", env_file=".env", env_file_encoding="utf-8")

    # Env vars:
    # - LOAD_SAMPLE_DATA (optional; seed the four demo users at startup)
    # - LOG_LEVEL (optional)
    # - APP_TITLE (optional; shown in the OpenAPI docs)
    load_sample_data: bool = Field(default=True, validation_alias="LOAD_SAMPLE_DATA")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    app_title: str = Field(default="User Directory", validation_alias="APP_TITLE")

    def model_post_init(self, __context):  # type: ignore[override]
        self.log_level = (self.log_level or "INFO").strip().upper()


def get_settings() -> Settings:
    """Load settings from environment.

    Keep this as the single canonical constructor for Settings(). FastAPI
    dependencies and tests can override/monkeypatch this function.
    """
    return Settings()
