"""
Configuration management using Pydantic Settings.
All parameters are loaded from environment variables with sensible defaults.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_BASE_PATH = Path(os.environ.get(
    "COMMITMENTS_BASE_PATH",
    os.environ.get("APP_BASE_PATH", Path.cwd())
))
ENV_FILE_PATH = APP_BASE_PATH / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application
    app_env: str = Field(default="development")
    app_debug: bool = Field(default=False)
    app_log_level: str = Field(default="INFO")

    # Server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000)

    # Data source: "memory", "snapshot" or "supabase"
    data_source: str = Field(default="snapshot")
    snapshot_dir: Path = Field(default=Path("./data/snapshots"))

    # Supabase (PostgREST)
    supabase_url: str = Field(default="")
    supabase_key: str = Field(default="")
    supabase_schema: Optional[str] = Field(default=None)
    request_timeout_seconds: float = Field(default=30.0)

    # Currency fallbacks for records whose currency id is unknown
    default_currency_code: str = Field(default="USD")
    default_currency_symbol: str = Field(default="$")

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
