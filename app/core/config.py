from functools import lru_cache
from pathlib import Path
from typing import Literal
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parents[2]
SUPPORTED_DATABASE_BACKENDS = ("postgresql", "sqlite")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: Literal["dev", "staging", "prod"] = "dev"
    app_name: str = "Bug Rush API"
    app_version: str = "1.0.0"
    api_prefix: str = "/api"
    debug: bool = False
    cors_allow_origins: str = "http://localhost:5173,http://localhost:3000"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    database_url: str = ""
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "bug_rush"
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_sslmode: Literal["disable", "allow", "prefer", "require", "verify-ca", "verify-full"] = "disable"
    db_pool_size: int = Field(default=10, ge=1)
    db_max_overflow: int = Field(default=0, ge=0)
    db_command_timeout: float = Field(default=30.0, gt=0)

    leaderboard_default_limit: int = Field(default=50, ge=1)
    leaderboard_max_limit: int = Field(default=500, ge=1)

    rounds_seed_file: str = ""

    @field_validator("database_url")
    @classmethod
    def check_database_backend(cls, value: str) -> str:
        if not value:
            return value
        backend = value.split("://", 1)[0].split("+", 1)[0]
        if backend not in SUPPORTED_DATABASE_BACKENDS:
            raise ValueError(f"unsupported database backend {backend!r}, expected one of {SUPPORTED_DATABASE_BACKENDS}")
        return value

    @property
    def async_database_url(self) -> str:
        if self.database_url:
            if self.database_url.startswith("postgresql+asyncpg://"):
                return self.database_url
            if self.database_url.startswith("postgresql://"):
                return "postgresql+asyncpg://" + self.database_url.removeprefix("postgresql://")
            return self.database_url
        user = quote_plus(self.db_user)
        password = quote_plus(self.db_password)
        ssl_query = ""
        if self.db_sslmode == "require":
            ssl_query = "?ssl=require"
        return (
            f"postgresql+asyncpg://{user}:{password}@{self.db_host}:{self.db_port}/{self.db_name}"
            f"{ssl_query}"
        )

    @property
    def cors_origins(self) -> list[str]:
        return [item.strip() for item in self.cors_allow_origins.split(",") if item.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
