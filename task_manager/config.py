from functools import lru_cache
from typing import Any, Literal
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    # Application Configuration
    API_NAME: str = "Task Manager API"
    API_SUMMARY: str = "A small API for managing tasks"
    API_VERSION: str = "v1.0.x"

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    ENVIRONMENT: Literal["development", "production"] = "production"
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    CORS_ENABLED: bool = False
    CORS_ORIGINS: list[str] = ["*"]

    # Database Configuration
    DATABASE_URL: str | None = None

    DB_DRIVER: str = "postgresql"
    DB_HOST: str = "localhost"
    DB_PORT: int | None = None
    DB_USER: str | None = None
    DB_PASSWORD: str | None = None
    DB_NAME: str = "task_manager"

    TASKS_TABLE_NAME: str = "tasks"

    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_PRE_PING: bool = True

    # Startup connectivity check
    DB_CONNECT_MAX_RETRIES: int = 5
    DB_CONNECT_RETRY_DELAY: float = 5.0
    DB_CONNECT_BACKOFF: Literal["fixed", "exponential"] = "fixed"
    DB_CONNECT_MAX_DELAY: float = 60.0
    DB_CONNECT_JITTER: bool = False

    # OpenTelemetry Settings
    OTEL_ENABLED: bool = False
    OTEL_SERVICE_NAME: str = "task-manager"

    @model_validator(mode="after")
    def assemble_database_url(self):
        if not self.DATABASE_URL:
            self.DATABASE_URL = URL.create(
                drivername=self.DB_DRIVER,
                username=self.DB_USER,
                password=self.DB_PASSWORD,
                host=self.DB_HOST,
                port=self.DB_PORT,
                database=self.DB_NAME,
            ).render_as_string(hide_password=False)
        return self

    @field_validator("DB_CONNECT_MAX_RETRIES")
    def validate_max_retries(cls, v: int):
        if v < 1:
            raise ValueError("DB_CONNECT_MAX_RETRIES must be at least 1")
        return v

    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: Any):
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    def validate_list_from_string(cls, v: Any):
        if isinstance(v, str):
            return [item.strip() for item in v.split(",")]
        return v

    @property
    def expose_error_details(self) -> bool:
        return self.ENVIRONMENT == "development"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings():
    return Settings()
