from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    debug: bool = False
    log_sql: bool = False
    app_name: str = "Message Intake"
    database_url: str = "sqlite:///./intake.db"

    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    message_list_default_limit: int = 10
    # 0 or below disables the upper bound on `limit`.
    message_list_max_limit: int = 100

    message_consumer_enabled: bool = True
    message_consumer_poll_ms: int = 250
    message_consumer_batch_size: int = 50
    message_consumer_max_attempts: int = 5

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, list):
            return value
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return []


@lru_cache
def get_settings() -> Settings:
    return Settings()
