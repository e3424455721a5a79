from pathlib import Path

from dotenv import load_dotenv
from pydantic import AliasChoices, Field
from typing import Optional
from pydantic_settings import BaseSettings

DEFAULT_REDIS_HOST = "localhost"
DEFAULT_REDIS_PORT = 6379

# Project root (parent of app/) - used so .env is found regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Explicitly load .env into os.environ so it works in tests and subprocesses
load_dotenv(_PROJECT_ROOT / ".env")


class Settings(BaseSettings):
    app_name: str = "threadkeep-api"
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENV", "ENVIRONMENT"),
    )
    log_level: str = Field(default="INFO", json_schema_extra={"env": "LOG_LEVEL"})
    port: int = Field(default=8000, json_schema_extra={"env": "PORT"})

    redis_url: Optional[str] = Field(default=None, json_schema_extra={"env": "REDIS_URL"})
    redis_host: str = Field(
        default=DEFAULT_REDIS_HOST, json_schema_extra={"env": "REDIS_HOST"}
    )
    redis_port: int = Field(
        default=DEFAULT_REDIS_PORT, json_schema_extra={"env": "REDIS_PORT"}
    )
    redis_db: int = Field(default=0, json_schema_extra={"env": "REDIS_DB"})
    redis_password: Optional[str] = Field(
        default=None, json_schema_extra={"env": "REDIS_PASSWORD"}
    )

    # Retention (lazy, applied on read)
    message_retention_days: int = Field(
        default=90, ge=1, json_schema_extra={"env": "MESSAGE_RETENTION_DAYS"}
    )
    chat_inactivity_days: int = Field(
        default=180, ge=1, json_schema_extra={"env": "CHAT_INACTIVITY_DAYS"}
    )

    # Message pagination
    messages_default_limit: int = Field(
        default=50, ge=1, json_schema_extra={"env": "MESSAGES_DEFAULT_LIMIT"}
    )
    messages_max_limit: int = Field(
        default=100, ge=1, json_schema_extra={"env": "MESSAGES_MAX_LIMIT"}
    )

    # Avatars
    avatar_api_url: Optional[str] = Field(
        default=None, json_schema_extra={"env": "AVATAR_API_URL"}
    )
    avatar_cache_ttl_seconds: int = Field(
        default=3600, json_schema_extra={"env": "AVATAR_CACHE_TTL_SECONDS"}
    )
    avatar_request_timeout_seconds: int = Field(
        default=5, json_schema_extra={"env": "AVATAR_REQUEST_TIMEOUT_SECONDS"}
    )

    rate_limit_messages_per_minute: Optional[int] = Field(
        default=None,
        json_schema_extra={"env": "RATE_LIMIT_MESSAGES_PER_MINUTE"},
    )

    realtime_enabled: bool = Field(
        default=True, json_schema_extra={"env": "REALTIME_ENABLED"}
    )
    realtime_channel: str = Field(
        default="chat_messages", json_schema_extra={"env": "REALTIME_CHANNEL"}
    )

    terms_version: str = Field(default="1.0", json_schema_extra={"env": "TERMS_VERSION"})

    @property
    def is_production(self) -> bool:
        """Check if the current environment is production."""
        return self.environment.lower() == "production"

    @property
    def is_test(self) -> bool:
        """Check if the current environment is test."""
        return self.environment.lower() == "test"

    @property
    def redis_url_resolved(self) -> str:
        """Return REDIS_URL when set, otherwise build one from host/port/db."""
        if self.redis_url:
            return self.redis_url
        auth = f":{self.redis_password}@" if self.redis_password else ""
        return f"redis://{auth}{self.redis_host}:{self.redis_port}/{self.redis_db}"

    class ConfigDict:
        env_file = str(_PROJECT_ROOT / ".env")
        env_file_encoding = "utf-8"
        extra = "allow"  # Allow extra environment variables


def get_settings() -> Settings:
    """Get application settings with required environment variables."""
    return Settings()
