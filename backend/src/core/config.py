"""Application configuration using pydantic-settings."""
import re
from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Same notation as the `ms` package: "3600", "45s", "1.5h", "2 days", "1w", "10 minutes", "1y"
_DURATION_PATTERN = re.compile(
    r"^\s*(\d+(?:\.\d+)?|\.\d+)\s*"
    r"(milliseconds?|msecs?|ms|seconds?|secs?|s|minutes?|mins?|m"
    r"|hours?|hrs?|h|days?|d|weeks?|w|years?|yrs?|y)?\s*$",
)
_UNIT_SECONDS = {
    "ms": 0.001,
    "s": 1,
    "m": 60,
    "h": 3600,
    "d": 86400,
    "w": 604800,
    "y": 31557600,  # 365.25 days
}


def _unit_seconds(unit: str | None) -> float:
    if not unit:
        return 1
    if unit.startswith(("ms", "msec", "milli")):
        return _UNIT_SECONDS["ms"]
    return _UNIT_SECONDS[unit[0]]


def parse_duration(value: str) -> timedelta:
    """
    Parse a token lifetime such as "1h", "1.5h", "2 days" or "3600" into a timedelta.

    A bare number is read as seconds. Units may be abbreviated ("s", "min",
    "hrs", "w", "y") or spelled out ("seconds", "minutes", "days", "years").

    Raises:
        ValueError: If the value is not a positive duration.
    """
    match = _DURATION_PATTERN.match(value.lower())
    if match is None:
        raise ValueError(f"Invalid duration: '{value}'")
    amount, unit = match.groups()
    seconds = float(amount) * _unit_seconds(unit)
    if seconds <= 0:
        raise ValueError(f"Duration must be positive: '{value}'")
    return timedelta(seconds=seconds)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str
    db_pool_size: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")

    # HTTP
    port: int = Field(default=3000, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    cors_origins_str: str = Field(default="*", validation_alias="CORS_ORIGINS")

    # Cache - task listing read-through cache
    cache_driver: Literal["redis", "memory"] = Field(
        default="redis", validation_alias="CACHE_DRIVER",
    )
    cache_host: str = Field(default="localhost", validation_alias="CACHE_HOST")
    cache_port: int = Field(default=6379, validation_alias="CACHE_PORT")
    cache_password: str | None = Field(default=None, validation_alias="CACHE_PASSWORD")
    cache_ttl_seconds: int = Field(default=3600, gt=0, validation_alias="CACHE_TTL_SECONDS")
    cache_namespace: str = Field(default="todoapp", validation_alias="CACHE_NAMESPACE")
    cache_pool_size: int = Field(default=20, validation_alias="CACHE_POOL_SIZE")
    # When true, cache errors are logged and requests fall through to the database
    cache_fail_open: bool = Field(default=False, validation_alias="CACHE_FAIL_OPEN")

    # Object storage - profile photos
    storage_driver: Literal["supabase", "memory"] = Field(
        default="supabase", validation_alias="STORAGE_DRIVER",
    )
    supabase_url: str | None = Field(default=None, validation_alias="SUPABASE_URL")
    supabase_key: str | None = Field(default=None, validation_alias="SUPABASE_KEY")
    supabase_bucket: str | None = Field(default=None, validation_alias="SUPABASE_BUCKET")
    photo_upload_requires_auth: bool = Field(
        default=False, validation_alias="PHOTO_UPLOAD_REQUIRES_AUTH",
    )

    # JWT access tokens
    jwt_secret: str = Field(min_length=1, validation_alias="JWT_SECRET")
    jwt_expires_in: str = Field(default="1h", validation_alias="JWT_EXPIRES_IN")
    jwt_issuer: str | None = Field(default=None, validation_alias="JWT_ISSUER")
    jwt_audience: str | None = Field(default=None, validation_alias="JWT_AUDIENCE")

    # Password hashing work factor
    bcrypt_salt_rounds: int = Field(
        default=10, ge=4, le=31, validation_alias="BCRYPT_SALT_ROUNDS",
    )

    @field_validator("jwt_expires_in")
    @classmethod
    def validate_jwt_expires_in(cls, value: str) -> str:
        """Reject token lifetimes that cannot be parsed."""
        parse_duration(value)
        return value

    @model_validator(mode="after")
    def validate_storage_credentials(self) -> "Settings":
        """Supabase storage needs its URL, key and bucket up front."""
        if self.storage_driver != "supabase":
            return self

        missing = [
            name
            for name, value in (
                ("SUPABASE_URL", self.supabase_url),
                ("SUPABASE_KEY", self.supabase_key),
                ("SUPABASE_BUCKET", self.supabase_bucket),
            )
            if not value
        ]
        if missing:
            raise ValueError(f"{', '.join(missing)} is required when STORAGE_DRIVER=supabase")
        return self

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def cache_url(self) -> str:
        """Redis URL built from host, port and optional password."""
        if self.cache_password:
            return f"redis://:{self.cache_password}@{self.cache_host}:{self.cache_port}"
        return f"redis://{self.cache_host}:{self.cache_port}"

    @property
    def jwt_expires_delta(self) -> timedelta:
        """Access token lifetime."""
        return parse_duration(self.jwt_expires_in)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
