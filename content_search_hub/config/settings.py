"""Application settings with modern Pydantic v2 patterns."""

from functools import lru_cache

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Merger settings
class MergerSettings(BaseModel):
    """Merger configuration settings."""

    default_limit: int = Field(
        default=100, ge=0, description="Result cap used when a request sets none"
    )
    log_merge_metrics: bool = Field(
        default=False, description="Log merge metrics after every merge"
    )


class FormatterSettings(BaseModel):
    """Display formatter settings."""

    default_icon: str | None = Field(
        default=None, description="Icon used when neither hit nor item has one"
    )
    require_default_icon: bool = Field(
        default=False,
        description="Treat a missing default icon as a configuration error",
    )


class AppSettings(BaseSettings):
    """Main application settings with modern Pydantic v2 patterns."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
        validate_default=True,
    )

    # Application metadata
    app_name: str = Field(default="Content Search Hub", description="Application name")
    environment: str = Field(default="development", description="Runtime environment")
    log_level: str = Field(default="INFO", description="Logging level")

    # Bucketed content search; when off the host falls back to the legacy engine
    buckets_enabled: bool = Field(
        default=True, description="Whether bucketed content search is enabled"
    )

    # Nested configurations
    merger: MergerSettings = Field(
        default_factory=MergerSettings, description="Merger settings"
    )
    formatter: FormatterSettings = Field(
        default_factory=FormatterSettings, description="Display formatter settings"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "staging", "production", "test"}
        if v.lower() not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of {valid_envs}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v.upper()


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()
