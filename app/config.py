"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./timeline.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="America/Sao_Paulo",
        description="IANA timezone (or UTC offset) used to localize naive timestamps",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )
    anchor_base_path: str = Field(
        default="/clients",
        description="Path prefix used when building deep-link anchors",
        min_length=1,
    )
    timeline_window_size: int = Field(
        default=10,
        description="Number of entries rendered before the user reveals older ones",
        gt=0,
    )
    timeline_source_limit: int = Field(
        default=50,
        description="Maximum number of rows fetched from each timeline source",
        gt=0,
    )
    highlight_glow_seconds: float = Field(
        default=2.5,
        description="Seconds a deep-linked entry stays emphasized",
        gt=0,
    )
    highlight_fade_seconds: float = Field(
        default=0.5,
        description="Seconds used for the fade-out of the emphasis",
        gt=0,
    )
    notification_body_limit: int = Field(
        default=100,
        description="Maximum characters of the comment quoted in a mention notification",
        gt=0,
    )
    mention_ambiguity_policy: str = Field(
        default="skip",
        description="What to do when a mention matches several users: 'skip' or 'notify_all'",
    )
    automated_comment_origins: list[str] = Field(
        default_factory=lambda: ["ai_detection", "automation"],
        description="Comment origins that identify automatically detected comments",
    )

    @field_validator("mention_ambiguity_policy")
    @classmethod
    def _validate_ambiguity_policy(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"skip", "notify_all"}:
            raise ValueError("MENTION_AMBIGUITY_POLICY must be 'skip' or 'notify_all'")
        return normalized


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
