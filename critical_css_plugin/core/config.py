"""Plugin-wide configuration using Pydantic settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Ambient settings that seed plugin defaults and logging."""

    model_config = SettingsConfigDict(
        env_prefix="CRITICAL_CSS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    debug: bool = False
    log_level: str | None = None

    default_filename_template: str = "[name].critical.css"
    default_viewport_width: int = 1920
    default_viewport_height: int = 1920


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""

    return Settings()


settings = get_settings()
