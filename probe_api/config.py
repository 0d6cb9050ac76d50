"""
File: config.py
Purpose: Centralized configuration using environment variables (12-factor).
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_VERSION = "1.0.0"


class Settings(BaseSettings):
    """Load service configuration from environment variables."""
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    ENV: str = "prod"  # "test" suppresses the listener
    SERVICE_NAME: str = "probe-api"
    LOG_LEVEL: str = "INFO"

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    APP_VERSION: str = DEFAULT_VERSION
    FAULT: str = ""  # "1" makes /api/fault answer 500

    @property
    def version(self) -> str:
        """Reported version; an empty APP_VERSION falls back to the default."""
        return self.APP_VERSION or DEFAULT_VERSION

    @property
    def fault_enabled(self) -> bool:
        return self.FAULT == "1"

    @property
    def testing(self) -> bool:
        return self.ENV == "test"


@lru_cache
def get_settings() -> Settings:
    """Return process settings (cached; tests call get_settings.cache_clear())."""
    return Settings()
