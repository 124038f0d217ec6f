"""Runtime configuration."""
from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from interview_tracker.errors import ConfigurationError

DEV_API_URL = "http://localhost:5000/api"


class Settings(BaseSettings):
    """Settings loaded from INTERVIEW_TRACKER_* environment variables."""

    model_config = SettingsConfigDict(env_prefix="INTERVIEW_TRACKER_", frozen=True)

    env: Literal["development", "production"] = "development"
    api_url: Optional[str] = None
    log_level: str = "WARNING"

    @property
    def base_url(self) -> str:
        if self.env == "development":
            return (self.api_url or DEV_API_URL).rstrip("/")
        if not self.api_url:
            raise ConfigurationError(
                "INTERVIEW_TRACKER_API_URL must be set when INTERVIEW_TRACKER_ENV=production"
            )
        return self.api_url.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Read the environment once; the result is held for the process lifetime."""
    return Settings()
