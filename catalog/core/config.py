from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Ensure env file is loaded before Settings() reads environment variables
from catalog.core.env import load_env
load_env()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=None,  # we load via catalog.core.env (ENV_FILE)
        extra="ignore",
        case_sensitive=True,
    )

    DATABASE_URL: str
    SQL_ECHO: bool = False

    LOG_LEVEL: str = "INFO"

    # Country listing cache (disabled when REDIS_URL is unset)
    REDIS_URL: Optional[str] = None
    COUNTRY_CACHE_TTL_SECONDS: int = 3600


settings = Settings()
