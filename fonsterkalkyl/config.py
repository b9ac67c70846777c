# fonsterkalkyl/config.py
import os
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # === Algemene app settings ===
    app_env: str = "local"  # local | development | production

    # === Prislista (Google Sheet proxy) ===
    price_list_url: Optional[str] = Field(None, description="Price list endpoint (GET = load, POST = save)")
    price_list_api_token: Optional[str] = Field(None, description="Bearer token for admin saves")
    price_cache_path: str = ".cache/price_list.json"
    price_cache_ttl_seconds: int = 600  # 10 min
    price_fetch_timeout_seconds: float = 10.0

    # === Logging ===
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_rotation: str = "1 day"
    log_retention: str = "30 days"
    log_to_file: bool = False

    # === Pydantic Settings config ===
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton Settings instance with simple env overrides."""
    s = Settings()

    env = os.getenv("ENVIRONMENT", s.app_env).lower()
    if env == "production":
        s.log_level = "WARNING"
    elif env == "development":
        s.log_level = "DEBUG"

    return s
