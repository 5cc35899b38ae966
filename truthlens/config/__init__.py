import logging
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("truthlens")


class Settings(BaseSettings):
    """Gateway and client settings, read from the environment and .env."""
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    LOVABLE_API_KEY: Optional[str] = None
    AI_GATEWAY_URL: str = "https://ai.gateway.lovable.dev/v1/chat/completions"

    ANALYZE_MODEL: str = "google/gemini-3-flash-preview"
    VERIFY_MODEL: str = "google/gemini-2.5-flash"
    CHAT_MODEL: str = "google/gemini-2.5-flash"

    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None

    USAGE_STORE_PATH: str = "~/.truthlens/storage.json"
    MAX_FREE_USES: int = 3


settings = Settings()

from .constants import (
    LLM_CONFIG,
    USAGE_CONFIG,
    IMAGE_CONFIG,
    HISTORY_CONFIG,
)

REQUIRED_KEYS = [
    "LOVABLE_API_KEY",
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
]

def check_api_keys_on_startup():
    """Check for required API keys on startup."""
    missing_keys = [key for key in REQUIRED_KEYS if not getattr(settings, key)]

    if missing_keys:
        logger.warning(f"Missing configuration: {', '.join(missing_keys)}")
    else:
        logger.info("All required API keys are configured.")

__all__ = [
    "logger",
    "Settings",
    "settings",
    "check_api_keys_on_startup",
    "LLM_CONFIG",
    "USAGE_CONFIG",
    "IMAGE_CONFIG",
    "HISTORY_CONFIG",
]
