from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./moodlog.db"
    log_level: str = "INFO"

    # Advice generation (OpenAI-compatible chat completion endpoint)
    openai_api_key: str = ""
    advice_enabled: bool = True
    advice_model: str = "gpt-4o-mini"
    advice_base_url: Optional[str] = None
    advice_timeout_seconds: float = 20.0
    advice_max_tokens: int = 800

    default_timezone: str = "America/New_York"  # IANA timezone
    recent_recommendations_limit: int = 10


@lru_cache
def get_settings() -> Settings:
    return Settings()
