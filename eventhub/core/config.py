"""
Application configuration using pydantic-settings.
Values come from environment variables (or a local .env file) with defaults
suited to running the service on a laptop.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "EventHub"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "auto"  # "auto", "json" or "console"

    # Persistence
    STORE_BACKEND: str = "file"  # "file" or "memory"
    DATA_DIR: str = "./data"
    SEED_DEMO_DATA: bool = False

    # Scheduling
    SLOT_SUGGESTION_LIMIT: int = 5

    # Assistant
    ASSISTANT_REPLY_DELAY_SECONDS: float = 1.0

    # Chat completion boundary
    CHAT_PROVIDER: str = "echo"  # "echo" or "openai"
    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"

    @property
    def log_as_json(self) -> bool:
        if self.LOG_FORMAT == "auto":
            return self.ENVIRONMENT == "production"
        return self.LOG_FORMAT == "json"

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
