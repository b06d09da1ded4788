"""Application configuration."""

from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "shared-lunch API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./shared_lunch.db")
    telegram_bot_token: str = getenv("BOT_TOKEN", "")
    telegram_api_base: str = getenv("TELEGRAM_API_BASE", "https://api.telegram.org")
    telegram_mode: str = getenv("TELEGRAM_MODE", "polling")
    telegram_timeout_seconds: float = float(getenv("TELEGRAM_TIMEOUT_SECONDS", "10"))
    notify_tick_seconds: float = float(getenv("NOTIFY_TICK_SECONDS", "30"))
    currency_symbol: str = getenv("CURRENCY_SYMBOL", "₽")
    seed_demo_data: bool = getenv("SEED_DEMO_DATA", "1") == "1"


settings: Settings = Settings()
