# dhl_rates/core/config.py

import os
from functools import lru_cache
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings.
    Loads values from environment variables (.env file)
    """
    # DHL Express credentials
    DHL_API_KEY: str = ""
    DHL_API_SECRET: str = ""
    DHL_ACCOUNT_NUMBER: str = ""
    DHL_TEST_MODE: bool = True

    # Shipper origin used when no stock location is matched
    DHL_ORIGIN_COUNTRY_CODE: str = ""
    DHL_ORIGIN_POSTAL_CODE: str = ""
    DHL_ORIGIN_CITY_NAME: str = ""

    DHL_UNIT_OF_MEASUREMENT: str = "metric"
    DHL_CURRENCY: str = ""           # Overrides the order currency when set
    DEFAULT_CURRENCY: str = "USD"    # Store-wide fallback

    # HTTP timeouts (seconds)
    DHL_CONNECT_TIMEOUT: float = 5.0
    DHL_READ_TIMEOUT: float = 10.0

    # Rate cache lifetime (seconds)
    DHL_RATE_CACHE_TTL: int = 600

    LOG_LEVEL: str = "INFO"

    model_config = ConfigDict(
        env_file=os.environ.get('ENV_FILE', '.env') if os.path.exists('.env') else None,
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache()
def get_settings():
    """Cached settings to avoid loading .env file for every quote"""
    return Settings()

def clear_settings_cache():
    """Clear the settings cache - useful when switching between environments"""
    get_settings.cache_clear()
