from typing import Dict, Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Application
    app_env: str = "local"
    log_level: str = "DEBUG"

    # Remote data source
    data_source: Literal["json", "http"] = "json"
    api_base_url: Optional[str] = None
    api_key: Optional[str] = None

    # Data paths
    data_dir: str = "sample_data"
    fallback_dir: str = ".hungerzhub"
    storage_namespace: str = "hungerzhub"

    # Sync settings
    freshness_window_s: float = 5.0
    request_timeout_s: float = 5.0
    retry_attempts: int = 3
    retry_backoff_s: float = 1.0
    poll_interval_s: float = 10.0

    # Checkout
    coupons: Dict[str, float] = {"PRINCE10": 10.0}

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)
