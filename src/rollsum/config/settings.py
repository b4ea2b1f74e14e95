from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized config.

    Read from env first (ROLLSUM_*), otherwise default to local dev values.
    """

    model_config = SettingsConfigDict(env_prefix="ROLLSUM_", extra="ignore")

    # HTTP listener
    host: str = "127.0.0.1"
    port: int = 8080

    # client defaults (CLI + smoke test)
    base_url: str = "http://127.0.0.1:8080"
    client_timeout_s: float = 10.0

    # 0 keeps every bucket forever; > 0 evicts expired buckets on that period
    sweep_interval_s: float = 0.0

    log_level: str = "INFO"
    log_json: bool = True


settings = Settings()
