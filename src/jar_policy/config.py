from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: str = "dev"
    log_level: str = "INFO"
    service_name: str = "jar-policy"

    # Sepolia
    default_chain_id: int = 11155111
    rpc_url: str = "http://127.0.0.1:8545"


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
