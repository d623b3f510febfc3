"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./priority_credit.db"

    # Registry genesis
    deployer_principal: str = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
    contract_name: str = "priority-credit"

    # Registry policy
    project_name_max_length: int = 256
    project_name_ascii_only: bool = True
    allow_self_transfer: bool = True

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # API Settings
    api_v1_prefix: str = "/api/v1"
    app_name: str = "Priority Credit Registry"
    version: str = "0.1.0"

    # Rate limiting
    rate_limit_blocks_per_minute: int = 30  # per client IP for block submission
    rate_limit_enabled: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
