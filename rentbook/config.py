"""Application configuration from environment variables and .env file."""

import logging
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field
from pydantic_settings import BaseSettings

from rentbook.engine.periods import PeriodPolicy

logger = logging.getLogger(__name__)


class TenantDeletePolicy(str, Enum):
    """What happens to bills and rent payments when their tenant is deleted."""

    BLOCK = "block"
    """Refuse to delete a tenant that still has bills or payments"""

    ORPHAN = "orphan"
    """Delete the tenant, keep its bills and payments"""

    CASCADE = "cascade"
    """Delete the tenant together with its bills and payments"""


class Settings(BaseSettings):
    """Settings loaded from environment variables.

    Pydantic loads values from:
    1. OS environment variables (at instantiation time)
    2. .env file in the working directory
    """

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str = Field(
        default="sqlite:///./rentbook.db",
        description="SQLAlchemy database URL",
    )
    database_echo: bool = Field(default=False, description="Log SQL queries")

    # Billing
    billing_period_policy: PeriodPolicy = Field(
        default=PeriodPolicy.PRIOR_MONTH,
        description="Label bills with the issue month (same_month) or the month before (prior_month)",
    )
    tenant_delete_policy: TenantDeletePolicy = Field(
        default=TenantDeletePolicy.BLOCK,
        description="Handling of dependent bills/payments when a tenant is deleted",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: str = Field(default="logs/server.log", description="Log file path")

    # API
    api_title: str = Field(default="rentbook API", description="API title")
    api_version: str = Field(default="0.1.0", description="API version")


_settings_instance: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create the settings instance (loaded on first use)."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
        logger.debug(
            "Loaded settings: database_url=%s, billing_period_policy=%s, tenant_delete_policy=%s",
            _settings_instance.database_url,
            _settings_instance.billing_period_policy.value,
            _settings_instance.tenant_delete_policy.value,
        )
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment."""
    global _settings_instance
    _settings_instance = None


__all__ = ["Settings", "TenantDeletePolicy", "get_settings", "reset_settings"]
