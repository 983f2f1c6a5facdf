"""
Configuration Management for Expense Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every tunable of the ledger (initial admin, index capacity, budget
enforcement, logging) is validated once at startup.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """
    Main ledger settings.
    
    Loads configuration from LEDGER_* environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Identity
    admin_principal: str = Field(
        default="deployer",
        min_length=1,
        description="Principal that becomes administrator when the ledger is created"
    )
    
    # Record store limits
    user_index_capacity: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Maximum number of expense IDs kept per user"
    )
    
    # Approval behaviour
    enforce_budget: bool = Field(
        default=False,
        description="Reject approvals that would push a category over its budget"
    )
    
    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    log_json: bool = Field(
        default=True,
        description="Render logs as JSON (False = human-readable console output)"
    )
    
    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept stdlib level names."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {allowed}")
        return v.upper()


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get ledger settings (cached).
    
    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()
