"""
Configuration Management for Expense Ledger

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Components read settings once at construction and also accept explicit
overrides, so tests never depend on the environment.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """
    Ledger engine settings.
    
    Loads configuration from LEDGER_* environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    # Category taxonomy
    fallback_category: str = Field(
        default="Other",
        min_length=1,
        description="Category that orphaned expenses are reassigned to"
    )
    default_categories: str = Field(
        default="Food,Transportation,Entertainment,Shopping,Bills,Healthcare,Other",
        description="Comma-separated list of categories the registry is seeded with"
    )
    default_category: str = Field(
        default="Food",
        description="Category pre-selected for a new expense draft"
    )
    
    # Analytics
    top_expenses_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="How many expenses the top-expenses ranking returns"
    )
    recent_expenses_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="How many expenses the recent view returns"
    )
    
    # Export
    export_base_filename: str = Field(
        default="expenses",
        min_length=1,
        description="Base name for exported CSV files"
    )
    currency_symbol: str = Field(
        default="₹",
        description="Symbol used when formatting amounts for display"
    )
    
    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    json_logs: bool = Field(
        default=True,
        description="Render logs as JSON (False = console renderer)"
    )
    
    load_sample_data: bool = Field(
        default=False,
        description="Seed the store with sample expenses on startup"
    )
    
    @field_validator('default_categories')
    @classmethod
    def validate_default_categories(cls, v: str) -> str:
        """The registry can never start empty."""
        if not any(name.strip() for name in v.split(",")):
            raise ValueError("default_categories must name at least one category")
        return v
    
    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level
    
    @property
    def default_categories_list(self) -> list[str]:
        """Get seed categories as a list, in order, without duplicates."""
        names: list[str] = []
        for name in self.default_categories.split(","):
            name = name.strip()
            if name and name not in names:
                names.append(name)
        return names


@lru_cache()
def get_settings() -> LedgerSettings:
    """
    Get ledger settings (cached).
    
    Call get_settings.cache_clear() to reload if needed.
    """
    return LedgerSettings()


def validate_settings() -> dict[str, object]:
    """
    Validate settings are properly configured.
    
    Returns a dict of {setting_name: is_valid} plus an error entry on failure.
    Useful for startup checks.
    """
    results: dict[str, object] = {}
    
    try:
        _ = LedgerSettings()
        results["ledger"] = True
    except ValueError as e:
        results["ledger"] = False
        results["ledger_error"] = str(e)
    
    return results
