"""
Configuration Management for FBAR Facts

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: Only the outer layers (orchestrator, CLI) read settings.
The loaders and the report context take explicit arguments, so the same
inputs always produce the same results regardless of the environment.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class FbarSettings(BaseSettings):
    """
    Application settings.
    
    Loads configuration from FBAR_* environment variables and .env file.
    """
    
    model_config = SettingsConfigDict(
        env_prefix="FBAR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )
    
    data_filename: str = Field(
        default="data.yml",
        min_length=1,
        description="Name of the user data document inside the data directory"
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level"
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines instead of console output"
    )
    audit_conversions: bool = Field(
        default=True,
        description="Record every rate lookup and conversion in the audit trail"
    )
    
    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {sorted(LOG_LEVELS)}")
        return level


@lru_cache()
def get_settings() -> FbarSettings:
    """
    Get application settings (cached).
    
    Call get_settings.cache_clear() to reload if needed.
    """
    return FbarSettings()
