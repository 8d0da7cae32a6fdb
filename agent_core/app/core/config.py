"""
Application Configuration
=========================
Centralized configuration with Pydantic Settings V2.
Every environment variable is read through this module.
"""

from functools import lru_cache
from typing import Annotated, Optional, Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application Settings - Environment Variables

    Values are read from the .env file or from environment variables.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # APP CONFIG
    # =========================================================================
    app_name: str = Field(default="Agent Execution Core", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode flag")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment"
    )

    # =========================================================================
    # API CONFIG
    # =========================================================================
    api_v1_prefix: str = Field(default="/api/v1", description="API version prefix")
    cors_origins: Annotated[list[str], NoDecode] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"],
        description="Allowed CORS origins"
    )

    # =========================================================================
    # WORK SOURCE (staged provider calls)
    # =========================================================================
    work_source: str = Field(
        default="simulated",
        description="Registered work source used for staged provider calls"
    )
    work_source_seed: Optional[int] = Field(
        default=None,
        description="Seed for the simulated work source (reproducible runs)"
    )
    simulated_delay_scale: float = Field(
        default=1.0,
        description="Multiplier applied to every simulated provider latency",
        ge=0.0,
        le=10.0
    )

    # =========================================================================
    # AGENT EXECUTION
    # =========================================================================
    agent_execution_timeout_seconds: float = Field(
        default=300.0,
        description="Maximum wall-clock time for one agent execution",
        gt=0.0,
        le=3600.0
    )
    email_batch_size: int = Field(
        default=50,
        description="Recipients per simulated email provider batch",
        ge=1,
        le=1000
    )
    lead_preview_size: int = Field(
        default=10,
        description="Qualified leads included in the lead generator preview",
        ge=1,
        le=100
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("work_source", mode="before")
    @classmethod
    def normalize_work_source(cls, v: str) -> str:
        """Work source names are case-insensitive."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @model_validator(mode="after")
    def validate_production_delays(self) -> "Settings":
        """Simulated latency cannot be disabled in production."""
        if self.environment == "production" and self.simulated_delay_scale == 0:
            raise ValueError("SIMULATED_DELAY_SCALE must be greater than 0 in production")
        return self

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """
    Singleton Settings Instance

    LRU cache ensures settings are loaded once and reused.
    Call get_settings.cache_clear() to reload if needed.

    Returns:
        Settings: Application settings instance

    Example:
        >>> from agent_core.app.core.config import get_settings
        >>> settings = get_settings()
        >>> print(settings.simulated_delay_scale)
    """
    return Settings()
