"""
Centralized Settings Configuration

Uses Pydantic Settings to load configuration from environment variables
with validation and type coercion.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///darts.db"

    # Scoring defaults
    default_outshot_type: int = 1  # 1 = double, 2 = master, 3 = any
    default_starting_lives: int = 3  # Knockout

    # Recalculation
    recalculation_dry_run: bool = True
    recalculation_since: str = "(All Time)"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"
    service_name: str = "darts-scoring"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return upper_v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is either json or console."""
        lower_v = v.lower()
        if lower_v not in {"json", "console"}:
            raise ValueError("log_format must be 'json' or 'console'")
        return lower_v

    @field_validator("default_outshot_type")
    @classmethod
    def validate_outshot_type(cls, v: int) -> int:
        """Outshot type must be one of double (1), master (2) or any (3)."""
        if v not in (1, 2, 3):
            raise ValueError("default_outshot_type must be 1 (double), 2 (master) or 3 (any)")
        return v


def get_settings() -> Settings:
    """
    Get application settings.

    Creates a new Settings instance each time, so tests can
    patch the environment and read a fresh configuration.
    """
    return Settings()


# Import this for quick access: from core.settings import settings
settings = Settings()
