"""
Configuration for calculator sessions.

Values come from environment variables prefixed with ``CALC_`` (or a
``.env`` file) and fall back to the defaults below.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CalculatorSettings(BaseSettings):
    """Session settings."""

    model_config = SettingsConfigDict(
        env_prefix="CALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Oldest history entries are dropped past this length; None keeps all
    history_limit: int | None = Field(default=100, ge=1)

    # Snapshots kept for Calculator.undo()
    undo_depth: int = Field(default=50, ge=0)

    log_level: str = "WARNING"


settings = CalculatorSettings()
