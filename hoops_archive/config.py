"""Configuration management using Pydantic Settings.

This module provides centralized configuration for the archive tooling,
supporting environment variables and .env file loading.

Example:
    >>> from hoops_archive.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.program_dir)
    public/data/boys/basketball
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Environment variables take precedence over .env file values.

    Attributes:
        data_dir: Root of the static data tree (``<data_dir>/<program>/<sport>``).
        program: Which program's data to read (boys or girls).
        sport: Sport folder under the program directory.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for log files.
        site_dir: Output directory for the generated static site.
        leaderboard_size: Fixed length of aggregate leaderboards.
        min_games_qualifier: Minimum games played for per-game records.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Data
    data_dir: str = Field(
        default="public/data",
        alias="HOOPS_DATA_DIR",
        description="Root directory of the static JSON data files",
    )
    program: Literal["boys", "girls"] = Field(
        default="boys",
        alias="HOOPS_PROGRAM",
        description="Program whose data files are read",
    )
    sport: str = Field(
        default="basketball",
        alias="HOOPS_SPORT",
        description="Sport folder under the program directory",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    log_dir: str = Field(
        default="logs",
        alias="LOG_DIR",
        description="Directory for log files",
    )

    # Site output
    site_dir: str = Field(
        default="docs",
        alias="HOOPS_SITE_DIR",
        description="Output directory for the static records site",
    )

    # Records
    leaderboard_size: int = Field(
        default=20,
        alias="LEADERBOARD_SIZE",
        ge=1,
        le=100,
        description="Number of rows in each season/career leaderboard",
    )
    min_games_qualifier: int = Field(
        default=10,
        alias="MIN_GAMES_QUALIFIER",
        ge=0,
        description="Minimum games played to qualify for per-game records",
    )

    @field_validator("data_dir", "log_dir", "site_dir", "sport")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Ensure path strings are valid."""
        if not v or v.isspace():
            raise ValueError("Path cannot be empty or whitespace")
        return v

    @property
    def data_dir_obj(self) -> Path:
        """Return data root as Path object."""
        return Path(self.data_dir)

    @property
    def program_dir(self) -> Path:
        """Return the directory holding this program's JSON files."""
        return self.data_dir_obj / self.program / self.sport

    @property
    def log_dir_obj(self) -> Path:
        """Return log directory as Path object."""
        return Path(self.log_dir)

    @property
    def site_dir_obj(self) -> Path:
        """Return site output directory as Path object."""
        return Path(self.site_dir)

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        self.log_dir_obj.mkdir(parents=True, exist_ok=True)
        self.site_dir_obj.mkdir(parents=True, exist_ok=True)


# Singleton pattern for settings
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        Settings instance loaded from environment.

    Example:
        >>> settings = get_settings()
        >>> print(settings.leaderboard_size)
        20
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (useful for testing)."""
    global _settings
    _settings = None
