"""
Application settings and configuration management.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from pydantic import Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings

from myhours.exceptions import ValidationError


def _default_config_dir() -> Path:
    """Resolve the per-user configuration directory."""
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home)
    return Path.home()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Logging
    log_level: str = Field(default="WARNING")

    # MyHours API
    api_base_url: str = Field(default="https://api2.myhours.com/api")
    api_version: str = Field(default="1.0")
    request_timeout: float = Field(default=5.0)

    # Storage
    config_dir: Path = Field(default_factory=_default_config_dir)
    credentials_filename: str = Field(default="my-hours-cli.json")

    # Fudge
    fudge_marker_note: str = Field(default="Fudged hours")
    default_tag_color: str = Field(default="#007bff")

    @field_validator("config_dir", mode="before")
    @classmethod
    def ensure_path(cls, v: str | Path) -> Path:
        """Ensure directory paths are Path objects."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended directly."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("default_tag_color")
    @classmethod
    def validate_tag_color(cls, v: str) -> str:
        """Validate that the tag color is a #RRGGBB hex string."""
        if not re.fullmatch(r"#[0-9a-fA-F]{6}", v):
            raise ValueError(f"Invalid tag color: {v}")
        return v.lower()

    @field_validator("fudge_marker_note")
    @classmethod
    def validate_marker_note(cls, v: str) -> str:
        """The marker note identifies fudged entries and cannot be blank."""
        if not v.strip():
            raise ValueError("Fudge marker note cannot be empty")
        return v

    @property
    def credentials_path(self) -> Path:
        """Full path of the cached session file."""
        return self.config_dir / self.credentials_filename

    model_config = {
        "env_prefix": "MYHOURS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def get_settings() -> Settings:
    """
    Load settings from the environment and the optional ``.env`` file.

    Raises
    ------
    ValidationError
        If a ``MYHOURS_*`` value is invalid.
    """
    try:
        return Settings()
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        raise ValidationError(
            f"Invalid configuration for {field}: {first.get('msg', 'invalid value')}",
            field_name=field,
            invalid_value=first.get("input"),
        ) from e
