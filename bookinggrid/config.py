"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import Optional

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.models import MINUTES_PER_DAY, GridConfig


class GridSettings(BaseModel):
    """Operating hours, slot resolution and booking defaults."""
    start_hour: int = 9
    end_hour: int = 17
    slot_resolution_minutes: int = 30
    booking_duration_minutes: int = 60

    @field_validator("start_hour", "end_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 24."""
        if not 0 <= v <= 24:
            raise ValueError(f"Hour must be between 0 and 24, got {v}")
        return v

    @field_validator("slot_resolution_minutes", "booking_duration_minutes")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("minutes must be greater than zero")
        return value

    @model_validator(mode="after")
    def validate_grid(self) -> "GridSettings":
        """Ensure the window opens before it closes and slots tile it exactly."""
        if self.end_hour <= self.start_hour:
            raise ValueError("end_hour must be later than start_hour")
        span = (self.end_hour - self.start_hour) * 60
        if span % self.slot_resolution_minutes or MINUTES_PER_DAY % self.slot_resolution_minutes:
            raise ValueError(
                f"slot_resolution_minutes={self.slot_resolution_minutes} must divide "
                f"both the operating span ({span} min) and a full day"
            )
        if self.booking_duration_minutes % self.slot_resolution_minutes:
            raise ValueError("booking_duration_minutes must be a multiple of slot_resolution_minutes")
        return self

    def to_grid_config(self) -> GridConfig:
        return GridConfig(
            start_hour=self.start_hour,
            end_hour=self.end_hour,
            slot_resolution_minutes=self.slot_resolution_minutes,
        )


class AppConfig(BaseModel):
    """Application configuration."""
    grid: GridSettings = Field(default_factory=GridSettings)
    timezone: str = "UTC"
    bookings_file: Optional[Path] = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)
        if config.bookings_file is not None and not config.bookings_file.is_absolute():
            # Relative booking files are resolved against the config file.
            config = config.model_copy(
                update={"bookings_file": config_path.parent / config.bookings_file}
            )
        return config


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """
    Load the given config file, or the default one if it exists.

    An explicitly passed path must exist; without one the built-in defaults
    are used when no config.yaml is found.
    """
    if config_path is not None:
        return AppConfig.load_from_yaml(config_path)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)
    return AppConfig()
