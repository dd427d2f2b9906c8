"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Optional, Tuple

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.availability_matcher import ALLOWED_START_BOUNDARY_MINUTES
from .domain.exceptions import InvalidTime
from .domain.slot_index import SLOT_MINUTES, time_to_slot
from .domain.weekly_template import DAYS_PER_WEEK, WEEKDAY_NAMES, WeeklyTemplate

DayPeriods = List[Tuple[str, str]]


def _default_week_template() -> List[DayPeriods]:
    """Monday to Friday 08:00-12:00 and 13:00-17:00, weekends closed."""
    working_day = [("08:00", "12:00"), ("13:00", "17:00")]
    return [[]] + [list(working_day) for _ in range(5)] + [[]]


class SchedulingDefaults(BaseModel):
    """Default appointment constraints."""
    start_boundary_minutes: int = 30
    duration_minutes: int = 60

    @field_validator("start_boundary_minutes")
    @classmethod
    def validate_start_boundary(cls, value: int) -> int:
        """Ensure appointments start on a supported boundary."""
        if value not in ALLOWED_START_BOUNDARY_MINUTES:
            raise ValueError(
                f"start_boundary_minutes must be one of {ALLOWED_START_BOUNDARY_MINUTES}, got {value}"
            )
        return value

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure appointment duration is a positive multiple of 5 minutes."""
        if value <= 0 or value % SLOT_MINUTES:
            raise ValueError(
                f"duration_minutes must be a positive multiple of {SLOT_MINUTES}, got {value}"
            )
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Berlin"
    week_template: List[DayPeriods] = Field(default_factory=_default_week_template)
    defaults: SchedulingDefaults = Field(default_factory=SchedulingDefaults)
    provider_calendar: Optional[Path] = None
    client_calendar: Optional[Path] = None

    @field_validator("week_template")
    @classmethod
    def validate_week_template(cls, value: List[DayPeriods]) -> List[DayPeriods]:
        """Ensure the template has seven days of valid, well-ordered periods."""
        if len(value) != DAYS_PER_WEEK:
            raise ValueError(
                f"week_template must have exactly {DAYS_PER_WEEK} days (Sunday first), got {len(value)}"
            )

        for weekday, periods in enumerate(value):
            for start, end in periods:
                try:
                    start_slot = time_to_slot(start)
                    end_slot = time_to_slot(end)
                except InvalidTime as exc:
                    raise ValueError(f"{WEEKDAY_NAMES[weekday]}: {exc}") from exc
                if start_slot >= end_slot:
                    raise ValueError(
                        f"{WEEKDAY_NAMES[weekday]}: period {start}-{end} must start before it ends"
                    )
        return value

    @model_validator(mode="after")
    def validate_calendars(self) -> "AppConfig":
        """Expand user home references in calendar paths."""
        if self.provider_calendar is not None:
            self.provider_calendar = self.provider_calendar.expanduser()
        if self.client_calendar is not None:
            self.client_calendar = self.client_calendar.expanduser()
        return self

    def build_weekly_template(self) -> WeeklyTemplate:
        """Build the weekly template grids from the configured periods."""
        return WeeklyTemplate.from_pairs(self.week_template)

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

        # Calendar paths in the file are relative to the file itself
        base_dir = config_path.parent
        if config.provider_calendar is not None and not config.provider_calendar.is_absolute():
            config.provider_calendar = base_dir / config.provider_calendar
        if config.client_calendar is not None and not config.client_calendar.is_absolute():
            config.client_calendar = base_dir / config.client_calendar

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
