"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.exceptions import InvalidTimeError
from .domain.time_utils import parse_time


class DefaultsConfig(BaseModel):
    """Default settings for slot search and activity projection."""
    duration_minutes: int = 60
    max_results: int = 5
    unscheduled_start_time: str = "09:00"  # Assumed start of activities without a time
    unscheduled_duration_minutes: int = 60

    @field_validator("duration_minutes", "max_results", "unscheduled_duration_minutes")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        """Ensure counts and durations are positive."""
        if value <= 0:
            raise ValueError("value must be greater than zero")
        return value

    @field_validator("unscheduled_start_time")
    @classmethod
    def validate_start_time(cls, value: str) -> str:
        """Validate the fallback start time is a 24-hour HH:MM string."""
        try:
            parse_time(value)
        except InvalidTimeError as exc:
            raise ValueError(str(exc)) from exc
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    data_file: Path = Path("trip_data.json")
    user_id: str = ""  # Acting user for the CLI
    log_level: str = "WARNING"
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Normalize and validate the logging level name."""
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    def resolve_data_file(self, config_path: Path | None = None) -> Path:
        """
        Resolve the store file path.

        Relative paths are taken relative to the config file's directory.
        """
        if self.data_file.is_absolute() or config_path is None:
            return self.data_file
        return config_path.parent / self.data_file

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

        return cls(**data)


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


def load_config(config_path: Path | None = None) -> tuple[AppConfig, Path | None]:
    """
    Load the configuration, falling back to defaults.

    An explicitly given path must exist. When no path is given and no
    config.yaml is found at the default locations, defaults are used.

    Returns:
        (config, path it was loaded from or None)
    """
    if config_path is not None:
        return AppConfig.load_from_yaml(config_path), config_path

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path), default_path

    return AppConfig(), None
