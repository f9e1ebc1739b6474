"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import Literal

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator

Role = Literal["user", "admin", "shop_owner"]


class ReminderConfig(BaseModel):
    """Settings for the task reminder loop."""
    window_minutes: int = 1
    poll_interval_seconds: int = 60
    store_path: Path | None = None

    @field_validator("window_minutes")
    @classmethod
    def validate_window(cls, value: int) -> int:
        """Ensure the due window is not negative."""
        if value < 0:
            raise ValueError(f"window_minutes must not be negative, got {value}")
        return value

    @field_validator("poll_interval_seconds")
    @classmethod
    def validate_interval(cls, value: int) -> int:
        """Ensure the polling interval is positive."""
        if value <= 0:
            raise ValueError("poll_interval_seconds must be greater than zero")
        return value

    def get_store_path(self) -> Path:
        """Get the pending reminder store path."""
        return self.store_path or Path.home() / ".pettime_reminders.json"


class AppConfig(BaseModel):
    """Application configuration."""
    api_base_url: str = "http://localhost:3000/api"
    api_token: str | None = None
    timezone: str = "UTC"
    role: Role = "user"
    reminders: ReminderConfig = Field(default_factory=ReminderConfig)

    @field_validator("api_base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        """Strip trailing slashes so endpoint paths can be appended."""
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"api_base_url must be an http(s) URL, got {value!r}")
        return value.rstrip("/")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA identifier."""
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

        return cls(**data)

    @classmethod
    def load_or_default(cls, config_path: Path | None = None) -> "AppConfig":
        """Load the config file if there is one, otherwise use defaults."""
        path = config_path or get_default_config_path()
        if config_path is None and not path.exists():
            return cls()
        return cls.load_from_yaml(path)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of pettime/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
