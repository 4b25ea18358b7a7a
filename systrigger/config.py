"""Configuration — loads and validates systrigger.yaml with Pydantic."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from systrigger.errors import ConfigurationError
from systrigger.triggers import TriggerSpec

DEFAULT_CONFIG_PATH = Path("/etc/systrigger.yaml")


class Config(BaseModel):
    """Run-wide settings.

    Every field has a default, so an absent configuration file is equivalent
    to an empty one.
    """

    root: str = "/"
    disabled_handlers: list[str] = []
    command_timeout: float | None = None
    history_file: str | None = "var/log/systrigger/history.jsonl"
    log_level: str = "info"
    log_format: Literal["console", "json"] = "console"
    triggers_dir: str | None = None
    triggers: list[TriggerSpec] = []

    @field_validator("disabled_handlers", mode="before")
    @classmethod
    def _deduplicate_handlers(cls, v: list[str] | None) -> list[str]:
        """Remove duplicate handler names while preserving order."""
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError("disabled_handlers must be a list")
        seen: set[str] = set()
        result: list[str] = []
        for name in v:
            if name not in seen:
                seen.add(name)
                result.append(name)
        return result

    @field_validator("command_timeout")
    @classmethod
    def _positive_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("command_timeout must be positive")
        return v

    def root_path(self) -> Path:
        """Return the resolved root the triggers operate on."""
        return Path(self.root).resolve()

    def history_path(self, root: Path | None = None) -> Path | None:
        """Return the run-history file.

        Relative paths are resolved under *root*, defaulting to the configured
        root. ``None`` disables history.
        """
        if not self.history_file:
            return None
        path = Path(self.history_file)
        if path.is_absolute():
            return path
        return (root or self.root_path()) / path


def load_config(path: Path | str | None = None) -> Config:
    """Load and validate a configuration file.

    Args:
        path: Path to the YAML file. When ``None`` the default location is
            tried and silently ignored if missing.

    Returns:
        A validated Config instance.

    Raises:
        ConfigurationError: If an explicit file is missing, or any file is
            empty, malformed or fails validation.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return Config()
        config_path = DEFAULT_CONFIG_PATH
    else:
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError(f"Unable to read config file {config_path}: {exc}") from exc

    if data is None:
        raise ConfigurationError(f"Config file is empty: {config_path}")
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file must contain a YAML mapping: {config_path}")

    try:
        return Config(**data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid config file {config_path}: {exc}") from exc
