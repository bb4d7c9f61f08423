"""Configuration management for mediator."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

from mediator.core.exceptions import ConfigurationError

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class MediatorConfig(BaseSettings):
    """
    Configuration for mediator.

    The dispatcher itself takes no options; this only controls how the
    package reports what it does.

    Can be loaded from:
    - Environment variables (prefix: MEDIATOR_)
    - YAML file
    - Direct initialization

    Example:
        >>> config = MediatorConfig(log_level="debug")
        >>> config = MediatorConfig.from_yaml("mediator.yaml")
        >>> config.configure_logging()
    """

    model_config = SettingsConfigDict(
        env_prefix="MEDIATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    log_level: str = Field(
        default="WARNING",
        description="Level applied to the 'mediator' logger hierarchy",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the level name and reject unknown ones."""
        level = str(v).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}, expected one of {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def find_config_yaml(cls) -> Path | None:
        """
        Search for mediator.yaml in standard locations.

        Search order:
        1. Current working directory
        2. User home directory (~/.mediator/)

        Returns:
            Path to mediator.yaml if found, None otherwise
        """
        search_paths = [
            Path.cwd() / "mediator.yaml",
            Path.home() / ".mediator" / "mediator.yaml",
        ]

        for path in search_paths:
            if path.exists():
                return path

        return None

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> MediatorConfig:
        """
        Load configuration from YAML file.

        Environment variables win over values found in the file.

        Args:
            path: Path to YAML configuration file. If None, searches standard locations.

        Returns:
            MediatorConfig instance

        Raises:
            FileNotFoundError: If no file is found
            ConfigurationError: If the file does not hold a mapping
        """
        if path is None:
            path = cls.find_config_yaml()
            if path is None:
                raise FileNotFoundError(
                    "Config file not found. Searched:\n"
                    "  1. ./mediator.yaml\n"
                    "  2. ~/.mediator/mediator.yaml"
                )
        else:
            path = Path(path)
            if not path.exists():
                raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        if not isinstance(yaml_data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")

        result_data = {}
        for key, value in yaml_data.items():
            env_key = f"MEDIATOR_{str(key).upper()}"
            if env_key in os.environ:
                continue
            result_data[key] = value

        return cls(**result_data)

    def to_yaml(self, path: Path | str) -> None:
        """
        Save configuration to YAML file.

        Args:
            path: Path to save YAML configuration
        """
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(
                self.model_dump(mode="json"),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

    def configure_logging(self) -> logging.Logger:
        """Apply log_level to the package logger and return it."""
        logger = logging.getLogger("mediator")
        logger.setLevel(self.log_level)
        return logger

    def __repr__(self) -> str:
        return f"MediatorConfig(log_level={self.log_level!r})"
