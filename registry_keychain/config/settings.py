"""
Configuration using Pydantic for type-safe settings management.

Settings come from ``REGISTRY_KEYCHAIN_*`` environment variables or from a YAML
file loaded with ``KeychainSettings.from_yaml``.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from registry_keychain.exceptions import ConfigurationError
from registry_keychain.store.keyring_store import DEFAULT_SECURITY_TOOL
from registry_keychain.utils.logging_config import VALID_LEVELS

_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")


class KeychainSettings(BaseSettings):
    """registry-keychain settings."""

    model_config = SettingsConfigDict(
        env_prefix="REGISTRY_KEYCHAIN_",
        case_sensitive=False,
    )

    helper_id: str = Field(
        default="registry-keychain",
        min_length=1,
        description="Namespace id under which registry credentials are stored",
    )
    log_level: str = Field(default="INFO", description="Minimum log level")
    trusted_application_paths: list[str] = Field(
        default_factory=list,
        description="Applications granted silent access to credentials saved by login",
    )
    security_tool: str = Field(
        default=DEFAULT_SECURITY_TOOL,
        description="Path to the macOS security command",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in VALID_LEVELS:
            raise ValueError(f"log_level must be one of: {', '.join(VALID_LEVELS)}")
        return level

    @classmethod
    def from_yaml(cls, config_path: str) -> KeychainSettings:
        """Load settings from a YAML file, expanding ${VAR} and ${VAR:-default}.

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        def expand(match: re.Match[str]) -> str:
            value = os.getenv(match.group(1), match.group(2))
            if value is None:
                raise ConfigurationError(
                    f"Invalid environment variable reference in config: "
                    f"Environment variable {match.group(1)} is not set"
                )
            return value

        try:
            config_dict = yaml.safe_load(_ENV_VAR_PATTERN.sub(expand, config_file.read_text()))
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e

        if config_dict is not None and not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        try:
            return cls(**(config_dict or {}))
        except (ValidationError, TypeError) as e:
            raise ConfigurationError(f"Failed to validate configuration: {e}") from e
