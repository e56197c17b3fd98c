"""
Configuration management for ldapguard.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ldapguard.utils.exceptions import ConfigurationError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("json", "text")


class Config(BaseModel):
    """
    Package-wide settings for ldapguard with environment variable support.
    """

    model_config = ConfigDict(validate_assignment=True)

    # Logging Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: str = Field(
        default="json",
        description="Log format (json, text)"
    )

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        if value.upper() not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {value}")
        return value

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, value: str) -> str:
        if value.lower() not in LOG_FORMATS:
            raise ValueError(f"Invalid log format: {value}")
        return value

    @classmethod
    def load_from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "Config":
        """
        Load configuration from environment variables and optional .env file.

        Args:
            env_file: Optional path to .env file to load

        Returns:
            Config instance

        Raises:
            ConfigurationError: If a variable holds an unsupported value
        """
        if env_file:
            load_dotenv(env_file)
        else:
            for env_path in [".env", ".env.local"]:
                if os.path.exists(env_path):
                    load_dotenv(env_path)
                    break

        config_data = {}

        env_mapping = {
            "LDAPGUARD_LOG_LEVEL": "log_level",
            "LDAPGUARD_LOG_FORMAT": "log_format",
        }

        for env_var, config_field in env_mapping.items():
            value = os.getenv(env_var)
            if value is None:
                continue

            config_data[config_field] = value

        try:
            return cls(**config_data)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration from environment: {e}",
                details={"errors": e.errors()},
            ) from e

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "Config":
        """Create configuration from a dictionary."""
        return cls(**config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return self.model_dump()


# Global configuration instance
_global_config: Optional[Config] = None


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Global Config instance
    """
    global _global_config
    if _global_config is None:
        _global_config = Config.load_from_env()
    return _global_config


def set_config(config: Config) -> None:
    """
    Set the global configuration instance.

    Args:
        config: Config instance to set as global
    """
    global _global_config
    _global_config = config


def reset_config() -> None:
    """Reset the global configuration to None."""
    global _global_config
    _global_config = None
