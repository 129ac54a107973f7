"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of Zendesk2, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Configuration management for Zendesk2.

This module provides a central location for all configuration settings in Zendesk2.
It handles environment variables, default values, and validation of configuration
parameters for the API client and logging.
"""

import logging
import os
from typing import Any, ClassVar, Never

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

logger = logging.getLogger(__name__)

TRUE_VALUES = ("1", "true", "yes", "on")


class BaseConfig(BaseModel):
    """Base configuration class with common functionality."""

    # Class variable to store environment variable prefixes
    ENV_PREFIX: ClassVar[str] = "ZENDESK2_"

    @classmethod
    def from_env(cls, **overrides) -> Never:
        """
        Create a configuration instance from environment variables.

        Args:
        ----
            **overrides: Key-value pairs that override environment variables

        Returns:
        -------
            An instance of the configuration class

        """
        raise NotImplementedError("Subclasses must implement from_env method")

    @classmethod
    def get_env_var(cls, key: str, default: Any = None) -> Any:
        """
        Get an environment variable with the class prefix.

        Args:
        ----
            key: Key name without prefix
            default: Default value if environment variable is not found

        Returns:
        -------
            The environment variable value or default

        """
        env_key = f"{cls.ENV_PREFIX}{key.upper()}"
        return os.environ.get(env_key, default)

    @classmethod
    def get_env_flag(cls, key: str, default: bool = False) -> bool:
        """Read a boolean environment variable with the class prefix."""
        value = cls.get_env_var(key)
        if value is None:
            return default
        return value.strip().lower() in TRUE_VALUES


class LoggingConfig(BaseConfig):
    """Configuration for logging settings."""

    level: str = Field(
        default_factory=lambda: os.environ.get("ZENDESK2_LOG_LEVEL", "INFO"),
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    use_rich: bool = Field(
        default=True,
        description="Whether to use rich for logging formatting",
    )
    log_file: str | None = Field(
        default=None,
        description="Path to the log file (None for console-only logging)",
    )
    json_format: bool = Field(
        default=False,
        description="Whether to use JSON format for logs",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, value):
        """Validate that the log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        value = value.upper()
        if value not in valid_levels:
            logger.warning(f"Invalid log level '{value}', defaulting to INFO")
            return "INFO"
        return value

    @classmethod
    def from_env(cls, **overrides) -> "LoggingConfig":
        """Create a logging configuration from environment variables."""
        config = {
            "level": cls.get_env_var("LOG_LEVEL", "INFO"),
            "use_rich": cls.get_env_flag("LOG_USE_RICH", True),
            "log_file": cls.get_env_var("LOG_FILE"),
            "json_format": cls.get_env_flag("LOG_JSON", False),
        }
        config.update(overrides)
        return cls(**config)

    def get_log_level_int(self) -> int:
        """Get the numeric logging level."""
        return getattr(logging, self.level)

    def configure_logging(self, debug: bool = False) -> None:
        """Configure logging based on these settings."""
        from zendesk2.core.logging import configure_logging as configure_contextual_logging

        configure_contextual_logging(
            level=self.level,
            log_file=self.log_file,
            json_format=self.json_format,
            use_rich=self.use_rich,
            debug=debug,
        )


class ZendeskConfig(BaseConfig):
    """Configuration for the Zendesk API session."""

    url: str = Field(
        ...,
        description="Zendesk account URL (e.g., https://example.zendesk.com)",
    )
    username: str = Field(
        ...,
        description="Email address of the acting agent",
    )
    token: str | None = Field(
        default=None,
        description="API token, also the shared secret for remote authentication",
    )
    password: str | None = Field(
        default=None,
        description="Password, used when no API token is configured",
    )
    jwt_token: str | None = Field(
        default=None,
        description="Shared secret used to sign JWT single sign-on payloads",
    )
    mock: bool = Field(
        default=False,
        description="Serve requests from an in-memory store instead of the network",
    )
    timeout: float = Field(
        default=30.0,
        description="API request timeout in seconds",
    )

    ENV_PREFIX: ClassVar[str] = "ZENDESK_"

    @field_validator("url")
    @classmethod
    def validate_url(cls, value):
        """Validate URL format."""
        if not value:
            raise ValueError("url must be provided")

        # Ensure URL has proper prefix, adding https:// if missing
        if not value.startswith(("http://", "https://")):
            value = f"https://{value}"
        return value.rstrip("/")

    @field_validator("username")
    @classmethod
    def validate_username(cls, value):
        """Validate username."""
        if not value:
            raise ValueError("username must be provided")
        return value

    @model_validator(mode="after")
    def validate_auth_method(self):
        """Validate that a token or password is provided for real requests."""
        if not self.mock and not (self.token or self.password):
            raise ValueError("Either token or password must be provided unless mock is enabled.")
        return self

    @classmethod
    def from_env(cls, **overrides) -> "ZendeskConfig":
        """Create a Zendesk configuration from environment variables."""
        config = {
            "url": cls.get_env_var("URL", ""),
            "username": cls.get_env_var("USERNAME", ""),
            "token": cls.get_env_var("TOKEN"),
            "password": cls.get_env_var("PASSWORD"),
            "jwt_token": cls.get_env_var("JWT_TOKEN"),
            "mock": cls.get_env_flag("MOCK", False),
            "timeout": cls.get_env_var("TIMEOUT", 30.0),
        }

        # Override with any directly provided values
        config.update({key: value for key, value in overrides.items() if value is not None})

        return cls(**config)


class AppConfig(BaseConfig):
    """Main application configuration that aggregates all other configurations."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )
    zendesk: ZendeskConfig | None = Field(
        default=None,
        description="Zendesk API configuration",
    )
    debug: bool = Field(
        default=False,
        description="Debug mode flag",
    )
    app_version: str = Field(
        default="0.0.0",
        description="Application version",
    )

    @classmethod
    def from_env(cls, **overrides) -> "AppConfig":
        """Create an application configuration from environment variables."""
        config = {
            "logging": LoggingConfig.from_env(),
            "debug": cls.get_env_flag("DEBUG", False),
            "app_version": cls.get_env_var("APP_VERSION", "0.0.0"),
        }

        if "ZENDESK_URL" in os.environ:
            try:
                config["zendesk"] = ZendeskConfig.from_env()
            except ValidationError as e:
                # Commands may still supply the missing settings as options
                logger.warning(f"Incomplete Zendesk configuration in environment: {e.error_count()} error(s)")

        for key, value in overrides.items():
            if key == "logging" and isinstance(value, dict):
                config[key] = LoggingConfig(**value)
            elif key == "zendesk" and isinstance(value, dict):
                config[key] = ZendeskConfig(**value)
            else:
                config[key] = value

        return cls(**config)

    def configure_logging(self) -> None:
        """Configure logging based on the settings."""
        self.logging.configure_logging(debug=self.debug)


# Global app configuration
_app_config = None


def get_app_config() -> AppConfig:
    """
    Get the global application configuration.

    Returns
    -------
        The application configuration instance

    """
    global _app_config
    if _app_config is None:
        _app_config = AppConfig.from_env()
    return _app_config


def init_app_config(config: AppConfig = None, **kwargs) -> AppConfig:
    """
    Initialize the global application configuration.

    Args:
    ----
        config: An existing AppConfig instance
        **kwargs: Key-value pairs for creating a new AppConfig

    Returns:
    -------
        The application configuration instance

    """
    global _app_config
    _app_config = config if config is not None else AppConfig.from_env(**kwargs)
    return _app_config
