"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.shared import DEFAULT_CONSUL_ADDRESS, EnumEnvironment, EnumLogLevel
from src.shared.env import load_secret_file_variables  # noqa: F401


class ConsulSettings(BaseSettings):
    """Consul agent connection settings."""

    address: str = Field(
        default=DEFAULT_CONSUL_ADDRESS,
        description="Consul agent HTTP address",
        validation_alias=AliasChoices("CONSUL_ADDRESS", "CONSUL_HTTP_ADDR"),
    )
    token: Optional[str] = Field(
        default=None,
        description="ACL token sent with every request",
        validation_alias=AliasChoices("CONSUL_TOKEN", "CONSUL_HTTP_TOKEN"),
    )
    datacenter: Optional[str] = Field(
        default=None, description="Default datacenter for queries"
    )
    namespace: Optional[str] = Field(
        default=None, description="Default namespace for queries"
    )
    timeout: float = Field(
        default=30.0, description="HTTP request timeout in seconds", gt=0
    )

    model_config = SettingsConfigDict(
        env_prefix="CONSUL_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    consul: ConsulSettings = Field(default_factory=ConsulSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()
