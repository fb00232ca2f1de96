"""
Configuration management for the IronMQ client.

This module provides the settings models used by the client, built on Pydantic
settings for type safety and environment variable support.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PROTOCOL = "https"
DEFAULT_HOST = "mq-aws-us-east-1.iron.io"
DEFAULT_PORT = 443
DEFAULT_API_VERSION = "1"


class LoggingConfig(BaseSettings):
    """Configuration for logging system."""

    level: str = Field(default="INFO", description="Logging level")
    json_output: bool = Field(default=True, description="Output logs in JSON format")

    model_config = SettingsConfigDict(env_prefix="IRON_LOG_")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level name."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"Logging level must be one of: {allowed}")
        return v.upper()


class IronMQConfig(BaseSettings):
    """Connection settings for the IronMQ service."""

    token: Optional[str] = Field(default=None, description="OAuth token")
    project_id: Optional[str] = Field(default=None, description="Project ID")
    protocol: str = Field(default=DEFAULT_PROTOCOL, description="http or https")
    host: str = Field(default=DEFAULT_HOST, description="API host")
    port: int = Field(default=DEFAULT_PORT, description="API port")
    api_version: str = Field(default=DEFAULT_API_VERSION, description="API version")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")

    model_config = SettingsConfigDict(
        env_prefix="IRON_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("token", "project_id", mode="before")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat blank credentials as not provided."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("token")
    @classmethod
    def validate_token(cls, v: Optional[str]) -> Optional[str]:
        """Validate that the token can be sent in an HTTP header."""
        if v is not None and not v.isascii():
            raise ValueError("Token must contain only ASCII characters")
        return v

    @field_validator("protocol")
    @classmethod
    def validate_protocol(cls, v: str) -> str:
        """Validate protocol value."""
        v = v.lower()
        if v not in ("http", "https"):
            raise ValueError("Protocol must be one of: ['http', 'https']")
        return v

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Validate port range."""
        if not 0 < v < 65536:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator("api_version", mode="before")
    @classmethod
    def validate_api_version(cls, v: object) -> str:
        return str(v).strip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v

    @property
    def base_url(self) -> str:
        """Get the API root URL, ending with a slash."""
        return f"{self.protocol}://{self.host}:{self.port}/{self.api_version}/"


# Global configuration instance
_config: Optional[IronMQConfig] = None


def get_config() -> IronMQConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        from .loader import load_config

        _config = load_config()
    return _config


def set_config(config: IronMQConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def reload_config() -> IronMQConfig:
    """Reload configuration from files and environment variables."""
    global _config
    _config = None
    return get_config()
