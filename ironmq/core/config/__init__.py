"""
Configuration package for the IronMQ client.

This package provides the connection settings and the loader that merges
explicit options, config files and environment variables.
"""

from .loader import (
    load_config,
    load_config_data,
    load_config_file,
    load_env_file,
)
from .settings import (
    IronMQConfig,
    LoggingConfig,
    get_config,
    reload_config,
    set_config,
)

__all__ = [
    # Configuration classes
    "IronMQConfig",
    "LoggingConfig",
    # Configuration functions
    "get_config",
    "reload_config",
    "set_config",
    # Loader functions
    "load_config",
    "load_config_data",
    "load_config_file",
    "load_env_file",
]
