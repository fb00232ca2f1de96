"""
Configuration loader for the IronMQ client.

Settings are collected from several sources. The first source that defines a
key wins, in this order:

1. explicit options, or an explicit config file (``.ini``, ``.json``, ``.env``)
2. ``iron.ini`` / ``iron.json`` in the working directory
3. ``IRON_MQ_*`` then ``IRON_*`` environment variables
4. ``~/.iron.ini`` / ``~/.iron.json``
5. built-in defaults
"""

import configparser
import json
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..errors import ConfigurationError
from .settings import IronMQConfig

PRODUCT_NAME = "iron_mq"

CONFIG_KEYS = (
    "token",
    "project_id",
    "protocol",
    "host",
    "port",
    "api_version",
    "timeout",
    "verify_ssl",
)

ConfigSource = Union[str, Path, Mapping[str, Any], None]


def load_env_file(env_file_path: Path) -> Dict[str, str]:
    """
    Load variables from a .env file.

    Args:
        env_file_path: Path to the .env file

    Returns:
        Dictionary of variables
    """
    env_vars: Dict[str, str] = {}

    if not env_file_path.exists():
        return env_vars

    with open(env_file_path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()

            # Skip empty lines and comments
            if not line or line.startswith("#"):
                continue

            if "=" in line:
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip()

                if value.startswith('"') and value.endswith('"'):
                    value = value[1:-1]
                elif value.startswith("'") and value.endswith("'"):
                    value = value[1:-1]

                env_vars[key] = value

    return env_vars


def load_ini_file(ini_file_path: Path) -> Dict[str, Any]:
    """
    Load an ini file into a dictionary.

    Keys outside any section land at the top level; each section becomes a
    nested dictionary.
    """
    parser = configparser.ConfigParser(interpolation=None)
    text = ini_file_path.read_text(encoding="utf-8")
    try:
        parser.read_string("[__root__]\n" + text)
    except configparser.Error as e:
        raise ConfigurationError(
            f"Invalid config file {ini_file_path}: {e}",
            error_code="CONFIG_FILE_INVALID",
            error_context={"path": str(ini_file_path)},
        ) from e

    data: Dict[str, Any] = {}
    for section in parser.sections():
        values = {k: _unquote(v) for k, v in parser.items(section)}
        if section == "__root__":
            data.update(values)
        else:
            data[section] = values
    return data


def load_json_file(json_file_path: Path) -> Dict[str, Any]:
    """Load a JSON config file."""
    try:
        data = json.loads(json_file_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(
            f"Invalid config file {json_file_path}: {e}",
            error_code="CONFIG_FILE_INVALID",
            error_context={"path": str(json_file_path)},
        ) from e
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Config file {json_file_path} must contain a JSON object",
            error_code="CONFIG_FILE_INVALID",
            error_context={"path": str(json_file_path)},
        )
    return data


def load_config_file(path: Path) -> Dict[str, Any]:
    """
    Load a config file and flatten it to client settings.

    Keys of an ``iron_mq`` section take precedence over top-level keys.
    """
    suffix = path.suffix.lower()
    if suffix == ".json":
        raw: Dict[str, Any] = load_json_file(path)
    elif suffix == ".env" or path.name == ".env":
        raw = {k.lower(): v for k, v in load_env_file(path).items()}
        raw = _strip_prefixes(raw)
    else:
        raw = load_ini_file(path)

    values: Dict[str, Any] = {}
    product = raw.get(PRODUCT_NAME)
    if isinstance(product, Mapping):
        values.update(_pick(product))
    for key, value in _pick(raw).items():
        values.setdefault(key, value)
    return values


def load_env_vars(prefix: str) -> Dict[str, str]:
    """Collect client settings from environment variables with ``prefix``."""
    values: Dict[str, str] = {}
    for key in CONFIG_KEYS:
        value = os.getenv(f"{prefix}{key.upper()}")
        if value:
            values[key] = value
    return values


def load_config_data(
    config_file_or_options: ConfigSource = None,
    search_dirs: Optional[Iterable[Path]] = None,
    home_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Merge settings from every available source.

    Args:
        config_file_or_options: Options mapping or path to a config file
        search_dirs: Directories searched for iron.ini / iron.json
            (defaults to the working directory)
        home_dir: Directory searched for .iron.ini / .iron.json
            (defaults to the user's home)

    Returns:
        Dictionary of settings, first source wins
    """
    sources = []

    if isinstance(config_file_or_options, Mapping):
        sources.append(_pick(config_file_or_options))
    elif config_file_or_options is not None:
        path = Path(config_file_or_options).expanduser()
        if not path.is_file():
            raise ConfigurationError(
                f"Config file {path} not found",
                error_code="CONFIG_FILE_NOT_FOUND",
                error_context={"path": str(path)},
            )
        sources.append(load_config_file(path))

    for directory in search_dirs if search_dirs is not None else [Path.cwd()]:
        for name in ("iron.ini", "iron.json"):
            candidate = Path(directory) / name
            if candidate.is_file():
                sources.append(load_config_file(candidate))

    sources.append(load_env_vars("IRON_MQ_"))
    sources.append(load_env_vars("IRON_"))

    home = home_dir if home_dir is not None else Path.home()
    for name in (".iron.ini", ".iron.json"):
        candidate = home / name
        if candidate.is_file():
            sources.append(load_config_file(candidate))

    merged: Dict[str, Any] = {}
    for source in sources:
        for key, value in source.items():
            if value is None or value == "":
                continue
            merged.setdefault(key, value)
    return merged


def load_config(
    config_file_or_options: ConfigSource = None,
    search_dirs: Optional[Iterable[Path]] = None,
    home_dir: Optional[Path] = None,
) -> IronMQConfig:
    """
    Create a configuration instance from all available sources.

    Raises:
        ConfigurationError: if a source is unreadable or a value is invalid
    """
    data = load_config_data(config_file_or_options, search_dirs, home_dir)
    try:
        return IronMQConfig(**data)
    except PydanticValidationError as e:
        raise ConfigurationError(
            f"Invalid IronMQ configuration: {e}",
            error_code="CONFIG_INVALID",
            error_context={"fields": sorted(str(err["loc"][0]) for err in e.errors())},
        ) from e


def _pick(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: data[key] for key in CONFIG_KEYS if key in data}


def _strip_prefixes(data: Dict[str, Any]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for prefix in ("iron_mq_", "iron_", ""):
        for key, value in data.items():
            if key.startswith(prefix):
                values.setdefault(key[len(prefix) :], value)
    return values


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value
