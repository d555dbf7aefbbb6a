"""Configuration for the chatwords command-line tool."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import toml
from platformdirs import user_config_dir

CONFIG_ENV = "CHATWORDS_CONFIG"
FORMATS = ("table", "json", "plain")


# Custom exceptions
class ChatwordsException(Exception):
    """Base exception for chatwords errors."""

    pass


class ConfigNotFound(ChatwordsException):
    """Raised when an explicitly requested config file doesn't exist."""

    pass


class InvalidConfig(ChatwordsException):
    """Raised when the config file can't be parsed or holds bad values."""

    pass


@dataclass
class Config:
    """Settings for the command-line tool."""

    format: str = "table"
    take: Optional[int] = None
    path: Optional[Path] = None


def default_config_path() -> Path:
    """Get the default config file path."""
    return Path(user_config_dir("chatwords")) / "config.toml"


def resolve_config_path(explicit: Optional[str] = None) -> tuple[Optional[Path], bool]:
    """
    Find the config file to load.

    Args:
        explicit: Path given on the command line, if any

    Returns:
        (path, required): The candidate path and whether it must exist
    """
    if explicit:
        return Path(explicit), True

    from_env = os.environ.get(CONFIG_ENV)
    if from_env:
        return Path(from_env), True

    return default_config_path(), False


def load_config(explicit: Optional[str] = None) -> Config:
    """
    Load configuration from the first config file found.

    Args:
        explicit: Path given on the command line, if any

    Returns:
        Config with defaults for anything the file leaves out

    Raises:
        ConfigNotFound: If a required config file doesn't exist
        InvalidConfig: If the file isn't valid TOML or has bad keys or values
    """
    path, required = resolve_config_path(explicit)

    if path is None or not path.is_file():
        if required:
            raise ConfigNotFound(f"Config file '{path}' does not exist")
        return Config()

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = toml.load(f)
    except toml.TomlDecodeError as e:
        raise InvalidConfig(f"{path}: {e}") from e

    config = parse_config(content)
    config.path = path
    return config


def parse_config(content: dict[str, Any]) -> Config:
    """Build a Config from parsed TOML content."""
    config = Config()

    for section, values in content.items():
        if section != "output":
            raise InvalidConfig(f"Unknown config section '{section}'")
        if not isinstance(values, dict):
            raise InvalidConfig(f"Config section '{section}' must be a table")

        for key, value in values.items():
            if key == "format":
                if value not in FORMATS:
                    raise InvalidConfig(
                        f"output.format must be one of {', '.join(FORMATS)}, got '{value}'"
                    )
                config.format = value
            elif key == "take":
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    raise InvalidConfig("output.take must be a non-negative integer")
                config.take = value
            else:
                raise InvalidConfig(f"Unknown config key 'output.{key}'")

    return config
