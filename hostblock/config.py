"""Configuration management for hostblock."""

import configparser
import enum
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from .constants import (
    CONFIG_SECTION,
    DEFAULT_BLACKLIST,
    DEFAULT_HEADER,
    DEFAULT_OUTPUT,
    DEFAULT_REDIRECT_IP,
    DEFAULT_SOURCES,
    DEFAULT_WHITELIST,
)
from .exceptions import ConfigError

logger = logging.getLogger(__name__)


class PromptPolicy(enum.Enum):
    """How to answer the continue-or-abort question after a failed source."""

    ASK = "ask"
    YES = "yes"
    NO = "no"


@dataclass(frozen=True)
class HostblockConfig:
    """Resolved settings for a single run."""

    output: str = DEFAULT_OUTPUT
    redirect_ip: str = DEFAULT_REDIRECT_IP
    header: str = DEFAULT_HEADER
    sources: Tuple[str, ...] = DEFAULT_SOURCES
    whitelist: Tuple[str, ...] = DEFAULT_WHITELIST
    blacklist: Tuple[str, ...] = DEFAULT_BLACKLIST
    backup: bool = False
    lenient: bool = False
    prompt: PromptPolicy = PromptPolicy.ASK


_LIST_FIELDS = ("sources", "whitelist", "blacklist")
_BOOL_FIELDS = ("backup", "lenient")
_FIELD_NAMES = {f.name for f in fields(HostblockConfig)}


def _coerce(key: str, value: Any) -> Any:
    """Convert an override value to the type its field expects."""
    if key in _LIST_FIELDS:
        if isinstance(value, str):
            return tuple(value.split())
        return tuple(value)
    if key in _BOOL_FIELDS:
        if isinstance(value, bool):
            return value
        # Same spellings as ConfigParser.getboolean
        state = configparser.ConfigParser.BOOLEAN_STATES.get(str(value).strip().lower())
        if state is None:
            raise ConfigError(f"Invalid value for '{key}': {value}")
        return state
    if key == "prompt":
        if isinstance(value, PromptPolicy):
            return value
        try:
            return PromptPolicy(str(value).lower())
        except ValueError as e:
            raise ConfigError(f"Invalid prompt policy: {value}") from e
    return str(value)


def resolve_config(
    overrides: Optional[Mapping[str, Any]] = None,
    base: Optional[HostblockConfig] = None,
) -> HostblockConfig:
    """
    Build a configuration from defaults and overrides.

    Every supplied override fully replaces its default; lists are never
    merged. ``None`` values count as "not supplied".

    Args:
        overrides: Field name to value mapping
        base: Configuration to override (default: built-in defaults)

    Returns:
        The resolved configuration

    Raises:
        ConfigError: If an override names an unknown field or has a bad value
    """
    config = base or HostblockConfig()
    if not overrides:
        return config

    changes: Dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in _FIELD_NAMES:
            raise ConfigError(f"Unknown configuration key: {key}")
        if value is None:
            continue
        changes[key] = _coerce(key, value)

    return replace(config, **changes)


class ConfigManager:
    """Reads hostblock INI configuration files."""

    def __init__(self, section: str = CONFIG_SECTION):
        """
        Initialize configuration manager.

        Args:
            section: INI section holding the settings
        """
        self.section = section

    def load(self, path: Path) -> Dict[str, Any]:
        """
        Load overrides from a configuration file.

        Args:
            path: Path to the INI file

        Returns:
            Dictionary of overrides suitable for resolve_config()

        Raises:
            ConfigError: If the file is missing, unreadable or invalid
        """
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        # Whitelist patterns may contain "%"
        parser = configparser.ConfigParser(interpolation=None)
        try:
            parser.read(path)
        except configparser.Error as e:
            raise ConfigError(f"Error reading {path}: {e}") from e

        if not parser.has_section(self.section):
            raise ConfigError(f"Missing [{self.section}] section in {path}")

        overrides: Dict[str, Any] = {}
        for key in parser.options(self.section):
            if key not in _FIELD_NAMES:
                raise ConfigError(f"Unknown key '{key}' in {path}")
            if key in _BOOL_FIELDS:
                try:
                    overrides[key] = parser.getboolean(self.section, key)
                except ValueError as e:
                    raise ConfigError(f"Invalid value for '{key}' in {path}") from e
            else:
                overrides[key] = parser.get(self.section, key)

        logger.debug("Loaded %d setting(s) from %s", len(overrides), path)
        return overrides
