"""
Configuration file support for storm-yarn.

Provides hierarchical configuration loading from:
1. Project config: .storm-yarn.toml or storm-yarn.toml in project root
2. User config: ~/.config/storm-yarn/config.toml

CLI arguments override config file values, and project config overrides user config.
"""

import sys
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from storm_yarn.exceptions import ConfigurationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

# Config file names to search for in project directories
CONFIG_FILENAMES = [".storm-yarn.toml", "storm-yarn.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "storm-yarn" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "defaults": {"verbose"},
    "launch": {"appname", "queue", "storm_home", "storm_zip"},
    "master": {"app_id"},
}

DEFAULT_APP_NAME = "Storm-on-Yarn"
DEFAULT_QUEUE = "default"


@dataclass
class DefaultsConfig:
    """Default options for CLI commands."""

    verbose: bool = False


@dataclass
class LaunchConfig:
    """Defaults for launching a new Storm cluster on YARN."""

    appname: str = DEFAULT_APP_NAME
    queue: str = DEFAULT_QUEUE
    storm_home: str | None = None
    storm_zip: str | None = None


@dataclass
class MasterConfig:
    """Defaults for commands talking to a running Storm master."""

    app_id: str | None = None


@dataclass
class Config:
    """Merged configuration from all sources."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    launch: LaunchConfig = field(default_factory=LaunchConfig)
    master: MasterConfig = field(default_factory=MasterConfig)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            user_data = _load_toml_file(USER_CONFIG_PATH)
            if user_data:
                _merge_config(config, user_data, str(USER_CONFIG_PATH))

        # Load project config (higher precedence)
        project_config = _find_project_config(start_dir)
        if project_config:
            project_data = _load_toml_file(project_config)
            if project_data:
                _merge_config(config, project_data, str(project_config))

        return config


class ConfigError(ConfigurationError):
    """Configuration file could not be read or parsed."""

    pass


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.

    Args:
        start_dir: Directory to start searching from

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any] | None:
    """
    Load a TOML file safely.

    Args:
        path: Path to TOML file

    Returns:
        Parsed TOML data or None when no TOML parser is available

    Raises:
        ConfigError: If TOML is invalid or the file cannot be read
    """
    if tomllib is None:
        warnings.warn(
            "tomli package not installed. Config file support requires 'pip install tomli' for Python < 3.11.",
            stacklevel=2,
        )
        return None

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}", context={"file": str(path)}) from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}", context={"file": str(path)}) from e


def _merge_config(config: Config, data: dict[str, Any], source: str) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for warnings and errors)
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    for section_name, known in KNOWN_KEYS.items():
        if section_name not in data:
            continue
        section_data = data[section_name]
        if not isinstance(section_data, dict):
            raise ConfigError(
                f"Config section [{section_name}] must be a table",
                context={"file": source, "got": type(section_data).__name__},
            )
        _warn_unknown_keys(section_data, known, section_name, source)

        section = getattr(config, section_name)
        for key in sorted(known):
            if key in section_data:
                setattr(section, key, section_data[key])


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=4)

