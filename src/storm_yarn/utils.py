"""
File helpers shared by storm-yarn commands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, TextIO

import yaml

from storm_yarn.exceptions import ConfigurationError


def ensure_parent_dir(path: Path) -> Path:
    """
    Ensure the parent directory of a path exists.

    Creates the parent directory (and any missing ancestors) if it doesn't exist.

    Args:
        path: The file path whose parent directory should be ensured.

    Returns:
        The original path, unchanged. This allows chaining like:
            with ensure_parent_dir(output_path).open('w') as f:
                ...
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def load_yaml_mapping(path: Path) -> dict[str, Any]:
    """
    Load a YAML file that must contain a mapping (storm.yaml, master.yaml).

    An empty file loads as an empty dict.

    Raises:
        ConfigurationError: If the file is missing, unreadable, invalid YAML,
            or does not contain a mapping at the top level.
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"File not found: {path}",
            context={"file": str(path)},
        ) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}", context={"file": str(path)}) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML in {path}",
            context={"file": str(path), "error": e},
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"{path.name} must contain a mapping",
            context={"file": str(path), "got": type(data).__name__},
        )
    return data


def dump_yaml(data: dict[str, Any], stream: TextIO) -> None:
    """Write a mapping as block-style YAML, keeping key order."""
    yaml.safe_dump(data, stream, default_flow_style=False, sort_keys=False)


def write_yaml(data: dict[str, Any], path: Path) -> Path:
    """Write a mapping as YAML to ``path``, creating parent directories."""
    with ensure_parent_dir(path).open("w", encoding="utf-8") as f:
        dump_yaml(data, f)
    return path
