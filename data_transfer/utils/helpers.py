"""
Helper utilities for data-transfer.

This module contains small functions shared by the configuration loader
and the command builders.
"""

import shlex
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Sequence, Union

import toml
import yaml

REDACTED = "******"


def load_config_file(file_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load configuration from a YAML or TOML file.

    Args:
        file_path: Path to configuration file

    Returns:
        Configuration dictionary
    """
    file_path = Path(file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with open(file_path, 'r', encoding='utf-8') as f:
        if file_path.suffix.lower() in ['.yaml', '.yml']:
            return yaml.safe_load(f) or {}
        elif file_path.suffix.lower() == '.toml':
            return toml.load(f)
        else:
            raise ValueError(f"Unsupported configuration file format: {file_path.suffix}")


def merge_dicts(dict1: Dict[str, Any], dict2: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two dictionaries.

    Args:
        dict1: Base dictionary
        dict2: Dictionary to merge (takes precedence)

    Returns:
        Merged dictionary
    """
    result = dict1.copy()

    for key, value in dict2.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value

    return result


def redact_command(argv: Sequence[str]) -> str:
    """Render an argument vector for logging with passwords masked."""
    return shlex.join(
        f"--password={REDACTED}" if arg.startswith("--password=") else arg
        for arg in argv
    )


def split_options(options: Sequence[str]) -> list:
    """Split configured option strings like ``-p 2222`` into argv words."""
    words = []
    for option in options:
        words.extend(shlex.split(str(option)))
    return words


def parent_folder(source: str) -> str:
    """Return the parent directory of a relative remote folder."""
    return str(PurePosixPath(source.rstrip("/") or "/").parent)


def format_bytes(bytes_count: int) -> str:
    """Format bytes into human-readable string."""
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if bytes_count < 1024.0:
            return f"{bytes_count:.1f} {unit}"
        bytes_count /= 1024.0
    return f"{bytes_count:.1f} PB"
