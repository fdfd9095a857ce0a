"""
Utilities module for data-transfer.

This module contains utility functions and helper classes
used throughout the application.
"""

from data_transfer.utils.helpers import (
    load_config_file,
    merge_dicts,
    redact_command,
    split_options,
    parent_folder,
    format_bytes,
)
from data_transfer.utils.logging import setup_logging

__all__ = [
    # Helper functions
    "load_config_file",
    "merge_dicts",
    "redact_command",
    "split_options",
    "parent_folder",
    "format_bytes",
    # Logging utilities
    "setup_logging",
]
