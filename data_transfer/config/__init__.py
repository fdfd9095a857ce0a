"""
Configuration loading for data-transfer.
"""

from data_transfer.config.loader import (
    ConfigurationLoader,
    DEFAULT_CONFIG_FILE,
    normalize_folders,
)
from data_transfer.config.parameters import ParameterBag

__all__ = [
    "ConfigurationLoader",
    "DEFAULT_CONFIG_FILE",
    "ParameterBag",
    "normalize_folders",
]
