"""
Configuration loading for data-transfer.

This module reads the YAML/TOML configuration file, applies the optional
environment overlay and turns the ``data_transfer.*`` parameters into a
frozen :class:`TransferConfig`.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from data_transfer.config.parameters import ParameterBag
from data_transfer.core.exceptions import ConfigurationError
from data_transfer.models.config import (
    FolderMapping,
    SshProxyConfig,
    TransferConfig,
)
from data_transfer.utils.helpers import load_config_file, merge_dicts, parent_folder

logger = logging.getLogger(__name__)

PARAMETER_PREFIX = "data_transfer"
DEFAULT_CONFIG_FILE = "data_transfer.yaml"

REQUIRED_PARAMETERS = ("remote.host", "remote.user", "remote.dir")


def normalize_folders(folders: Any) -> List[FolderMapping]:
    """
    Turn the configured folder list into ordered (source, destination) pairs.

    ``folders`` is either a mapping of source to destination, or a list whose
    entries are a bare source (destination = parent directory of the source)
    or a single-entry mapping.
    """
    if not folders:
        return []

    if isinstance(folders, dict):
        items: Iterable = folders.items()
    elif isinstance(folders, (list, tuple)):
        items = []
        for entry in folders:
            if isinstance(entry, dict):
                items.extend(entry.items())
            else:
                items.append((entry, None))
    else:
        raise ConfigurationError(
            f"Parameter {PARAMETER_PREFIX}.folders must be a list or a mapping, "
            f"got {type(folders).__name__}"
        )

    mappings = []
    for source, destination in items:
        source = str(source)
        if destination is None or destination == "":
            destination = parent_folder(source)
        mappings.append(FolderMapping(source=source, destination=str(destination)))
    return mappings


def _as_options(value: Any) -> tuple:
    """Option lists may be given as a list or as a single string."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,) if value.strip() else ()
    return tuple(str(option) for option in value)


class ConfigurationLoader:
    """Loads parameters from a configuration file and builds the transfer config."""

    def __init__(
        self,
        config_path: Union[str, Path, None] = None,
        environment: Optional[str] = None,
        require_environment: bool = True
    ):
        self.config_path = Path(config_path or DEFAULT_CONFIG_FILE)
        self.environment = environment or None
        # When false, an environment without an overlay section runs on the base parameters
        self.require_environment = require_environment
        self._parameters: Optional[ParameterBag] = None

    def load_parameters(self) -> ParameterBag:
        """Read the configuration file and return the effective parameters."""
        if self._parameters is not None:
            return self._parameters

        try:
            raw = load_config_file(self.config_path)
        except FileNotFoundError as e:
            raise ConfigurationError(str(e)) from e
        except (yaml.YAMLError, ValueError) as e:
            # toml.TomlDecodeError is a ValueError
            raise ConfigurationError(f"Failed to parse configuration file {self.config_path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigurationError(f"Configuration file {self.config_path} must contain a mapping")

        parameters: Dict[str, Any] = raw.get("parameters") or {}

        if self.environment:
            environments = raw.get("environments") or {}
            if self.environment in environments:
                overlay = (environments[self.environment] or {}).get("parameters") or {}
                parameters = merge_dicts(parameters, overlay)
                logger.debug(f"Applied environment overlay: {self.environment}")
            elif self.require_environment:
                raise ConfigurationError(
                    f"Unknown environment '{self.environment}' in {self.config_path}. "
                    f"Available: {', '.join(sorted(environments)) or 'none'}"
                )
            else:
                logger.debug(f"No overlay for environment {self.environment}, using base parameters")

        self._parameters = ParameterBag(parameters)
        logger.debug(f"Loaded configuration from {self.config_path}")
        return self._parameters

    def get_param(self, name: str, default: Any = None) -> Any:
        """Fetch a ``data_transfer.*`` parameter without the prefix."""
        return self.load_parameters().get(f"{PARAMETER_PREFIX}.{name}", default)

    def load(self) -> TransferConfig:
        """Build the transfer configuration for this run."""
        params = self.load_parameters()

        missing = [
            f"{PARAMETER_PREFIX}.{name}"
            for name in REQUIRED_PARAMETERS
            if params.get(f"{PARAMETER_PREFIX}.{name}") in (None, "")
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required parameters: {', '.join(missing)}",
                details={"missing": missing}
            )

        values = {
            "remote_host": self.get_param("remote.host"),
            "remote_user": self.get_param("remote.user"),
            "remote_dir": self.get_param("remote.dir"),
            "remote_env": self.get_param("remote.env"),
            "console_script": self.get_param("console_script") or "data-transfer",
            "ssh_options": _as_options(self.get_param("ssh.options")),
            "ssh_proxy": SshProxyConfig(
                host=self.get_param("ssh.proxy.host") or None,
                user=self.get_param("ssh.proxy.user") or None,
                options=_as_options(self.get_param("ssh.proxy.options")),
            ),
            "rsync_options": _as_options(self.get_param("rsync.options")),
            "folders": tuple(normalize_folders(self.get_param("folders"))),
            "siteaccess": self.get_param("siteaccess") or "default",
            "log_file": self.get_param("log_file"),
        }
        cache_dir = self.get_param("cache_dir")
        if cache_dir:
            values["cache_dir"] = cache_dir

        try:
            return TransferConfig(**values)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid transfer configuration: {e}") from e
