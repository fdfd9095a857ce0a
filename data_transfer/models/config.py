"""
Configuration models for data-transfer.

This module defines the Pydantic models for the transfer configuration
and the database credentials, plus the per-step outcome record.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_CACHE_DIR = Path.home() / ".data-transfer" / "cache"


class SshProxyConfig(BaseModel):
    """Jump host the SSH connection is tunnelled through."""
    model_config = ConfigDict(frozen=True)

    host: Optional[str] = None
    user: Optional[str] = None
    options: Tuple[str, ...] = ()

    @property
    def enabled(self) -> bool:
        """A proxy is only used when both host and user are set."""
        return bool(self.host) and bool(self.user)


class FolderMapping(BaseModel):
    """Remote source folder and the local destination it is synced into."""
    model_config = ConfigDict(frozen=True)

    source: str
    destination: str


class TransferConfig(BaseModel):
    """Effective configuration of one fetch run."""
    model_config = ConfigDict(frozen=True)

    remote_host: str
    remote_user: str
    remote_dir: str
    remote_env: Optional[str] = None
    console_script: str = "data-transfer"
    ssh_options: Tuple[str, ...] = ()
    ssh_proxy: SshProxyConfig = Field(default_factory=SshProxyConfig)
    rsync_options: Tuple[str, ...] = ()
    folders: Tuple[FolderMapping, ...] = ()
    siteaccess: str = "default"
    cache_dir: Path = DEFAULT_CACHE_DIR
    log_file: Optional[str] = None

    @field_validator('remote_host', 'remote_user', 'remote_dir', 'console_script')
    @classmethod
    def must_not_be_empty(cls, v):
        if not v or not str(v).strip():
            raise ValueError('value cannot be empty')
        return str(v).strip()

    @field_validator('remote_env')
    @classmethod
    def empty_env_is_none(cls, v):
        return v or None

    @field_validator('cache_dir')
    @classmethod
    def expand_cache_dir(cls, v):
        return Path(v).expanduser()


class DbCredentials(BaseModel):
    """Local database connection parameters used for one import."""
    database: str
    user: str
    password: str = Field(default="", repr=False)
    host: str = "localhost"
    port: Optional[int] = None

    @field_validator('database', 'user', mode='before')
    @classmethod
    def coerce_to_str(cls, v):
        return v if v is None else str(v)

    @field_validator('password', mode='before')
    @classmethod
    def empty_password(cls, v):
        return "" if v is None else str(v)

    @field_validator('host', mode='before')
    @classmethod
    def default_host(cls, v):
        return v and str(v) or "localhost"


@dataclass
class TransferOutcome:
    """Result of one top-level step."""
    step: str
    success: bool
    message: Optional[str] = None

    @classmethod
    def ok(cls, step: str) -> "TransferOutcome":
        return cls(step=step, success=True)

    @classmethod
    def failed(cls, step: str, message: str) -> "TransferOutcome":
        return cls(step=step, success=False, message=message)
