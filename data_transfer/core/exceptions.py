"""
Custom exceptions for data-transfer.

This module defines the exception hierarchy raised by the fetch and export
steps. Process failures keep the offending process output in ``details`` so
the console can show what the remote side actually said.
"""

from typing import Any, Dict, Optional


class DataTransferError(Exception):
    """Base exception class for data-transfer errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(DataTransferError):
    """Raised when there's an error in configuration."""
    pass


class TransferError(DataTransferError):
    """Raised when a remote transfer fails."""
    pass


class DatabaseError(DataTransferError):
    """Raised when database operations fail."""
    pass


class ProcessFailure(DataTransferError):
    """Raised when an external process exits with a non-zero status."""

    def __init__(
        self,
        message: str,
        stdout: str = "",
        stderr: str = "",
        returncode: Optional[int] = None,
        **kwargs
    ):
        super().__init__(
            f"{message}: {stdout} {stderr}",
            details={"stdout": stdout, "stderr": stderr, "returncode": returncode},
            **kwargs
        )
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode


class ConnectionFailure(ProcessFailure, TransferError):
    """Raised when the remote export over SSH exits non-zero."""
    pass


class SyncFailure(ProcessFailure, TransferError):
    """Raised when rsync exits non-zero for a folder."""
    pass


class ImportFailure(ProcessFailure, DatabaseError):
    """Raised when the local mysql import exits non-zero."""
    pass


class InvalidDumpError(DatabaseError):
    """Raised when the captured export output is not a complete MySQL dump."""

    def __init__(self, output: str, **kwargs):
        super().__init__(f"Error on remote host: {output}", **kwargs)
        self.output = output


class CredentialResolutionError(ConfigurationError):
    """Raised when no database settings can be found for a siteaccess."""

    def __init__(self, siteaccess: str, attempted_keys: list, **kwargs):
        message = (
            "Unable to find database settings from siteaccess. "
            f"You need to define either {' or '.join(attempted_keys)}"
        )
        super().__init__(message, details={"siteaccess": siteaccess}, **kwargs)
        self.siteaccess = siteaccess
        self.attempted_keys = list(attempted_keys)
