"""
Core module for data-transfer.

This module contains the exception hierarchy and error handling
used throughout the application.
"""

from data_transfer.core.exceptions import (
    DataTransferError,
    ConfigurationError,
    TransferError,
    DatabaseError,
    ProcessFailure,
    ConnectionFailure,
    SyncFailure,
    ImportFailure,
    InvalidDumpError,
    CredentialResolutionError,
)

__all__ = [
    "DataTransferError",
    "ConfigurationError",
    "TransferError",
    "DatabaseError",
    "ProcessFailure",
    "ConnectionFailure",
    "SyncFailure",
    "ImportFailure",
    "InvalidDumpError",
    "CredentialResolutionError",
]
