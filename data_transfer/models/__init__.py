"""
Data models for data-transfer.
"""

from data_transfer.models.config import (
    DbCredentials,
    FolderMapping,
    SshProxyConfig,
    TransferConfig,
    TransferOutcome,
)

__all__ = [
    "DbCredentials",
    "FolderMapping",
    "SshProxyConfig",
    "TransferConfig",
    "TransferOutcome",
]
