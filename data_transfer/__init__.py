"""
data-transfer

Pulls a production MySQL dump and data folders from a remote host into a
local development environment over SSH and rsync.
"""

__version__ = "0.1.0"

from data_transfer.models.config import TransferConfig, TransferOutcome
from data_transfer.orchestrator.fetch import FetchOrchestrator

__all__ = [
    "TransferConfig",
    "TransferOutcome",
    "FetchOrchestrator",
]
