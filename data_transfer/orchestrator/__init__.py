"""
Orchestration of the fetch command.
"""

from data_transfer.orchestrator.fetch import (
    DatabaseFetch,
    FetchOrchestrator,
    FetchState,
)

__all__ = [
    "DatabaseFetch",
    "FetchOrchestrator",
    "FetchState",
]
