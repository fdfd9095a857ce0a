"""
Progress reporting for data-transfer.
"""

from data_transfer.monitoring.progress import (
    ChunkTicker,
    ConsoleProgress,
    MegabyteTicker,
    ProgressReporter,
)

__all__ = [
    "ChunkTicker",
    "ConsoleProgress",
    "MegabyteTicker",
    "ProgressReporter",
]
