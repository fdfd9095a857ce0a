"""
CLI module for data-transfer.
"""

from data_transfer.cli.main import main

__all__ = ["main"]
