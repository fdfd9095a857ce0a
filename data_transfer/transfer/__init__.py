"""
Remote transfer module for data-transfer.

This module runs the external ssh and rsync processes.
"""

from .runner import CommandResult, CommandRunner
from .rsync import RsyncFetcher, build_rsync_command
from .ssh import build_export_command, build_proxy_option, build_remote_shell

__all__ = [
    'CommandResult',
    'CommandRunner',
    'RsyncFetcher',
    'build_rsync_command',
    'build_export_command',
    'build_proxy_option',
    'build_remote_shell',
]
