"""
Rsync folder fetching.

Each configured folder is pulled from the remote directory with rsync,
using the same ssh options and jump host as the database export.
"""

import logging
from pathlib import Path
from typing import List, Optional

from data_transfer.core.exceptions import SyncFailure
from data_transfer.models.config import FolderMapping, TransferConfig
from data_transfer.monitoring.progress import ChunkTicker, ProgressReporter
from data_transfer.transfer.runner import CommandRunner
from data_transfer.transfer.ssh import build_remote_shell, remote_target
from data_transfer.utils.helpers import split_options

logger = logging.getLogger(__name__)

RSYNC_BINARY = "rsync"


def build_rsync_command(config: TransferConfig, folder: FolderMapping) -> List[str]:
    """Build the rsync argument vector for one folder."""
    remote_dir = config.remote_dir.rstrip("/")
    source = folder.source.lstrip("/")
    return [
        RSYNC_BINARY,
        *split_options(config.rsync_options),
        "-e", build_remote_shell(config),
        f"{remote_target(config)}:{remote_dir}/{source}",
        f"{folder.destination.rstrip('/')}/",
    ]


class RsyncFetcher:
    """
    Pulls the configured folders in order.

    The first failing folder raises :class:`SyncFailure` and the remaining
    folders are not attempted.
    """

    def __init__(
        self,
        config: TransferConfig,
        runner: CommandRunner,
        progress: ProgressReporter,
        base_dir: Optional[Path] = None
    ):
        self.config = config
        self.runner = runner
        self.progress = progress
        self.base_dir = Path(base_dir) if base_dir else None

    def _local_destination(self, folder: FolderMapping) -> Path:
        destination = Path(folder.destination)
        if self.base_dir and not destination.is_absolute():
            destination = self.base_dir / destination
        return destination

    async def fetch_folder(self, folder: FolderMapping) -> None:
        """Sync a single remote folder into its local destination."""
        destination = self._local_destination(folder)
        destination.mkdir(parents=True, exist_ok=True)

        cmd = build_rsync_command(
            self.config,
            FolderMapping(source=folder.source, destination=str(destination)),
        )
        logger.info(f"Fetching folder {folder.source} into {destination}")

        result = await self.runner.run(cmd, on_output=ChunkTicker(self.progress))
        if not result.successful:
            raise SyncFailure(
                "Error fetching files",
                stdout=result.stdout,
                stderr=result.stderr,
                returncode=result.returncode,
            )
        self.progress.ok()

    async def fetch_all(self) -> None:
        """Sync all configured folders, stopping at the first failure."""
        if not self.config.folders:
            logger.warning("No folders configured, nothing to fetch")
            return

        for folder in self.config.folders:
            await self.fetch_folder(folder)
