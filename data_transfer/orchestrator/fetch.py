"""
Fetch orchestration.

This module provides the FetchOrchestrator which pulls the remote database
dump and the configured folders into the local environment. The database
step and the file step each run inside their own failure boundary: a failing
step is reported and the next step still runs.
"""

import logging
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, List, Optional

from data_transfer.core.error_handler import ErrorContext, ErrorHandler
from data_transfer.core.exceptions import ConnectionFailure
from data_transfer.database.credentials import CredentialResolver
from data_transfer.database.dump import validate_dump
from data_transfer.database.mysql import MySQLImporter
from data_transfer.models.config import TransferConfig, TransferOutcome
from data_transfer.monitoring.progress import MegabyteTicker, ProgressReporter
from data_transfer.transfer.rsync import RsyncFetcher
from data_transfer.transfer.runner import CommandResult, CommandRunner
from data_transfer.transfer.ssh import build_export_command
from data_transfer.utils.helpers import format_bytes

logger = logging.getLogger(__name__)

DATABASE_STEP = "database"
FILES_STEP = "files"


class FetchState(str, Enum):
    """States of the database fetch."""
    IDLE = "idle"
    DISPATCHED = "dispatched"
    CAPTURED = "captured"
    VALIDATED = "validated"
    IMPORTED = "imported"
    CLEANED_UP = "cleaned_up"
    FAILED = "failed"


class DatabaseFetch:
    """
    Remote export, validation and local import of the database.

    The temporary dump file is removed after the import attempt whether or
    not the import succeeded.
    """

    def __init__(
        self,
        config: TransferConfig,
        runner: CommandRunner,
        resolver: CredentialResolver,
        progress: ProgressReporter
    ):
        self.config = config
        self.runner = runner
        self.resolver = resolver
        self.progress = progress
        self.importer = MySQLImporter(runner)
        self.state = FetchState.IDLE
        self.failure_reason: Optional[str] = None
        self.dump_path: Optional[Path] = None

    def _transition(self, state: FetchState) -> None:
        logger.debug(f"Database fetch: {self.state.value} -> {state.value}")
        self.state = state

    async def export_remote(self) -> CommandResult:
        """Dispatch the export over SSH and return the captured output."""
        cmd = build_export_command(self.config)
        self._transition(FetchState.DISPATCHED)
        self.progress.tick()

        ticker = MegabyteTicker(self.progress)
        result = await self.runner.run(cmd, on_output=ticker)

        if not result.successful:
            raise ConnectionFailure(
                "Cannot connect to remote host",
                stdout=result.stdout,
                stderr=result.stderr,
                returncode=result.returncode,
            )
        self._transition(FetchState.CAPTURED)
        logger.info(f"Captured {format_bytes(ticker.total_bytes)} of export output")
        self.progress.ok()
        return result

    def write_dump(self, dump: bytes) -> Path:
        """Store the validated dump in a fresh file in the cache directory."""
        cache_dir = Path(self.config.cache_dir)
        cache_dir.mkdir(parents=True, exist_ok=True)

        fd, path = tempfile.mkstemp(prefix="data-transfer-", suffix=".sql", dir=cache_dir)
        self.dump_path = Path(path)
        with os.fdopen(fd, "wb") as f:
            f.write(dump)
        logger.debug(f"Wrote dump to {self.dump_path}")
        return self.dump_path

    def cleanup(self) -> None:
        """Remove the temporary dump file if it exists."""
        if self.dump_path is None:
            return
        try:
            if self.dump_path.exists():
                self.dump_path.unlink()
                logger.debug(f"Removed temporary dump {self.dump_path}")
        except OSError as e:
            logger.warning(f"Failed to remove temporary dump {self.dump_path}: {e}")

    async def run(self) -> None:
        """Run the whole database fetch; raises on the first failing step."""
        try:
            result = await self.export_remote()

            validate_dump(result.stdout)
            self._transition(FetchState.VALIDATED)
            self.progress.ok()

            try:
                dump_path = self.write_dump(result.stdout_bytes or result.stdout.encode("utf-8"))
                self.progress.done()

                self.progress.step("Importing database")
                credentials = self.resolver.resolve(self.config.siteaccess)
                self.progress.tick()

                await self.importer.import_file(credentials, dump_path)
                self._transition(FetchState.IMPORTED)
                self.progress.ok()
            finally:
                self.cleanup()
                self.progress.tick()

            self._transition(FetchState.CLEANED_UP)
        except Exception as e:
            self.failure_reason = getattr(e, "message", None) or str(e)
            self._transition(FetchState.FAILED)
            raise


class FetchOrchestrator:
    """Runs the database step and the file step of a fetch."""

    def __init__(
        self,
        config: TransferConfig,
        resolver: CredentialResolver,
        progress: ProgressReporter,
        runner: Optional[CommandRunner] = None,
        error_handler: Optional[ErrorHandler] = None,
        base_dir: Optional[Path] = None
    ):
        self.config = config
        self.resolver = resolver
        self.progress = progress
        self.runner = runner or CommandRunner()
        self.error_handler = error_handler or ErrorHandler(logger)
        self.base_dir = base_dir

    async def fetch_database(self) -> DatabaseFetch:
        """Log in to the remote server, dump the database and import it."""
        self.progress.step("Fetching database")
        database_fetch = DatabaseFetch(self.config, self.runner, self.resolver, self.progress)
        await database_fetch.run()
        return database_fetch

    async def fetch_files(self) -> None:
        """Fetch the configured folders from the remote server."""
        self.progress.step("Fetching files")
        fetcher = RsyncFetcher(self.config, self.runner, self.progress, base_dir=self.base_dir)
        await fetcher.fetch_all()

    async def _run_step(self, step: str, action: Callable[[], Awaitable]) -> TransferOutcome:
        try:
            await action()
            outcome = TransferOutcome.ok(step)
        except Exception as e:
            error_info = self.error_handler.handle_error(e, ErrorContext(operation="fetch", step=step))
            hint = error_info.remediation_steps[0] if error_info.remediation_steps else None
            self.progress.error(error_info.message, hint)
            outcome = TransferOutcome.failed(step, error_info.message)
        self.progress.done()
        return outcome

    async def run(self, db_only: bool = False, files_only: bool = False) -> List[TransferOutcome]:
        """
        Run the requested steps sequentially.

        Args:
            db_only: Skip the file step
            files_only: Skip the database step

        Returns:
            One TransferOutcome per executed step
        """
        outcomes = []

        if not files_only:
            outcomes.append(await self._run_step(DATABASE_STEP, self.fetch_database))

        if not db_only:
            outcomes.append(await self._run_step(FILES_STEP, self.fetch_files))

        failed = [outcome.step for outcome in outcomes if not outcome.success]
        if failed:
            logger.warning(f"Fetch finished with failed steps: {', '.join(failed)}")
        else:
            logger.info("Fetch finished successfully")
        return outcomes
