"""MySQL client invocations for importing and exporting dumps."""

import logging
import sys
from pathlib import Path
from typing import IO, Any, List, Optional, Union

from data_transfer.core.exceptions import DatabaseError, ImportFailure
from data_transfer.models.config import DbCredentials
from data_transfer.transfer.runner import CommandResult, CommandRunner, OutputCallback

logger = logging.getLogger(__name__)

MYSQL_BINARY = "mysql"
MYSQLDUMP_BINARY = "mysqldump"


def _connection_args(credentials: DbCredentials) -> List[str]:
    # Each value is its own argv word, so no shell quoting is involved.
    args = [
        f"--user={credentials.user}",
        f"--password={credentials.password}",
        f"--host={credentials.host}",
    ]
    if credentials.port:
        args.append(f"--port={credentials.port}")
    return args


def build_import_command(credentials: DbCredentials) -> List[str]:
    """``mysql <database> --user=.. --password=.. --host=..``"""
    return [MYSQL_BINARY, credentials.database, *_connection_args(credentials)]


def build_dump_command(credentials: DbCredentials) -> List[str]:
    """``mysqldump`` with options producing the framed dump the fetch side expects."""
    return [
        MYSQLDUMP_BINARY,
        *_connection_args(credentials),
        "--single-transaction",
        "--routines",
        "--triggers",
        "--add-drop-table",
        credentials.database,
    ]


class MySQLImporter:
    """Feeds a dump file into the local mysql client."""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    async def import_file(
        self,
        credentials: DbCredentials,
        dump_path: Union[str, Path],
        on_output: Optional[OutputCallback] = None
    ) -> CommandResult:
        """
        Import a dump file into the credentials' database.

        Raises:
            ImportFailure: if mysql exits non-zero
        """
        cmd = build_import_command(credentials)
        logger.info(f"Importing {dump_path} into {credentials.database}@{credentials.host}")

        with open(dump_path, "rb") as dump_file:
            result = await self.runner.run(cmd, on_output=on_output, stdin=dump_file)

        if not result.successful:
            raise ImportFailure(
                "Error importing database",
                stdout=result.stdout,
                stderr=result.stderr,
                returncode=result.returncode,
            )
        return result


class MySQLExporter:
    """Streams a mysqldump of the local database to a file object."""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    async def export(self, credentials: DbCredentials, target: Optional[IO[Any]] = None) -> CommandResult:
        """
        Dump the database into ``target`` (stdout by default).

        Raises:
            DatabaseError: if mysqldump exits non-zero
        """
        target = target if target is not None else sys.stdout.buffer
        target.flush()

        result = await self.runner.run(build_dump_command(credentials), stdout=target)
        if not result.successful:
            raise DatabaseError(
                f"mysqldump failed: {result.stderr}",
                details={"returncode": result.returncode},
            )
        return result
