"""
External process execution.

The runner starts a process from an argument vector (never through a shell),
drains stdout and stderr concurrently, hands every chunk to an optional
callback and waits for the process without any timeout.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import IO, Any, Callable, List, Optional, Sequence

from data_transfer.utils.helpers import redact_command

logger = logging.getLogger(__name__)

# Called with the stream name ("stdout" or "stderr") and the raw chunk.
OutputCallback = Callable[[str, bytes], None]

CHUNK_SIZE = 64 * 1024


@dataclass
class CommandResult:
    """Exit status and captured output of a finished process."""
    argv: List[str]
    returncode: int
    stdout: str
    stderr: str
    stdout_bytes: bytes = b""

    @property
    def successful(self) -> bool:
        return self.returncode == 0


class CommandRunner:
    """Runs external commands to completion with streaming output observation."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def _drain(
        self,
        name: str,
        stream: Optional[asyncio.StreamReader],
        on_output: Optional[OutputCallback]
    ) -> bytes:
        if stream is None:
            return b""

        chunks = []
        while True:
            chunk = await stream.read(CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
            if on_output:
                try:
                    on_output(name, chunk)
                except Exception as e:
                    self.logger.warning(f"Output callback failed: {e}")
        return b"".join(chunks)

    async def run(
        self,
        argv: Sequence[str],
        on_output: Optional[OutputCallback] = None,
        stdin: Optional[IO[Any]] = None,
        stdout: Optional[IO[Any]] = None,
        cwd: Optional[str] = None
    ) -> CommandResult:
        """
        Run a command and wait for it to finish.

        Args:
            argv: Program and arguments
            on_output: Called for every chunk read from stdout/stderr
            stdin: Optional file object connected to the process stdin
            stdout: Optional file object receiving stdout instead of capturing it
            cwd: Working directory of the process

        Returns:
            CommandResult with exit code and captured output
        """
        argv = [str(arg) for arg in argv]
        self.logger.info(f"Running command: {redact_command(argv)}")

        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=stdin if stdin is not None else asyncio.subprocess.DEVNULL,
            stdout=stdout if stdout is not None else asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd
        )

        out, err = await asyncio.gather(
            self._drain("stdout", process.stdout, on_output),
            self._drain("stderr", process.stderr, on_output),
        )
        returncode = await process.wait()

        self.logger.debug(
            f"Command exited with {returncode} "
            f"({len(out)} bytes stdout, {len(err)} bytes stderr)"
        )

        return CommandResult(
            argv=argv,
            returncode=returncode,
            stdout=out.decode(self.encoding, errors="replace"),
            stderr=err.decode(self.encoding, errors="replace"),
            stdout_bytes=out,
        )
