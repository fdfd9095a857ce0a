"""
Tests for CommandRunner against real child processes.

The child is the running Python interpreter, so the tests do not depend on
ssh, rsync or mysql being installed.
"""

import sys

import pytest

from data_transfer.transfer.runner import CommandRunner


class TestCommandRunner:
    """Test process execution and output capture."""

    @pytest.mark.asyncio
    async def test_captures_stdout_and_stderr(self):
        runner = CommandRunner()

        result = await runner.run([
            sys.executable, "-c",
            "import sys; sys.stdout.write('out'); sys.stderr.write('err')",
        ])

        assert result.successful is True
        assert result.stdout == "out"
        assert result.stderr == "err"
        assert result.stdout_bytes == b"out"

    @pytest.mark.asyncio
    async def test_reports_exit_code(self):
        result = await CommandRunner().run([sys.executable, "-c", "import sys; sys.exit(3)"])

        assert result.successful is False
        assert result.returncode == 3

    @pytest.mark.asyncio
    async def test_streams_output_to_callback(self):
        seen = []

        await CommandRunner().run(
            [sys.executable, "-c", "import sys; sys.stdout.write('x' * 200000)"],
            on_output=lambda stream, chunk: seen.append((stream, len(chunk))),
        )

        assert sum(size for stream, size in seen if stream == "stdout") == 200000

    @pytest.mark.asyncio
    async def test_arguments_are_not_interpreted_by_a_shell(self):
        result = await CommandRunner().run(
            [sys.executable, "-c", "import sys; print(sys.argv[1])", "$(echo injected); ls"],
        )

        assert result.stdout.strip() == "$(echo injected); ls"

    @pytest.mark.asyncio
    async def test_stdin_from_file(self, tmp_path):
        source = tmp_path / "input.sql"
        source.write_bytes(b"SELECT 1;\n")

        with open(source, "rb") as f:
            result = await CommandRunner().run(
                [sys.executable, "-c", "import sys; sys.stdout.write(sys.stdin.read().upper())"],
                stdin=f,
            )

        assert result.stdout == "SELECT 1;\n"

    @pytest.mark.asyncio
    async def test_stdout_to_file(self, tmp_path):
        target = tmp_path / "dump.sql"

        with open(target, "wb") as f:
            result = await CommandRunner().run(
                [sys.executable, "-c", "print('-- MySQL dump')"],
                stdout=f,
            )

        assert result.stdout == ""
        assert target.read_text().strip() == "-- MySQL dump"

    @pytest.mark.asyncio
    async def test_failing_callback_does_not_break_run(self):
        def explode(stream, chunk):
            raise RuntimeError("boom")

        result = await CommandRunner().run([sys.executable, "-c", "print('hi')"], on_output=explode)

        assert result.stdout.strip() == "hi"

    @pytest.mark.asyncio
    async def test_missing_program(self):
        with pytest.raises(FileNotFoundError):
            await CommandRunner().run(["data-transfer-no-such-binary"])
