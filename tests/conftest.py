"""
Pytest configuration and fixtures for the data-transfer tests.

External processes are never started here: a FakeRunner records every
argument vector and answers with scripted results per program.
"""

from pathlib import Path
from typing import Dict, List, Optional
from unittest.mock import Mock

import pytest

from data_transfer.config.parameters import ParameterBag
from data_transfer.models.config import (
    FolderMapping,
    SshProxyConfig,
    TransferConfig,
)
from data_transfer.transfer.runner import CommandResult


VALID_DUMP = (
    "-- MySQL dump 10.13  Distrib 8.0.36, for Linux (x86_64)\n"
    "--\n"
    "-- Host: localhost    Database: app\n"
    "CREATE TABLE `users` (`id` int NOT NULL);\n"
    "INSERT INTO `users` VALUES (1),(2);\n"
    "-- Dump completed on 2024-01-15 03:22:10\n"
)


class FakeRunner:
    """Stands in for CommandRunner and records every invocation."""

    def __init__(self):
        self.calls: List[List[str]] = []
        self.stdin_contents: List[bytes] = []
        self._responses: Dict[str, List[CommandResult]] = {}

    def respond(self, program: str, returncode: int = 0, stdout: str = "", stderr: str = "") -> "FakeRunner":
        """Queue a result for the next call of ``program``."""
        self._responses.setdefault(program, []).append(
            CommandResult(argv=[program], returncode=returncode, stdout=stdout, stderr=stderr,
                          stdout_bytes=stdout.encode("utf-8"))
        )
        return self

    def calls_for(self, program: str) -> List[List[str]]:
        return [call for call in self.calls if call and call[0] == program]

    async def run(self, argv, on_output=None, stdin=None, stdout=None, cwd=None) -> CommandResult:
        argv = [str(arg) for arg in argv]
        self.calls.append(argv)
        if stdin is not None:
            self.stdin_contents.append(stdin.read())

        queue = self._responses.get(argv[0]) or []
        template: Optional[CommandResult] = queue.pop(0) if queue else None
        if template is None:
            template = CommandResult(argv=argv, returncode=0, stdout="", stderr="")

        if on_output:
            if template.stdout:
                on_output("stdout", template.stdout.encode("utf-8"))
            if template.stderr:
                on_output("stderr", template.stderr.encode("utf-8"))

        return CommandResult(
            argv=argv,
            returncode=template.returncode,
            stdout=template.stdout,
            stderr=template.stderr,
            stdout_bytes=template.stdout_bytes,
        )


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Command runner double."""
    return FakeRunner()


@pytest.fixture
def progress() -> Mock:
    """Progress reporter double."""
    return Mock(spec=["step", "tick", "ok", "done", "error"])


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "cache"


@pytest.fixture
def transfer_config(cache_dir: Path) -> TransferConfig:
    """Sample transfer configuration without proxy."""
    return TransferConfig(
        remote_host="prod.example.com",
        remote_user="deploy",
        remote_dir="/var/www/app",
        remote_env="prod",
        console_script="bin/data-transfer",
        ssh_options=("-p 2222", "-o StrictHostKeyChecking=no"),
        rsync_options=("-az", "--delete"),
        folders=(
            FolderMapping(source="var/storage", destination="var"),
            FolderMapping(source="web/uploads", destination="data/uploads"),
        ),
        siteaccess="site",
        cache_dir=cache_dir,
    )


@pytest.fixture
def proxied_config(transfer_config: TransferConfig) -> TransferConfig:
    """Same configuration, tunnelled through a jump host."""
    return transfer_config.model_copy(update={
        "ssh_proxy": SshProxyConfig(host="jump.example.com", user="hop", options=("-i /home/hop/.ssh/jump",)),
    })


@pytest.fixture
def legacy_parameters() -> ParameterBag:
    """Parameters using the flat database.params shape."""
    return ParameterBag({
        "siteaccess.site.database.params": {
            "database": "app_dev",
            "user": "dev",
            "password": "s3cr3t'; rm -rf /",
            "host": "127.0.0.1",
        },
    })


@pytest.fixture
def repository_parameters() -> ParameterBag:
    """Parameters using the repository -> connection shape."""
    return ParameterBag({
        "siteaccess": {"site": {"repository": "main"}},
        "repositories": {"main": {"connection": "local"}},
        "connections": {
            "local": {
                "dbname": "app_repo",
                "user": "repo_user",
                "password": "repo_pass",
                "host": "db.local",
                "port": 3307,
            },
        },
    })


@pytest.fixture
def valid_dump() -> str:
    """A complete dump as produced by mysqldump."""
    return VALID_DUMP
