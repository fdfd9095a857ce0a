"""
Main CLI entry point for data-transfer.

This module provides the command-line interface using Click with Rich
formatting: ``fetch`` pulls the remote database and folders, ``export``
is the remote counterpart that writes the local database dump to stdout.
"""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.text import Text

from data_transfer import __version__
from data_transfer.config.loader import ConfigurationLoader, DEFAULT_CONFIG_FILE
from data_transfer.core.exceptions import DataTransferError
from data_transfer.database.credentials import CredentialResolver
from data_transfer.database.mysql import MySQLExporter
from data_transfer.monitoring.progress import ConsoleProgress
from data_transfer.orchestrator.fetch import FetchOrchestrator
from data_transfer.transfer.runner import CommandRunner
from data_transfer.utils.logging import setup_logging

console = Console(highlight=False)
error_console = Console(stderr=True, highlight=False)

logger = logging.getLogger(__name__)


def _print_error(message: str, target: Console = console) -> None:
    target.print(Text(f"Error: {message}", style="bold red"))


@click.group()
@click.version_option(__version__, message="data-transfer version %(version)s")
@click.option(
    '--config', '-c', 'config_path',
    envvar='DATA_TRANSFER_CONFIG',
    default=DEFAULT_CONFIG_FILE,
    show_default=True,
    type=click.Path(dir_okay=False),
    help='Configuration file (YAML or TOML)'
)
@click.option('--env', 'environment', envvar='DATA_TRANSFER_ENV', help='Configuration environment overlay')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.pass_context
def main(ctx: click.Context, config_path: str, environment: Optional[str], verbose: bool):
    """
    data-transfer

    Fetch a remote database and data folders into the local environment.
    """
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['config_path'] = config_path
    ctx.obj['environment'] = environment
    ctx.obj['loader'] = ConfigurationLoader(config_path, environment)


def _setup_logging(ctx: click.Context, log_file: Optional[str] = None) -> None:
    setup_logging(
        level="DEBUG" if ctx.obj.get('verbose') else "WARNING",
        log_file=log_file,
    )


@main.command()
@click.option('--db-only', is_flag=True, help='Only transfer the database, not the files.')
@click.option('--files-only', is_flag=True, help='Only transfer the files, not the database.')
@click.pass_context
def fetch(ctx: click.Context, db_only: bool, files_only: bool):
    """Fetch remote database and files from configured system."""
    loader: ConfigurationLoader = ctx.obj['loader']

    _setup_logging(ctx)
    try:
        config = loader.load()
        parameters = loader.load_parameters()
    except DataTransferError as e:
        _print_error(e.message)
        sys.exit(1)

    if config.log_file:
        _setup_logging(ctx, config.log_file)

    if ctx.obj.get('verbose'):
        console.print(Text(f"Remote: {config.remote_user}@{config.remote_host}:{config.remote_dir}", style="dim"))
        if config.ssh_proxy.enabled:
            console.print(Text(f"Proxy: {config.ssh_proxy.user}@{config.ssh_proxy.host}", style="dim"))

    orchestrator = FetchOrchestrator(
        config=config,
        resolver=CredentialResolver(parameters),
        progress=ConsoleProgress(console),
        runner=CommandRunner(),
        base_dir=Path.cwd(),
    )
    outcomes = asyncio.run(orchestrator.run(db_only=db_only, files_only=files_only))

    if any(not outcome.success for outcome in outcomes):
        sys.exit(1)


@main.command()
@click.pass_context
def export(ctx: click.Context):
    """Write a dump of the local database to stdout."""
    # fetch passes its remote.env as --env, which need not have an overlay here
    loader = ConfigurationLoader(ctx.obj['config_path'], ctx.obj['environment'], require_environment=False)

    # stdout carries the dump; everything else goes to stderr
    _setup_logging(ctx)
    try:
        parameters = loader.load_parameters()
        siteaccess = loader.get_param("siteaccess") or "default"
        credentials = CredentialResolver(parameters).resolve(siteaccess)
        asyncio.run(MySQLExporter(CommandRunner()).export(credentials))
    except DataTransferError as e:
        _print_error(e.message, error_console)
        sys.exit(1)
    except FileNotFoundError as e:
        _print_error(f"mysqldump not available: {e}", error_console)
        sys.exit(1)


if __name__ == '__main__':
    main()
