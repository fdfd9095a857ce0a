"""
Database module for data-transfer.

Dump validation, credential resolution and the mysql client wrappers.
"""

from .credentials import (
    CredentialResolver,
    CredentialStrategy,
    LegacyParameterStrategy,
    RepositoryStrategy,
    register_credential_strategy,
)
from .dump import check_dump, validate_dump
from .mysql import MySQLExporter, MySQLImporter, build_dump_command, build_import_command

__all__ = [
    'CredentialResolver',
    'CredentialStrategy',
    'LegacyParameterStrategy',
    'RepositoryStrategy',
    'register_credential_strategy',
    'check_dump',
    'validate_dump',
    'MySQLExporter',
    'MySQLImporter',
    'build_dump_command',
    'build_import_command',
]
