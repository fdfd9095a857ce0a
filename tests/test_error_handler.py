"""
Tests for error categorization and the exception hierarchy.
"""

import logging
from unittest.mock import Mock

import pytest

from data_transfer.core.error_handler import (
    ErrorCategory,
    ErrorContext,
    ErrorHandler,
    ErrorSeverity,
)
from data_transfer.core.exceptions import (
    ConfigurationError,
    ConnectionFailure,
    CredentialResolutionError,
    DatabaseError,
    DataTransferError,
    ImportFailure,
    InvalidDumpError,
    SyncFailure,
    TransferError,
)


class TestExceptions:
    """Test exception messages and hierarchy."""

    def test_process_failure_message_includes_output(self):
        error = ConnectionFailure("Cannot connect to remote host", stdout="out", stderr="err", returncode=255)

        assert error.message == "Cannot connect to remote host: out err"
        assert error.details == {"stdout": "out", "stderr": "err", "returncode": 255}
        assert error.code == "ConnectionFailure"

    def test_hierarchy(self):
        assert issubclass(ConnectionFailure, TransferError)
        assert issubclass(SyncFailure, TransferError)
        assert issubclass(ImportFailure, DatabaseError)
        assert issubclass(InvalidDumpError, DatabaseError)
        assert issubclass(CredentialResolutionError, ConfigurationError)
        assert issubclass(ConfigurationError, DataTransferError)

    def test_credential_error_names_keys(self):
        error = CredentialResolutionError("site", ["a.b", "c.d"])

        assert error.siteaccess == "site"
        assert "a.b" in error.message
        assert "c.d" in error.message


class TestErrorHandler:
    """Test categorization and logging."""

    def setup_method(self):
        self.logger = Mock(spec=logging.Logger)
        self.handler = ErrorHandler(self.logger)

    @pytest.mark.parametrize("error, category, severity", [
        (ConnectionFailure("x"), ErrorCategory.CONNECTIVITY, ErrorSeverity.HIGH),
        (InvalidDumpError("x"), ErrorCategory.DUMP, ErrorSeverity.HIGH),
        (ImportFailure("x"), ErrorCategory.DATABASE, ErrorSeverity.CRITICAL),
        (SyncFailure("x"), ErrorCategory.TRANSFER, ErrorSeverity.MEDIUM),
        (CredentialResolutionError("site", []), ErrorCategory.CONFIGURATION, ErrorSeverity.HIGH),
        (FileNotFoundError("rsync"), ErrorCategory.RESOURCE, ErrorSeverity.MEDIUM),
        (ValueError("x"), ErrorCategory.UNKNOWN, ErrorSeverity.MEDIUM),
    ])
    def test_categorize(self, error, category, severity):
        error_info = self.handler.categorize_error(error)

        assert error_info.category == category
        assert error_info.severity == severity
        assert error_info.remediation_steps

    def test_subclass_falls_back_to_parent_mapping(self):
        class RemoteTimeout(TransferError):
            pass

        error_info = self.handler.categorize_error(RemoteTimeout("slow"))

        assert error_info.category == ErrorCategory.TRANSFER

    def test_handle_error_logs_at_severity_level(self):
        context = ErrorContext(operation="fetch", step="database")

        error_info = self.handler.handle_error(ImportFailure("Error importing database"), context)

        level, message = self.logger.log.call_args.args
        assert level == logging.CRITICAL
        assert "[database] database failed" in message
        assert error_info.context is context

    def test_message_prefers_exception_message(self):
        error_info = self.handler.categorize_error(SyncFailure("Error fetching files", stderr="denied"))

        assert error_info.message == "Error fetching files:  denied"
