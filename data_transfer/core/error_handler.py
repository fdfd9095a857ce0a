"""
Error handling for the fetch and export steps.

Errors raised inside a step are categorized here, logged with their
remediation hints, and turned into something the console can render.
"""

import logging
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from .exceptions import (
    ConfigurationError,
    ConnectionFailure,
    CredentialResolutionError,
    DatabaseError,
    ImportFailure,
    InvalidDumpError,
    SyncFailure,
    TransferError,
)


class ErrorCategory(str, Enum):
    """Categories of errors for better handling and reporting."""
    CONFIGURATION = "configuration"
    CONNECTIVITY = "connectivity"
    DUMP = "dump"
    DATABASE = "database"
    TRANSFER = "transfer"
    RESOURCE = "resource"
    UNKNOWN = "unknown"


class ErrorSeverity(str, Enum):
    """Severity levels for errors."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Context information for an error occurrence."""
    timestamp: datetime = field(default_factory=datetime.now)
    operation: Optional[str] = None
    step: Optional[str] = None
    additional_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ErrorInfo:
    """Categorized error information."""
    error: Exception
    category: ErrorCategory
    severity: ErrorSeverity
    context: ErrorContext
    remediation_steps: List[str]
    traceback_str: str

    @property
    def message(self) -> str:
        return getattr(self.error, "message", None) or str(self.error)


class ErrorHandler:
    """
    Categorizes step errors and logs them with remediation hints.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self._error_mappings = self._build_error_mappings()
        self._remediation_guides = self._build_remediation_guides()

    def _build_error_mappings(self) -> Dict[Type[Exception], Dict[str, Any]]:
        """Build mapping of exception types to error categories and severities."""
        # Ordered: most specific first, parents are matched by isinstance.
        return {
            CredentialResolutionError: {
                "category": ErrorCategory.CONFIGURATION,
                "severity": ErrorSeverity.HIGH,
            },
            ConfigurationError: {
                "category": ErrorCategory.CONFIGURATION,
                "severity": ErrorSeverity.HIGH,
            },
            ConnectionFailure: {
                "category": ErrorCategory.CONNECTIVITY,
                "severity": ErrorSeverity.HIGH,
            },
            InvalidDumpError: {
                "category": ErrorCategory.DUMP,
                "severity": ErrorSeverity.HIGH,
            },
            ImportFailure: {
                "category": ErrorCategory.DATABASE,
                "severity": ErrorSeverity.CRITICAL,
            },
            SyncFailure: {
                "category": ErrorCategory.TRANSFER,
                "severity": ErrorSeverity.MEDIUM,
            },
            DatabaseError: {
                "category": ErrorCategory.DATABASE,
                "severity": ErrorSeverity.HIGH,
            },
            TransferError: {
                "category": ErrorCategory.TRANSFER,
                "severity": ErrorSeverity.MEDIUM,
            },
            FileNotFoundError: {
                "category": ErrorCategory.RESOURCE,
                "severity": ErrorSeverity.MEDIUM,
            },
            OSError: {
                "category": ErrorCategory.RESOURCE,
                "severity": ErrorSeverity.MEDIUM,
            },
        }

    def _build_remediation_guides(self) -> Dict[ErrorCategory, List[str]]:
        """Build remediation guides for each error category."""
        return {
            ErrorCategory.CONFIGURATION: [
                "Check the data_transfer parameters in the configuration file",
                "Verify the siteaccess database settings are defined",
            ],
            ErrorCategory.CONNECTIVITY: [
                "Check that 'ssh user@host' works with the configured ssh options",
                "Verify the ssh proxy host and user if a proxy is configured",
                "Make sure the remote console script can run the export command",
            ],
            ErrorCategory.DUMP: [
                "Run the export command on the remote host and inspect its output",
                "Check that mysqldump is installed on the remote host",
            ],
            ErrorCategory.DATABASE: [
                "Verify the local database is running and the credentials are correct",
                "Ensure the local database user may create and drop tables",
            ],
            ErrorCategory.TRANSFER: [
                "Check that the remote folders exist below the remote directory",
                "Verify local write permissions on the destination folders",
            ],
            ErrorCategory.RESOURCE: [
                "Check that mysql, mysqldump, ssh and rsync are installed and on PATH",
                "Check available disk space in the cache directory",
            ],
            ErrorCategory.UNKNOWN: [
                "Run again with --verbose for additional context",
            ],
        }

    def categorize_error(self, error: Exception, context: Optional[ErrorContext] = None) -> ErrorInfo:
        """
        Categorize an error and create error information.

        Args:
            error: The exception that occurred
            context: Optional context information

        Returns:
            ErrorInfo object with categorized error details
        """
        mapping = self._error_mappings.get(type(error))

        if not mapping:
            for exc_type, exc_mapping in self._error_mappings.items():
                if isinstance(error, exc_type):
                    mapping = exc_mapping
                    break

        if not mapping:
            mapping = {
                "category": ErrorCategory.UNKNOWN,
                "severity": ErrorSeverity.MEDIUM,
            }

        category = mapping["category"]
        return ErrorInfo(
            error=error,
            category=category,
            severity=mapping["severity"],
            context=context or ErrorContext(),
            remediation_steps=self._remediation_guides.get(category, []),
            traceback_str="".join(
                traceback.format_exception(type(error), error, error.__traceback__)
            ),
        )

    def handle_error(self, error: Exception, context: Optional[ErrorContext] = None) -> ErrorInfo:
        """Categorize and log an error raised inside a step."""
        error_info = self.categorize_error(error, context)

        log_level = {
            ErrorSeverity.LOW: logging.INFO,
            ErrorSeverity.MEDIUM: logging.WARNING,
            ErrorSeverity.HIGH: logging.ERROR,
            ErrorSeverity.CRITICAL: logging.CRITICAL,
        }[error_info.severity]

        self.logger.log(
            log_level,
            f"[{error_info.category.value}] {error_info.context.step or 'step'} failed: {error_info.message}",
        )
        self.logger.debug(error_info.traceback_str)
        return error_info
