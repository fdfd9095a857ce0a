"""
Structural checks for MySQL dump output.

A remote export that fails still produces output (an error message, a PHP
warning, a login banner), so the captured text must look like a complete
mysqldump before it is imported.
"""

import re
from dataclasses import dataclass, field
from typing import List

from data_transfer.core.exceptions import InvalidDumpError

# must start with '-- MySQL dump'
DUMP_HEADER_REGEX = re.compile(r"-- MySQL dump")

# must end with '-- Dump completed on YYYY-MM-DD HH:MM:SS'
DUMP_FOOTER_REGEX = re.compile(
    r"-- Dump completed on\s+\d*-\d*-\d*\s+\d+:\d+:\d+[\r\n\s\t]*\Z"
)


@dataclass
class DumpCheckResult:
    """Outcome of the structural dump checks."""
    has_header: bool
    has_footer: bool
    failed_checks: List[str] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return self.has_header and self.has_footer


def check_dump(output: str) -> DumpCheckResult:
    """Run both structural checks and report which ones failed."""
    has_header = DUMP_HEADER_REGEX.match(output) is not None
    has_footer = DUMP_FOOTER_REGEX.search(output) is not None

    failed = []
    if not has_header:
        failed.append("header")
    if not has_footer:
        failed.append("footer")

    return DumpCheckResult(has_header=has_header, has_footer=has_footer, failed_checks=failed)


def validate_dump(output: str) -> str:
    """
    Return the dump unchanged if it passes both checks.

    Raises:
        InvalidDumpError: with the full captured output embedded
    """
    result = check_dump(output)
    if not result.valid:
        raise InvalidDumpError(output, details={"failed_checks": result.failed_checks})
    return output
