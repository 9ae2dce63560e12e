"""Diagnostic codes and data structures.

Defines error codes, source locations, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceLocation",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1099: Scan errors (template syntax, scan configuration)
        1100-1199: Scan warnings (suspicious msgids, misplaced functions)
        2000-2999: Call errors (parameter shape of a translation call)
        3000-3999: Resolution problems (missing values, modifier failures)
        4000-4999: Configuration errors (textdomain registration)
        5000-5099: Catalog errors (store failures)
        5100-5199: Catalog warnings
    """

    # Scan errors (1000-1099)
    SCAN_MISSING_END = 1001
    SCAN_UNKNOWN_PATTERN = 1002

    # Scan warnings (1100-1199)
    HTML_ESCAPE_IN_MSGID = 1101
    FUNCTION_NOT_EXPECTED = 1102

    # Call errors (2000-2999)
    COUNT_REQUIRED = 2001
    COUNT_NOT_ALLOWED = 2002
    SUPERFLUOUS_PARAMETERS = 2003
    COUNT_NOT_NUMERIC = 2004

    # Resolution problems (3000-3999)
    MISSING_KEY = 3001
    MODIFIER_UNKNOWN = 3002
    MODIFIER_FAILED = 3003

    # Configuration errors (4000-4999)
    TEXTDOMAIN_EXISTS = 4001
    FUNCTION_IN_USE = 4002
    DIRECTORY_NOT_IN_PATH = 4003
    INVALID_OPTION = 4004

    # Catalog errors (5000-5099)
    CATALOG_WRITE_FAILED = 5001

    # Catalog warnings (5100-5199)
    CATALOG_PLURAL_MISMATCH = 5101


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Location of a construct inside a template file.

    Attributes:
        file: File identifier as supplied by the text source
        line: Line number (1-indexed)
    """

    file: str
    line: int

    def __post_init__(self) -> None:
        """Validate SourceLocation invariants.

        Raises:
            ValueError: If line is less than 1 (lines are 1-indexed).
        """
        if self.line < 1:
            msg = f"SourceLocation.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Carries enough context (file,
    line, key, format string) for a template author to act on it.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        location: Template location (None for render-time problems)
        hint: Suggestion for fixing the error
        key: Placeholder or parameter name involved
        format_string: Message format string involved
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    location: SourceLocation | None = None
    hint: str | None = None
    key: str | None = None
    format_string: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[SCAN_MISSING_END]: template syntax error, no END in page.tt line 4
              --> page.tt:4
              = help: Close the filter block with [% END %]

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
