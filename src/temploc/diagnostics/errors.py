"""temploc exception hierarchy with structured diagnostics.

All exceptions store Diagnostic objects for rich error information.
Extraction and call-shape errors are raised; resolution problems are
collected by the formatter and never interrupt rendering.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic


class TemplocError(Exception):
    """Base exception for all temploc errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize TemplocError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class ScanSyntaxError(TemplocError):
    """Template syntax error found while extracting msgids.

    Aborts the scan of one file. The location is available both in the
    diagnostic and as plain attributes.

    Attributes:
        filename: Template file identifier
        line: Line number (1-indexed)
    """

    def __init__(self, message: str | Diagnostic, *, filename: str, line: int) -> None:
        super().__init__(message)
        self.filename = filename
        self.line = line


class PatternConfigError(TemplocError):
    """Scan pattern cannot be interpreted.

    Raised before any text is scanned.
    """


class CallShapeError(TemplocError):
    """Translation call with parameters that do not fit the msgid.

    A programming error in a template: count missing for a plural msgid,
    count given for a singular one, or positional values left over.
    """


class PlaceholderResolutionError(TemplocError):
    """Placeholder without value and without default.

    Collected, not raised: the placeholder is replaced by an empty string.
    """


class ModifierError(TemplocError):
    """Modifier unknown or failing on the value.

    Collected, not raised: the value is inserted unmodified.
    """


class TextdomainConfigError(TemplocError):
    """Invalid textdomain registration (duplicate name or function)."""


class CatalogWriteError(TemplocError):
    """Catalog store failed to write the tables of one or more domains.

    Attributes:
        domains: Names of the domains which failed
    """

    def __init__(self, message: str | Diagnostic, *, domains: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.domains = domains
