"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceLocation


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps messages testable and documents every error case in one place.
    """

    # ------------------------------------------------------------------
    # Scanning
    # ------------------------------------------------------------------

    @staticmethod
    def missing_end(filename: str, line: int) -> Diagnostic:
        """Block filter opened without a closing END tag.

        Args:
            filename: Template file identifier
            line: Line of the opening tag

        Returns:
            Diagnostic for SCAN_MISSING_END
        """
        msg = f"template syntax error, no END in {filename} line {line}"
        return Diagnostic(
            code=DiagnosticCode.SCAN_MISSING_END,
            message=msg,
            location=SourceLocation(filename, line),
            hint="Close the filter block with [% END %] directly after the msgid",
        )

    @staticmethod
    def unknown_pattern(pattern: object) -> Diagnostic:
        """Scan pattern is neither TT1-<function> nor TT2-<function>.

        Args:
            pattern: The rejected pattern specification

        Returns:
            Diagnostic for SCAN_UNKNOWN_PATTERN
        """
        msg = f"unknown pattern {pattern!s}"
        return Diagnostic(
            code=DiagnosticCode.SCAN_UNKNOWN_PATTERN,
            message=msg,
            hint="Use 'TT2-<function>' (or 'TT1-<function>'), for instance 'TT2-loc'",
        )

    @staticmethod
    def html_escape_in_msgid(msgid: str, filename: str, line: int) -> Diagnostic:
        """Extracted msgid contains an HTML character entity.

        Args:
            msgid: The msgid, with plural joined by '|'
            filename: Template file identifier
            line: Line of the msgid

        Returns:
            Diagnostic for HTML_ESCAPE_IN_MSGID (warning)
        """
        msg = (
            f"msgid '{msgid}' contains html escapes, don't do that. "
            f"File {filename} line {line}"
        )
        return Diagnostic(
            code=DiagnosticCode.HTML_ESCAPE_IN_MSGID,
            message=msg,
            location=SourceLocation(filename, line),
            hint="Write plain text; inserted values are escaped at render time",
            severity="warning",
        )

    @staticmethod
    def function_not_expected(function: str, domain: str, filename: str) -> Diagnostic:
        """Translation function used outside the directories of its textdomain.

        Args:
            function: Translation function name
            domain: Textdomain name
            filename: Template file identifier

        Returns:
            Diagnostic for FUNCTION_NOT_EXPECTED (warning)
        """
        msg = f"function '{function}' of textdomain '{domain}' not expected in {filename}"
        return Diagnostic(
            code=DiagnosticCode.FUNCTION_NOT_EXPECTED,
            message=msg,
            hint="Check the only_in_directory setting of the textdomain",
            severity="warning",
        )

    # ------------------------------------------------------------------
    # Call shape
    # ------------------------------------------------------------------

    @staticmethod
    def count_required(msgid: str) -> Diagnostic:
        """Plural msgid used without a count.

        Args:
            msgid: The msgid including its plural alternative

        Returns:
            Diagnostic for COUNT_REQUIRED
        """
        msg = f"translation '{msgid}' requires a count"
        return Diagnostic(
            code=DiagnosticCode.COUNT_REQUIRED,
            message=msg,
            format_string=msgid,
            hint="Pass the count as first parameter or as _count => COUNT",
        )

    @staticmethod
    def count_not_allowed(msgid: str) -> Diagnostic:
        """Count passed for a msgid without plural alternative.

        Args:
            msgid: The msgid

        Returns:
            Diagnostic for COUNT_NOT_ALLOWED
        """
        msg = f"translation '{msgid}' has no plural form, but a count was given"
        return Diagnostic(
            code=DiagnosticCode.COUNT_NOT_ALLOWED,
            message=msg,
            format_string=msgid,
            hint="Add a plural alternative after '|' or remove the count",
        )

    @staticmethod
    def count_not_numeric(msgid: str, count: object) -> Diagnostic:
        """Count which is not a finite number."""
        msg = f"count '{count}' of translation '{msgid}' is not a number"
        return Diagnostic(
            code=DiagnosticCode.COUNT_NOT_NUMERIC,
            message=msg,
            format_string=msgid,
            hint="Pass an integer count, or a string holding one",
        )

    @staticmethod
    def superfluous_parameters(msgid: str, count: int) -> Diagnostic:
        """Positional parameters left after the count was taken.

        Args:
            msgid: The msgid
            count: Number of unused positional parameters

        Returns:
            Diagnostic for SUPERFLUOUS_PARAMETERS
        """
        msg = f"superfluous positional parameters ({count}) for translation '{msgid}'"
        return Diagnostic(
            code=DiagnosticCode.SUPERFLUOUS_PARAMETERS,
            message=msg,
            format_string=msgid,
            hint="Pass values as name => value pairs; filters take no positional values",
        )

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    @staticmethod
    def missing_key(key: str, format_string: str, label: str | None) -> Diagnostic:
        """Placeholder without value and without default.

        Args:
            key: Placeholder path
            format_string: Format string containing the placeholder
            label: Name of the template being rendered

        Returns:
            Diagnostic for MISSING_KEY (warning)
        """
        msg = f"Missing key '{key}' in format '{format_string}', in {label or 'template'}"
        return Diagnostic(
            code=DiagnosticCode.MISSING_KEY,
            message=msg,
            key=key,
            format_string=format_string,
            hint=f"Pass {key} => value, set it in the template, or add a //default",
            severity="warning",
        )

    @staticmethod
    def modifier_unknown(name: str, key: str) -> Diagnostic:
        """Modifier name not found in the registry.

        Args:
            name: Modifier name
            key: Placeholder path the modifier was applied to

        Returns:
            Diagnostic for MODIFIER_UNKNOWN (warning)
        """
        msg = f"Unknown modifier '{name}' for '{key}'"
        return Diagnostic(
            code=DiagnosticCode.MODIFIER_UNKNOWN,
            message=msg,
            key=key,
            hint="Register the modifier with ModifierRegistry.register()",
            severity="warning",
        )

    @staticmethod
    def modifier_failed(name: str, key: str, reason: str) -> Diagnostic:
        """Modifier raised while transforming a value.

        Args:
            name: Modifier name or printf spec
            key: Placeholder path
            reason: Error description

        Returns:
            Diagnostic for MODIFIER_FAILED (warning)
        """
        msg = f"Modifier '{name}' failed for '{key}': {reason}"
        return Diagnostic(
            code=DiagnosticCode.MODIFIER_FAILED,
            message=msg,
            key=key,
            severity="warning",
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @staticmethod
    def textdomain_exists(name: str) -> Diagnostic:
        """Textdomain name registered twice."""
        msg = f"textdomain '{name}' already defined"
        return Diagnostic(code=DiagnosticCode.TEXTDOMAIN_EXISTS, message=msg)

    @staticmethod
    def function_in_use(function: str, domain: str) -> Diagnostic:
        """Translation function name already bound to another textdomain.

        Args:
            function: Translation function name
            domain: Name of the textdomain which owns it

        Returns:
            Diagnostic for FUNCTION_IN_USE
        """
        msg = f"translation function '{function}' already in use by textdomain '{domain}'"
        return Diagnostic(
            code=DiagnosticCode.FUNCTION_IN_USE,
            message=msg,
            hint="Each textdomain needs its own function name, like 'loc' and 'L'",
        )

    @staticmethod
    def directory_not_in_path(directory: str, option: str) -> Diagnostic:
        """Restricting directory is not part of the include path."""
        msg = f"directory {directory} not in INCLUDE_PATH, used by {option}"
        return Diagnostic(code=DiagnosticCode.DIRECTORY_NOT_IN_PATH, message=msg)

    @staticmethod
    def invalid_option(option: str, value: object) -> Diagnostic:
        """Configuration option with an unsupported value."""
        msg = f"illegal value '{value}' for '{option}' option"
        return Diagnostic(code=DiagnosticCode.INVALID_OPTION, message=msg)

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    @staticmethod
    def catalog_write_failed(domain: str, reason: str) -> Diagnostic:
        """Catalog store could not write the tables of a domain."""
        msg = f"cannot write translation table for textdomain '{domain}': {reason}"
        return Diagnostic(code=DiagnosticCode.CATALOG_WRITE_FAILED, message=msg)

    @staticmethod
    def plural_mismatch(
        msgid: str, kept: str, ignored: str, location: SourceLocation
    ) -> Diagnostic:
        """Same msgid extracted with two different plural texts."""
        msg = f"msgid '{msgid}' has plural '{kept}', ignoring '{ignored}' at {location}"
        return Diagnostic(
            code=DiagnosticCode.CATALOG_PLURAL_MISMATCH,
            message=msg,
            location=location,
            severity="warning",
        )
