"""Diagnostic system for temploc errors.

Provides structured error diagnostics with codes, locations, and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceLocation
from .errors import (
    CallShapeError,
    CatalogWriteError,
    ModifierError,
    PatternConfigError,
    PlaceholderResolutionError,
    ScanSyntaxError,
    TemplocError,
    TextdomainConfigError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "CallShapeError",
    "CatalogWriteError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "ModifierError",
    "OutputFormat",
    "PatternConfigError",
    "PlaceholderResolutionError",
    "ScanSyntaxError",
    "SourceLocation",
    "TemplocError",
    "TextdomainConfigError",
]
