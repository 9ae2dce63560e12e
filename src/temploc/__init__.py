"""temploc - translation for Template-Toolkit style templates.

Extracts translatable msgids from template text into gettext catalogs, and
renders translation calls at run time with placeholder substitution,
modifiers, plural selection and HTML escaping.

Public API:
    Templater / TemplaterConfig - Textdomain registry and template glue
    Textdomain - One set of messages bound to one translation function
    MessageFormatter / RuntimeCall - Render-time formatting of one call
    MappingScope - Template variables used as fallback for parameters
    ModifierRegistry - Built-in and custom placeholder modifiers
    GettextTranslator / NullTranslator - Translator collaborators
    scan_template / Extractor - Build-time msgid extraction
    BabelCatalogStore - POT writer through Babel
    parse_template - Placeholder grammar parser

Exceptions:
    TemplocError - Base exception class
    ScanSyntaxError - Block filter without END
    PatternConfigError - Scan pattern not understood
    CallShapeError - Count or parameters not matching the msgid
    TextdomainConfigError - Invalid textdomain registration
    CatalogWriteError - Translation tables could not be written

Submodules:
    temploc.syntax - msgid plural split and placeholder grammar
    temploc.runtime - Formatter, resolver, modifiers, translators, textdomains
    temploc.extraction - Scanner, catalog accumulator, extractor
    temploc.diagnostics - Diagnostic codes, templates and exceptions
    temploc.filters - cols and br text filters
"""

from .diagnostics import (
    CallShapeError,
    CatalogWriteError,
    PatternConfigError,
    ScanSyntaxError,
    TemplocError,
    TextdomainConfigError,
)
from .extraction import BabelCatalogStore, Extractor, ScanPattern, scan_template
from .runtime import (
    GettextTranslator,
    MappingScope,
    MessageFormatter,
    ModifierRegistry,
    NullTranslator,
    RuntimeCall,
    Textdomain,
)
from .syntax import parse_template
from .templater import Templater, TemplaterConfig

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError  # noqa: E402
from importlib.metadata import version as _get_version  # noqa: E402

try:
    __version__ = _get_version("temploc")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BabelCatalogStore",
    "CallShapeError",
    "CatalogWriteError",
    "Extractor",
    "GettextTranslator",
    "MappingScope",
    "MessageFormatter",
    "ModifierRegistry",
    "NullTranslator",
    "PatternConfigError",
    "RuntimeCall",
    "ScanPattern",
    "ScanSyntaxError",
    "Templater",
    "TemplaterConfig",
    "TemplocError",
    "Textdomain",
    "TextdomainConfigError",
    "__version__",
    "parse_template",
    "scan_template",
]
