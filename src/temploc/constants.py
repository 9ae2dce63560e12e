"""Shared constants for temploc.

This module provides centralized configuration constants used across
the extraction and runtime packages. Placing constants here avoids circular
imports and provides a single source of truth.

Constants are grouped by domain:
- Template dialects: Tag delimiters and END marker for Template-Toolkit text
- Message grammar: Plural separator, reserved parameters, HTML suffix
- Modifiers: BYTES units and precision, DT keywords
- Cache limits: Memory bounds for the placeholder parse cache

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Template dialects
    "TT1_TAG_PATTERN",
    "TT2_TAG_PATTERN",
    "END_TAG_PATTERN",
    "DEFAULT_FUNCTION",
    "DEFAULT_CHARSET",
    # Message grammar
    "PLURAL_SEPARATOR",
    "COUNT_PARAM",
    "LANG_PARAM",
    "CONTEXT_PARAM",
    "HTML_SAFE_SUFFIX",
    "DEFAULT_SEPARATOR",
    # Modifiers
    "BYTE_UNITS",
    "BYTE_STEP",
    "BYTES_PRECISION",
    "DT_DEFAULT_FORMAT",
    # Cache limits
    "MAX_TEMPLATE_CACHE_SIZE",
    "MAX_LOCALE_CACHE_SIZE",
]

# ============================================================================
# TEMPLATE DIALECTS
# ============================================================================

# Dialect 1 accepts both "[% ... %]" and "%% ... %%" (and mixes of the two).
TT1_TAG_PATTERN: str = r"[\[%]%(.*?)%[%\]]"

# Dialect 2 only knows "[% ... %]".
TT2_TAG_PATTERN: str = r"\[%(.*?)%\]"

# Tag content which closes a block filter.
END_TAG_PATTERN: str = r"^\s*END\s*$"

# Translation function name used when a textdomain does not name one.
DEFAULT_FUNCTION: str = "loc"

# Encoding assumed for template text and written catalogs.
DEFAULT_CHARSET: str = "utf-8"

# ============================================================================
# MESSAGE GRAMMAR
# ============================================================================

# Separates singular from plural inside one msgid: "one file|{_count} files"
PLURAL_SEPARATOR: str = "|"

# Reserved named parameters. They steer the call and are never required
# to appear in the message.
COUNT_PARAM: str = "_count"
LANG_PARAM: str = "_lang"
CONTEXT_PARAM: str = "_context"

# Placeholders whose path ends on this suffix carry HTML already.
HTML_SAFE_SUFFIX: str = "_html"

# Introduces the default value of a placeholder: {count //0}
DEFAULT_SEPARATOR: str = "//"

# ============================================================================
# MODIFIERS
# ============================================================================

BYTE_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")

BYTE_STEP: int = 1024

# Decimals shown for every unit above plain bytes ("1.5 MB").
BYTES_PRECISION: int = 1

# DT() without an argument renders "YYYY-MM-DD HH:MM:SS".
DT_DEFAULT_FORMAT: str = "FT"

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Distinct format strings kept parsed. A site rarely has more than a few
# thousand translatable strings.
MAX_TEMPLATE_CACHE_SIZE: int = 4096

# Maximum cached Babel Locale instances.
MAX_LOCALE_CACHE_SIZE: int = 128
