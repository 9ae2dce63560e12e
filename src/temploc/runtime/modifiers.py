"""Modifier engine: value transformations named inside placeholders.

A placeholder may list modifiers after its path:

    {price %.2f}          printf conversion
    {size BYTES}          human readable byte count
    {created DT(RFC2822)} date-time rendering

Modifiers apply left to right, each one receiving the output of the
previous. Built-ins are YEAR, DATE, TIME, DT and BYTES; applications add
their own through ModifierRegistry.register().

Modifier Calling Convention:
    func(value, args, lang) -> value
        value: Current value
        args:  Parenthesized arguments as strings, quotes removed
        lang:  Language of the translation call (may be None)

Python 3.13+. Depends on Babel (through the DT CLDR styles).
"""

import logging
from collections.abc import Iterator
from decimal import Decimal
from typing import Protocol

from temploc.constants import BYTE_STEP, BYTE_UNITS, BYTES_PRECISION, DT_DEFAULT_FORMAT
from temploc.diagnostics import ErrorTemplate, ModifierError
from temploc.runtime.datetimes import format_datetime_keyword, to_datetime
from temploc.syntax import ModifierSpec

__all__ = [
    "BUILTIN_MODIFIERS",
    "Modifier",
    "ModifierRegistry",
    "coerce_number",
    "create_default_registry",
    "format_bytes",
    "format_printf",
    "get_shared_registry",
]

logger = logging.getLogger(__name__)

_NUMERIC_CONVERSIONS = frozenset("diouxXeEfFgG")
_INTEGER_CONVERSIONS = frozenset("diouxX")


class Modifier(Protocol):
    """Protocol for modifier functions."""

    def __call__(self, value: object, args: tuple[str, ...], lang: str | None, /) -> object:
        ...  # pragma: no cover  # Protocol stub - not executable


# ============================================================================
# PRINTF
# ============================================================================


def format_printf(spec: str, value: object) -> str:
    """Apply a printf conversion to one value.

    Numeric conversions accept numeric strings: "%.2f" on "3.14159"
    gives "3.14". A missing value formats as an empty string for %s.

    Args:
        spec: Complete printf spec, for instance "%05.1f"
        value: Value to format

    Returns:
        Formatted text

    Raises:
        ValueError: If a numeric conversion gets a non-numeric value
        TypeError: If the conversion does not accept the value type
        OverflowError: If an integer conversion gets an infinite value
    """
    conversion = spec[-1]
    if conversion in _NUMERIC_CONVERSIONS:
        number = coerce_number(value)
        if conversion in _INTEGER_CONVERSIONS and not isinstance(number, int):
            number = int(number)
        return spec % number
    if value is None:
        value = ""
    return spec % (value,)


def coerce_number(value: object) -> int | float:
    """Numeric value of a template value; numeric strings are parsed.

    Raises:
        ValueError: If the value is None or its text is not a number
    """
    match value:
        case bool():
            return int(value)
        case int() | float():
            return value
        case Decimal():
            if not value.is_finite():
                return float(value)
            return int(value) if value == value.to_integral_value() else float(value)
        case None:
            msg = "no value"
            raise ValueError(msg)
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


# ============================================================================
# BUILT-IN MODIFIERS
# ============================================================================


def format_bytes(value: object, args: tuple[str, ...] = (), lang: str | None = None) -> str:
    """Render a byte count with binary units.

    Counts below 1024 show as whole bytes, larger counts with one decimal
    in the largest unit that keeps the number below 1024.

    Examples:
        >>> format_bytes(0)
        '0 B'
        >>> format_bytes(1023)
        '1023 B'
        >>> format_bytes(1536)
        '1.5 KB'
        >>> format_bytes("1572864")
        '1.5 MB'
    """
    size = float(coerce_number(value))
    if abs(size) < BYTE_STEP:
        return f"{int(size)} {BYTE_UNITS[0]}"

    unit = 0
    while unit < len(BYTE_UNITS) - 1 and round(abs(size), BYTES_PRECISION) >= BYTE_STEP:
        size /= BYTE_STEP
        unit += 1
    return f"{size:.{BYTES_PRECISION}f} {BYTE_UNITS[unit]}"


def _date_part(pattern: str) -> Modifier:
    def modifier(value: object, args: tuple[str, ...], lang: str | None) -> object:
        if value is None or value == "":
            return ""
        moment = to_datetime(value)
        if moment is None:
            return value
        return moment.strftime(pattern)

    return modifier


def format_dt(value: object, args: tuple[str, ...], lang: str | None) -> object:
    """DT(keyword): render a date-time, see format_datetime_keyword()."""
    if value is None or value == "":
        return ""
    moment = to_datetime(value)
    if moment is None:
        return value
    keyword = args[0] if args else DT_DEFAULT_FORMAT
    return format_datetime_keyword(moment, keyword, lang)


BUILTIN_MODIFIERS: dict[str, Modifier] = {
    "BYTES": format_bytes,
    "YEAR": _date_part("%Y"),
    "DATE": _date_part("%Y-%m-%d"),
    "TIME": _date_part("%H:%M:%S"),
    "DT": format_dt,
}


# ============================================================================
# REGISTRY
# ============================================================================


class ModifierRegistry:
    """Named modifiers available to placeholders.

    Built-in names cannot be replaced: registering a custom modifier under
    a built-in name logs a warning and keeps the built-in.

    Example:
        >>> registry = create_default_registry()
        >>> registry.register(lambda v, args, lang: str(v).upper(), name="UC")
        >>> "UC" in registry
        True
    """

    __slots__ = ("_builtins", "_custom", "_frozen")

    def __init__(self) -> None:
        """Initialize empty modifier registry."""
        self._builtins: dict[str, Modifier] = {}
        self._custom: dict[str, Modifier] = {}
        self._frozen = False

    def register(self, func: Modifier, *, name: str | None = None) -> None:
        """Register a custom modifier.

        Args:
            func: Modifier function, see the module calling convention
            name: Name used in placeholders (default: func.__name__.upper())

        Raises:
            TypeError: If the registry is frozen
        """
        self._check_writable()
        if name is None:
            name = getattr(func, "__name__", "unknown").upper()
        if name in self._builtins:
            logger.warning("Modifier '%s' is built in; custom registration ignored", name)
            return
        self._custom[name] = func

    def _register_builtin(self, name: str, func: Modifier) -> None:
        self._check_writable()
        self._builtins[name] = func
        self._custom.pop(name, None)

    def _check_writable(self) -> None:
        if self._frozen:
            msg = "Cannot modify frozen ModifierRegistry; use copy() to get a mutable registry"
            raise TypeError(msg)

    def freeze(self) -> None:
        """Reject further registrations."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        """True when register() raises."""
        return self._frozen

    def get(self, name: str) -> Modifier | None:
        """Look up a modifier, built-ins first."""
        return self._builtins.get(name) or self._custom.get(name)

    def apply(self, spec: ModifierSpec, value: object, *, key: str, lang: str | None) -> object:
        """Apply one modifier to a value.

        Args:
            spec: Parsed modifier
            value: Current value
            key: Placeholder path, for diagnostics
            lang: Language of the translation call

        Returns:
            Transformed value

        Raises:
            ModifierError: If the modifier is unknown or fails on the value
        """
        if spec.printf:
            try:
                return format_printf(spec.name, value)
            except (OverflowError, TypeError, ValueError) as e:
                raise ModifierError(ErrorTemplate.modifier_failed(spec.name, key, str(e))) from e

        func = self.get(spec.name)
        if func is None:
            raise ModifierError(ErrorTemplate.modifier_unknown(spec.name, key))

        # These mean the value did not suit the modifier; anything else is a
        # bug in the modifier and propagates.
        try:
            return func(value, spec.args, lang)
        except (OverflowError, TypeError, ValueError) as e:
            raise ModifierError(ErrorTemplate.modifier_failed(str(spec), key, str(e))) from e

    def list_modifiers(self) -> list[str]:
        """List registered names, built-ins first."""
        return [*self._builtins, *self._custom]

    def copy(self) -> "ModifierRegistry":
        """Create an unfrozen copy sharing the modifier functions."""
        new_registry = ModifierRegistry()
        new_registry._builtins = self._builtins.copy()
        new_registry._custom = self._custom.copy()
        return new_registry

    def __contains__(self, name: object) -> bool:
        return name in self._builtins or name in self._custom

    def __iter__(self) -> Iterator[str]:
        return iter(self.list_modifiers())

    def __len__(self) -> int:
        return len(self._builtins) + len(self._custom)

    def __repr__(self) -> str:
        return (
            f"ModifierRegistry(builtins={len(self._builtins)}, "
            f"custom={len(self._custom)}, frozen={self._frozen})"
        )


def create_default_registry() -> ModifierRegistry:
    """Create a new mutable registry with the built-in modifiers.

    See Also:
        get_shared_registry: Frozen registry shared between formatters.
    """
    registry = ModifierRegistry()
    for name, func in BUILTIN_MODIFIERS.items():
        registry._register_builtin(name, func)  # noqa: SLF001 - same module
    return registry


# Initialized lazily on first access to avoid import-time side effects.
_SHARED_REGISTRY: ModifierRegistry | None = None


def get_shared_registry() -> ModifierRegistry:
    """Get the shared, frozen registry with the built-in modifiers.

    Calling register() on it raises TypeError. Use copy() or
    create_default_registry() for a registry with custom modifiers.
    """
    global _SHARED_REGISTRY  # noqa: PLW0603
    if _SHARED_REGISTRY is None:
        _SHARED_REGISTRY = create_default_registry()
        _SHARED_REGISTRY.freeze()
    return _SHARED_REGISTRY
