"""Tests for the modifier engine: printf, BYTES, date parts and the registry."""

from __future__ import annotations

import logging
import re
from decimal import Decimal

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from temploc.constants import BYTE_UNITS
from temploc.diagnostics import DiagnosticCode, ModifierError
from temploc.runtime import (
    ModifierRegistry,
    create_default_registry,
    format_bytes,
    format_printf,
    get_shared_registry,
)
from temploc.runtime.modifiers import BUILTIN_MODIFIERS
from temploc.syntax import ModifierSpec


def shout(value: object, args: tuple[str, ...], lang: str | None) -> object:
    return str(value).upper()


@pytest.fixture
def registry() -> ModifierRegistry:
    """Fresh mutable registry with the built-ins."""
    return create_default_registry()


# ============================================================================
# PRINTF
# ============================================================================


class TestFormatPrintf:
    """printf conversions on template values."""

    @pytest.mark.parametrize(
        ("spec", "value", "expected"),
        [
            ("%d", 42, "42"),
            ("%d", "42", "42"),
            ("%d", "42.7", "42"),
            ("%d", True, "1"),
            ("%05.1f", 3.14159, "003.1"),
            ("%.2f", "3.14159", "3.14"),
            ("%.1f", Decimal("2.5"), "2.5"),
            ("%d", Decimal("3"), "3"),
            ("%x", 255, "ff"),
            ("%5s", "ab", "   ab"),
            ("%-5s", "ab", "ab   "),
            ("%s", None, ""),
        ],
    )
    def test_conversions(self, spec: str, value: object, expected: str) -> None:
        assert format_printf(spec, value) == expected

    def test_numeric_conversion_rejects_text(self) -> None:
        with pytest.raises(ValueError, match="abc"):
            format_printf("%d", "abc")

    def test_numeric_conversion_rejects_missing_value(self) -> None:
        with pytest.raises(ValueError, match="no value"):
            format_printf("%.2f", None)


# ============================================================================
# BYTES
# ============================================================================


_BYTES_OUTPUT = re.compile(r"(?P<number>-?\d+(?:\.\d)?) (?P<unit>[KMGTPEZY]?B)")


class TestFormatBytes:
    """Human readable byte counts."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, "0 B"),
            (1, "1 B"),
            (1023, "1023 B"),
            (1024, "1.0 KB"),
            (1536, "1.5 KB"),
            ("1572864", "1.5 MB"),
            (1024**3, "1.0 GB"),
            (-2048, "-2.0 KB"),
        ],
    )
    def test_known_values(self, value: object, expected: str) -> None:
        assert format_bytes(value) == expected

    def test_rounding_steps_up_a_unit(self) -> None:
        """A value rounding to 1024.0 is shown in the next unit."""
        assert format_bytes(1024**2 - 1) == "1.0 MB"

    def test_non_numeric_raises(self) -> None:
        with pytest.raises(ValueError):
            format_bytes("lots")

    @given(size=st.integers(min_value=0, max_value=1024**7))
    def test_shape_and_range(self, size: int) -> None:
        """PROPERTY: Shown number stays below 1024 in a known unit."""
        match = _BYTES_OUTPUT.fullmatch(format_bytes(size))
        assert match is not None
        unit = match.group("unit")
        event(f"unit={unit}")
        assert unit in BYTE_UNITS
        assert float(match.group("number")) < 1024
        if size < 1024:
            assert format_bytes(size) == f"{size} B"

    @given(
        a=st.integers(min_value=0, max_value=1024**5),
        b=st.integers(min_value=0, max_value=1024**6),
    )
    def test_monotonic_units(self, a: int, b: int) -> None:
        """PROPERTY: A larger count never shows in a smaller unit."""
        small, large = sorted((a, a + b))
        unit_small = BYTE_UNITS.index(format_bytes(small).split()[1])
        unit_large = BYTE_UNITS.index(format_bytes(large).split()[1])
        assert unit_small <= unit_large


# ============================================================================
# DATE PARTS
# ============================================================================


class TestDateParts:
    """YEAR, DATE and TIME built-ins."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [("YEAR", "2017"), ("DATE", "2017-06-26"), ("TIME", "00:24:15")],
    )
    def test_from_database_string(self, name: str, expected: str) -> None:
        modifier = BUILTIN_MODIFIERS[name]
        assert modifier("2017-06-26 00:24:15", (), None) == expected

    def test_epoch_is_utc(self) -> None:
        assert BUILTIN_MODIFIERS["DATE"](0, (), None) == "1970-01-01"

    def test_unparseable_passes_through(self) -> None:
        assert BUILTIN_MODIFIERS["YEAR"]("sometime", (), None) == "sometime"

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_renders_empty(self, value: object) -> None:
        assert BUILTIN_MODIFIERS["DATE"](value, (), None) == ""


# ============================================================================
# REGISTRY
# ============================================================================


class TestModifierRegistry:
    """Registration, freezing and lookup."""

    def test_builtins_listed_first(self, registry: ModifierRegistry) -> None:
        registry.register(shout)
        assert registry.list_modifiers() == ["BYTES", "YEAR", "DATE", "TIME", "DT", "SHOUT"]
        assert list(registry) == registry.list_modifiers()
        assert len(registry) == 6

    def test_default_name_from_function(self, registry: ModifierRegistry) -> None:
        registry.register(shout)
        assert "SHOUT" in registry
        assert registry.get("SHOUT") is shout

    def test_explicit_name(self, registry: ModifierRegistry) -> None:
        registry.register(shout, name="UC")
        assert "UC" in registry
        assert "SHOUT" not in registry

    def test_builtin_name_not_replaced(
        self, registry: ModifierRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        """A custom modifier cannot shadow a built-in."""
        with caplog.at_level(logging.WARNING, logger="temploc.runtime.modifiers"):
            registry.register(shout, name="BYTES")
        assert registry.get("BYTES") is format_bytes
        assert "built in" in caplog.text

    def test_frozen_rejects_register(self, registry: ModifierRegistry) -> None:
        registry.freeze()
        assert registry.frozen
        with pytest.raises(TypeError, match="frozen"):
            registry.register(shout)

    def test_copy_is_mutable_and_independent(self, registry: ModifierRegistry) -> None:
        registry.freeze()
        clone = registry.copy()
        assert not clone.frozen
        clone.register(shout)
        assert "SHOUT" in clone
        assert "SHOUT" not in registry

    def test_shared_registry(self) -> None:
        """The shared registry is one frozen instance."""
        shared = get_shared_registry()
        assert shared is get_shared_registry()
        assert shared.frozen
        assert "DT" in shared

    def test_repr(self, registry: ModifierRegistry) -> None:
        assert repr(registry) == "ModifierRegistry(builtins=5, custom=0, frozen=False)"


class TestRegistryApply:
    """apply() and the errors it raises."""

    def test_printf(self, registry: ModifierRegistry) -> None:
        spec = ModifierSpec(name="%.1f", printf=True)
        assert registry.apply(spec, "2.26", key="n", lang=None) == "2.3"

    def test_printf_failure(self, registry: ModifierRegistry) -> None:
        spec = ModifierSpec(name="%d", printf=True)
        with pytest.raises(ModifierError) as exc_info:
            registry.apply(spec, "many", key="n", lang=None)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.MODIFIER_FAILED
        assert exc_info.value.diagnostic.key == "n"

    @pytest.mark.parametrize("value", ["inf", "1e999", float("-inf"), Decimal("Infinity")])
    def test_printf_integer_of_infinity(self, registry: ModifierRegistry, value: object) -> None:
        spec = ModifierSpec(name="%d", printf=True)
        with pytest.raises(ModifierError) as exc_info:
            registry.apply(spec, value, key="n", lang=None)
        assert isinstance(exc_info.value.__cause__, OverflowError)

    def test_overflow_in_custom_modifier(self, registry: ModifierRegistry) -> None:
        registry.register(lambda value, args, lang: int(float(value)), name="INT")
        with pytest.raises(ModifierError):
            registry.apply(ModifierSpec(name="INT"), "inf", key="n", lang=None)

    def test_unknown_modifier(self, registry: ModifierRegistry) -> None:
        with pytest.raises(ModifierError) as exc_info:
            registry.apply(ModifierSpec(name="NOPE"), 1, key="n", lang=None)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.MODIFIER_UNKNOWN
        assert "NOPE" in str(exc_info.value)

    def test_args_and_lang_passed(self, registry: ModifierRegistry) -> None:
        registry.register(lambda value, args, lang: (value, args, lang), name="ECHO")
        spec = ModifierSpec(name="ECHO", args=("a", "b"))
        assert registry.apply(spec, 7, key="n", lang="nl") == (7, ("a", "b"), "nl")

    def test_value_error_becomes_modifier_error(self, registry: ModifierRegistry) -> None:
        with pytest.raises(ModifierError) as exc_info:
            registry.apply(ModifierSpec(name="DT", args=("BOGUS",)), 0, key="d", lang=None)
        assert "DT(BOGUS)" in str(exc_info.value)

    def test_other_exceptions_propagate(self, registry: ModifierRegistry) -> None:
        """Bugs inside a modifier are not hidden."""

        def broken(value: object, args: tuple[str, ...], lang: str | None) -> object:
            raise RuntimeError("bug")

        registry.register(broken)
        with pytest.raises(RuntimeError, match="bug"):
            registry.apply(ModifierSpec(name="BROKEN"), 1, key="n", lang=None)
