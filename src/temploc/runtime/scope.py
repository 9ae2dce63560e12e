"""Ambient variable scope: the render-time variables of a template.

Placeholders not passed explicitly to a translation call are looked up
here, so a template that already holds `user` can write "Hi {user.name}"
without repeating it in every call.

Python 3.13+. Zero external dependencies.
"""

import inspect
from collections.abc import Mapping, Sequence
from typing import Protocol

__all__ = ["EMPTY_SCOPE", "AmbientScope", "MappingScope", "lookup_path"]


class AmbientScope(Protocol):
    """Read-only lookup in the variables of the template being rendered."""

    @property
    def name(self) -> str | None:
        """Label of the render target, used in diagnostics."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def get(self, path: Sequence[str]) -> object | None:
        """Value at a dotted path, None when absent."""
        ...  # pragma: no cover  # Protocol stub - not executable


def lookup_path(root: object, path: Sequence[str]) -> object | None:
    """Walk a dotted path through mappings, attributes and zero-arg methods.

    Args:
        root: Object the first segment is looked up in
        path: Path segments

    Returns:
        Value found, or None when any segment is absent

    Example:
        >>> lookup_path({"user": {"name": "Ann"}}, ("user", "name"))
        'Ann'
        >>> lookup_path({"user": {}}, ("user", "name")) is None
        True
    """
    value: object | None = root
    for segment in path:
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(segment)
        else:
            value = getattr(value, segment, None)
        if inspect.ismethod(value):
            value = value()
    return value


class MappingScope:
    """AmbientScope over a mapping of template variables.

    Example:
        >>> scope = MappingScope({"user": {"name": "Ann"}}, name="index.tt")
        >>> scope.get(("user", "name"))
        'Ann'
    """

    __slots__ = ("_name", "_variables")

    def __init__(
        self, variables: Mapping[str, object] | None = None, *, name: str | None = None
    ) -> None:
        self._variables: Mapping[str, object] = variables if variables is not None else {}
        self._name = name

    @property
    def name(self) -> str | None:
        return self._name

    def get(self, path: Sequence[str]) -> object | None:
        return lookup_path(self._variables, path)

    def __repr__(self) -> str:
        return f"MappingScope(name={self._name!r}, variables={len(self._variables)})"


EMPTY_SCOPE = MappingScope()
