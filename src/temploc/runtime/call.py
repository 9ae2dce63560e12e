"""Per-invocation state of a translation call.

Thread Safety:
    A RuntimeCall is created for every render invocation and never shared,
    so concurrent renders do not see each other's language or parameters.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TypeAlias
from types import MappingProxyType

from temploc.runtime.scope import EMPTY_SCOPE, AmbientScope

__all__ = ["RuntimeCall"]

Context: TypeAlias = str | Mapping[str, object] | None


@dataclass(frozen=True, slots=True)
class RuntimeCall:
    """One translation request, validated and ready to format.

    Attributes:
        msgid: Singular msgid (plural part already split off)
        plural: Plural msgid, None for messages without plural form
        count: Count selecting singular or plural, None without plural form
        params: Named values, read-only; includes _count when a count was given
        scope: Template variables used when a name is not in params
        lang: Target language, None for the translator default
        html: Escape substituted values for HTML
        label: Name of the render target for diagnostics (defaults to scope.name)
        context: Context forwarded opaquely to the translator
    """

    msgid: str
    plural: str | None = None
    count: object = None
    params: Mapping[str, object] = field(default_factory=dict)
    scope: AmbientScope = EMPTY_SCOPE
    lang: str | None = None
    html: bool = False
    label: str | None = None
    context: Context = None

    def __post_init__(self) -> None:
        # Detach from the caller's dict: later mutations must not leak in.
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @property
    def target(self) -> str | None:
        """Render target named in diagnostics."""
        return self.label if self.label is not None else self.scope.name
