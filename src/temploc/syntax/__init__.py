"""Message grammar shared by extraction and rendering.

Provides the plural split of msgids and the placeholder template parser.

Python 3.13+. Zero external dependencies.
"""

from .messages import has_plural, split_plural
from .placeholders import (
    Literal,
    ModifierSpec,
    Placeholder,
    PlaceholderTemplate,
    Segment,
    parse_template,
    placeholder_names,
)

__all__ = [
    "Literal",
    "ModifierSpec",
    "Placeholder",
    "PlaceholderTemplate",
    "Segment",
    "has_plural",
    "parse_template",
    "placeholder_names",
    "split_plural",
]
