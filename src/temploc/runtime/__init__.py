"""Render-time translation: formatter, resolver, modifiers, textdomains.

Python 3.13+.
"""

from .call import RuntimeCall
from .formatter import CallArguments, MessageFormatter, bind_arguments
from .modifiers import (
    Modifier,
    ModifierRegistry,
    create_default_registry,
    format_bytes,
    format_printf,
    get_shared_registry,
)
from .resolver import ValueResolver
from .scope import EMPTY_SCOPE, AmbientScope, MappingScope, lookup_path
from .textdomain import (
    FilterCall,
    FilterFactory,
    Textdomain,
    TextdomainLike,
    TranslationFunction,
)
from .translator import GettextTranslator, NullTranslator, Translator, context_key

__all__ = [
    "EMPTY_SCOPE",
    "AmbientScope",
    "CallArguments",
    "FilterCall",
    "FilterFactory",
    "GettextTranslator",
    "MappingScope",
    "MessageFormatter",
    "Modifier",
    "ModifierRegistry",
    "NullTranslator",
    "RuntimeCall",
    "Textdomain",
    "TextdomainLike",
    "TranslationFunction",
    "Translator",
    "ValueResolver",
    "bind_arguments",
    "context_key",
    "create_default_registry",
    "format_bytes",
    "format_printf",
    "get_shared_registry",
    "lookup_path",
]
