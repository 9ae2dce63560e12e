"""Templater: textdomain registry and glue for a template engine.

The Templater owns the pieces which are set up once per process: the
modifier registry, the message formatter and the textdomains. For every
render it hands the template engine the translation functions and
filters, bound to the variables of that render:

    templater = Templater(TemplaterConfig(include_path=("templates",)))
    templater.add_textdomain(name="shop", function="loc", lexicon="locale")

    variables = {"user": user}
    scope = MappingScope(variables, name="cart.tt")
    variables.update(templater.template_vars(scope))   # loc(...)
    filters = templater.filters(scope)                  # | loc, cols, br

Extraction runs every registered domain over a set of template texts:

    templater.extract(read_templates())

Configuration is read once; the language of a call is either passed as
_lang or taken from the domain, never from mutable shared state.

Python 3.13+.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import cast

from temploc.diagnostics import (
    CatalogWriteError,
    ErrorTemplate,
    TextdomainConfigError,
)
from temploc.enums import TemplateSyntax
from temploc.extraction import BabelCatalogStore, CatalogStore, Extractor, ScanPattern
from temploc.filters import br, cols
from temploc.runtime import (
    AmbientScope,
    MessageFormatter,
    Modifier,
    ModifierRegistry,
    Textdomain,
    TextdomainLike,
    Translator,
    create_default_registry,
)
from temploc.runtime.scope import EMPTY_SCOPE

__all__ = ["Templater", "TemplaterConfig"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TemplaterConfig:
    """Immutable Templater configuration.

    Attributes:
        template_syntax: HTML escapes inserted values; UNKNOWN does not
        modifiers: Custom modifiers by name, added to the built-ins
        translate_to: Default language of domains which set none
        include_path: Template directories; a string is split on delimiter
        delimiter: Separator of include_path and only_in_directory strings
        dialect: Template-Toolkit dialect scanned by extract() (1 or 2)
        textdomain_class: Factory building the textdomains

    Example:
        >>> config = TemplaterConfig(include_path="templates:shared")
        >>> config.include_path
        ('templates', 'shared')
    """

    template_syntax: TemplateSyntax | str = TemplateSyntax.HTML
    modifiers: Mapping[str, Modifier] = field(default_factory=dict)
    translate_to: str | None = None
    include_path: tuple[str, ...] | str = ()
    delimiter: str = ":"
    dialect: int = 2
    textdomain_class: Callable[..., TextdomainLike] = Textdomain

    def __post_init__(self) -> None:
        """Normalize and validate values.

        Raises:
            ValueError: If template_syntax or dialect is not supported
        """
        try:
            syntax = TemplateSyntax(self.template_syntax)
        except ValueError:
            raise ValueError(
                str(ErrorTemplate.invalid_option("template_syntax", self.template_syntax))
            ) from None
        object.__setattr__(self, "template_syntax", syntax)

        if self.dialect not in (1, 2):
            raise ValueError(str(ErrorTemplate.invalid_option("dialect", self.dialect)))

        if isinstance(self.include_path, str):
            paths = tuple(p for p in self.include_path.split(self.delimiter) if p)
            object.__setattr__(self, "include_path", paths)
        else:
            object.__setattr__(self, "include_path", tuple(self.include_path))


class Templater:
    """Registry of textdomains with their translation functions and filters.

    Thread Safety:
        Set up (add_textdomain) before serving. Afterwards the modifier
        registry is frozen and the domain table only read, so concurrent
        renders need no locking.
    """

    __slots__ = ("_config", "_domains", "_formatter", "_modifiers")

    def __init__(
        self, config: TemplaterConfig | None = None, *, translator: Translator | None = None
    ) -> None:
        """Initialize templater.

        Args:
            config: Configuration (default: TemplaterConfig())
            translator: Translator for domains without their own
        """
        self._config = config if config is not None else TemplaterConfig()

        registry = create_default_registry()
        for name, func in self._config.modifiers.items():
            registry.register(func, name=name)
        registry.freeze()
        self._modifiers: ModifierRegistry = registry

        self._formatter = MessageFormatter(
            modifiers=registry,
            translator=translator,
            html=self._config.template_syntax == TemplateSyntax.HTML,
        )
        self._domains: dict[str, TextdomainLike] = {}
        logger.debug("Templater created: %r", self._config)

    @property
    def config(self) -> TemplaterConfig:
        return self._config

    @property
    def formatter(self) -> MessageFormatter:
        return self._formatter

    @property
    def translate_to(self) -> str | None:
        return self._config.translate_to

    # ------------------------------------------------------------------
    # Textdomains
    # ------------------------------------------------------------------

    def add_textdomain(self, name: str, **options: object) -> TextdomainLike:
        """Register a textdomain.

        Args:
            name: Domain name, unique within this templater
            **options: Passed to the textdomain class (function, lexicon,
                only_in_directory, lang, translator)

        Returns:
            The new textdomain

        Raises:
            TextdomainConfigError: If the name or function is already used,
                or only_in_directory names a directory outside include_path
        """
        if name in self._domains:
            raise TextdomainConfigError(ErrorTemplate.textdomain_exists(name))

        only = options.get("only_in_directory")
        if only is not None:
            if isinstance(only, str):
                dirs = tuple(only.split(self._config.delimiter))
            else:
                dirs = tuple(cast(Iterable[str], only))
            for directory in dirs:
                if directory not in self._config.include_path:
                    raise TextdomainConfigError(
                        ErrorTemplate.directory_not_in_path(
                            directory, "add_textdomain(only_in_directory)"
                        )
                    )
            options["only_in_directory"] = dirs

        if options.get("lang") is None:
            options["lang"] = self._config.translate_to

        domain = self._config.textdomain_class(name, **options)
        for other in self._domains.values():
            if other.function == domain.function:
                raise TextdomainConfigError(
                    ErrorTemplate.function_in_use(domain.function, other.name)
                )

        self._domains[name] = domain
        logger.info("Added textdomain '%s' with function '%s'", name, domain.function)
        return domain

    def domains(self) -> tuple[TextdomainLike, ...]:
        """Registered textdomains, in registration order."""
        return tuple(self._domains.values())

    def domain(self, name: str) -> TextdomainLike | None:
        return self._domains.get(name)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def template_vars(self, scope: AmbientScope = EMPTY_SCOPE) -> dict[str, object]:
        """Translation functions of every domain, by function name."""
        return {
            domain.function: domain.translation_function(self._formatter, scope)
            for domain in self._domains.values()
        }

    def filters(self, scope: AmbientScope = EMPTY_SCOPE) -> dict[str, Callable[..., object]]:
        """Filter factories: one per domain plus cols and br."""
        factories: dict[str, Callable[..., object]] = {"cols": cols, "br": br}
        for domain in self._domains.values():
            factories[domain.function] = domain.translation_filter(self._formatter, scope)
        return factories

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    def extract(
        self,
        sources: Iterable[tuple[str, str]],
        stores: Mapping[str, CatalogStore] | None = None,
        *,
        write_tables: bool = True,
    ) -> dict[str, int]:
        """Extract the msgids of every domain from template texts.

        Args:
            sources: (filename, text) pairs
            stores: Catalog store per domain name; domains not listed get a
                BabelCatalogStore writing to their lexicon
            write_tables: When False, scan and report only

        Returns:
            Number of msgids found per domain

        Raises:
            TextdomainConfigError: If a domain has neither store nor lexicon
            ScanSyntaxError: If a template has a block filter without END
            CatalogWriteError: If some domains could not be written; the
                other domains are written regardless
        """
        stores = stores or {}
        extractors: list[Extractor] = []
        for domain in self._domains.values():
            store = stores.get(domain.name)
            if store is None:
                if domain.lexicon is None:
                    raise TextdomainConfigError(ErrorTemplate.invalid_option("lexicon", None))
                store = BabelCatalogStore(domain.lexicon)
            logger.debug("Extracting msgids for '%s' of domain '%s'", domain.function, domain.name)
            extractors.append(
                Extractor(
                    domain.name,
                    ScanPattern(self._config.dialect, domain.function),
                    store,
                    expected_in=domain.expected_in,
                )
            )

        for filename, text in sources:
            for extractor in extractors:
                extractor.process(text, filename)

        found: dict[str, int] = {}
        failures: list[CatalogWriteError] = []
        for extractor in extractors:
            extractor.show_stats()
            found[extractor.domain] = len(extractor.records)
            if not write_tables:
                continue
            try:
                extractor.write()
            except CatalogWriteError as e:
                logger.error("%s", e)
                failures.append(e)

        if failures:
            domains = tuple(d for failure in failures for d in failure.domains)
            reasons = "; ".join(str(failure) for failure in failures)
            raise CatalogWriteError(
                ErrorTemplate.catalog_write_failed(", ".join(domains), reasons), domains=domains
            )
        return found

    def __repr__(self) -> str:
        return f"Templater(domains={list(self._domains)}, syntax={self._config.template_syntax})"
