"""Per-domain extraction pass.

    extractor = Extractor("shop", "TT2-loc", BabelCatalogStore("locale"))
    for filename, text in templates:
        extractor.process(text, filename)
    extractor.show_stats()
    extractor.write()

Records are kept in memory until write(), so an error in a later file
never leaves a half-updated table behind.

Python 3.13+.
"""

import logging
from collections.abc import Callable

from temploc.diagnostics import (
    CatalogWriteError,
    Diagnostic,
    ErrorTemplate,
    TemplocError,
)
from temploc.extraction.catalog import CatalogAccumulator, CatalogStore, MessageRecord
from temploc.extraction.scanner import ScanPattern, ScanResult, scan_template

__all__ = ["Extractor"]

logger = logging.getLogger(__name__)


class Extractor:
    """Collects the msgids of one textdomain from template texts.

    Attributes:
        domain: Textdomain name
        pattern: Dialect and function scanned for
    """

    __slots__ = (
        "_accumulator",
        "_call_sites",
        "_expected_in",
        "_files",
        "_store",
        "_warnings",
        "domain",
        "pattern",
    )

    def __init__(
        self,
        domain: str,
        pattern: ScanPattern | str,
        store: CatalogStore,
        *,
        expected_in: Callable[[str], bool] | None = None,
    ) -> None:
        """Initialize extractor.

        Args:
            domain: Textdomain name
            pattern: ScanPattern or specification like "TT2-loc"
            store: Catalog store receiving the records on write()
            expected_in: Predicate telling whether the function may be used
                in a file; call sites elsewhere are reported as warnings

        Raises:
            PatternConfigError: If the pattern is not understood
        """
        self.domain = domain
        self.pattern = pattern if isinstance(pattern, ScanPattern) else ScanPattern.parse(pattern)
        self._store = store
        self._expected_in = expected_in
        self._accumulator = CatalogAccumulator()
        self._warnings: list[Diagnostic] = []
        self._files = 0
        self._call_sites = 0

    def process(self, text: str, filename: str) -> ScanResult:
        """Scan one template text.

        Args:
            text: Template text, already decoded
            filename: File identifier for locations and diagnostics

        Returns:
            ScanResult of the file

        Raises:
            ScanSyntaxError: If a block filter lacks END; nothing of the
                file is recorded
        """
        logger.info("Processing %s for domain '%s'", filename, self.domain)
        result = scan_template(text, self.pattern, filename)

        self._warnings.extend(result.warnings)
        if (
            result.call_sites
            and self._expected_in is not None
            and not self._expected_in(filename)
        ):
            diagnostic = ErrorTemplate.function_not_expected(
                self.pattern.function, self.domain, filename
            )
            logger.warning("%s", diagnostic.message)
            self._warnings.append(diagnostic)

        self._accumulator.add_sites(self.domain, result.call_sites)
        self._files += 1
        self._call_sites += len(result.call_sites)
        return result

    @property
    def records(self) -> tuple[MessageRecord, ...]:
        return self._accumulator.records(self.domain)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(self._warnings)

    def show_stats(self) -> None:
        logger.info(
            "Domain '%s': %d files, %d call sites, %d msgids",
            self.domain,
            self._files,
            self._call_sites,
            len(self._accumulator),
        )
        self._store.show_stats()

    def write(self) -> int:
        """Hand the records to the store and let it write the table of the domain.

        Stores offering write_domain(domain) write only this domain; others
        write all their tables.

        Returns:
            Number of records written

        Raises:
            CatalogWriteError: If the store fails
        """
        try:
            count = self._accumulator.flush(self._store, self.domain)
            write_domain = getattr(self._store, "write_domain", None)
            if callable(write_domain):
                write_domain(self.domain)
            else:
                self._store.write()
        except (OSError, ValueError, TemplocError) as e:
            raise CatalogWriteError(
                ErrorTemplate.catalog_write_failed(self.domain, str(e)), domains=(self.domain,)
            ) from e
        logger.info("Wrote %d msgids for domain '%s'", count, self.domain)
        return count

    def __repr__(self) -> str:
        return f"Extractor(domain={self.domain!r}, pattern='{self.pattern}')"
