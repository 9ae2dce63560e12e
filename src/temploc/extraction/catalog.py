"""Message records and the catalog store they are written to.

CatalogAccumulator merges call sites into one MessageRecord per
(domain, msgid, has-plural): the same msgid used on ten pages becomes a
single record with ten locations. Nothing reaches the CatalogStore before
flush(), so a file which fails to scan leaves the stored tables untouched.

BabelCatalogStore is the default store. It builds a
babel.messages.catalog.Catalog per domain and writes it as a POT file,
the template translators copy into <lang>.po.

Python 3.13+. Depends on Babel (messages.catalog, messages.pofile).
"""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Protocol, TypeAlias

from babel.messages.catalog import Catalog
from babel.messages.pofile import write_po

from temploc.constants import DEFAULT_CHARSET
from temploc.diagnostics import ErrorTemplate, SourceLocation
from temploc.extraction.scanner import CallSite

__all__ = [
    "BabelCatalogStore",
    "CatalogAccumulator",
    "CatalogStore",
    "MessageRecord",
]

logger = logging.getLogger(__name__)

RecordKey: TypeAlias = tuple[str, str, bool]


@dataclass(frozen=True, slots=True)
class MessageRecord:
    """One extracted message with every place it is used.

    Attributes:
        domain: Textdomain name
        msgid: Singular msgid
        plural: Plural msgid or None
        locations: (file, line) pairs in the order they were found; never empty
    """

    domain: str
    msgid: str
    plural: str | None
    locations: tuple[SourceLocation, ...]

    def __post_init__(self) -> None:
        if not self.locations:
            msg = f"MessageRecord '{self.msgid}' needs at least one location"
            raise ValueError(msg)

    @property
    def key(self) -> RecordKey:
        return (self.domain, self.msgid, self.plural is not None)


class CatalogStore(Protocol):
    """Receives extracted messages and writes translation tables."""

    def store(
        self, domain: str, file: str, line: int, msgid: str, plural: str | None
    ) -> None:
        """Record one use of a msgid."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def write(self) -> None:
        """Write the tables of every domain stored so far."""
        ...  # pragma: no cover  # Protocol stub - not executable

    def show_stats(self) -> None:
        """Report statistics about the stored messages."""
        ...  # pragma: no cover  # Protocol stub - not executable


class CatalogAccumulator:
    """Collects call sites into MessageRecords, keyed per domain.

    Example:
        >>> acc = CatalogAccumulator()
        >>> acc.add("shop", "Hi {name}", None, "a.tt", 3)
        >>> acc.add("shop", "Hi {name}", None, "b.tt", 7)
        >>> [str(loc) for loc in acc.records("shop")[0].locations]
        ['a.tt:3', 'b.tt:7']
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: dict[RecordKey, tuple[str | None, list[SourceLocation]]] = {}

    def add(self, domain: str, msgid: str, plural: str | None, file: str, line: int) -> None:
        """Record one use of a msgid.

        A second plural text for the same msgid is ignored with a warning;
        the first one found stays.
        """
        location = SourceLocation(file, line)
        key = (domain, msgid, plural is not None)
        entry = self._entries.get(key)
        if entry is None:
            self._entries[key] = (plural, [location])
            return

        kept, locations = entry
        if plural is not None and kept is not None and plural != kept:
            logger.warning("%s", ErrorTemplate.plural_mismatch(msgid, kept, plural, location))
        if location not in locations:
            locations.append(location)

    def add_sites(self, domain: str, sites: Iterable[CallSite]) -> None:
        for site in sites:
            self.add(domain, site.raw_msgid, site.raw_plural, site.file, site.line)

    def records(self, domain: str | None = None) -> tuple[MessageRecord, ...]:
        """Records in order of first appearance, optionally for one domain."""
        return tuple(
            MessageRecord(key[0], key[1], plural, tuple(locations))
            for key, (plural, locations) in self._entries.items()
            if domain is None or key[0] == domain
        )

    def domains(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys(key[0] for key in self._entries))

    def flush(self, store: CatalogStore, domain: str | None = None) -> int:
        """Hand the records to a store.

        Args:
            store: Catalog store receiving one store() call per location
            domain: Only flush this domain (default: all)

        Returns:
            Number of records flushed
        """
        records = self.records(domain)
        for record in records:
            for location in record.locations:
                store.store(
                    record.domain, location.file, location.line, record.msgid, record.plural
                )
        return len(records)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[MessageRecord]:
        return iter(self.records())


class BabelCatalogStore:
    """CatalogStore writing one POT file per domain through Babel.

    Tables go to <lexicon>/<domain>.pot, or to a binary stream when one is
    given (all domains written to it in sequence).
    """

    __slots__ = ("_catalogs", "_charset", "_found", "_lexicon", "_output", "_project")

    def __init__(
        self,
        lexicon: str | Path | None = None,
        *,
        output: BinaryIO | None = None,
        charset: str = DEFAULT_CHARSET,
        project: str | None = None,
    ) -> None:
        """Initialize store.

        Args:
            lexicon: Directory receiving the POT files
            output: Binary stream receiving the tables instead of files
            charset: Charset declared in the table headers
            project: Project name in the table headers (default: the domain)

        Raises:
            ValueError: If neither lexicon nor output is given
        """
        if lexicon is None and output is None:
            msg = "BabelCatalogStore needs a lexicon directory or an output stream"
            raise ValueError(msg)
        self._lexicon = Path(lexicon) if lexicon is not None else None
        self._output = output
        self._charset = charset
        self._project = project
        self._catalogs: dict[str, Catalog] = {}
        self._found: dict[str, int] = {}

    def catalog(self, domain: str) -> Catalog:
        """Catalog of a domain, created on first use."""
        catalog = self._catalogs.get(domain)
        if catalog is None:
            catalog = Catalog(
                domain=domain,
                project=self._project or domain,
                charset=self._charset,
                fuzzy=False,
            )
            self._catalogs[domain] = catalog
        return catalog

    def store(
        self, domain: str, file: str, line: int, msgid: str, plural: str | None
    ) -> None:
        message_id: str | tuple[str, str] = msgid if plural is None else (msgid, plural)
        self.catalog(domain).add(message_id, locations=[(file, line)])
        self._found[domain] = self._found.get(domain, 0) + 1

    def write(self) -> None:
        """Write every stored domain.

        Raises:
            OSError: If a table cannot be written
        """
        for domain in self._catalogs:
            self.write_domain(domain)

    def write_domain(self, domain: str) -> None:
        """Write the table of one domain.

        Raises:
            OSError: If the table cannot be written
        """
        catalog = self.catalog(domain)
        if self._output is not None:
            write_po(self._output, catalog, sort_output=True)
            return

        assert self._lexicon is not None
        self._lexicon.mkdir(parents=True, exist_ok=True)
        path = self._lexicon / f"{domain}.pot"
        with path.open("wb") as stream:
            write_po(stream, catalog, sort_output=True)
        logger.info("Wrote %d msgids for domain '%s' to %s", len(catalog), domain, path)

    def show_stats(self) -> None:
        for domain, catalog in self._catalogs.items():
            logger.info(
                "Domain '%s': %d msgids from %d call sites",
                domain,
                len(catalog),
                self._found.get(domain, 0),
            )

    def __repr__(self) -> str:
        return f"BabelCatalogStore(lexicon={self._lexicon!s}, domains={list(self._catalogs)})"
