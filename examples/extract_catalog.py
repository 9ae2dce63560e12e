"""Extract msgids from templates into POT files.

Usage:
    python examples/extract_catalog.py TEMPLATE_DIR LEXICON_DIR [FUNCTION]

Every *.tt and *.html file below TEMPLATE_DIR is scanned for calls of the
translation function (default "loc"), and LEXICON_DIR/<domain>.pot is
written through Babel. The domain is named after the template directory.
"""

import logging
import sys
from pathlib import Path

from temploc import CatalogWriteError, ScanSyntaxError, Templater, TemplaterConfig

TEMPLATE_SUFFIXES = frozenset({".tt", ".html"})


def read_templates(root: Path) -> list[tuple[str, str]]:
    return [
        (path.relative_to(root).as_posix(), path.read_text(encoding="utf-8"))
        for path in sorted(root.rglob("*"))
        if path.suffix in TEMPLATE_SUFFIXES and path.is_file()
    ]


def main(argv: list[str]) -> int:
    if len(argv) not in (2, 3):
        print(__doc__)
        return 2

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    template_dir, lexicon = Path(argv[0]), Path(argv[1])
    function = argv[2] if len(argv) == 3 else "loc"
    lexicon.mkdir(parents=True, exist_ok=True)

    templater = Templater(TemplaterConfig(include_path=(template_dir.name,)))
    templater.add_textdomain(template_dir.name, function=function, lexicon=str(lexicon))

    try:
        found = templater.extract(read_templates(template_dir))
    except ScanSyntaxError as e:
        print(f"{e.filename}:{e.line}: {e}", file=sys.stderr)
        return 1
    except CatalogWriteError as e:
        print(f"failed: {', '.join(e.domains)}", file=sys.stderr)
        return 1

    for domain, count in found.items():
        print(f"{domain}: {count} msgids -> {lexicon / domain}.pot")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
