"""Build-time msgid extraction from template text.

Python 3.13+.
"""

from .catalog import BabelCatalogStore, CatalogAccumulator, CatalogStore, MessageRecord
from .extractor import Extractor
from .scanner import CallSite, ScanPattern, ScanResult, scan_template

__all__ = [
    "BabelCatalogStore",
    "CallSite",
    "CatalogAccumulator",
    "CatalogStore",
    "Extractor",
    "MessageRecord",
    "ScanPattern",
    "ScanResult",
    "scan_template",
]
