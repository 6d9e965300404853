"""Listing data extraction and reconciliation engine.

This module reduces a heterogeneous description of a property (a captured
listing page, a pasted JSON object, or a listing URL) to one canonical,
typed record. Missing or untrustworthy fields are omitted; only empty
input, an unparsable pasted value, and an unsupported site are reported.

Main exports:
- ListingEngine: Entry points for the three source shapes
- PageSnapshot: Captured page (URL, HTML and optional visible text)
- ExtractionOutcome: Record or classified error from one call
- SnapshotWatcher: Re-runs extraction on page-change notifications
- SourceKind, ErrorKind: Enums for supported sites and reported errors

Example usage:
    from listing_reconciler.extraction import ListingEngine, PageSnapshot

    engine = ListingEngine()
    outcome = engine.extract_page(PageSnapshot(url=url, html=html))
    if outcome.ok:
        record = outcome.record
"""

from .base import (
    ErrorKind,
    ExtractionError,
    ExtractionOutcome,
    PageSnapshot,
    SourceKind,
)
from .engine import ListingEngine
from .watcher import SnapshotWatcher

__all__ = [
    # Main interface
    "ListingEngine",
    "SnapshotWatcher",
    # Data models
    "PageSnapshot",
    "ExtractionOutcome",
    # Enums
    "SourceKind",
    "ErrorKind",
    # Exceptions
    "ExtractionError",
]
