"""Extraction engine facade.

One entry point per raw source shape. Each call is a pure function of its
input: the engine keeps no state between calls, so it can be re-run on
every page change. Classified failures (empty input, invalid pasted
shape, unknown site) come back as an ExtractionOutcome instead of an
exception.
"""

import logging
from typing import Any, Optional

from listing_reconciler.config import Settings, settings as default_settings
from .assembler import assemble
from .base import ErrorKind, ExtractionError, ExtractionOutcome, PageSnapshot
from .document import PageDocument
from .identifier import parse_identifier
from .page import PageExtractor
from .reconciler import parse_pasted, reconcile
from .sites import SiteProfile, SiteRegistry, default_registry

logger = logging.getLogger(__name__)


class ListingEngine:
    """Reduces page snapshots, pasted objects and listing URLs to records.

    Usage:
        engine = ListingEngine()
        outcome = engine.import_url("https://www.redfin.com/NJ/Chester/309-North-Rd-07930/home/37150152")
        if outcome.ok:
            print(outcome.record.to_fields())
        else:
            print(outcome.message)
    """

    def __init__(
        self,
        sites: Optional[SiteRegistry] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize the engine.

        Args:
            sites: Site registry (default: packaged sites.yaml)
            settings: Thresholds and limits (default: environment settings)
        """
        self.sites = sites or default_registry()
        self.settings = settings or default_settings

    def _site_for(self, url: Optional[str]) -> SiteProfile:
        profile = self.sites.detect(url)
        if profile is None:
            raise ExtractionError(ErrorKind.UNRECOGNIZED_SOURCE, f"no site matches {url!r}")
        return profile

    def _run(self, label: str, func, *args) -> ExtractionOutcome:
        try:
            record = func(*args)
        except ExtractionError as e:
            logger.info(f"{label} rejected ({e.kind.value}): {e}")
            return ExtractionOutcome.failed(e)

        logger.info(f"{label} produced {record.field_count} fields")
        return ExtractionOutcome(record=record)

    # ------------------------------------------------------------------
    # Page snapshots
    # ------------------------------------------------------------------

    def extract_page(self, snapshot: PageSnapshot) -> ExtractionOutcome:
        """Extract a record from a captured listing page."""
        return self._run("Page extraction", self._extract_page, snapshot)

    def _extract_page(self, snapshot: PageSnapshot):
        if snapshot is None or snapshot.is_empty:
            raise ExtractionError(ErrorKind.EMPTY_INPUT, "page snapshot is empty")
        profile = self._site_for(snapshot.url)

        document = PageDocument(snapshot)
        fields = PageExtractor(profile, self.settings).extract(document)
        return assemble(
            structural=fields["structural"],
            identifier=parse_identifier(snapshot.url, profile.kind),
            scanned=fields["scanned"],
            provenance={"source": profile.kind.value, "source_url": snapshot.url},
        )

    # ------------------------------------------------------------------
    # Pasted structured values
    # ------------------------------------------------------------------

    def import_pasted(self, value: Any) -> ExtractionOutcome:
        """Import a pasted JSON object (string or already-decoded mapping)."""
        return self._run("Pasted import", self._import_pasted, value)

    def _import_pasted(self, value: Any):
        blob = parse_pasted(value)
        reconciled = reconcile(blob)

        # A listing URL inside the object can still fill address gaps
        identifier = {}
        profile = self.sites.detect(reconciled.get("source_url"))
        if profile is not None:
            identifier = parse_identifier(reconciled["source_url"], profile.kind)

        return assemble(reconciled=reconciled, identifier=identifier)

    # ------------------------------------------------------------------
    # Listing URLs
    # ------------------------------------------------------------------

    def import_url(self, url: Optional[str]) -> ExtractionOutcome:
        """Recover what the listing URL's slug encodes (address fields)."""
        return self._run("URL import", self._import_url, url)

    def _import_url(self, url: Optional[str]):
        if url is None or not str(url).strip():
            raise ExtractionError(ErrorKind.EMPTY_INPUT, "URL is empty")
        url = str(url).strip()
        profile = self._site_for(url)

        return assemble(
            identifier=parse_identifier(url, profile.kind),
            provenance={"source": profile.kind.value, "source_url": url},
        )

    def is_listing_page(self, url: Optional[str]) -> bool:
        """Whether a URL is a listing detail page on a supported site."""
        return self.sites.is_listing_page(url)
