"""Re-extraction driven by page-change notifications.

The page capture side reports every navigation or content mutation by
calling notify(); the watcher decides whether to run the (stateless)
engine and keeps the latest outcome. The last notification wins.
"""

import logging
from typing import Callable, Optional

from .base import ExtractionOutcome, PageSnapshot
from .engine import ListingEngine

logger = logging.getLogger(__name__)


class SnapshotWatcher:
    """Runs the engine on each new listing-page snapshot."""

    def __init__(
        self,
        engine: Optional[ListingEngine] = None,
        on_result: Optional[Callable[[ExtractionOutcome], None]] = None,
    ):
        self.engine = engine or ListingEngine()
        self.on_result = on_result
        self.latest: Optional[ExtractionOutcome] = None
        self._last_snapshot: Optional[PageSnapshot] = None

    def notify(self, snapshot: PageSnapshot) -> Optional[ExtractionOutcome]:
        """Handle a page-change notification.

        Returns:
            The new outcome, or None when the snapshot was skipped (not a
            listing page, or identical to the previous snapshot)
        """
        if not self.engine.is_listing_page(snapshot.url):
            logger.debug(f"Ignoring non-listing page {snapshot.url}")
            return None
        if snapshot == self._last_snapshot:
            logger.debug(f"Snapshot of {snapshot.url} unchanged, skipping")
            return None

        self._last_snapshot = snapshot
        outcome = self.engine.extract_page(snapshot)
        self.latest = outcome
        if self.on_result is not None:
            self.on_result(outcome)
        return outcome

    def reset(self) -> None:
        """Forget the previous snapshot and outcome."""
        self.latest = None
        self._last_snapshot = None
