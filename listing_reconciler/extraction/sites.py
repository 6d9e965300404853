"""Site registry loaded from sites.yaml.

Everything that differs between listing sites (domains, listing-page
markers, selector lists) lives in the YAML file, so the page extractor
and URL parser stay site-agnostic.
"""

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from urllib.parse import urlparse

import yaml

from listing_reconciler.config import settings
from .base import SourceKind

logger = logging.getLogger(__name__)

DEFAULT_SITES_FILE = Path(__file__).with_name("sites.yaml")


@dataclass(frozen=True)
class SiteProfile:
    """Data describing one listing site."""
    kind: SourceKind
    domains: Tuple[str, ...]
    listing_markers: Tuple[str, ...] = ()
    selectors: Dict[str, List[str]] = field(default_factory=dict)

    def selectors_for(self, name: str) -> List[str]:
        return list(self.selectors.get(name, []))

    def matches_host(self, host: str) -> bool:
        host = host.lower().rstrip(".")
        return any(host == d or host.endswith("." + d) for d in self.domains)


class SiteRegistry:
    """Lookup of site profiles by kind or by URL."""

    def __init__(self, profiles: List[SiteProfile]):
        self._profiles = {profile.kind: profile for profile in profiles}

    @classmethod
    def from_file(cls, path: Path) -> "SiteRegistry":
        """Load profiles from a YAML file."""
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

        profiles = []
        for key, entry in raw.items():
            try:
                kind = SourceKind(key)
            except ValueError:
                logger.warning(f"Ignoring unknown site {key!r} in {path}")
                continue
            entry = entry or {}
            profiles.append(
                SiteProfile(
                    kind=kind,
                    domains=tuple(d.lower() for d in entry.get("domains", [])),
                    listing_markers=tuple(entry.get("listing_markers", [])),
                    selectors={
                        name: list(css or [])
                        for name, css in (entry.get("selectors") or {}).items()
                    },
                )
            )
        logger.debug(f"Loaded {len(profiles)} site profiles from {path}")
        return cls(profiles)

    @property
    def kinds(self) -> List[SourceKind]:
        return list(self._profiles)

    def get(self, kind: SourceKind) -> Optional[SiteProfile]:
        return self._profiles.get(kind)

    def detect(self, url: Optional[str]) -> Optional[SiteProfile]:
        """Profile whose domain allow-list covers the URL's host, if any."""
        if not url or not isinstance(url, str):
            return None
        try:
            parsed = urlparse(url.strip())
        except ValueError:
            return None
        if parsed.scheme not in ("http", "https") or not parsed.hostname:
            return None

        for profile in self._profiles.values():
            if profile.matches_host(parsed.hostname):
                return profile
        return None

    def is_listing_page(self, url: Optional[str]) -> bool:
        """Whether the URL is a listing detail page on a known site."""
        profile = self.detect(url)
        if profile is None:
            return False
        path = urlparse(url.strip()).path
        return any(marker in path for marker in profile.listing_markers)


@lru_cache(maxsize=None)
def _load(path: Path) -> SiteRegistry:
    return SiteRegistry.from_file(path)


def default_registry() -> SiteRegistry:
    """Registry from LISTING_SITES_FILE, or the packaged sites.yaml."""
    return _load(settings.sites_file or DEFAULT_SITES_FILE)
