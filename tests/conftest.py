"""Shared fixtures for the test suite."""

import pytest

from listing_reconciler.config import Settings
from listing_reconciler.extraction import ListingEngine, PageSnapshot, SourceKind
from listing_reconciler.extraction.document import PageDocument
from listing_reconciler.extraction.sites import default_registry

REDFIN_URL = "https://www.redfin.com/NJ/Chester/309-North-Rd-07930/home/37150152"
ZILLOW_URL = "https://www.zillow.com/homedetails/12-Oak-St-SpringLake-NJ-07762/39012345_zpid/"
REALTOR_URL = "https://www.realtor.com/realestateandhomes-detail/45-Elm-Ave_Montclair_NJ_07042_M51234-56789"

REDFIN_HTML = """
<html>
<head>
  <title>309 North Rd, Chester, NJ 07930 | Redfin</title>
  <script>window.__price = "$999,999";</script>
</head>
<body>
  <div class="HomeMainStats">
    <div class="stat-block price-section" data-rf-test-id="abp-price">
      <div class="statsValue">$650,000</div>
      <span class="statsLabel">Price</span>
    </div>
    <div class="stat-block beds-section">
      <div class="statsValue">4</div>
      <span class="statsLabel">Beds</span>
    </div>
    <div class="stat-block baths-section">
      <div class="statsValue">2.5</div>
      <span class="statsLabel">Baths</span>
    </div>
    <div class="stat-block sqft-section">
      <div class="statsValue">2,600</div>
      <span class="statsLabel">Sq Ft</span>
    </div>
  </div>
  <div class="homeAddress" data-rf-test-id="abp-streetLine">
    <div class="street-address">309 North Rd,</div>
    <div class="dp-subtext bp-cityStateZip" data-rf-test-id="abp-cityStateZip">Chester, NJ 07930</div>
  </div>
  <div class="details-list">
    <div class="keyDetail"><span class="header">Year Built</span><span class="content">1985</span></div>
    <div class="keyDetail"><span class="header">Lot Size</span><span class="content">0.25 Acres</span></div>
    <div class="keyDetail"><span class="header">HOA Dues</span><span class="content">$150/mo</span></div>
    <div class="keyDetail"><span class="header">Style</span><span class="content">Colonial</span></div>
  </div>
  <div class="propertyType">Single Family Residential</div>
  <div class="sourceId" data-rf-test-id="abp-sourceId">MLS# 3912345</div>
  <div id="marketing-remarks-scroll"><p>Charming colonial on a quiet road.</p></div>
  <ul class="amenities">
    <li>Parking: 2 car garage</li>
  </ul>
  <span class="time-on-market">12 days on Redfin</span>
  <!-- 99,999 sq ft -->
</body>
</html>
"""


def make_snapshot(url=REDFIN_URL, html=REDFIN_HTML, text=None) -> PageSnapshot:
    """Factory for creating test PageSnapshot instances."""
    return PageSnapshot(url=url, html=html, text=text)


def make_document(text, url=REDFIN_URL, html="<html><body></body></html>") -> PageDocument:
    """Document whose visible text is given directly."""
    return PageDocument(PageSnapshot(url=url, html=html, text=text))


@pytest.fixture
def test_settings():
    """Settings with the stock thresholds, independent of the environment."""
    return Settings(
        sqft_scan_min=500,
        sqft_scan_max=20000,
        price_noise_ceiling=100000,
        price_scan_min_digits=6,
        description_max_length=1000,
    )


@pytest.fixture
def registry():
    """Registry loaded from the packaged sites.yaml."""
    return default_registry()


@pytest.fixture
def redfin_profile(registry):
    return registry.get(SourceKind.REDFIN)


@pytest.fixture
def engine(registry, test_settings):
    return ListingEngine(sites=registry, settings=test_settings)
