"""Field extraction from a captured listing page.

One extractor serves every site: the site-specific part is the selector
data in the SiteProfile. Extraction produces two independent field maps:

- structural: values read from semantically-scoped page elements
- scanned: values recovered by regex scans over the whole visible text

The assembler ranks structural values above URL-derived ones, and both
above scanned ones.
"""

import logging
import re
from typing import Any, Dict, Optional

from listing_reconciler.config import Settings, settings as default_settings
from .document import PageDocument
from .locator import locate, pattern, selectors
from .numbers import (
    lot_size_to_sqft,
    parse_bounded_number,
    parse_digits,
    parse_number,
    round_half_up,
)
from .sites import SiteProfile

logger = logging.getLogger(__name__)

_STATE_ZIP_RE = re.compile(r"([A-Z]{2})\s*(\d{5})?")
_MLS_LABEL_RE = re.compile(r"^.*(?:MLS|Listing)\s*(?:ID|#|Number)?\s*[#:]?\s*", re.IGNORECASE)
_SQFT_WORDS = ("sq ft", "sqft", "sq. ft")

_YEAR_IN_DETAILS = r"(?:year built|built)[:\s]*(\d{4})"
_YEAR_IN_TEXT = r"(?:built in|year built)[:\s]*(\d{4})"
_LOT_IN_DETAILS = r"(?:lot|land)[^:\d]{0,12}[:\s]*([\d,.]+)\s*(?:sq|acre|sf)"
_LOT_IN_TEXT = r"(?:lot size|land area)[:\s]*([\d,.]+)\s*(?:sq|acre|sf)"


def _first_comma_segment(text: Optional[str]) -> Optional[str]:
    if text and "," in text:
        return text.split(",")[0].strip() or None
    return text


def _parse_city_state_zip(text: Optional[str]) -> Dict[str, str]:
    """Split "Chester, NJ 07930" (or "309 North Rd, Chester, NJ 07930")."""
    if not text:
        return {}

    parts = [p.strip() for p in text.split(",")]
    result: Dict[str, str] = {}
    if len(parts) == 1:
        if parts[0]:
            result["city"] = parts[0]
        return result

    if parts[-2]:
        result["city"] = parts[-2]
    match = _STATE_ZIP_RE.search(parts[-1])
    if match:
        result["state"] = match.group(1)
        if match.group(2):
            result["zip"] = match.group(2)
    return result


def _clean_mls(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    value = re.sub(r"[^a-zA-Z0-9]", "", _MLS_LABEL_RE.sub("", text))
    return value or None


def _int(snippet: Optional[str]) -> Optional[int]:
    value = parse_number(snippet)
    return int(value) if value is not None else None


class PageExtractor:
    """Extracts structural and scanned field maps for one site."""

    def __init__(self, profile: SiteProfile, settings: Optional[Settings] = None):
        self.profile = profile
        self.settings = settings or default_settings

    def _css(self, name: str):
        return selectors(self.profile.selectors_for(name))

    # ------------------------------------------------------------------
    # Structural lookups
    # ------------------------------------------------------------------

    def structural_fields(self, document: PageDocument) -> Dict[str, Any]:
        """Fields read from site-specific page elements."""
        fields: Dict[str, Any] = {}

        fields["price"] = round_half_up(parse_number(locate(document, self._css("price"))))
        fields["address"] = _first_comma_segment(locate(document, self._css("address")))
        fields.update(_parse_city_state_zip(locate(document, self._css("city_state_zip"))))
        fields.update(self._stat_block_fields(document))

        details = " ".join(document.select_all_text(self.profile.selectors_for("key_details")))
        if details:
            year_match = re.search(_YEAR_IN_DETAILS, details, re.IGNORECASE)
            fields["year_built"] = int(year_match.group(1)) if year_match else None
            lot_match = re.search(_LOT_IN_DETAILS, details, re.IGNORECASE)
            fields["lot_size"] = lot_size_to_sqft(lot_match.group(0)) if lot_match else None

        fields["mls_number"] = _clean_mls(locate(document, self._css("mls_number")))
        fields["property_type"] = locate(document, self._css("property_type"))

        description = locate(document, self._css("description"))
        if description:
            fields["description"] = description[: self.settings.description_max_length]

        return {k: v for k, v in fields.items() if v is not None}

    def _stat_block_fields(self, document: PageDocument) -> Dict[str, Any]:
        """Beds, baths and sqft from the headline stat blocks.

        A value at or above the price ceiling is a price that landed in a
        stat block and is skipped. Stat blocks are structurally trusted, so
        sqft is not range filtered here.
        """
        fields: Dict[str, Any] = {}
        for text in document.select_all_text(self.profile.selectors_for("stat_blocks")):
            value = parse_number(text)
            if not value or value >= self.settings.price_noise_ceiling:
                continue

            lowered = text.lower()
            if "bed" in lowered:
                fields.setdefault("beds", int(value))
            elif "bath" in lowered:
                fields.setdefault("baths", value)
            elif any(word in lowered for word in _SQFT_WORDS):
                fields.setdefault("sqft", int(value))
        return fields

    # ------------------------------------------------------------------
    # Whole-page scans
    # ------------------------------------------------------------------

    def scanned_fields(self, document: PageDocument) -> Dict[str, Any]:
        """Fields recovered by regex scans over the whole visible text.

        These are the least trusted values: they only fill gaps left by
        every other source, and numeric ones are bounded.
        """
        s = self.settings
        sqft_min, sqft_max = s.sqft_scan_bounds
        fields: Dict[str, Any] = {}

        # "$" followed by at least N digits, commas allowed between them
        price_text = locate(
            document,
            [pattern(r"\$\s?((?:\d,?){%d,})" % s.price_scan_min_digits)],
        )
        fields["price"] = parse_digits(price_text)

        beds = locate(document, [pattern(r"\b(\d+)\s*(?:beds?|bedrooms?|bd)\b")])
        fields["beds"] = _int(beds)
        baths = locate(document, [pattern(r"\b(\d+(?:\.\d+)?)\s*(?:baths?|bathrooms?|ba)\b")])
        fields["baths"] = parse_number(baths)

        sqft = locate(
            document,
            [
                pattern(
                    r"(?<![\d,.$])(\d{1,2},\d{3}|\d{1,5})\s*(?:sq\.?\s*ft|sqft|square\s+feet)",
                    accept=lambda v: parse_bounded_number(v, sqft_min, sqft_max) is not None,
                )
            ],
        )
        fields["sqft"] = _int(sqft)

        fields["year_built"] = _int(locate(document, [pattern(_YEAR_IN_TEXT)]))
        fields["lot_size"] = lot_size_to_sqft(locate(document, [pattern(_LOT_IN_TEXT, group=0)]))

        fields["mls_number"] = locate(
            document, [pattern(r"(?:MLS|Listing)\s*#?\s*:?\s*([A-Z0-9-]*\d[A-Z0-9-]*)")]
        )
        fields["property_type"] = locate(
            document,
            [
                pattern(
                    r"(?:property type|home type)[:\s]*"
                    r"(single family|condo|townhouse|multi-family|land|mobile)"
                )
            ],
        )

        hoa = locate(document, [pattern(r"\bHOA(?:\s+(?:dues|fees?))?[:\s]*\$?\s*([\d,]+)")])
        fields["hoa_fee"] = parse_digits(hoa)
        garage = locate(
            document, [pattern(r"\b(\d+)[-\s]*(?:car|space)?s?[-\s]*(?:garage|parking)")]
        )
        fields["garage_spaces"] = parse_digits(garage)
        days = locate(
            document,
            [pattern(r"\b(\d+)\s*days?\s*(?:on market|on redfin|on zillow|on realtor\.com)")],
        )
        fields["days_on_market"] = parse_digits(days)

        return {k: v for k, v in fields.items() if v is not None}

    def extract(self, document: PageDocument) -> Dict[str, Dict[str, Any]]:
        """Both field maps for a page."""
        structural = self.structural_fields(document)
        scanned = self.scanned_fields(document)
        logger.debug(
            f"{self.profile.kind.value} page {document.url}: "
            f"structural={sorted(structural)}, scanned={sorted(scanned)}"
        )
        return {"structural": structural, "scanned": scanned}
