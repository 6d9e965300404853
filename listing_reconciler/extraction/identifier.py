"""Address recovery from listing URL slugs.

Each site encodes the address in its listing path with its own slug grammar:

    redfin   /NJ/Chester/309-North-Rd-07930/home/37150152
    zillow   /homedetails/309-North-Rd-Chester-NJ-07930/37150152_zpid/
    realtor  /realestateandhomes-detail/309-North-Rd_Chester_NJ_07930_M12345-67890

Parsers never raise: a segment that is missing or does not look like what
its position calls for is left out of the result, and a path that is not
in the listing layout yields nothing.

Zillow slugs use hyphens both between street words and between city
words, so only the last token before the state is taken as the city
("123-Main-St-New-York-NY-10001" gives city "York"). CamelCase city tokens
("SpringLake") are split. State and zip are unaffected. On page snapshots
the page's own city line outranks the slug.
"""

import logging
import re
from typing import Callable, Dict, List, Optional
from urllib.parse import unquote, urlparse

from .base import SourceKind

logger = logging.getLogger(__name__)

_TRAILING_ZIP_RE = re.compile(r"(\d{5})(?:-\d{4})?$")
_TRAILING_ZIP_STRIP_RE = re.compile(r"-?\d{5}(?:-\d{4})?$")
_LEADING_ZIP_RE = re.compile(r"^(\d{5})")
_STATE_RE = re.compile(r"^[A-Za-z]{2}$")
_CAMEL_RE = re.compile(r"(?<=[a-z])(?=[A-Z])")


def _words(slug: str) -> str:
    return re.sub(r"\s+", " ", slug.replace("-", " ").replace("+", " ")).strip()


def _state(segment: str) -> Optional[str]:
    segment = segment.strip()
    return segment.upper() if _STATE_RE.match(segment) else None


def _leading_zip(segment: str) -> Optional[str]:
    match = _LEADING_ZIP_RE.match(segment.strip())
    return match.group(1) if match else None


def _segments(path: str) -> List[str]:
    return [unquote(part) for part in path.split("/") if part]


def _parse_redfin(path: str) -> Dict[str, str]:
    """/STATE/City/Street-Zip/home/ID (or /STATE/City/Street-Zip/unit-N/home/ID)"""
    parts = _segments(path)
    # other redfin pages (/city/..., /zipcode/...) share the leading segments
    if "home" not in parts[3:5]:
        return {}

    result: Dict[str, str] = {}
    if _state(parts[0]):
        result["state"] = _state(parts[0])
    if _words(parts[1]):
        result["city"] = _words(parts[1])
    street_part = parts[2]
    if street_part:
        zip_match = _TRAILING_ZIP_RE.search(street_part)
        if zip_match:
            result["zip"] = zip_match.group(1)
        address = _words(_TRAILING_ZIP_STRIP_RE.sub("", street_part))
        if address:
            result["address"] = address
    return result


def _parse_zillow(path: str) -> Dict[str, str]:
    """/homedetails/Street-City-State-Zip/ID_zpid/"""
    match = re.search(r"homedetails/([^/]+)", path)
    if not match:
        return {}

    parts = [p for p in unquote(match.group(1)).split("-") if p]
    if len(parts) < 4:
        return {}

    result: Dict[str, str] = {}
    zip_code = _leading_zip(parts[-1])
    if zip_code:
        result["zip"] = zip_code
    state = _state(parts[-2])
    if state:
        result["state"] = state
    # Zillow keeps multi-word cities as one CamelCase token
    city = _CAMEL_RE.sub(" ", parts[-3]).strip()
    if city:
        result["city"] = city
    address = " ".join(parts[:-3]).strip()
    if address:
        result["address"] = address
    return result


def _parse_realtor(path: str) -> Dict[str, str]:
    """/realestateandhomes-detail/Street_City_State_Zip_ID"""
    match = re.search(r"detail/([^/]+)", path)
    if not match:
        return {}

    parts = unquote(match.group(1)).split("_")
    if len(parts) < 4:
        return {}

    result: Dict[str, str] = {}
    if _words(parts[0]):
        result["address"] = _words(parts[0])
    if _words(parts[1]):
        result["city"] = _words(parts[1])
    state = _state(parts[2])
    if state:
        result["state"] = state
    zip_code = _leading_zip(parts[3])
    if zip_code:
        result["zip"] = zip_code
    return result


GRAMMARS: Dict[SourceKind, Callable[[str], Dict[str, str]]] = {
    SourceKind.REDFIN: _parse_redfin,
    SourceKind.ZILLOW: _parse_zillow,
    SourceKind.REALTOR: _parse_realtor,
}


def parse_identifier(path_or_url: Optional[str], source_kind: SourceKind) -> Dict[str, str]:
    """Decode the address components encoded in a listing path.

    Args:
        path_or_url: URL path, or a full URL whose path is used
        source_kind: Site whose slug grammar applies

    Returns:
        Any of address, city, state, zip that could be recovered
    """
    if not path_or_url or not isinstance(path_or_url, str):
        return {}

    grammar = GRAMMARS.get(source_kind)
    if grammar is None:
        return {}

    path = path_or_url.strip()
    if "://" in path:
        try:
            path = urlparse(path).path
        except ValueError:
            return {}

    result = grammar(path)
    logger.debug(f"Parsed {source_kind.value} identifier {path!r}: {result}")
    return result
