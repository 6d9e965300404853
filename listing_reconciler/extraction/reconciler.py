"""Reconciliation of pasted listing objects of unknown shape.

Pasted listing data comes in many shapes: flat objects, objects nested
under "property"/"details"/"financial"/... buckets, camelCase or snake_case
keys. Each canonical field is described once in the FIELDS table by its
alias spellings and the namespaces to search, and a single resolver walks
the table.

Lookup order is alias-major: the first alias is tried in every namespace
(in namespace order) before the second alias is tried anywhere. The first
defined, non-null value wins; values from different namespaces are never
merged.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from .base import ErrorKind, ExtractionError
from .numbers import acres_to_sqft, combine_baths, lot_size_to_sqft, parse_number, round_half_up

logger = logging.getLogger(__name__)

ROOT = ""  # the pasted object itself

DEFAULT_NAMESPACES: Tuple[str, ...] = (
    "property",
    "details",
    ROOT,
    "interior",
    "exterior",
    "lot",
    "financial",
    "utilities",
)
LIST_NAMESPACES: Tuple[str, ...] = ("interior", "exterior", "lot", ROOT, "property")

YEAR_UNKNOWN = 9999


@dataclass(frozen=True)
class FieldSpec:
    """How one canonical field is found in a pasted object.

    kind is one of: text, int, number, area, flag, list, raw.
    area values are square feet unless tagged as acres.
    paths are nested key paths from the root, tried before the aliases.
    """
    name: str
    aliases: Tuple[str, ...]
    kind: str = "text"
    namespaces: Tuple[str, ...] = DEFAULT_NAMESPACES
    paths: Tuple[Tuple[str, ...], ...] = ()


def _spec(name, *aliases, kind="text", paths=()):
    namespaces = LIST_NAMESPACES if kind == "list" else DEFAULT_NAMESPACES
    return FieldSpec(name, tuple(aliases), kind, namespaces, tuple(paths))


FIELDS: Dict[str, FieldSpec] = {
    spec.name: spec
    for spec in [
        # Address
        _spec("address", "address", "streetAddress"),
        _spec("city", "city"),
        _spec("state", "state"),
        _spec("zip", "zip", "zipCode", "postalCode", kind="raw"),
        _spec("county", "county"),
        # Core facts
        _spec("price", "listPrice", "price", "askingPrice", kind="int"),
        _spec("beds", "bedrooms", "beds", kind="int"),
        _spec("baths", "baths", "bathrooms", kind="number"),
        _spec("full_baths", "fullBaths", "full_baths", kind="number"),
        _spec("half_baths", "halfBaths", "half_baths", kind="number"),
        _spec("sqft", "sqft", "squareFeet", "livingArea", kind="int"),
        _spec("lot_size", "lot_size", "lotSize", "lotSqft", kind="area"),
        _spec("lot_acres", "acres", "lot_acres", "lotAcres", kind="number"),
        _spec("year_built", "yearBuilt", "year_built", kind="int"),
        _spec("year_renovated", "yearRenovated", "year_renovated", kind="int"),
        _spec(
            "garage_spaces",
            "garage",
            "garageSpaces",
            kind="int",
            paths=[("exterior", "garage", "spaces"), ("garage", "spaces")],
        ),
        _spec("stories", "stories", "floors", "levels", kind="int"),
        _spec("rooms", "rooms", "totalRooms", kind="int"),
        # Money
        _spec("hoa_fee", "fee", "hoa_monthly", "hoaFee", "hoaMonthly", kind="int"),
        _spec(
            "property_tax_annual",
            "property_tax_annual",
            "propertyTax",
            "annualTax",
            kind="int",
            paths=[("financial", "taxes", "amount"), ("taxes", "amount")],
        ),
        _spec("insurance_annual", "insurance_annual", "annualInsurance", kind="int"),
        _spec("original_list_price", "originalListPrice", "original_list_price", "originalPrice", kind="int"),
        _spec("price_per_sqft", "pricePerSqft", "price_per_sqft", kind="int"),
        _spec("tax_year", "taxYear", "tax_year", kind="int", paths=[("financial", "taxes", "year")]),
        _spec("tax_rate", "taxRate", "tax_rate", kind="number", paths=[("financial", "taxRate", "rate")]),
        _spec(
            "assessed_value_total",
            "assessedValueTotal",
            "assessed_value_total",
            "assessedValue",
            kind="int",
            paths=[("financial", "assessments", "total")],
        ),
        _spec(
            "assessed_value_land",
            "assessedValueLand",
            "assessed_value_land",
            kind="int",
            paths=[("financial", "assessments", "land")],
        ),
        _spec(
            "assessed_value_building",
            "assessedValueBuilding",
            "assessed_value_building",
            kind="int",
            paths=[("financial", "assessments", "building")],
        ),
        # Listing metadata
        _spec("source_url", "source_url", "sourceUrl", "listingUrl", "url"),
        _spec("mls_number", "mlsNumber", "mls_number", "mlsId", "listingId"),
        _spec("property_type", "propertyType", "property_type", "type", "homeType"),
        _spec("property_style", "style", "property_style", "architecturalStyle"),
        _spec("description", "remarks", "description", "publicRemarks"),
        _spec("directions", "directions"),
        _spec("days_on_market", "daysOnMarket", "days_on_market", "dom", kind="int"),
        _spec("list_date", "listDate", "list_date", "listingDate", kind="raw"),
        _spec("expiration_date", "expirationDate", "expiration_date", kind="raw"),
        _spec("ownership_type", "ownershipType", "ownership_type"),
        # Systems and construction
        _spec("heating", "heating", "heatingType", paths=[("utilities", "heating", "type")]),
        _spec("cooling", "cooling", "coolingType", "airConditioning"),
        _spec("basement", "basement", "basementType"),
        _spec("roof", "roof", "roofType"),
        _spec("sewer", "sewer", "sewerType"),
        _spec("water", "water", "waterSource"),
        _spec("fuel", "fuel", "fuelType"),
        _spec("fireplaces", "fireplaces", "numberOfFireplaces", kind="int"),
        _spec("driveway", "driveway", "drivewayType"),
        _spec("exterior_finish", "exteriorFinish", "exterior_finish", "exteriorMaterial"),
        # Presence flags
        _spec(
            "has_in_law_suite",
            "hasInLawSuite",
            "has_in_law_suite",
            "inLawSuite",
            kind="flag",
            paths=[("interior", "inLawSuite", "hasInLaw")],
        ),
        _spec("age_restricted", "ageRestricted", "age_restricted", kind="flag"),
        _spec("pets_allowed", "petsAllowed", "pets_allowed", kind="flag"),
        _spec(
            "short_sale",
            "shortSale",
            "short_sale",
            kind="flag",
            paths=[("financial", "shortSaleApprovalRequired")],
        ),
        # Feature lists
        _spec("lot_description", "lotDescription", "lot_description", "lotFeatures", kind="list"),
        _spec("interior_features", "interiorFeatures", "interior_features", kind="list"),
        _spec("exterior_features", "exteriorFeatures", "exterior_features", kind="list"),
        _spec("appliances", "appliances", "includedAppliances", kind="list"),
        _spec("flooring", "flooring", "floorTypes", kind="list"),
        _spec(
            "garage_type",
            "garageType",
            "garage_type",
            kind="list",
            paths=[("exterior", "garage", "type"), ("garage", "type")],
        ),
        _spec("kitchen_features", "kitchenFeatures", "kitchen_features", kind="list"),
        _spec(
            "in_law_features",
            "inLawFeatures",
            "in_law_features",
            kind="list",
            paths=[("interior", "inLawSuite", "features")],
        ),
    ]
}

_TRUE_WORDS = {"true", "yes", "y", "1"}
_FALSE_WORDS = {"false", "no", "n", "0", ""}


def parse_pasted(value: Any) -> Dict[str, Any]:
    """Strictly parse a pasted value into a JSON object.

    Raises:
        ExtractionError: EMPTY_INPUT for an empty value, INVALID_SHAPE when
            the value is not a JSON object
    """
    if isinstance(value, Mapping):
        return dict(value)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ExtractionError(ErrorKind.EMPTY_INPUT, "pasted value is empty")
    if not isinstance(value, str):
        raise ExtractionError(ErrorKind.INVALID_SHAPE, f"unsupported type {type(value).__name__}")

    try:
        data = json.loads(value)
    except ValueError as e:
        raise ExtractionError(ErrorKind.INVALID_SHAPE, f"not JSON: {e}") from e

    if not isinstance(data, dict):
        raise ExtractionError(ErrorKind.INVALID_SHAPE, f"JSON {type(data).__name__}, expected object")
    return data


def _namespace(blob: Mapping, name: str) -> Mapping:
    if name == ROOT:
        return blob
    value = blob.get(name)
    return value if isinstance(value, Mapping) else {}


def _walk(blob: Mapping, path: Tuple[str, ...]) -> Any:
    node: Any = blob
    for key in path:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node


def _candidates(blob: Mapping, spec: FieldSpec) -> Iterator[Tuple[Any, bool]]:
    """Yield (value, from_path) pairs in lookup order."""
    for path in spec.paths:
        yield _walk(blob, path), True
    namespaces = [_namespace(blob, name) for name in spec.namespaces]
    for alias in spec.aliases:
        for namespace in namespaces:
            yield namespace.get(alias), False


def _normalize(value: Any, kind: str, from_path: bool = False) -> Any:
    if kind == "list":
        # nested shapes may hold a single value; aliases must hold a list
        if from_path and isinstance(value, (str, int, float)) and not isinstance(value, bool):
            value = [value]
        if isinstance(value, (list, tuple)):
            items = [str(item).strip() for item in value if item is not None and str(item).strip()]
            return items or None
        return None

    if isinstance(value, (Mapping, list, tuple)):
        return None  # a container where a scalar belongs

    if kind == "int":
        return round_half_up(parse_number(value))
    if kind == "number":
        return parse_number(value)
    if kind == "area":
        return lot_size_to_sqft(value)
    if kind == "flag":
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            word = value.strip().lower()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
            return None
        return bool(value)
    if kind == "text":
        text = str(value).strip()
        return text or None
    return value


def resolve(blob: Mapping, spec: FieldSpec) -> Any:
    """First usable value for a field, normalized to its kind, or None."""
    for candidate, from_path in _candidates(blob, spec):
        if candidate is None:
            continue
        value = _normalize(candidate, spec.kind, from_path)
        if value is not None:
            return value
    return None


def _zip(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int) and 0 <= value < 100000:
        return f"{value:05d}"
    text = str(value).strip().split("-")[0].strip()
    return text or None


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value is False or value == []


def reconcile(blob: Mapping) -> Dict[str, Any]:
    """Resolve every canonical field of a pasted object.

    Args:
        blob: Parsed pasted object (see parse_pasted)

    Returns:
        Canonical field map with empty values removed
    """
    fields: Dict[str, Any] = {name: resolve(blob, spec) for name, spec in FIELDS.items()}

    # Full/half counts beat any separately stated total
    if fields["full_baths"] or fields["half_baths"]:
        total = combine_baths(fields["full_baths"], fields["half_baths"])
        if total:
            fields["baths"] = total

    if not fields["lot_size"] and fields["lot_acres"]:
        fields["lot_size"] = acres_to_sqft(fields["lot_acres"])

    fields["zip"] = _zip(fields["zip"])

    if fields["year_built"] == YEAR_UNKNOWN:
        logger.debug("Dropping unknown-year sentinel 9999")
        fields["year_built"] = None

    price, sqft = fields["price"], fields["sqft"]
    if price and sqft and sqft > 0:
        fields["price_per_sqft"] = round_half_up(price / sqft)

    result = {name: value for name, value in fields.items() if not _is_empty(value)}
    logger.debug(f"Reconciled {len(result)} fields: {sorted(result)}")
    return result
