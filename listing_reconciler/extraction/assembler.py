"""Per-field merge of every source into one canonical record."""

import logging
from typing import Any, Dict, Mapping, Optional

from listing_reconciler.validation import CanonicalProperty, fields_to_canonical
from .numbers import round_half_up

logger = logging.getLogger(__name__)

YEAR_UNKNOWN = 9999
DERIVED_FIELDS = ("price_per_sqft",)


def _usable(field: str, value: Any) -> bool:
    if value is None or value == "" or value == []:
        return False
    if field == "year_built" and value in (YEAR_UNKNOWN, str(YEAR_UNKNOWN)):
        return False
    return True


def assemble(
    structural: Optional[Mapping[str, Any]] = None,
    identifier: Optional[Mapping[str, Any]] = None,
    reconciled: Optional[Mapping[str, Any]] = None,
    scanned: Optional[Mapping[str, Any]] = None,
    provenance: Optional[Mapping[str, Any]] = None,
) -> CanonicalProperty:
    """Merge source field maps into a CanonicalProperty.

    Priority is decided independently for every field, highest first:
    reconciled (pasted object), structural (page elements), identifier
    (URL slug), scanned (whole-page text). A lower source is only consulted
    for a field all higher sources lack.

    Args:
        structural: Fields from structural page lookups
        identifier: Fields parsed from the listing URL
        reconciled: Fields reconciled from a pasted object
        scanned: Fields from whole-page text scans
        provenance: source/source_url, applied last

    Returns:
        Immutable record with derived fields computed and empty fields omitted
    """
    ranked = [reconciled or {}, structural or {}, identifier or {}, scanned or {}]

    merged: Dict[str, Any] = {}
    for source in ranked:
        for field, value in source.items():
            if field in merged or not _usable(field, value):
                continue
            merged[field] = value

    for field, value in (provenance or {}).items():
        if _usable(field, value):
            merged[field] = value

    # Derived values are recomputed from validated inputs, never taken
    # from a source
    for field in DERIVED_FIELDS:
        merged.pop(field, None)
    record = fields_to_canonical(merged)

    if _positive(record.price) and _positive(record.sqft):
        record = record.model_copy(
            update={"price_per_sqft": round_half_up(record.price / record.sqft)}
        )
    logger.debug(f"Assembled record with {record.field_count} fields")
    return record


def _positive(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
