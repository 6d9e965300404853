"""Converters from merged field maps to validated records.

A field map is assembled from untrusted sources. Rather than rejecting the
whole record when one value is bad, conversion drops each field that fails
validation and keeps the rest.
"""

import logging
from typing import Any, Dict, Mapping

from pydantic import ValidationError

from .models import CanonicalProperty

logger = logging.getLogger(__name__)


def fields_to_canonical(fields: Mapping[str, Any]) -> CanonicalProperty:
    """Convert a merged field map to a CanonicalProperty.

    Fields failing validation are omitted, logged at WARNING with the
    details at DEBUG. Unknown keys and None values are ignored.

    Args:
        fields: Canonical field name -> value

    Returns:
        Validated record holding every field that passed validation

    Example:
        >>> record = fields_to_canonical({"price": 500000, "state": "New Jersey"})
        >>> record.price, record.state
        (500000, None)
    """
    data: Dict[str, Any] = {
        k: v for k, v in fields.items() if k in CanonicalProperty.model_fields and v is not None
    }

    # Each pass removes at least one field, so this terminates
    while True:
        try:
            return CanonicalProperty(**data)
        except ValidationError as e:
            rejected = {
                error["loc"][0] for error in e.errors() if error.get("loc") and error["loc"][0] in data
            }
            if not rejected:
                raise
            logger.warning(
                f"Dropping {len(rejected)} invalid field(s): {', '.join(sorted(map(str, rejected)))}"
            )
            logger.debug(f"Validation errors: {e.errors()}")
            for key in rejected:
                data.pop(key, None)
