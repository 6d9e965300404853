"""Data validation module using Pydantic models.

This module provides the canonical property record and the converter that
turns merged field maps into it, dropping fields that fail validation.

Main exports:
- CanonicalProperty: Validated, immutable property record
- fields_to_canonical: Convert a field map, omitting invalid fields

Example usage:
    from listing_reconciler.validation import fields_to_canonical

    record = fields_to_canonical({"price": "650000", "state": "nj", "zip": "07930-1234"})
    record.state  # "NJ"
    record.zip    # "07930"
"""

from .models import CanonicalProperty
from .converters import fields_to_canonical

__all__ = [
    "CanonicalProperty",
    "fields_to_canonical",
]
