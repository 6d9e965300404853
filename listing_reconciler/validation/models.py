"""Pydantic model for the canonical property record.

This module defines the single output type of the extraction engine. The
model enforces the record invariants (two-letter state, five-digit zip,
half-bath increments, ...); the converters use validation failures to drop
individual untrustworthy fields.
"""

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

YEAR_UNKNOWN = 9999


class CanonicalProperty(BaseModel):
    """Canonical, typed property record.

    Every field is optional: partial records are the normal outcome of an
    extraction. Instances are immutable.

    Example:
        record = CanonicalProperty(
            address="309 North Rd",
            city="Chester",
            state="NJ",
            zip="07930",
            price=650000,
            beds=4,
            baths=2.5,
            sqft=2400,
        )
    """

    model_config = {"frozen": True, "extra": "ignore", "str_strip_whitespace": True}

    # Location
    address: Optional[str] = Field(None, min_length=1, description="Street address")
    city: Optional[str] = Field(None, min_length=1, description="City name")
    state: Optional[str] = Field(None, description="Two-letter state code")
    zip: Optional[str] = Field(None, description="Five-digit ZIP code")
    county: Optional[str] = Field(None, description="County name")

    # Core facts
    price: Optional[int] = Field(None, gt=0, description="List price in dollars")
    beds: Optional[int] = Field(None, ge=0, description="Bedrooms")
    baths: Optional[float] = Field(None, ge=0, description="Bathrooms, half baths as .5")
    full_baths: Optional[float] = Field(None, ge=0)
    half_baths: Optional[float] = Field(None, ge=0)
    sqft: Optional[int] = Field(None, gt=0, lt=100000, description="Living area in sq ft")
    lot_size: Optional[int] = Field(None, ge=0, description="Lot size in sq ft")
    lot_acres: Optional[float] = Field(None, ge=0)
    year_built: Optional[int] = Field(None, ge=1000, le=9998, description="Construction year")
    year_renovated: Optional[int] = Field(None, ge=1000, le=9998)
    price_per_sqft: Optional[int] = Field(None, gt=0, description="Derived price / sqft")
    garage_spaces: Optional[int] = Field(None, ge=0)
    stories: Optional[int] = Field(None, ge=0)
    rooms: Optional[int] = Field(None, ge=0)
    fireplaces: Optional[int] = Field(None, ge=0)

    # Money
    hoa_fee: Optional[int] = Field(None, ge=0, description="Monthly HOA fee")
    property_tax_annual: Optional[int] = Field(None, ge=0)
    insurance_annual: Optional[int] = Field(None, ge=0)
    original_list_price: Optional[int] = Field(None, gt=0)
    tax_year: Optional[int] = Field(None, ge=1000, le=9998)
    tax_rate: Optional[float] = Field(None, ge=0)
    assessed_value_total: Optional[int] = Field(None, ge=0)
    assessed_value_land: Optional[int] = Field(None, ge=0)
    assessed_value_building: Optional[int] = Field(None, ge=0)

    # Listing metadata
    mls_number: Optional[str] = Field(None, min_length=1)
    property_type: Optional[str] = Field(None, min_length=1)
    property_style: Optional[str] = None
    description: Optional[str] = None
    directions: Optional[str] = None
    days_on_market: Optional[int] = Field(None, ge=0)
    list_date: Optional[str] = None
    expiration_date: Optional[str] = None
    ownership_type: Optional[str] = None

    # Systems and construction
    heating: Optional[str] = None
    cooling: Optional[str] = None
    basement: Optional[str] = None
    roof: Optional[str] = None
    sewer: Optional[str] = None
    water: Optional[str] = None
    fuel: Optional[str] = None
    driveway: Optional[str] = None
    exterior_finish: Optional[str] = None

    # Presence flags
    has_in_law_suite: Optional[bool] = None
    age_restricted: Optional[bool] = None
    pets_allowed: Optional[bool] = None
    short_sale: Optional[bool] = None

    # Feature lists
    lot_description: Optional[List[str]] = None
    interior_features: Optional[List[str]] = None
    exterior_features: Optional[List[str]] = None
    appliances: Optional[List[str]] = None
    flooring: Optional[List[str]] = None
    garage_type: Optional[List[str]] = None
    kitchen_features: Optional[List[str]] = None
    in_law_features: Optional[List[str]] = None

    # Provenance
    source: Optional[str] = Field(None, description="Site the data came from")
    source_url: Optional[str] = Field(None, description="Listing URL")

    @field_validator("state", mode="before")
    @classmethod
    def normalize_state(cls, v: Any) -> Optional[str]:
        """Upper-case and require exactly two letters."""
        if v is None:
            return None
        v = str(v).strip().upper()
        if not re.fullmatch(r"[A-Z]{2}", v):
            raise ValueError(f"Invalid state code: {v!r}. Expected two letters")
        return v

    @field_validator("zip", mode="before")
    @classmethod
    def normalize_zip(cls, v: Any) -> Optional[str]:
        """Keep the five-digit ZIP, discarding any ZIP+4 suffix.

        Valid formats:
        - 07930
        - 07930-1234
        - 7930 (integer, zero-padded)
        """
        if v is None:
            return None
        if isinstance(v, int) and not isinstance(v, bool) and 0 <= v < 100000:
            return f"{v:05d}"

        v = str(v).strip()
        match = re.fullmatch(r"(\d{5})(?:-?\d{4})?", v)
        if not match:
            raise ValueError(f"Invalid ZIP code: {v!r}. Expected 5 digits")
        return match.group(1)

    @field_validator("baths")
    @classmethod
    def validate_half_increments(cls, v: Optional[float]) -> Optional[float]:
        """Bathrooms come in whole and half units."""
        if v is None:
            return None
        if (v * 2) != int(v * 2):
            raise ValueError(f"Bathrooms must be a multiple of 0.5, got {v}")
        return v

    @field_validator("year_built", mode="before")
    @classmethod
    def drop_unknown_year(cls, v: Any) -> Any:
        """9999 means "unknown" in some feeds; never store it."""
        if v == YEAR_UNKNOWN or v == str(YEAR_UNKNOWN):
            return None
        return v

    def to_fields(self) -> Dict[str, Any]:
        """Non-empty fields as a plain dict, in declaration order."""
        return self.model_dump(exclude_none=True)

    @property
    def field_count(self) -> int:
        return len(self.to_fields())
