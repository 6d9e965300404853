"""Deep-link transport of records to the companion app.

The app's entry form is pre-populated from a link like

    homescout://add-property?address=309+North+Rd&price=650000&baths=2.5

Query keys are the canonical field names; empty fields are left out.
"""

from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import parse_qsl, urlencode, urlsplit

from listing_reconciler.config import settings
from listing_reconciler.validation import CanonicalProperty

LIST_SEPARATOR = "|"


def _to_param(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return LIST_SEPARATOR.join(_to_param(item) for item in value)
    return str(value)


def to_query_params(record: Union[CanonicalProperty, Mapping[str, Any]]) -> Dict[str, str]:
    """String-coerced query parameters for a record, empty fields omitted."""
    fields = record.to_fields() if isinstance(record, CanonicalProperty) else dict(record)
    params = {}
    for key, value in fields.items():
        if value is None or value == "" or value == []:
            continue
        params[key] = _to_param(value)
    return params


def build_deep_link(
    record: Union[CanonicalProperty, Mapping[str, Any]],
    scheme: Optional[str] = None,
    path: Optional[str] = None,
) -> str:
    """Build the add-property deep link for a record."""
    scheme = scheme or settings.deep_link_scheme
    path = path or settings.deep_link_path
    return f"{scheme}://{path}?{urlencode(to_query_params(record))}"


def parse_deep_link(link: str) -> Dict[str, str]:
    """Query parameters of a deep link, as the receiving app sees them."""
    return dict(parse_qsl(urlsplit(link).query, keep_blank_values=False))
