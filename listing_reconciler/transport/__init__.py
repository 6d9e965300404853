"""Deep-link transport of canonical records to the companion app."""

from .deeplink import build_deep_link, parse_deep_link, to_query_params

__all__ = [
    "build_deep_link",
    "parse_deep_link",
    "to_query_params",
]
