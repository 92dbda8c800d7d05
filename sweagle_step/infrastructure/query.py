"""
Percent-encoding for Sweagle endpoints that reject '+' as a space.

httpx form-encodes `params=` with '+' for spaces; the snapshot endpoint only
accepts '%20', so its query is encoded here instead.
"""

from typing import Mapping
from urllib.parse import quote_plus


def quote_service(value: str) -> str:
    """
    Percent-encodes a value as UTF-8 with spaces written as '%20'.

    A literal '+' in the input is already '%2B' after quoting, so only the
    encoder's own space marker is replaced.
    """
    return quote_plus(value, encoding="utf-8").replace("+", "%20")


def service_query(params: Mapping[str, str]) -> str:
    """Joins parameters into a query string, each value via `quote_service`."""
    return "&".join(
        f"{name}={quote_service(value)}" for name, value in params.items()
    )
