"""Breached-password lookups."""

from .client import (
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT,
    MIN_CHECK_LENGTH,
    BreachLookupClient,
    hash_prefix_suffix,
    parse_range_response,
)

__all__ = [
    "BreachLookupClient",
    "DEFAULT_API_URL",
    "DEFAULT_TIMEOUT",
    "MIN_CHECK_LENGTH",
    "hash_prefix_suffix",
    "parse_range_response",
]
