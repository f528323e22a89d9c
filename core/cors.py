"""CORS headers attached to proxied responses."""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

CORS_HEADERS: Mapping[str, str] = MappingProxyType(
    {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Authorization",
    }
)


def with_cors(headers: Iterable[tuple[str, str]]) -> list[tuple[str, str]]:
    """Merge CORS headers on top of ``headers``, replacing same-named entries."""
    overridden = {key.lower() for key in CORS_HEADERS}
    merged = [(key, value) for key, value in headers if key.lower() not in overridden]
    merged.extend(CORS_HEADERS.items())
    return merged
