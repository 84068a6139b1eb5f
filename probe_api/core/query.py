"""Query Parsing — URL query decoding with all-or-nothing failure.

Invariants:
    - '&' is the only pair separator; ';' makes the whole query malformed
    - An invalid percent escape makes the whole query malformed
    - '+' decodes to a space; blank values are kept
    - Repeated keys: first value wins
"""

import re
from urllib.parse import parse_qs

_INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class MalformedQueryError(ValueError):
    """Raw query string cannot be decoded."""


def parse_query(raw_query: str) -> dict[str, list[str]]:
    """Decode a raw query string into key -> values."""
    if not raw_query:
        return {}
    if ";" in raw_query:
        raise MalformedQueryError("invalid semicolon separator in query")
    match = _INVALID_ESCAPE.search(raw_query)
    if match:
        raise MalformedQueryError(f"invalid URL escape at offset {match.start()}")
    # Undecodable UTF-8 becomes U+FFFD rather than failing the request.
    return parse_qs(raw_query, keep_blank_values=True, errors="replace")


def query_value(raw_query: str, key: str, default: str = "") -> str:
    """First value for key; malformed queries and empty values yield default."""
    try:
        values = parse_query(raw_query)
    except MalformedQueryError:
        return default
    found = values.get(key)
    if not found or not found[0]:
        return default
    return found[0]
