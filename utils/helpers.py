"""
Helper utilities for the lobby relay server.

Payloads arrive from clients untyped; these helpers read fields out of
them without ever raising, so handlers can treat anything missing as a
no-op.
"""

from typing import Any, Dict, Iterable, List, Optional, Union


def get_field(data: Any, name: str) -> Optional[Any]:
    """
    Read a field from an inbound event payload.

    Args:
        data: Raw payload as delivered by the transport (may be None or not a dict)
        name: Field name

    Returns:
        Field value or None if the payload has no such field
    """
    if not isinstance(data, dict):
        return None
    return data.get(name)


def get_key(data: Any, name: str) -> Optional[str]:
    """
    Read a field that is used as a lobby, player or room key.

    Keys must be strings; anything else (arrays, objects, numbers) is
    treated as missing.
    """
    value = get_field(data, name)
    if not isinstance(value, str):
        return None
    return value


def get_fields(data: Any, *names: str, keys: Iterable[str] = ()) -> Optional[Dict[str, Any]]:
    """
    Read several required fields at once.

    Args:
        data: Raw payload
        names: Required field names
        keys: Subset of names that must be string keys

    Returns:
        Dictionary of field values, or None if any field is missing or
        a key field is not a string
    """
    values = {}
    for name in names:
        value = get_key(data, name) if name in keys else get_field(data, name)
        if value is None:
            return None
        values[name] = value
    return values


def parse_origins(raw: str) -> Union[str, List[str]]:
    """Split a comma separated CORS origin setting."""
    origins = [origin.strip() for origin in raw.split(',') if origin.strip()]
    if origins == ['*']:
        return '*'
    return origins
