"""
Utilities module for the lobby relay server.

This module contains constants and payload helpers used throughout the
application.
"""

from .constants import (
    DEFAULT_TARGET_SCORE, CLIENT_EVENTS, SERVER_EVENTS, SOCKET_NAMESPACE, SERVER_VERSION
)
from .helpers import get_field, get_fields, parse_origins

__all__ = [
    'DEFAULT_TARGET_SCORE',
    'CLIENT_EVENTS',
    'SERVER_EVENTS',
    'SOCKET_NAMESPACE',
    'SERVER_VERSION',
    'get_field',
    'get_fields',
    'parse_origins'
]
