"""Cached local UTC offset and RFC3339-style local timestamps.

Typical use:
    >>> from localstamp import get_local_timestamp
    >>> timestamp, errors = get_local_timestamp()
"""

from .api import (
    get_default_cache,
    get_default_resolver,
    get_global_offset,
    get_local_timestamp,
    get_local_timestamp_from_offset,
    get_utc_offset,
    try_set_global_offset,
    try_set_global_offset_from_pair,
    try_set_global_offset_from_str,
)
from .cache import OffsetCache
from .errors import ErrorCode, LocalStampError
from .formatter import format_now
from .offset import UTC, UtcOffset
from .resolver import OffsetResolver, Resolution

__all__ = [
    # Types
    "UtcOffset",
    "UTC",
    "OffsetCache",
    "OffsetResolver",
    "Resolution",
    "ErrorCode",
    "LocalStampError",
    # Formatting
    "format_now",
    # Process-wide API
    "get_default_cache",
    "get_default_resolver",
    "get_global_offset",
    "try_set_global_offset",
    "try_set_global_offset_from_str",
    "try_set_global_offset_from_pair",
    "get_utc_offset",
    "get_local_timestamp",
    "get_local_timestamp_from_offset",
]
