"""Process-wide offset cache and module-level entry points.

Everything below the default instances takes its cache explicitly. The
defaults are built on first use and read their configuration from the
environment:

    LOCALSTAMP_OFFSET            explicit offset applied to the cache, e.g. "-08:00"
    LOCALSTAMP_COMMAND_FALLBACK  set to "false" to skip the platform command
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Optional

from .cache import OffsetCache
from .constants import ENV_COMMAND_FALLBACK, ENV_OFFSET
from .errors import InvalidOffsetStringError, LocalStampError
from .formatter import format_now
from .offset import UtcOffset
from .resolver import OffsetResolver, Resolution
from .utils import get_env_bool, get_env_str

logger = logging.getLogger(__name__)

_default_lock = threading.Lock()
_default_cache: Optional[OffsetCache] = None
_default_resolver: Optional[OffsetResolver] = None


def _build_cache() -> OffsetCache:
    cache = OffsetCache()
    configured = get_env_str(ENV_OFFSET)
    if configured:
        try:
            cache.set_from_string(configured)
            logger.info(f"Using offset {cache.get()} from {ENV_OFFSET}")
        except InvalidOffsetStringError:
            logger.warning(f"Invalid offset in {ENV_OFFSET}: '{configured}'. Ignoring it")
    return cache


def get_default_cache() -> OffsetCache:
    """Get or create the process-wide offset cache."""
    global _default_cache
    if _default_cache is None:
        with _default_lock:
            if _default_cache is None:
                _default_cache = _build_cache()
    return _default_cache


def get_default_resolver() -> OffsetResolver:
    """Get or create the resolver bound to the process-wide cache."""
    global _default_resolver
    if _default_resolver is None:
        cache = get_default_cache()
        with _default_lock:
            if _default_resolver is None:
                _default_resolver = OffsetResolver(
                    cache,
                    command_fallback=get_env_bool(ENV_COMMAND_FALLBACK, True),
                )
    return _default_resolver


def reset_defaults() -> None:
    """Drop the default instances so the next call rebuilds them. Intended for tests."""
    global _default_cache, _default_resolver
    with _default_lock:
        _default_cache = None
        _default_resolver = None


def get_global_offset() -> UtcOffset:
    """Return the cached offset or raise ``UninitializedError``."""
    return get_default_cache().get()


def try_set_global_offset(offset: UtcOffset) -> None:
    """Store ``offset``, raising ``WriteLockError`` if the cache is busy."""
    get_default_cache().try_set(offset)


def try_set_global_offset_from_str(text: str) -> None:
    """Store an offset given as ``[+|-]HH[:]MM``, e.g. ``+0900`` or ``-09:30``."""
    get_default_cache().set_from_string(text)


def try_set_global_offset_from_pair(hours: int, minutes: int) -> None:
    """Store an offset given as hours in [-12, 14] and minutes in [0, 59]."""
    get_default_cache().set_from_pair(hours, minutes)


def get_utc_offset() -> Resolution:
    """Resolve the local offset, caching it. Never fails; see ``Resolution.errors``."""
    return get_default_resolver().resolve()


def get_local_timestamp(now: Optional[datetime] = None) -> tuple[str, list[LocalStampError]]:
    """Render ``now`` in the local offset.

    The offset comes from, in order: an explicit set, the host clock, the
    platform time command, UTC.

    Returns:
        The timestamp and the soft errors collected while resolving the offset
    """
    return get_default_resolver().local_timestamp(now=now)


def get_local_timestamp_from_offset(offset: UtcOffset, now: Optional[datetime] = None) -> str:
    """Render ``now`` in a caller-supplied offset."""
    return format_now(offset, now=now)
