"""Timestamp rendering for a resolved UTC offset."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from .constants import TIMESTAMP_PATTERN
from .errors import DatetimeOverflowError, TimestampFormatError
from .offset import UtcOffset


def _render(moment: datetime, offset: UtcOffset) -> str:
    return (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
        f"{offset.isoformat()}"
    )


def format_now(offset: UtcOffset, now: Optional[datetime] = None) -> str:
    """Render the current instant in ``offset`` as ``YYYY-MM-DDTHH:MM:SS±HH:MM``.

    Args:
        offset: Offset to shift the UTC instant by
        now: Instant to render instead of the current time. Naive values are
            taken as UTC.

    Returns:
        Timestamp string without fractional seconds, e.g.
        ``"2024-03-01T14:05:09-08:00"``

    Raises:
        DatetimeOverflowError: the shifted instant is outside the datetime range
        TimestampFormatError: the instant cannot be rendered in the layout
    """
    try:
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        else:
            now = now.astimezone(timezone.utc)

        if offset.is_utc:
            shifted = now
        else:
            # Minute resolution so half-hour and 45 minute offsets are honored
            shifted = now + offset.to_timedelta()
    except OverflowError as exc:
        raise DatetimeOverflowError(cause=exc) from exc
    local = shifted.replace(tzinfo=offset.to_timezone())

    try:
        rendered = _render(local, offset)
    except (TypeError, ValueError) as exc:
        raise TimestampFormatError(str(exc), cause=exc) from exc

    if not TIMESTAMP_PATTERN.match(rendered):
        raise TimestampFormatError(f"rendered value {rendered!r} does not match layout")
    return rendered
