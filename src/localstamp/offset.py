"""UTC offset value type.

A ``UtcOffset`` is stored as signed total minutes so that offsets such as
``-09:30`` and ``+05:45`` are represented exactly. Bounds are enforced by the
model itself, so an out-of-range offset cannot be constructed.
"""

from __future__ import annotations

from datetime import timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .constants import (
    OFFSET_HOURS_MAX,
    OFFSET_HOURS_MIN,
    OFFSET_MINUTES_MAX,
    OFFSET_MINUTES_MIN,
    OFFSET_STRING_PATTERN,
    OFFSET_TOTAL_MINUTES_MAX,
    OFFSET_TOTAL_MINUTES_MIN,
)
from .errors import InvalidOffsetHoursError, InvalidOffsetMinutesError, InvalidOffsetStringError


def trim_new_lines(text: str) -> str:
    """Strip surrounding whitespace, including trailing CRLF/LF sequences."""
    return text.strip()


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class UtcOffset(BaseModel):
    """Signed displacement from UTC in whole minutes."""

    total_minutes: int = Field(ge=OFFSET_TOTAL_MINUTES_MIN, le=OFFSET_TOTAL_MINUTES_MAX)

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    @classmethod
    def from_pair(cls, hours: int, minutes: int) -> "UtcOffset":
        """Build an offset from signed hours and unsigned minutes.

        The sign of ``hours`` applies to the whole offset, so ``(-9, 30)`` is
        ``-09:30``.

        Raises:
            InvalidOffsetHoursError: hours not an int in [-12, 14]
            InvalidOffsetMinutesError: minutes not an int in [0, 59]
        """
        if not _is_int(hours) or hours < OFFSET_HOURS_MIN or hours > OFFSET_HOURS_MAX:
            raise InvalidOffsetHoursError(hours)
        if not _is_int(minutes) or not OFFSET_MINUTES_MIN <= minutes <= OFFSET_MINUTES_MAX:
            raise InvalidOffsetMinutesError(minutes)

        signed_minutes = -minutes if hours < 0 else minutes
        return cls(total_minutes=hours * 60 + signed_minutes)

    @classmethod
    def parse(cls, text: str) -> "UtcOffset":
        """Parse ``[+|-]HH[:]MM``, e.g. ``+0900``, ``-09:30`` or ``1000``.

        Raises:
            InvalidOffsetStringError: on bad grammar or an out-of-range offset
        """
        trimmed = trim_new_lines(text)
        match = OFFSET_STRING_PATTERN.match(trimmed)
        if match is None:
            raise InvalidOffsetStringError(text)

        hours = int(match.group("hours"))
        minutes = int(match.group("minutes"))
        if minutes > OFFSET_MINUTES_MAX:
            raise InvalidOffsetStringError(text)

        total = hours * 60 + minutes
        if match.group("sign") == "-":
            total = -total

        try:
            return cls(total_minutes=total)
        except ValidationError as exc:
            raise InvalidOffsetStringError(text, cause=exc) from exc

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "UtcOffset":
        """Build an offset from a ``timedelta`` with no seconds component.

        Raises:
            ValueError: the delta has a sub-minute part
            pydantic.ValidationError: the delta is out of range
        """
        seconds = int(delta.total_seconds())
        if seconds % 60 or delta.microseconds:
            raise ValueError(f"offset {delta} is not a whole number of minutes")
        return cls(total_minutes=seconds // 60)

    @property
    def is_utc(self) -> bool:
        return self.total_minutes == 0

    @property
    def sign(self) -> str:
        return "-" if self.total_minutes < 0 else "+"

    @property
    def hours(self) -> int:
        """Whole hours, carrying the sign of the offset."""
        whole = abs(self.total_minutes) // 60
        return -whole if self.total_minutes < 0 else whole

    @property
    def minutes(self) -> int:
        """Minutes past the whole hour, always in [0, 59]."""
        return abs(self.total_minutes) % 60

    def to_timedelta(self) -> timedelta:
        return timedelta(minutes=self.total_minutes)

    def to_timezone(self) -> timezone:
        return timezone(self.to_timedelta())

    def isoformat(self) -> str:
        """Render as ``±HH:MM`` with a mandatory sign."""
        return f"{self.sign}{abs(self.hours):02d}:{self.minutes:02d}"

    def __str__(self) -> str:
        return self.isoformat()


UTC = UtcOffset(total_minutes=0)
