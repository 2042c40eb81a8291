"""Local UTC offset resolution.

Resolution order:
1. The offset cache, if it already holds a value
2. The host's local offset (``datetime.now().astimezone()``)
3. A platform command (``date +%z`` or PowerShell ``Get-Date -Format K``)
4. UTC

Environmental failures never abort resolution. They are collected on the
returned ``Resolution`` so callers can inspect them.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Optional, Sequence

from .cache import OffsetCache
from .constants import POSIX_OFFSET_COMMAND, WINDOWS_OFFSET_COMMAND
from .errors import (
    InvalidOffsetStringError,
    LocalOffsetError,
    LocalStampError,
    ReadLockError,
    TimeCommandDecodeError,
    TimeCommandError,
    TimeCommandExitError,
    TimeCommandParseError,
    UninitializedError,
    WriteLockError,
)
from .formatter import format_now
from .offset import UTC, UtcOffset, trim_new_lines

logger = logging.getLogger(__name__)

LocalOffsetQuery = Callable[[], Optional[timedelta]]
CommandRunner = Callable[[Sequence[str]], "subprocess.CompletedProcess[bytes]"]


def query_local_offset() -> Optional[timedelta]:
    """Ask the host for the current local UTC offset."""
    return datetime.now().astimezone().utcoffset()


def run_command(args: Sequence[str]) -> "subprocess.CompletedProcess[bytes]":
    """Run ``args`` and capture raw stdout/stderr."""
    return subprocess.run(list(args), capture_output=True, check=False)


@dataclass(slots=True)
class Resolution:
    """A resolved offset plus the soft errors hit while finding it."""

    offset: UtcOffset
    errors: list[LocalStampError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def __iter__(self):
        return iter((self.offset, self.errors))


class OffsetResolver:
    """Finds a usable offset and keeps the cache populated."""

    def __init__(
        self,
        cache: OffsetCache,
        local_offset: LocalOffsetQuery = query_local_offset,
        runner: CommandRunner = run_command,
        platform: Optional[str] = None,
        command_fallback: bool = True,
    ):
        """Initialize the resolver.

        Args:
            cache: Cache consulted first and populated after a miss
            local_offset: Host query returning the local offset, or None
            runner: Runs a platform command and returns the completed process
            platform: ``sys.platform`` style name choosing the command
            command_fallback: Whether to try the platform command at all
        """
        self.cache = cache
        self.local_offset = local_offset
        self.runner = runner
        self.platform = platform or sys.platform
        self.command_fallback = command_fallback

    def command_args(self) -> tuple[str, ...]:
        if self.platform.startswith("win"):
            return WINDOWS_OFFSET_COMMAND
        return POSIX_OFFSET_COMMAND

    def offset_from_host(self) -> UtcOffset:
        """Read the offset from the host clock.

        Raises:
            LocalOffsetError: the host reported nothing usable
        """
        try:
            delta = self.local_offset()
        except (OSError, OverflowError, ValueError) as exc:
            raise LocalOffsetError("host query failed", cause=exc) from exc

        if delta is None:
            raise LocalOffsetError("host reported no offset")

        try:
            return UtcOffset.from_timedelta(delta)
        except ValueError as exc:
            raise LocalOffsetError(f"unsupported offset {delta}", cause=exc) from exc

    def offset_from_command(self) -> UtcOffset:
        """Read the offset by running the platform time command.

        Raises:
            TimeCommandError: the command could not be launched
            TimeCommandExitError: the command exited non-zero
            TimeCommandDecodeError: the output was not UTF-8
            TimeCommandParseError: the output was not an offset
        """
        args = self.command_args()
        try:
            completed = self.runner(args)
        except (OSError, subprocess.SubprocessError) as exc:
            raise TimeCommandError(args, cause=exc) from exc

        if completed.returncode != 0:
            raise TimeCommandExitError(args, completed.returncode, completed.stderr or b"")

        try:
            output = (completed.stdout or b"").decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TimeCommandDecodeError(completed.stdout, cause=exc) from exc

        try:
            return UtcOffset.parse(output)
        except InvalidOffsetStringError as exc:
            raise TimeCommandParseError(trim_new_lines(output), cause=exc) from exc

    def _construct_offset(self, errors: list[LocalStampError]) -> UtcOffset:
        try:
            offset = self.offset_from_host()
            logger.debug(f"Resolved local offset {offset} from host clock")
            return offset
        except LocalOffsetError as exc:
            errors.append(exc)

        if self.command_fallback:
            try:
                offset = self.offset_from_command()
                logger.debug(f"Resolved local offset {offset} from {self.command_args()[0]}")
                return offset
            except LocalStampError as exc:
                errors.append(exc)

        logger.debug("Falling back to UTC offset")
        return UTC

    def resolve(self) -> Resolution:
        """Return the cached offset, or resolve and cache a fresh one."""
        errors: list[LocalStampError] = []
        try:
            return Resolution(self.cache.get())
        except UninitializedError:
            pass
        except ReadLockError as exc:
            errors.append(exc)

        offset = self._construct_offset(errors)

        try:
            self.cache.try_set(offset)
        except WriteLockError as exc:
            errors.append(exc)

        return Resolution(offset, errors)

    def local_timestamp(self, now: Optional[datetime] = None) -> tuple[str, list[LocalStampError]]:
        """Resolve an offset and render ``now`` with it.

        Raises:
            DatetimeOverflowError: applying the offset overflowed
            TimestampFormatError: the timestamp could not be rendered
        """
        offset, errors = self.resolve()
        return format_now(offset, now=now), errors
