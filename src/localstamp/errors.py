"""Error types and constants for consistent error handling across the package.

Errors fall into two groups. Hard errors (validation, overflow, formatting,
direct reads of an empty cache) are raised to the caller. Soft errors
(environment lookups, lock contention during resolution) are collected by the
resolver and returned alongside a usable offset.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Standardized error codes for consistent error handling."""

    # Lock errors
    READ_LOCK = "read_lock"
    WRITE_LOCK = "write_lock"

    # Cache state
    UNINITIALIZED = "uninitialized"

    # Validation errors
    INVALID_OFFSET_STRING = "invalid_offset_string"
    INVALID_OFFSET_HOURS = "invalid_offset_hours"
    INVALID_OFFSET_MINUTES = "invalid_offset_minutes"

    # Environment errors
    LOCAL_OFFSET_UNAVAILABLE = "local_offset_unavailable"
    TIME_COMMAND_FAILED = "time_command_failed"
    TIME_COMMAND_EXIT = "time_command_exit"
    TIME_COMMAND_DECODE = "time_command_decode"
    TIME_COMMAND_PARSE = "time_command_parse"

    # Arithmetic and formatting errors
    DATETIME_OVERFLOW = "datetime_overflow"
    TIME_FORMAT = "time_format"


class LocalStampError(Exception):
    """Base exception class for localstamp errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        """Initialize the error.

        Args:
            code: Error code identifier
            message: Human-readable error message
            details: Additional error context and data
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for diagnostics output."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ReadLockError(LocalStampError):
    """Raised when the cache read lock cannot be acquired."""

    def __init__(self, timeout: Optional[float] = None):
        super().__init__(
            ErrorCode.READ_LOCK,
            "Unable to acquire a read lock",
            details={"timeout": timeout},
        )


class WriteLockError(LocalStampError):
    """Raised when the cache write lock is held by someone else."""

    def __init__(self):
        super().__init__(ErrorCode.WRITE_LOCK, "Unable to acquire a write lock")


class UninitializedError(LocalStampError):
    """Raised when reading a cache that has never been set."""

    def __init__(self):
        super().__init__(ErrorCode.UNINITIALIZED, "The global offset is not initialized")


class InvalidOffsetStringError(LocalStampError):
    """Raised when an offset string does not follow [+|-]HH[:]MM."""

    def __init__(self, value: str, cause: Optional[Exception] = None):
        """Initialize invalid offset string error.

        Args:
            value: The string that failed to parse
            cause: Underlying validation failure, if any
        """
        super().__init__(
            ErrorCode.INVALID_OFFSET_STRING,
            f"Unable to parse offset string: {value!r}",
            details={"value": value},
            cause=cause,
        )


class InvalidOffsetHoursError(LocalStampError):
    """Raised when offset hours fall outside [-12, 14]."""

    def __init__(self, hours: int):
        super().__init__(
            ErrorCode.INVALID_OFFSET_HOURS,
            f"Invalid offset hours: {hours}",
            details={"hours": hours},
        )
        self.hours = hours


class InvalidOffsetMinutesError(LocalStampError):
    """Raised when offset minutes fall outside [0, 59]."""

    def __init__(self, minutes: int):
        super().__init__(
            ErrorCode.INVALID_OFFSET_MINUTES,
            f"Invalid offset minutes: {minutes}",
            details={"minutes": minutes},
        )
        self.minutes = minutes


class LocalOffsetError(LocalStampError):
    """Raised when the host cannot report a usable local offset."""

    def __init__(self, reason: str, cause: Optional[Exception] = None):
        message = f"Unable to determine local offset: {reason}"
        if cause:
            message += f": {cause}"
        super().__init__(
            ErrorCode.LOCAL_OFFSET_UNAVAILABLE,
            message,
            details={"reason": reason},
            cause=cause,
        )


class TimeCommandError(LocalStampError):
    """Raised when the platform time command cannot be launched."""

    def __init__(self, args: tuple[str, ...], cause: Optional[Exception] = None):
        message = "Error executing command to get system time"
        if cause:
            message += f": {cause}"
        super().__init__(
            ErrorCode.TIME_COMMAND_FAILED,
            message,
            details={"args": list(args)},
            cause=cause,
        )


class TimeCommandExitError(LocalStampError):
    """Raised when the platform time command exits with a non-zero status."""

    def __init__(self, args: tuple[str, ...], returncode: int, stderr: bytes = b""):
        super().__init__(
            ErrorCode.TIME_COMMAND_EXIT,
            f"Time command exited with status {returncode}",
            details={
                "args": list(args),
                "returncode": returncode,
                "stderr": stderr.decode("utf-8", errors="replace").strip(),
            },
        )


class TimeCommandDecodeError(LocalStampError):
    """Raised when the platform time command prints non-UTF8 output."""

    def __init__(self, output: bytes, cause: Optional[Exception] = None):
        super().__init__(
            ErrorCode.TIME_COMMAND_DECODE,
            "Time command output is not valid UTF-8",
            details={"output": output.hex()},
            cause=cause,
        )


class TimeCommandParseError(LocalStampError):
    """Raised when the platform time command output is not an offset."""

    def __init__(self, output: str, cause: Optional[Exception] = None):
        super().__init__(
            ErrorCode.TIME_COMMAND_PARSE,
            f"Unable to parse time command output: {output!r}",
            details={"output": output},
            cause=cause,
        )


class DatetimeOverflowError(LocalStampError):
    """Raised when applying an offset leaves the representable datetime range."""

    def __init__(self, cause: Optional[Exception] = None):
        super().__init__(ErrorCode.DATETIME_OVERFLOW, "Datetime overflow", cause=cause)


class TimestampFormatError(LocalStampError):
    """Raised when a datetime cannot be rendered in the timestamp layout."""

    def __init__(self, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            ErrorCode.TIME_FORMAT,
            f"Unable to format timestamp: {reason}",
            details={"reason": reason},
            cause=cause,
        )
