"""Process-wide UTC offset cache.

Readers share access through a read lock. Writers never wait: if the write
lock is busy the update fails with ``WriteLockError`` and the caller decides
what to do with that.
"""

from __future__ import annotations

import threading
from typing import Optional

from .errors import ReadLockError, UninitializedError, WriteLockError
from .offset import UtcOffset


class ReadWriteLock:
    """Shared/exclusive lock with a non-blocking exclusive side."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    def acquire_read(self, timeout: Optional[float] = None) -> bool:
        """Wait for shared access. Returns False if ``timeout`` elapses."""
        with self._cond:
            if not self._cond.wait_for(lambda: not self._writer, timeout=timeout):
                return False
            self._readers += 1
            return True

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def try_acquire_write(self) -> bool:
        """Take exclusive access only if nobody holds the lock right now.

        The internal mutex is only held for bookkeeping, so waiting on it is
        brief. The reader/writer state is checked without waiting.
        """
        with self._cond:
            if self._writer or self._readers:
                return False
            self._writer = True
            return True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()


class OffsetCache:
    """Holds at most one ``UtcOffset`` shared by every caller in the process."""

    def __init__(self, read_timeout: Optional[float] = None):
        """Create an empty cache.

        Args:
            read_timeout: Seconds ``get`` waits for the read lock before
                raising ``ReadLockError``. ``None`` waits indefinitely.
        """
        self.read_timeout = read_timeout
        self._lock = ReadWriteLock()
        self._init_lock = threading.Lock()
        self._value: Optional[UtcOffset] = None

    def is_initialized(self) -> bool:
        return self._value is not None

    def get(self) -> UtcOffset:
        """Return the cached offset.

        Raises:
            UninitializedError: nothing has been stored yet
            ReadLockError: the read lock was not acquired within ``read_timeout``
        """
        if self._value is None:
            raise UninitializedError()
        if not self._lock.acquire_read(timeout=self.read_timeout):
            raise ReadLockError(self.read_timeout)
        try:
            value = self._value
        finally:
            self._lock.release_read()
        if value is None:
            raise UninitializedError()
        return value

    def try_set(self, offset: UtcOffset) -> None:
        """Store ``offset``, initializing the cache on first use.

        Raises:
            TypeError: ``offset`` is not a ``UtcOffset``
            WriteLockError: another reader or writer holds the lock
        """
        if not isinstance(offset, UtcOffset):
            raise TypeError(f"expected UtcOffset, got {type(offset).__name__}")

        if self._value is None:
            with self._init_lock:
                if self._value is None:
                    self._value = offset
                    return

        if not self._lock.try_acquire_write():
            raise WriteLockError()
        try:
            self._value = offset
        finally:
            self._lock.release_write()

    def set_from_string(self, text: str) -> None:
        """Parse ``[+|-]HH[:]MM`` and store the result."""
        self.try_set(UtcOffset.parse(text))

    def set_from_pair(self, hours: int, minutes: int) -> None:
        """Validate an hours/minutes pair and store the result."""
        self.try_set(UtcOffset.from_pair(hours, minutes))

    def reset(self) -> None:
        """Forget the stored offset. Intended for tests."""
        with self._init_lock:
            self._value = None
