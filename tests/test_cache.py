"""Tests for the process-wide offset cache and its lock."""

import threading
import time

import pytest

from localstamp.cache import OffsetCache, ReadWriteLock
from localstamp.errors import (
    InvalidOffsetHoursError,
    InvalidOffsetMinutesError,
    InvalidOffsetStringError,
    ReadLockError,
    UninitializedError,
    WriteLockError,
)
from localstamp.offset import UtcOffset


def test_get_uninitialized(cache: OffsetCache):
    """Test that reading an empty cache is a hard error."""
    assert not cache.is_initialized()
    with pytest.raises(UninitializedError):
        cache.get()


def test_first_set_initializes(cache: OffsetCache):
    offset = UtcOffset.from_pair(-8, 0)
    cache.try_set(offset)
    assert cache.is_initialized()
    assert cache.get() == offset


def test_later_sets_overwrite(cache: OffsetCache):
    cache.try_set(UtcOffset.from_pair(1, 0))
    cache.try_set(UtcOffset.from_pair(2, 0))
    assert cache.get().isoformat() == "+02:00"


def test_try_set_rejects_non_offsets(cache: OffsetCache):
    """Test that nothing but a UtcOffset can be stored."""
    with pytest.raises(TypeError):
        cache.try_set("+01:00")  # type: ignore[arg-type]
    assert not cache.is_initialized()


def test_try_set_fails_fast_while_reader_holds_lock(cache: OffsetCache):
    """Test that a busy lock makes writers fail instead of waiting."""
    cache.try_set(UtcOffset.from_pair(1, 0))
    assert cache._lock.acquire_read()
    try:
        with pytest.raises(WriteLockError):
            cache.try_set(UtcOffset.from_pair(2, 0))
    finally:
        cache._lock.release_read()
    assert cache.get().isoformat() == "+01:00"


def test_try_set_fails_fast_while_writer_holds_lock(cache: OffsetCache):
    cache.try_set(UtcOffset.from_pair(1, 0))
    assert cache._lock.try_acquire_write()
    try:
        with pytest.raises(WriteLockError):
            cache.try_set(UtcOffset.from_pair(2, 0))
    finally:
        cache._lock.release_write()


def test_get_times_out_while_writer_holds_lock():
    """Test that an unavailable read lock is distinct from an empty cache."""
    cache = OffsetCache(read_timeout=0.01)
    cache.try_set(UtcOffset.from_pair(3, 0))
    assert cache._lock.try_acquire_write()
    try:
        with pytest.raises(ReadLockError):
            cache.get()
    finally:
        cache._lock.release_write()
    assert cache.get().isoformat() == "+03:00"


def test_set_from_string(cache: OffsetCache):
    cache.set_from_string(" +05:30\n")
    assert cache.get().isoformat() == "+05:30"


def test_set_from_string_invalid_leaves_cache(cache: OffsetCache):
    cache.set_from_string("-0800")
    with pytest.raises(InvalidOffsetStringError):
        cache.set_from_string("nope")
    assert cache.get().isoformat() == "-08:00"


@pytest.mark.parametrize(
    "hours, minutes, error",
    [
        (127, 0, InvalidOffsetHoursError),
        (-127, 0, InvalidOffsetHoursError),
        (0, -1, InvalidOffsetMinutesError),
        (0, 60, InvalidOffsetMinutesError),
    ],
)
def test_set_from_pair_invalid_leaves_cache(cache: OffsetCache, hours, minutes, error):
    """Test that invalid pairs fail and the stored value survives."""
    cache.set_from_pair(6, 0)
    with pytest.raises(error):
        cache.set_from_pair(hours, minutes)
    assert cache.get().isoformat() == "+06:00"


def test_set_from_pair_invalid_on_empty_cache(cache: OffsetCache):
    with pytest.raises(InvalidOffsetHoursError):
        cache.set_from_pair(15, 0)
    assert not cache.is_initialized()


def test_reset(cache: OffsetCache):
    cache.set_from_pair(1, 0)
    cache.reset()
    with pytest.raises(UninitializedError):
        cache.get()


def test_readers_share_lock():
    """Test that several readers can hold the lock together."""
    lock = ReadWriteLock()
    assert lock.acquire_read()
    assert lock.acquire_read(timeout=0.01)
    assert not lock.try_acquire_write()
    lock.release_read()
    lock.release_read()
    assert lock.try_acquire_write()
    assert not lock.acquire_read(timeout=0.01)
    lock.release_write()


def test_concurrent_reads_only_see_written_values(cache: OffsetCache):
    """Test that readers racing writers never see a value nobody wrote."""
    written = [UtcOffset.from_pair(h, m) for h in range(-12, 15) for m in (0, 30, 45)]
    allowed = {offset.total_minutes for offset in written}
    cache.try_set(written[0])

    stop = threading.Event()
    observed: list[UtcOffset] = []
    observed_lock = threading.Lock()

    def reader():
        seen = []
        while not stop.is_set():
            seen.append(cache.get())
        with observed_lock:
            observed.extend(seen)

    def writer():
        for offset in written * 20:
            try:
                cache.try_set(offset)
            except WriteLockError:
                pass

    readers = [threading.Thread(target=reader) for _ in range(4)]
    writers = [threading.Thread(target=writer) for _ in range(2)]
    for thread in readers + writers:
        thread.start()
    for thread in writers:
        thread.join()
    stop.set()
    for thread in readers:
        thread.join()

    assert observed
    for offset in observed:
        assert isinstance(offset, UtcOffset)
        assert offset.total_minutes in allowed
        assert -12 <= offset.hours <= 14
        assert 0 <= offset.minutes <= 59


def test_writer_waits_out_bookkeeping_but_not_readers():
    """Test that a brief hold on the internal mutex does not fail a free write lock."""
    lock = ReadWriteLock()
    held = threading.Event()

    def hold_mutex():
        with lock._cond:
            held.set()
            time.sleep(0.05)

    thread = threading.Thread(target=hold_mutex)
    thread.start()
    held.wait()
    try:
        assert lock.try_acquire_write()
    finally:
        thread.join()
    lock.release_write()


def test_writes_succeed_alongside_looping_readers(cache: OffsetCache):
    """Test that readers spinning on get do not starve every writer."""
    cache.try_set(UtcOffset.from_pair(0, 0))
    stop = threading.Event()

    def reader():
        while not stop.is_set():
            cache.get()

    readers = [threading.Thread(target=reader) for _ in range(2)]
    for thread in readers:
        thread.start()
    written = False
    deadline = time.monotonic() + 5
    try:
        while not written and time.monotonic() < deadline:
            try:
                cache.try_set(UtcOffset.from_pair(1, 0))
                written = True
            except WriteLockError:
                time.sleep(0)
    finally:
        stop.set()
        for thread in readers:
            thread.join()
    assert written
    assert cache.get().isoformat() == "+01:00"
