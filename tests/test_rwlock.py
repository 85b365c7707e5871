# tests/test_rwlock.py
"""Tests for the writer-preferring reader/writer lock."""

from __future__ import annotations

import threading
import time

import pytest

from secureshare.core.rwlock import LockTimeout, ReadWriteLock


def test_readers_share_the_lock() -> None:
    lock = ReadWriteLock()
    lock.acquire_read()
    # A second reader does not block while the first holds the lock.
    lock.acquire_read(timeout=0.1)
    lock.release_read()
    lock.release_read()


def test_writer_excludes_readers_and_writers() -> None:
    lock = ReadWriteLock()
    with lock.write_locked():
        with pytest.raises(LockTimeout):
            lock.acquire_read(timeout=0.05)
        with pytest.raises(LockTimeout):
            lock.acquire_write(timeout=0.05)
    # Released: both succeed again.
    with lock.read_locked(timeout=0.1):
        pass
    with lock.write_locked(timeout=0.1):
        pass


def test_reader_blocks_writer() -> None:
    lock = ReadWriteLock()
    with lock.read_locked():
        with pytest.raises(LockTimeout):
            lock.acquire_write(timeout=0.05)


def test_waiting_writer_blocks_new_readers() -> None:
    lock = ReadWriteLock()
    lock.acquire_read()
    writer_done = threading.Event()

    def writer() -> None:
        with lock.write_locked():
            writer_done.set()

    thread = threading.Thread(target=writer)
    thread.start()
    time.sleep(0.05)

    # The writer is queued, so a new reader must wait behind it.
    with pytest.raises(LockTimeout):
        lock.acquire_read(timeout=0.05)

    lock.release_read()
    thread.join(timeout=1)
    assert writer_done.is_set()
    with lock.read_locked(timeout=0.1):
        pass


def test_timed_out_writer_releases_queued_readers() -> None:
    lock = ReadWriteLock()
    lock.acquire_read()
    with pytest.raises(LockTimeout):
        lock.acquire_write(timeout=0.05)
    # No writer is waiting any more; readers proceed.
    lock.acquire_read(timeout=0.1)
    lock.release_read()
    lock.release_read()
