"""Writer-preferring reader/writer lock."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class LockTimeout(Exception):
    """Raised when a lock could not be acquired within the timeout."""


class ReadWriteLock:
    """Readers share the lock; a writer excludes everyone.

    Once a writer is waiting, new readers queue behind it so a steady stream
    of reads cannot starve writes.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer_active = False
        self._writers_waiting = 0

    def acquire_read(self, timeout: float | None = None) -> None:
        with self._cond:
            ok = self._cond.wait_for(
                lambda: not self._writer_active and self._writers_waiting == 0,
                timeout,
            )
            if not ok:
                raise LockTimeout("timed out waiting for read lock")
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self, timeout: float | None = None) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                ok = self._cond.wait_for(
                    lambda: not self._writer_active and self._readers == 0,
                    timeout,
                )
            finally:
                self._writers_waiting -= 1
            if not ok:
                # Readers blocked behind this writer may proceed now.
                self._cond.notify_all()
                raise LockTimeout("timed out waiting for write lock")
            self._writer_active = True

    def release_write(self) -> None:
        with self._cond:
            self._writer_active = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self, timeout: float | None = None) -> Iterator[None]:
        self.acquire_read(timeout)
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self, timeout: float | None = None) -> Iterator[None]:
        self.acquire_write(timeout)
        try:
            yield
        finally:
            self.release_write()
