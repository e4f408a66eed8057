"""Read-write lock: many concurrent readers OR one exclusive writer.

Every ConcurrentMap owns exactly one of these. Point reads (get,
exists, length, snapshots) take the shared side; point writes (add,
delete, update) take the exclusive side.

Implementation: a single threading.Condition guarding three counters.
Writer preference: once a writer is queued, new readers wait. Under a
steady stream of readers a plain reader-count lock never lets a
writer in.

Usage:
    lock = ReadWriteLock()

    with lock.read():
        value = data[key]

    with lock.write():
        data[key] = value

The lock is not reentrant. A thread that already holds it (in either
mode) and asks again will block forever.
"""
from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """Condition-based read-write lock with writer preference."""

    __slots__ = ("_readers", "_writers_waiting", "_writer_active", "_cond")

    def __init__(self) -> None:
        self._readers: int = 0
        self._writers_waiting: int = 0
        self._writer_active: bool = False
        self._cond = threading.Condition(threading.Lock())

    # -- explicit primitives --------------------------------------------

    def acquire_read(self) -> None:
        """Block until no writer is active or queued, then join the readers."""
        with self._cond:
            while self._writer_active or self._writers_waiting > 0:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers == 0:
                raise RuntimeError("release_read() called without a held read lock")
            self._readers -= 1
            if self._readers == 0:
                # last reader out wakes any queued writer
                self._cond.notify_all()

    def acquire_write(self) -> None:
        """Queue as a writer, then block until readers and writer drain."""
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer_active or self._readers > 0:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer_active = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer_active:
                raise RuntimeError("release_write() called without a held write lock")
            self._writer_active = False
            self._cond.notify_all()

    # -- context managers -----------------------------------------------

    @contextmanager
    def read(self) -> Iterator[None]:
        """Shared section. Blocks while a writer is active or waiting."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        """Exclusive section. Blocks while any reader or writer is inside."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    # -- introspection (racy by nature, for tests and monitoring) -------

    @property
    def readers(self) -> int:
        with self._cond:
            return self._readers

    @property
    def writers_waiting(self) -> int:
        with self._cond:
            return self._writers_waiting

    @property
    def writer_active(self) -> bool:
        with self._cond:
            return self._writer_active

    def __repr__(self) -> str:
        with self._cond:
            return (
                f"ReadWriteLock(readers={self._readers}, "
                f"writer_active={self._writer_active}, "
                f"writers_waiting={self._writers_waiting})"
            )
