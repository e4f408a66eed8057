"""Tests for the ReadWriteLock.

Covers: concurrent readers, writer exclusion, writer preference,
misuse detection, introspection, and no-deadlock under stress.
"""
from __future__ import annotations

import threading
import time

import pytest

from syncmap.concurrency.rwlock import ReadWriteLock


def test_multiple_readers():
    """8 threads hold the read lock at the same time."""
    lock = ReadWriteLock()
    barrier = threading.Barrier(8)
    peak = 0
    peak_lock = threading.Lock()

    def reader():
        nonlocal peak
        with lock.read():
            # every reader must be inside before any can pass
            barrier.wait(timeout=5.0)
            with peak_lock:
                peak = max(peak, lock.readers)

    threads = [threading.Thread(target=reader) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10.0)

    assert peak == 8
    assert lock.readers == 0


def test_writer_excludes_readers():
    """While a writer holds the lock, readers block."""
    lock = ReadWriteLock()
    writer_entered = threading.Event()
    writer_release = threading.Event()
    reader_entered = threading.Event()

    def writer():
        with lock.write():
            writer_entered.set()
            writer_release.wait(timeout=5.0)

    def reader():
        with lock.read():
            reader_entered.set()

    wt = threading.Thread(target=writer)
    wt.start()
    assert writer_entered.wait(timeout=5.0)
    assert lock.writer_active is True

    rt = threading.Thread(target=reader)
    rt.start()
    assert not reader_entered.wait(timeout=0.2), "Reader entered while writer held the lock"

    writer_release.set()
    wt.join(timeout=5.0)
    assert reader_entered.wait(timeout=5.0), "Reader never entered after writer released"
    rt.join(timeout=5.0)
    assert lock.writer_active is False


def test_writer_excludes_writer():
    lock = ReadWriteLock()
    first_in = threading.Event()
    first_release = threading.Event()
    second_in = threading.Event()

    def first():
        with lock.write():
            first_in.set()
            first_release.wait(timeout=5.0)

    def second():
        with lock.write():
            second_in.set()

    t1 = threading.Thread(target=first)
    t1.start()
    assert first_in.wait(timeout=5.0)

    t2 = threading.Thread(target=second)
    t2.start()
    assert not second_in.wait(timeout=0.2)

    first_release.set()
    t1.join(timeout=5.0)
    t2.join(timeout=5.0)
    assert second_in.is_set()


def test_writer_preference():
    """Once a writer is waiting, new readers queue behind it."""
    lock = ReadWriteLock()
    reader1_entered = threading.Event()
    reader1_release = threading.Event()
    reader2_entered = threading.Event()
    order: list[str] = []

    def reader1():
        with lock.read():
            reader1_entered.set()
            reader1_release.wait(timeout=5.0)

    def writer():
        with lock.write():
            order.append("writer")

    def reader2():
        with lock.read():
            order.append("reader2")
            reader2_entered.set()

    t1 = threading.Thread(target=reader1)
    t1.start()
    assert reader1_entered.wait(timeout=5.0)

    tw = threading.Thread(target=writer)
    tw.start()
    # wait until the writer is actually queued
    deadline = time.monotonic() + 5.0
    while lock.writers_waiting == 0 and time.monotonic() < deadline:
        time.sleep(0.005)
    assert lock.writers_waiting == 1

    t2 = threading.Thread(target=reader2)
    t2.start()
    assert not reader2_entered.wait(timeout=0.2), "New reader jumped a waiting writer"

    reader1_release.set()
    for t in (t1, tw, t2):
        t.join(timeout=5.0)

    assert order == ["writer", "reader2"]


def test_release_without_acquire_raises():
    lock = ReadWriteLock()
    with pytest.raises(RuntimeError):
        lock.release_read()
    with pytest.raises(RuntimeError):
        lock.release_write()


def test_explicit_primitives_match_context_managers():
    lock = ReadWriteLock()
    lock.acquire_read()
    lock.acquire_read()
    assert lock.readers == 2
    lock.release_read()
    lock.release_read()
    assert lock.readers == 0

    lock.acquire_write()
    assert lock.writer_active is True
    lock.release_write()
    assert lock.writer_active is False


def test_lock_released_when_body_raises():
    lock = ReadWriteLock()
    with pytest.raises(KeyError):
        with lock.write():
            raise KeyError("boom")
    assert lock.writer_active is False

    with pytest.raises(KeyError):
        with lock.read():
            raise KeyError("boom")
    assert lock.readers == 0


def test_repr_shows_state():
    lock = ReadWriteLock()
    with lock.read():
        assert "readers=1" in repr(lock)


def test_no_deadlock():
    """64 threads alternating read/write complete within 5 seconds."""
    lock = ReadWriteLock()
    counter = 0

    def worker(n):
        nonlocal counter
        for _ in range(50):
            if n % 2 == 0:
                with lock.read():
                    _ = counter
            else:
                with lock.write():
                    counter += 1

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(64)]
    start = time.perf_counter()
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10.0)
    elapsed = time.perf_counter() - start

    assert elapsed < 5.0, f"Took {elapsed:.1f}s, possible deadlock"
    # the write lock alone must serialize the increments
    assert counter == 32 * 50, f"Counter={counter}, expected {32 * 50}"
