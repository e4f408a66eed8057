"""Threaded load harness for ConcurrentMap.

Hammers one shared map from num_threads workers with a mix of point
reads and point writes, then checks that nothing was lost.

Key layout:
  - ("seed", n) for n in range(key_space): pre-populated before the
    workers start. All reads target these.
  - (thread_id, i): written by exactly one worker. Disjoint across
    threads, so after the run the map must hold every one of them.

A lost update (a written key missing at the end) means the write lock
failed to serialize two writers. The check counts them explicitly
instead of trusting length() alone.
"""
from __future__ import annotations

import logging
import random
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from syncmap.maps.concurrent_map import ConcurrentMap

log = logging.getLogger(__name__)


@dataclass(slots=True)
class WorkloadResult:
    """Counts and timings from a single run."""
    num_threads: int
    total_ops: int
    reads: int
    writes: int
    total_time_ms: float
    ops_per_sec: float
    final_length: int
    expected_length: int
    lost_updates: int

    @property
    def ok(self) -> bool:
        return self.lost_updates == 0 and self.final_length == self.expected_length


def run_workload(
    num_threads: int = 8,
    ops_per_thread: int = 10_000,
    read_ratio: float = 0.8,
    key_space: int = 1_000,
    seed: int = 42,
) -> WorkloadResult:
    """Run the mixed read/write workload and return timing data.

    Each worker draws from its own random.Random(seed + thread_id), so a
    given seed always produces the same read/write split per thread.
    """
    if num_threads < 1:
        raise ValueError(f"num_threads must be >= 1, got {num_threads}")
    if ops_per_thread < 0:
        raise ValueError(f"ops_per_thread must be >= 0, got {ops_per_thread}")
    if not 0.0 <= read_ratio <= 1.0:
        raise ValueError(f"read_ratio must be within [0, 1], got {read_ratio}")
    if key_space < 1:
        raise ValueError(f"key_space must be >= 1, got {key_space}")

    log.debug(
        "workload: threads=%d ops/thread=%d read_ratio=%.2f key_space=%d seed=%d",
        num_threads, ops_per_thread, read_ratio, key_space, seed,
    )

    shared: ConcurrentMap = ConcurrentMap({("seed", n): n for n in range(key_space)})
    start_gate = threading.Barrier(num_threads + 1)

    def _worker(thread_id: int) -> tuple[int, int]:
        rng = random.Random(seed + thread_id)
        reads = writes = 0
        start_gate.wait()
        for _ in range(ops_per_thread):
            if rng.random() < read_ratio:
                shared.get(("seed", rng.randrange(key_space)))
                reads += 1
            else:
                shared.add((thread_id, writes), writes)
                writes += 1
        return reads, writes

    with ThreadPoolExecutor(max_workers=num_threads) as pool:
        futures = [pool.submit(_worker, tid) for tid in range(num_threads)]
        # release all workers at once so they actually contend
        start_gate.wait()
        t0 = time.perf_counter()
        counts = [f.result() for f in futures]
        elapsed_ms = (time.perf_counter() - t0) * 1000

    total_reads = sum(r for r, _ in counts)
    total_writes = sum(w for _, w in counts)
    lost = sum(
        1
        for tid, (_, w) in enumerate(counts)
        for i in range(w)
        if not shared.exists((tid, i))
    )
    final_length = shared.length()
    expected = key_space + total_writes
    if lost or final_length != expected:
        log.error(
            "lost updates detected: %d missing keys, length %d != expected %d",
            lost, final_length, expected,
        )

    total_ops = total_reads + total_writes
    return WorkloadResult(
        num_threads=num_threads,
        total_ops=total_ops,
        reads=total_reads,
        writes=total_writes,
        total_time_ms=elapsed_ms,
        ops_per_sec=total_ops / (elapsed_ms / 1000) if elapsed_ms > 0 else 0.0,
        final_length=final_length,
        expected_length=expected,
        lost_updates=lost,
    )
