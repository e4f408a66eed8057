"""Plain-text formatting for WorkloadResult."""
from __future__ import annotations

from syncmap.profiling.harness import WorkloadResult


def format_report(result: WorkloadResult, label: str = "Workload") -> str:
    """Format a WorkloadResult as a readable report string."""
    ops = result.total_ops or 1
    lines = [
        f"=== {label} ===",
        f"Threads:           {result.num_threads}",
        f"Operations:        {result.total_ops:,}",
        f"  Reads:           {result.reads:,} ({result.reads / ops * 100:.1f}%)",
        f"  Writes:          {result.writes:,} ({result.writes / ops * 100:.1f}%)",
        f"Total time:        {result.total_time_ms:.1f} ms",
        f"Throughput:        {result.ops_per_sec:,.0f} ops/sec",
        "",
        f"Final length:      {result.final_length:,}",
        f"Expected length:   {result.expected_length:,}",
        f"Lost updates:      {result.lost_updates:,}",
        f"Status:            {'OK' if result.ok else 'FAILED'}",
    ]
    return "\n".join(lines)
