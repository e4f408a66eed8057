"""Load harness and reporting for ConcurrentMap."""

from syncmap.profiling.harness import WorkloadResult, run_workload
from syncmap.profiling.report import format_report

__all__ = [
    "WorkloadResult",
    "format_report",
    "run_workload",
]
