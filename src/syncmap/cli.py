"""syncmap CLI entry point.

Usage: syncmap bench [--threads N] [--ops N] [--read-ratio F] ...
"""
import argparse
import logging
import sys

log = logging.getLogger(__name__)


def _add_bench_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "bench",
        help="Run a threaded read/write workload against one shared map.",
    )
    p.add_argument(
        "--threads", type=int, default=8,
        help="Worker threads (default: 8)",
    )
    p.add_argument(
        "--ops", type=int, default=10_000,
        help="Operations per thread (default: 10000)",
    )
    p.add_argument(
        "--read-ratio", type=float, default=0.8,
        help="Fraction of operations that are reads (default: 0.8)",
    )
    p.add_argument(
        "--key-space", type=int, default=1_000,
        help="Number of pre-populated keys that reads target (default: 1000)",
    )
    p.add_argument(
        "--seed", type=int, default=42,
        help="RNG seed for reproducible runs (default: 42)",
    )
    p.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging.",
    )


def _run_bench(args: argparse.Namespace) -> int:
    from syncmap.profiling.harness import run_workload
    from syncmap.profiling.report import format_report

    try:
        result = run_workload(
            num_threads=args.threads,
            ops_per_thread=args.ops,
            read_ratio=args.read_ratio,
            key_space=args.key_space,
            seed=args.seed,
        )
    except ValueError as exc:
        log.error("invalid workload: %s", exc)
        return 2

    print(format_report(result))
    return 0 if result.ok else 1


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="syncmap",
        description="Thread-safe map utilities -- load harness.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_bench_parser(subparsers)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "bench":
        sys.exit(_run_bench(args))
