from __future__ import annotations

import argparse
import json
import logging
import random
import statistics
import sys
from typing import Any

from sortbench.config.load_config import ConfigError, load_app_config
from sortbench.runtime.sorters import SORTERS


logger = logging.getLogger(__name__)


def generate_batch(
    *, batch_size: int, array_length: int, value_min: int, value_max: int, seed: int
) -> list[list[int]]:
    """Deterministic random batch (same seed -> same batch)."""
    rng = random.Random(seed)
    return [[rng.randint(value_min, value_max) for _ in range(array_length)] for _ in range(batch_size)]


def _at_least(name: str, value: int, *, min_v: int) -> int:
    if value < min_v:
        raise SystemExit(f"{name} must be >= {min_v}, got {value}")
    return value


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare sequential vs concurrent batch sorting in-process.")
    parser.add_argument("--batch-size", type=int, default=None, help="Number of arrays in the batch.")
    parser.add_argument("--array-length", type=int, default=None, help="Length of each array.")
    parser.add_argument("--value-min", type=int, default=None, help="Smallest generated value.")
    parser.add_argument("--value-max", type=int, default=None, help="Largest generated value.")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for the generated batch.")
    parser.add_argument("--repeat", type=int, default=None, help="Timed repetitions per mode.")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON.")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level (default: WARNING).")
    return parser.parse_args(argv)


def run_comparison(batch: list[list[int]], *, repeat: int) -> dict[str, Any]:
    """Run every sorter `repeat` times on the same batch and summarize timings."""
    report: dict[str, Any] = {"batch_size": len(batch), "repeat": repeat, "modes": {}, "agree": True}
    reference: list[list[int]] | None = None

    for mode, sorter in SORTERS.items():
        timings: list[int] = []
        for i in range(repeat):
            result = sorter(batch)
            timings.append(result.time_ns)
            if reference is None:
                reference = result.sorted_arrays
            elif result.sorted_arrays != reference:
                logger.error("%s run %d disagrees with the reference result", mode, i)
                report["agree"] = False
        report["modes"][mode] = {
            "best_ns": min(timings),
            "mean_ns": int(statistics.fmean(timings)),
        }
        logger.info("%s: best=%d ns mean=%d ns", mode, report["modes"][mode]["best_ns"], report["modes"][mode]["mean_ns"])

    single_best = report["modes"]["single"]["best_ns"]
    concurrent_best = report["modes"]["concurrent"]["best_ns"]
    report["speedup"] = (single_best / concurrent_best) if concurrent_best > 0 else None
    return report


def _print_text(report: dict[str, Any]) -> None:
    print(f"batch_size={report['batch_size']} repeat={report['repeat']}")
    for mode, stats in report["modes"].items():
        print(f"  {mode:<11} best={stats['best_ns']:>12} ns  mean={stats['mean_ns']:>12} ns")
    speedup = report["speedup"]
    print(f"  speedup (single/concurrent, best): {speedup:.2f}x" if speedup is not None else "  speedup: n/a")
    if not report["agree"]:
        print("  RESULT MISMATCH between modes", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv if argv is not None else sys.argv[1:])
    logging.basicConfig(level=str(args.log_level).upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        bench = load_app_config().bench
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 1

    def pick(flag: int | None, default: int) -> int:
        return int(flag) if flag is not None else int(default)

    batch_size = _at_least("batch_size", pick(args.batch_size, bench.batch_size), min_v=0)
    array_length = _at_least("array_length", pick(args.array_length, bench.array_length), min_v=0)
    repeat = _at_least("repeat", pick(args.repeat, bench.repeat), min_v=1)
    value_min = pick(args.value_min, bench.value_min)
    value_max = pick(args.value_max, bench.value_max)
    if value_min > value_max:
        raise SystemExit(f"value_min ({value_min}) must be <= value_max ({value_max})")

    batch = generate_batch(
        batch_size=batch_size,
        array_length=array_length,
        value_min=value_min,
        value_max=value_max,
        seed=pick(args.seed, bench.seed),
    )
    report = run_comparison(batch, repeat=repeat)

    if args.json:
        print(json.dumps(report, ensure_ascii=False))
    else:
        _print_text(report)
    return 0 if report["agree"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
