#!/usr/bin/env python3
"""Generator throughput profiler.

Usage:
    python scripts/profile_generator.py --draws 200000 --seed 123
    python scripts/profile_generator.py --draws 200000 --cprofile gen.prof
    python scripts/profile_generator.py --bytes 4096 --batches 200

Reports:
    - rand_int throughput (draws/sec) and per-batch timing (min, p50, p95, max)
    - rand_bytes throughput (values/sec)
    - Output histogram over [low, high] as a sanity check for gross bias
    - Optional: cProfile dump (crc32 usually dominates)
"""

from __future__ import annotations

import argparse
import cProfile
import io
import os
import pstats
import statistics
import sys
import time
from collections import Counter

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from xprng.__main__ import parse_seed
from xprng.core.generator import PseudoRandom

_BATCH = 1000


def _run_ints(rng: PseudoRandom, draws: int, low: int, high: int) -> dict:
    """Draw in fixed-size batches and collect timing and a histogram."""
    batch_times: list[float] = []
    histogram: Counter[int] = Counter()

    remaining = draws
    while remaining > 0:
        n = min(_BATCH, remaining)
        t0 = time.perf_counter()
        values = [rng.rand_int(low, high) for _ in range(n)]
        batch_times.append((time.perf_counter() - t0) / n)
        histogram.update(values)
        remaining -= n

    return {"batch_times": batch_times, "histogram": histogram}


def _run_bytes(rng: PseudoRandom, length: int, batches: int) -> list[float]:
    times: list[float] = []
    for _ in range(batches):
        t0 = time.perf_counter()
        rng.rand_bytes(length, decimal=True)
        times.append(time.perf_counter() - t0)
    return times


def _percentile(data: list[float], p: float) -> float:
    """Simple percentile calculation."""
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(ints: dict, byte_times: list[float], args: argparse.Namespace) -> None:
    per_draw = ints["batch_times"]
    histogram: Counter[int] = ints["histogram"]

    print("\n" + "=" * 60)
    print("  GENERATOR PERFORMANCE REPORT")
    print("=" * 60)

    if per_draw:
        mean_us = statistics.mean(per_draw) * 1e6
        print(f"\n  rand_int draws:    {args.draws}")
        print(f"  Throughput:        {1e6 / mean_us:,.0f} draws/sec")
        print(f"\n  {'Metric':<16} {'us/draw':>10}")
        print(f"  {'-' * 16} {'-' * 10}")
        print(f"  {'Min':<16} {min(per_draw) * 1e6:>10.3f}")
        print(f"  {'P50 (median)':<16} {_percentile(per_draw, 50) * 1e6:>10.3f}")
        print(f"  {'P95':<16} {_percentile(per_draw, 95) * 1e6:>10.3f}")
        print(f"  {'Max':<16} {max(per_draw) * 1e6:>10.3f}")

    if histogram:
        buckets = args.high - args.low + 1
        expected = args.draws / buckets
        worst = max(abs(histogram.get(v, 0) - expected) for v in range(args.low, args.high + 1))
        print(f"\n  Buckets:           {buckets}")
        print(f"  Expected/bucket:   {expected:.1f}")
        print(f"  Worst deviation:   {worst:.1f} ({worst / expected * 100:.1f}%)")

    if byte_times:
        total = sum(byte_times)
        print(f"\n  rand_bytes:        {args.batches} x {args.bytes} values")
        print(f"  Throughput:        {args.batches * args.bytes / total:,.0f} values/sec")

    print("\n" + "=" * 60)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile the pseudo-random generator")
    parser.add_argument("--draws", type=int, default=100_000, help="Number of rand_int draws")
    parser.add_argument("--seed", type=str, default="123", help="Seed (integer or text)")
    parser.add_argument("--min", dest="low", type=int, default=0)
    parser.add_argument("--max", dest="high", type=int, default=255)
    parser.add_argument("--bytes", type=int, default=1024, help="Length of each rand_bytes call")
    parser.add_argument("--batches", type=int, default=50, help="Number of rand_bytes calls")
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    args = parser.parse_args()

    rng = PseudoRandom(parse_seed(args.seed))

    profiler = cProfile.Profile() if args.cprofile else None
    if profiler:
        profiler.enable()

    ints = _run_ints(rng, args.draws, args.low, args.high)
    byte_times = _run_bytes(rng, args.bytes, args.batches)

    if profiler:
        profiler.disable()
        profiler.dump_stats(args.cprofile)
        stream = io.StringIO()
        pstats.Stats(profiler, stream=stream).sort_stats("cumulative").print_stats(10)
        print(stream.getvalue())
        print(f"cProfile written to {args.cprofile}")

    _print_report(ints, byte_times, args)


if __name__ == "__main__":
    main()
