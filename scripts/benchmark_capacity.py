"""Benchmark route capacity aggregation for growing numbers of sections.

Usage (PowerShell):
    python scripts/benchmark_capacity.py -Min 100 -Max 1000 -Step 300
    python -m scripts.benchmark_capacity -Min 100 -Max 1000 -Step 300 -Json

Notes:
    - Sections are folded linearly and by pairwise tree reduction; both must agree
      since track capacity addition is associative and commutative.
"""

from __future__ import annotations
import argparse, random, statistics, json, time, os, sys
from typing import List

# Ensure project root on path
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from trackcap.core.capacity import TrackCapacity, total_capacity, EMPTY_TRACK_CAPACITY  # type: ignore
from trackcap.core.config import CapacityConfig  # type: ignore
from trackcap.core.solver import evaluate_section  # type: ignore
from trackcap.sim.scenario import section_from_dict  # type: ignore
from scripts.generate_large_route import build_sections  # type: ignore


def tree_fold(caps: List[TrackCapacity]) -> TrackCapacity:
    if not caps:
        return EMPTY_TRACK_CAPACITY
    while len(caps) > 1:
        caps = [caps[i] + caps[i + 1] if i + 1 < len(caps) else caps[i] for i in range(0, len(caps), 2)]
    return caps[0]


def run_once(n_sections: int, fail_rate: float) -> dict:
    gp = CapacityConfig().general_parameters()
    sections = [section_from_dict(s) for s in build_sections(n_sections, fail_rate)]
    t0 = time.perf_counter()
    caps = [evaluate_section(s, gp) for s in sections]
    t1 = time.perf_counter()
    linear = total_capacity(caps)
    t2 = time.perf_counter()
    shuffled = caps[:]
    random.shuffle(shuffled)
    tree = tree_fold(shuffled)
    t3 = time.perf_counter()
    return {
        "n_sections": n_sections,
        "evaluate_s": t1 - t0,
        "linear_fold_s": t2 - t1,
        "tree_fold_s": t3 - t2,
        "agree": linear == tree,
    }


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument('-Min', type=int, default=100)
    ap.add_argument('-Max', type=int, default=1000)
    ap.add_argument('-Step', type=int, default=300)
    ap.add_argument('-Repeats', type=int, default=3)
    ap.add_argument('-FailRate', type=float, default=0.0)
    ap.add_argument('-Json', action='store_true')
    args = ap.parse_args()

    random.seed(42)
    rows = []
    for n in range(args.Min, args.Max + 1, args.Step):
        for _ in range(args.Repeats):
            row = run_once(n, args.FailRate)
            rows.append(row)
            if args.Json:
                print(json.dumps(row))
            else:
                print(f"Sections={row['n_sections']:<5} evaluate={row['evaluate_s']*1000:7.2f} ms "
                      f"linear={row['linear_fold_s']*1000:7.2f} ms tree={row['tree_fold_s']*1000:7.2f} ms agree={row['agree']}")
    if not args.Json:
        from collections import defaultdict
        by_n = defaultdict(list)
        for r in rows:
            by_n[r['n_sections']].append(r['evaluate_s'] + r['linear_fold_s'])
        print('\nSummary (mean ms per section count)')
        for n in sorted(by_n):
            ms = statistics.fmean(by_n[n]) * 1000
            print(f"  {n:>5}: {ms:7.2f} ms")


if __name__ == '__main__':
    main()
