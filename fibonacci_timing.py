#!/usr/bin/env python3
# Times naive recursion against the fast big-integer routines and plots the gap

from __future__ import annotations

import argparse
import time
from typing import Callable, List, Sequence, Tuple

import matplotlib.pyplot as plt

from bigint_fibonacci import PROVIDERS, fib_fast, fib_naive, fib_naive_counted

Row = Tuple[int, float, float, int]


def time_call(func: Callable[[int], int], n: int, repeat: int = 1) -> Tuple[int, float]:
    """Best wall time of `repeat` calls; returns (value, seconds)."""
    best = float('inf')
    value = None
    for _ in range(max(1, repeat)):
        start = time.perf_counter()
        value = func(n)
        best = min(best, time.perf_counter() - start)
    return value, best


def compare_algorithms(indices: Sequence[int], provider: str = "sympy", repeat: int = 1) -> List[Row]:
    """Rows of (n, naive seconds, fast seconds, naive call count)."""
    rows = []
    for n in indices:
        slow_value, slow_t = time_call(fib_naive, n, repeat)
        fast_value, fast_t = time_call(lambda k: fib_fast(k, provider), n, repeat)
        if slow_value != fast_value:
            raise RuntimeError(f"naive and {provider} disagree at n={n}: {slow_value} != {fast_value}")
        _, calls = fib_naive_counted(n)
        rows.append((n, slow_t, fast_t, calls))
    return rows


def print_table(rows: Sequence[Row], provider: str) -> None:
    print(f"{'n':>4} | {'naive (s)':>12} | {provider + ' (s)':>14} | {'naive calls':>12} | {'calls ratio':>11}")
    prev_calls = None
    for n, slow_t, fast_t, calls in rows:
        growth = f"{calls / prev_calls:.4f}" if prev_calls else ""
        print(f"{n:>4} | {slow_t:>12.6f} | {fast_t:>14.6f} | {calls:>12,} | {growth:>11}")
        prev_calls = calls


def time_big(n: int, provider: str) -> None:
    value, elapsed = time_call(lambda k: fib_fast(k, provider), n)
    digits = len(str(value))
    print(f"f({n:,}) via {provider}: {digits:,} digits in {elapsed:.4f}s (leading digits {str(value)[:20]}...)")


def plot_rows(rows: Sequence[Row], provider: str, save_path: str | None = None, show: bool = True) -> None:
    xs = [r[0] for r in rows]
    plt.figure(figsize=(10, 5))
    plt.plot(xs, [r[1] for r in rows], marker='o', linestyle='-', linewidth=1, label="naive recursion")
    plt.plot(xs, [r[2] for r in rows], marker='s', linestyle='-', linewidth=1, label=f"fast ({provider})")
    plt.yscale("log")
    plt.xlabel("n")
    plt.ylabel("seconds (log scale)")
    plt.title("Time to compute $F_n$: naive recursion vs fast big-integer routine")
    plt.grid(True, which="both", ls="-", alpha=0.2)
    plt.legend()
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path)
        print(f"Saved plot to {save_path}")

    if show:
        plt.show()
    plt.close()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare naive recursive Fibonacci with a fast arbitrary-precision routine.")
    parser.add_argument("--start", type=int, default=5, help="First n timed for both algorithms (default: 5)")
    parser.add_argument("--end", type=int, default=30, help="Last n timed for both algorithms (default: 30)")
    parser.add_argument("--step", type=int, default=5, help="Step between timed n (default: 5)")
    parser.add_argument("--provider", choices=sorted(PROVIDERS), default="sympy", help="Fast routine (default: sympy)")
    parser.add_argument("--repeat", type=int, default=3, help="Best of this many runs per timing (default: 3)")
    parser.add_argument("--big", type=int, default=100_000, help="Also time the fast routine alone at this n (0 to skip)")
    parser.add_argument("--save", "-s", type=str, default=None, help="Optional file path to save the figure (e.g. timing.png).")
    parser.add_argument("--no-show", action="store_true", help="Do not call plt.show() (useful when saving only).")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    if args.start < 0 or args.start > args.end:
        raise SystemExit("Error: need 0 <= --start <= --end.")
    if args.step < 1:
        raise SystemExit("Error: --step must be positive.")
    if args.no_show:
        plt.switch_backend("Agg")

    rows = compare_algorithms(range(args.start, args.end + 1, args.step), args.provider, args.repeat)
    print_table(rows, args.provider)
    if args.big > 0:
        time_big(args.big, args.provider)
    if args.save or not args.no_show:
        plot_rows(rows, args.provider, save_path=args.save, show=not args.no_show)


if __name__ == "__main__":
    main()
