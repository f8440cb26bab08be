#!/usr/bin/env python3
# Where does (phi^n - psi^n) / sqrt(5) stop giving F_n when evaluated at a fixed precision?

from __future__ import annotations

import argparse
from typing import List, Optional, Sequence

import matplotlib.pyplot as plt

from bigint_fibonacci import fib_range
from matrix_power_fibonacci import fib_binet

MAX_PLOTTED_INDEX = 1400  # errors must stay below the float64 range


def binet_errors(n_max: int, digits: int | None) -> List[int]:
    """|binet(n) - F_n| for n = 1..n_max; digits=None uses the exact working precision."""
    exact = fib_range(1, n_max + 1)
    return [abs(fib_binet(n, digits) - f) for n, f in zip(range(1, n_max + 1), exact)]


def first_wrong_index(errors: Sequence[int]) -> Optional[int]:
    for n, err in enumerate(errors, start=1):
        if err:
            return n
    return None


def plot_precision(n_max: int, digit_settings: Sequence[int], save_path: str | None = None,
                   show: bool = True) -> dict:
    """Plots the rounding error per precision; returns {digits: first wrong n or None}."""
    xs = list(range(1, n_max + 1))
    first_wrong = {}

    fig, ax = plt.subplots(figsize=(10, 5))
    cmap = plt.get_cmap('tab10')
    for i, digits in enumerate(digit_settings):
        errors = binet_errors(n_max, digits)
        first_wrong[digits] = first_wrong_index(errors)
        color = cmap(i % cmap.N)
        ax.plot(xs, [float(e) for e in errors], marker='.', linestyle='-', linewidth=1,
                color=color, label=f"{digits} digits")
        if first_wrong[digits] is not None:
            ax.axvline(first_wrong[digits], color=color, linestyle=':', alpha=0.7)

    ax.set_yscale("symlog", linthresh=1)
    ax.set_xlabel("n")
    ax.set_ylabel(r"$|\mathrm{round}((\varphi^n - \psi^n)/\sqrt{5}) - F_n|$")
    ax.set_title("Binet closed form at fixed precision vs exact $F_n$")
    ax.grid(True, which="both", ls="-", alpha=0.2)
    ax.legend()
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path)
        print(f"Saved plot to {save_path}")

    if show:
        plt.show()
    plt.close(fig)
    return first_wrong


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compare the Binet formula at fixed precision with exact Fibonacci numbers.")
    parser.add_argument("--n-max", type=int, default=120, help="Last index checked (default: 120)")
    parser.add_argument("--digits", type=int, nargs="+", default=[10, 15, 30],
                        help="Working precisions in significant digits (default: 10 15 30)")
    parser.add_argument("--save", "-s", type=str, default=None, help="Optional file path to save the figure.")
    parser.add_argument("--no-show", action="store_true", help="Do not call plt.show().")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    if not 1 <= args.n_max <= MAX_PLOTTED_INDEX:
        raise SystemExit(f"Error: --n-max must be in [1, {MAX_PLOTTED_INDEX}].")
    if any(d < 1 for d in args.digits):
        raise SystemExit("Error: --digits must be positive.")
    if args.no_show:
        plt.switch_backend("Agg")

    first_wrong = plot_precision(args.n_max, args.digits, save_path=args.save, show=not args.no_show)
    for digits, n in first_wrong.items():
        if n is None:
            print(f"{digits:>4} digits: exact for every n <= {args.n_max}")
        else:
            print(f"{digits:>4} digits: first wrong at n = {n}")
    if first_wrong_index(binet_errors(args.n_max, None)) is None:
        print(f"adaptive precision: exact for every n <= {args.n_max}")


if __name__ == "__main__":
    main()
