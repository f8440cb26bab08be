#!/usr/bin/env python3
# Plots r(n) = F_(n+1) / F_n converging to the golden ratio, the dominant eigenvalue of [[1,1],[1,0]]

from __future__ import annotations

import argparse

import matplotlib.pyplot as plt

from bigint_fibonacci import PROVIDERS
from matrix_power_fibonacci import DEFAULT_DIGITS, characteristic_polynomial, eigenvalues, fib_matrix_power
from ratio_convergence import is_converging, ratio_sequence


def print_eigen_report(digits: int = DEFAULT_DIGITS) -> None:
    phi, psi = eigenvalues(digits)
    print(f"F = {fib_matrix_power(1)}")
    print(f"characteristic polynomial: {characteristic_polynomial().as_expr()} = 0")
    print(f"phi = {phi}")
    print(f"psi = {psi}")
    print(f"phi^2 - phi - 1 = {(phi * phi - phi - 1).evalf(6)}")


def compute_and_plot(n_max: int, provider: str = "sympy", save_path: str | None = None,
                     show: bool = True, log_scale: bool = False, digits: int = 30) -> None:
    ratios = ratio_sequence(n_max, provider=provider)
    exact = list(ratios)
    errors = ratios.errors(digits)
    ys = ratios.floats()
    xs = list(range(1, len(exact) + 1))

    print("n   -> F_(n+1)/F_n  (exact)    -> (float plotted) -> |r(n) - phi|")
    for n, frac, fval, err in zip(xs, exact, ys, errors):
        print(f"{n:3d} -> {frac} -> {fval:.12g} -> {float(err):.3e}")
    print(f"error strictly decreasing: {is_converging(errors)}")

    phi = float(eigenvalues()[0])
    plt.figure(figsize=(10, 5))
    if log_scale:
        plt.plot(xs, [float(e) for e in errors], marker='o', linestyle='-', linewidth=1)
        plt.yscale("log")
        plt.ylabel(r"$|F_{n+1}/F_n - \varphi|$")
    else:
        plt.plot(xs, ys, marker='o', linestyle='-', linewidth=1, label=r"$F_{n+1}/F_n$")
        plt.axhline(phi, color='r', linestyle='dashed', linewidth=1.5, label=rf"$\varphi \approx {phi:.6f}$")
        plt.ylabel(r"$F_{n+1}/F_n$")
        plt.legend()
    plt.xlabel("n")
    plt.title(r"Convergence of $F_{{n+1}}/F_n$ to the golden ratio for $n$ in [1, {}]".format(len(xs)))
    plt.grid(True)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path)
        print(f"Saved plot to {save_path}")

    if show:
        plt.show()
    plt.close()


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Plot F_(n+1)/F_n against the golden ratio.")
    parser.add_argument("--n-max", type=int, default=30, help="Use F_1..F_n-max (default: 30)")
    parser.add_argument("--provider", choices=sorted(PROVIDERS), default="sympy", help="Fast routine (default: sympy)")
    parser.add_argument("--digits", type=int, default=DEFAULT_DIGITS, help="Significant digits for phi and psi (default: 80)")
    parser.add_argument("--save", "-s", type=str, default=None, help="Optional file path to save the figure (e.g. output.png).")
    parser.add_argument("--no-show", action="store_true", help="Do not call plt.show() (useful when saving only).")
    parser.add_argument("--log", action="store_true", help="Plot |r(n) - phi| on a log scale instead of r(n).")
    return parser.parse_args(argv)


def main(argv=None) -> None:
    args = parse_args(argv)
    if args.n_max < 2:
        raise SystemExit("Error: --n-max must be >= 2.")
    if args.digits < 1:
        raise SystemExit("Error: --digits must be positive.")
    if args.no_show:
        plt.switch_backend("Agg")
    print_eigen_report(args.digits)
    compute_and_plot(args.n_max, provider=args.provider, save_path=args.save,
                     show=not args.no_show, log_scale=args.log)


if __name__ == "__main__":
    main()
