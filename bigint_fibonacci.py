# Arbitrary-precision Fibonacci numbers, slow and fast
# f(0) = 0, f(1) = f(2) = 1, f(3) = 2, ...

from __future__ import annotations

import operator
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
import sympy as sp


class InputDomainError(ValueError):
    """Index outside the domain of the sequence (e.g. n < 0)."""

    def __init__(self, index, message: str = "index must be non-negative"):
        self.index = index
        super().__init__(f"{message}: got {index}")


class ResourceExhaustionError(OverflowError):
    """Value does not fit the fixed-width integer type that was asked for."""


DEFAULT_PROVIDER = "sympy"


# ---------- Input checks & integer types ----------
def check_index(n, minimum: int = 0) -> int:
    # any integral type (int, numpy, sympy.Integer) but not bool
    if isinstance(n, bool):
        raise TypeError("n must be an integer")
    try:
        n = operator.index(n)
    except TypeError:
        raise TypeError("n must be an integer") from None
    if n < minimum:
        raise InputDomainError(n, f"index must be >= {minimum}")
    return n


def max_representable_index(int_type=int) -> Optional[int]:
    """Largest n with f(n) inside the range of int_type, None if unbounded."""
    if not (isinstance(int_type, type) and issubclass(int_type, np.integer)):
        return None
    top = int(np.iinfo(int_type).max)
    n, a, b = 0, 0, 1
    while b <= top:
        a, b = b, a + b
        n += 1
    return n


def check_int_type(int_type) -> None:
    """Only integral result types: int, sympy.Integer or a numpy integer type."""
    if not (isinstance(int_type, type)
            and issubclass(int_type, (int, np.integer, sp.Integer))
            and not issubclass(int_type, bool)):
        raise TypeError(f"int_type must be an integer type, not {int_type!r}")


def as_integer(value: int, int_type=int):
    """Express an exact result as int_type; fixed-width overflow is an error."""
    if int_type is int:
        return value
    check_int_type(int_type)
    if issubclass(int_type, np.integer):
        info = np.iinfo(int_type)
        if value > info.max or value < info.min:
            raise ResourceExhaustionError(
                f"{value.bit_length()}-bit value does not fit {np.dtype(int_type).name}")
    return int_type(value)


# ---------- Naive recursion ----------
def _naive(n: int) -> int:
    if n < 2:
        return n
    return _naive(n - 1) + _naive(n - 2)


def fib_naive(n: int, int_type=int):
    """Textbook recursion, no memoization: Theta(phi^n) calls."""
    n = check_index(n)
    check_int_type(int_type)
    return as_integer(_naive(n), int_type)


def fib_naive_counted(n: int) -> Tuple[int, int]:
    """Same recursion as fib_naive, returning (f(n), number of calls made)."""
    n = check_index(n)
    calls = 0

    def rec(k: int) -> int:
        nonlocal calls
        calls += 1
        if k < 2:
            return k
        return rec(k - 1) + rec(k - 2)

    value = rec(n)
    return value, calls


# ---------- Fast doubling ----------
def fib_fast_doubling_pair(n: int) -> Tuple[int, int]:
    """Iterative fast-doubling: returns (f(n), f(n+1))."""
    n = check_index(n)
    if n == 0:
        return 0, 1
    bits = bin(n)[3:]  # skip '0b' and leading 1
    a, b = 1, 1  # (f(1), f(2)) for the leading bit
    for bit in bits:
        # c = f(2k), d = f(2k+1)
        c = a * (2 * b - a)
        d = a * a + b * b
        if bit == '0':
            a, b = c, d
        else:
            a, b = d, c + d
    return a, b


def fib_fast_doubling(n: int, int_type=int):
    check_int_type(int_type)
    return as_integer(fib_fast_doubling_pair(n)[0], int_type)


def fast_doubling_steps(n: int) -> int:
    """Number of doubling steps taken for index n (its bit length)."""
    return check_index(n).bit_length()


# ---------- Providers ----------
def _sympy_fib(n: int) -> int:
    return int(sp.fibonacci(n))


def _matrix_fib(n: int) -> int:
    from matrix_power_fibonacci import fib_matrix
    return fib_matrix(n)


PROVIDERS: Dict[str, Callable[[int], int]] = {
    "sympy": _sympy_fib,
    "doubling": lambda n: fib_fast_doubling_pair(n)[0],
    "matrix": _matrix_fib,
}


def fib_fast(n: int, provider: str = DEFAULT_PROVIDER, int_type=int):
    """
    Fast arbitrary-precision f(n).

    provider picks the big-integer routine doing the work:
      'sympy'    -> sympy.fibonacci (mpmath's native integer fib)
      'doubling' -> local fast-doubling
      'matrix'   -> 2x2 matrix power by squaring
    """
    try:
        func = PROVIDERS[provider]
    except KeyError:
        raise ValueError(f"unknown provider {provider!r}; choose from {sorted(PROVIDERS)}") from None
    n = check_index(n)
    check_int_type(int_type)
    return as_integer(func(n), int_type)


def fib_range(start: int, stop: int, method: str = "fast",
              provider: str = DEFAULT_PROVIDER, int_type=int) -> List:
    """[f(start), ..., f(stop - 1)]."""
    start = check_index(start)
    stop = check_index(stop)
    if method == "naive":
        return [fib_naive(n, int_type) for n in range(start, stop)]
    if method == "fast":
        return [fib_fast(n, provider, int_type) for n in range(start, stop)]
    raise ValueError("method must be 'naive' or 'fast'")
