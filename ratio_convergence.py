# Ratio r(n) = f(n+1) / f(n) of consecutive Fibonacci numbers and its approach to phi

from __future__ import annotations

from collections import abc
from fractions import Fraction
from typing import Callable, Iterable, Iterator, List, Sequence, Union

import numpy as np
import sympy as sp

from bigint_fibonacci import DEFAULT_PROVIDER, InputDomainError, check_index, fib_fast, fib_naive
from matrix_power_fibonacci import eigenvalues_exact

Values = Union[Sequence[int], Callable[[], Iterable[int]]]


class RatioSequence:
    """
    Exact ratios r(n) = f(n+1)/f(n) for n = 1..N-1 over values f(1)..f(N).

    `values` is either a sequence or a zero-argument callable returning a fresh
    iterable. Each iteration starts over from the source, so the sequence can be
    walked any number of times; nothing is cached and the input is never touched.
    Ratios are Fractions; rounding happens in floats() / evalf().
    """

    def __init__(self, values: Values, start: int = 1):
        if not callable(values) and not isinstance(values, (abc.Sequence, np.ndarray)):
            raise TypeError("values must be a sequence or a callable returning an iterable")
        self._values = values
        # Fibonacci index of the first value, used in error messages
        self.start = check_index(start)
        if not callable(values):
            for n, value in enumerate(values, start=self.start):
                self._check_term(n, value)

    @staticmethod
    def _check_term(n: int, value) -> None:
        if value == 0:
            raise InputDomainError(n, "ratio undefined, f(n) is zero at index")

    @classmethod
    def from_producer(cls, producer: Callable[[int], int], start: int, stop: int) -> "RatioSequence":
        """Lazily evaluate producer(n) for start <= n < stop."""
        start = check_index(start, minimum=1)
        stop = check_index(stop)
        return cls(lambda: (producer(n) for n in range(start, stop)), start=start)

    def _source(self) -> Iterable[int]:
        return self._values() if callable(self._values) else self._values

    def __iter__(self) -> Iterator[Fraction]:
        # a lazy source is checked term by term, before any ratio that uses the term
        prev = None
        for n, value in enumerate(self._source(), start=self.start):
            self._check_term(n, value)
            if prev is not None:
                yield Fraction(int(value), int(prev))
            prev = value

    def __len__(self) -> int:
        if callable(self._values):
            raise TypeError("length of a lazily produced RatioSequence is unknown")
        return max(len(self._values) - 1, 0)

    def floats(self) -> np.ndarray:
        """Ratios as float64, for plotting."""
        return np.array([float(r) for r in self], dtype=float)

    def evalf(self, digits: int = 30) -> List[sp.Float]:
        return [sp.Rational(r.numerator, r.denominator).evalf(digits) for r in self]

    def errors(self, digits: int = 50) -> List[sp.Float]:
        """|r(n) - phi|, with phi taken exactly and rounded to `digits` at the end."""
        phi = eigenvalues_exact()[0]
        return [sp.Abs(sp.Rational(r.numerator, r.denominator) - phi).evalf(digits) for r in self]


def ratio_sequence(n_max: int, method: str = "fast", provider: str = DEFAULT_PROVIDER) -> RatioSequence:
    """Ratios r(1)..r(n_max - 1) built lazily from f(1)..f(n_max)."""
    n_max = check_index(n_max, minimum=1)
    if method == "naive":
        return RatioSequence.from_producer(fib_naive, 1, n_max + 1)
    if method == "fast":
        return RatioSequence.from_producer(lambda n: fib_fast(n, provider), 1, n_max + 1)
    raise ValueError("method must be 'naive' or 'fast'")


def is_converging(errors: Sequence, start: int = 1) -> bool:
    """True if errors (indexed from n=1) strictly decrease from index `start` on."""
    tail = list(errors)[start - 1:]
    return all(b < a for a, b in zip(tail, tail[1:]))
