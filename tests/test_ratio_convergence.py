from fractions import Fraction

import numpy as np
import pytest

from bigint_fibonacci import InputDomainError, fib_fast, fib_range
from matrix_power_fibonacci import golden_ratio
from ratio_convergence import RatioSequence, is_converging, ratio_sequence

PHI = float(golden_ratio())


def test_first_ratios_are_exact():
    assert list(ratio_sequence(6)) == [
        Fraction(1), Fraction(2), Fraction(3, 2), Fraction(5, 3), Fraction(8, 5)]


def test_sequence_is_restartable():
    seq = ratio_sequence(25)
    first = list(seq)
    second = list(seq)
    assert first == second
    assert len(first) == 24


def test_input_is_not_mutated():
    values = fib_range(1, 21)
    copy = list(values)
    seq = RatioSequence(values)
    list(seq)
    seq.floats()
    assert values == copy
    assert len(seq) == 19


def test_callable_source_is_restartable():
    seq = RatioSequence(lambda: (fib_fast(n) for n in range(1, 11)))
    assert list(seq) == list(seq)
    with pytest.raises(TypeError):
        len(seq)


def test_plain_iterator_rejected():
    with pytest.raises(TypeError):
        RatioSequence(iter([1, 1, 2]))
    with pytest.raises(TypeError):
        RatioSequence(5)


def test_numpy_array_source():
    seq = RatioSequence(np.array([1, 1, 2, 3, 5], dtype=object))
    assert list(seq) == [1, 2, Fraction(3, 2), Fraction(5, 3)]


def test_short_inputs():
    assert list(RatioSequence([1])) == []
    assert list(RatioSequence([])) == []
    assert len(RatioSequence([])) == 0


def test_zero_term_is_a_domain_error():
    with pytest.raises(InputDomainError):
        RatioSequence([0, 1, 1])
    with pytest.raises(InputDomainError):
        RatioSequence.from_producer(fib_fast, 0, 5)


def test_trailing_zero_rejected_before_any_ratio():
    with pytest.raises(InputDomainError) as exc:
        RatioSequence([1, 1, 0])
    assert exc.value.index == 3


def test_zero_reported_at_fibonacci_index():
    with pytest.raises(InputDomainError) as exc:
        RatioSequence([5, 8, 0, 13], start=5)
    assert exc.value.index == 7


def test_lazy_zero_stops_before_its_ratio():
    seq = RatioSequence.from_producer(lambda n: 0 if n == 4 else fib_fast(n), 1, 8)
    seen = []
    with pytest.raises(InputDomainError) as exc:
        for r in seq:
            seen.append(r)
    assert seen == [1, 2]
    assert exc.value.index == 4


def test_error_decreases_and_is_small_at_20():
    errors = ratio_sequence(40).errors()
    assert is_converging(errors, start=5)
    assert errors[19] < 1e-6


def test_is_converging_helper():
    assert is_converging([5, 4, 3, 2])
    assert not is_converging([5, 4, 4, 2])
    assert is_converging([1, 9, 3, 2], start=2)
    assert is_converging([])


def test_floats_for_plotting():
    ys = ratio_sequence(50).floats()
    assert ys.dtype == np.float64
    assert ys.shape == (49,)
    assert ys[-1] == pytest.approx(PHI, abs=1e-15)


def test_large_indices_do_not_overflow_floats():
    seq = RatioSequence.from_producer(lambda n: fib_fast(n, "doubling"), 1500, 1503)
    ys = seq.floats()
    assert np.all(np.isfinite(ys))
    assert list(ys) == pytest.approx([PHI, PHI], abs=1e-15)


def test_evalf_precision():
    last = ratio_sequence(120).evalf(40)[-1]
    assert abs(last - golden_ratio(60)) < 1e-35


def test_naive_and_fast_methods_agree():
    assert list(ratio_sequence(20, method="naive")) == list(ratio_sequence(20, provider="matrix"))
    with pytest.raises(ValueError):
        ratio_sequence(20, method="closed")
