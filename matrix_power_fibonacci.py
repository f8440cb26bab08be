# Fibonacci numbers from powers of F = [[1, 1], [1, 0]], and the eigenvalues of F
#
#   F^k = [[f(k+1), f(k)], [f(k), f(k-1)]]
#   F^(n-1) . [1, 1] = [f(n+1), f(n)]

from __future__ import annotations

import operator
from typing import Tuple

import numpy as np
import sympy as sp

from bigint_fibonacci import InputDomainError, as_integer, check_index, check_int_type

Matrix2 = Tuple[Tuple[int, int], Tuple[int, int]]

FIB_MATRIX: Matrix2 = ((1, 1), (1, 0))
IDENTITY: Matrix2 = ((1, 0), (0, 1))
DEFAULT_DIGITS = 80
LOG10_PHI = 0.20898764024997873


# ---------- 2x2 integer arithmetic ----------
def mat_mult(A: Matrix2, B: Matrix2) -> Matrix2:
    return (
        (A[0][0] * B[0][0] + A[0][1] * B[1][0],
         A[0][0] * B[0][1] + A[0][1] * B[1][1]),
        (A[1][0] * B[0][0] + A[1][1] * B[1][0],
         A[1][0] * B[0][1] + A[1][1] * B[1][1])
    )


def mat_vec(A: Matrix2, v: Tuple[int, int]) -> Tuple[int, int]:
    return (A[0][0] * v[0] + A[0][1] * v[1],
            A[1][0] * v[0] + A[1][1] * v[1])


def mat_pow(mat: Matrix2, exp: int) -> Matrix2:
    """mat**exp by repeated squaring: O(log exp) 2x2 multiplications."""
    if isinstance(exp, bool):
        raise TypeError("exponent must be an integer")
    try:
        e = operator.index(exp)
    except TypeError:
        raise TypeError("exponent must be an integer") from None
    if e < 0:
        raise InputDomainError(e, "exponent must be non-negative")
    result = IDENTITY
    base = mat
    while e > 0:
        if e & 1:
            result = mat_mult(result, base)
        e >>= 1
        if e:
            base = mat_mult(base, base)
    return result


# ---------- Fibonacci via F^k ----------
def fib_matrix_power(k: int) -> Matrix2:
    """Raw F^k."""
    return mat_pow(FIB_MATRIX, k)


def fib_matrix_power_array(k: int) -> np.ndarray:
    """F^k as a numpy object array, so entries stay arbitrary precision."""
    return np.array(fib_matrix_power(k), dtype=object)


def fib_matrix(n: int, int_type=int):
    n = check_index(n)
    check_int_type(int_type)
    if n == 0:
        return as_integer(0, int_type)
    _, f_n = mat_vec(fib_matrix_power(n - 1), (1, 1))
    return as_integer(f_n, int_type)


# ---------- Eigen-analysis ----------
def _trace_det(M: Matrix2 = FIB_MATRIX) -> Tuple[int, int]:
    return M[0][0] + M[1][1], M[0][0] * M[1][1] - M[0][1] * M[1][0]


def characteristic_polynomial(symbol: str = "lambda") -> sp.Poly:
    """lambda^2 - tr(F) lambda + det(F), i.e. lambda^2 - lambda - 1."""
    lam = sp.Symbol(symbol)
    tr, det = _trace_det()
    return sp.Poly(lam ** 2 - tr * lam + det, lam)


def eigenvalues_exact() -> Tuple[sp.Expr, sp.Expr]:
    """Quadratic formula on the characteristic polynomial, larger root first."""
    tr, det = _trace_det()
    root = sp.sqrt(tr * tr - 4 * det)
    return (tr + root) / 2, (tr - root) / 2


def eigenvalues(digits: int | None = None):
    """
    (phi, psi). digits=None gives numpy float64 values, good enough for plots;
    otherwise sympy Floats with `digits` significant digits.
    """
    if digits is None:
        tr, det = _trace_det()
        root = np.sqrt(np.float64(tr * tr - 4 * det))
        return (tr + root) / 2, (tr - root) / 2
    if digits < 1:
        raise ValueError("digits must be positive")
    phi, psi = eigenvalues_exact()
    return phi.evalf(digits), psi.evalf(digits)


def golden_ratio(digits: int | None = None):
    return eigenvalues(digits)[0]


def fib_binet(n: int, digits: int | None = None) -> int:
    """
    Closed form f(n) = (phi^n - psi^n) / sqrt(5), rounded to the nearest integer.
    With digits=None the working precision grows with n so the rounding is exact;
    a fixed small `digits` shows where floating evaluation breaks down.
    """
    n = check_index(n)
    if digits is None:
        digits = int(n * LOG10_PHI) + 20
    phi, psi = eigenvalues_exact()
    value = ((phi ** n - psi ** n) / sp.sqrt(5)).evalf(digits)
    return int(sp.floor(value + sp.Rational(1, 2)))
