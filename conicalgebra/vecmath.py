"""Scalar and vector arithmetic on sequences of floats.

Vector functions take any iterable of numbers and return new lists.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Sequence


def scalar_clip(
    value: float, min_thresh: float, max_thresh: float, min_new: float, max_new: float
) -> float:
    """Replace values below ``min_thresh`` by ``min_new`` and above ``max_thresh`` by ``max_new``."""
    if value < min_thresh:
        return min_new
    if value > max_thresh:
        return max_new
    return value


def logsafe(value: float) -> float:
    """log(value) for positive values, -inf otherwise."""
    if value <= 0.0:
        return -math.inf
    return math.log(value)


def triangular_number(k: int) -> int:
    """Number of entries in a k x k triangle."""
    return (k * (k + 1)) >> 1


def triangular_index(k: int) -> int:
    """0-based index of the k-th diagonal entry in a packed triangle."""
    return (k * (k + 3)) >> 1


def _recip(v: float) -> float:
    if v == 0.0:
        return math.copysign(math.inf, v)
    return 1.0 / v


def _sqrt(v: float) -> float:
    if v < 0.0 or math.isnan(v):
        return math.nan
    return math.sqrt(v)


def select(x: Sequence[float], index: Sequence[bool]) -> list[float]:
    """Elements of ``x`` whose flag in ``index`` is true."""
    return [v for v, keep in zip(x, index, strict=True) if keep]


def scalarop(op: Callable[[float], float], x: Iterable[float]) -> list[float]:
    """Apply ``op`` to every element."""
    return [op(v) for v in x]


def translate(x: Iterable[float], c: float) -> list[float]:
    """Add ``c`` to every element."""
    return [v + c for v in x]


def scale(x: Iterable[float], c: float) -> list[float]:
    """Multiply every element by ``c``."""
    return [v * c for v in x]


def recip(x: Iterable[float]) -> list[float]:
    """Elementwise reciprocal; zeros map to signed infinity."""
    return [_recip(v) for v in x]


def sqrt(x: Iterable[float]) -> list[float]:
    """Elementwise square root; negative entries map to NaN."""
    return [_sqrt(v) for v in x]


def rsqrt(x: Iterable[float]) -> list[float]:
    """Elementwise inverse square root."""
    return [_recip(_sqrt(v)) for v in x]


def negate(x: Iterable[float]) -> list[float]:
    """Elementwise negation."""
    return [-v for v in x]


def hadamard(x: Iterable[float], y: Iterable[float]) -> list[float]:
    """Elementwise product."""
    return [a * b for a, b in zip(x, y)]


def clip(
    x: Iterable[float], min_thresh: float, max_thresh: float, min_new: float, max_new: float
) -> list[float]:
    """Vector version of :func:`scalar_clip`."""
    return [scalar_clip(v, min_thresh, max_thresh, min_new, max_new) for v in x]


def normalize(x: Iterable[float]) -> tuple[list[float], float]:
    """Return ``(x / norm(x), norm(x))``, leaving ``x`` unchanged when its norm is zero."""
    values = list(x)
    n = norm(values)
    if n == 0.0:
        return values, 0.0
    inv = 1.0 / n
    return [v * inv for v in values], n


def dot(x: Iterable[float], y: Iterable[float]) -> float:
    """Inner product."""
    return sum((a * b for a, b in zip(x, y)), 0.0)


def dot_shifted(
    z: Sequence[float],
    s: Sequence[float],
    dz: Sequence[float],
    ds: Sequence[float],
    alpha: float,
) -> float:
    """dot(z + alpha*dz, s + alpha*ds) without building the shifted vectors."""
    if not len(z) == len(s) == len(dz) == len(ds):
        raise ValueError("vectors must have equal length")
    return sum(
        ((si + alpha * dsi) * (zi + alpha * dzi) for si, dsi, zi, dzi in zip(s, ds, z, dz)),
        0.0,
    )


def dist(x: Iterable[float], y: Iterable[float]) -> float:
    """Euclidean distance between ``x`` and ``y``."""
    return math.sqrt(sum(((a - b) ** 2 for a, b in zip(x, y)), 0.0))


def sumsq(x: Iterable[float]) -> float:
    """Sum of squared elements."""
    return sum((v * v for v in x), 0.0)


def norm(x: Iterable[float]) -> float:
    """Euclidean norm."""
    return math.sqrt(sumsq(x))


def norm_scaled(x: Sequence[float], v: Sequence[float]) -> float:
    """Euclidean norm of the elementwise product of ``x`` and ``v``."""
    return math.sqrt(sum(((a * b) ** 2 for a, b in zip(x, v, strict=True)), 0.0))


def norm_inf(x: Iterable[float]) -> float:
    """Largest absolute value, ignoring NaNs; zero for an empty vector."""
    return max((abs(v) for v in x if not math.isnan(v)), default=0.0)


def norm_one(x: Iterable[float]) -> float:
    """Sum of absolute values."""
    return sum((abs(v) for v in x), 0.0)


def norm_inf_diff(x: Iterable[float], y: Iterable[float]) -> float:
    """Largest absolute elementwise difference, ignoring NaNs."""
    diffs = (abs(a - b) for a, b in zip(x, y))
    return max((d for d in diffs if not math.isnan(d)), default=0.0)


def minimum(x: Iterable[float]) -> float:
    """Smallest element ignoring NaNs; +inf for an empty vector."""
    return min((v for v in x if not math.isnan(v)), default=math.inf)


def maximum(x: Iterable[float]) -> float:
    """Largest element ignoring NaNs; -inf for an empty vector."""
    return max((v for v in x if not math.isnan(v)), default=-math.inf)


def mean(x: Iterable[float]) -> float:
    """Arithmetic mean; zero for an empty vector."""
    values = list(x)
    if not values:
        return 0.0
    return sum(values, 0.0) / len(values)


def is_finite(x: Iterable[float]) -> bool:
    """True when no element is infinite or NaN."""
    return all(math.isfinite(v) for v in x)


def axpby(a: float, x: Sequence[float], b: float, y: Sequence[float]) -> list[float]:
    """Return ``a*x + b*y``."""
    return [a * xv + b * yv for xv, yv in zip(x, y, strict=True)]