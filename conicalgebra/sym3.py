"""Symmetric 3x3 matrices stored as a packed upper triangle."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field

from .vecmath import triangular_number


@dataclass
class DenseMatrixSym3:
    """Symmetric 3x3 matrix holding its upper triangle in six packed values.

    Reads and writes to the lower triangle go to the mirrored upper entry.
    """

    data: list[float] = field(default_factory=lambda: [0.0] * 6)

    def __post_init__(self) -> None:
        self.data = [float(v) for v in self.data]
        if len(self.data) != 6:
            raise ValueError("packed data must have 6 entries")

    @classmethod
    def zeros(cls) -> DenseMatrixSym3:
        """The zero matrix."""
        return cls()

    @staticmethod
    def index_linear(idx: tuple[int, int]) -> int:
        """Position of entry ``(row, col)`` in the packed upper triangle."""
        r, c = idx
        if r < c:
            return r + triangular_number(c)
        return c + triangular_number(r)

    def __getitem__(self, idx: tuple[int, int]) -> float:
        return self.data[self.index_linear(idx)]

    def __setitem__(self, idx: tuple[int, int], value: float) -> None:
        self.data[self.index_linear(idx)] = float(value)

    def mul(self, x: Sequence[float]) -> list[float]:
        """Return ``H*x``."""
        d = self.data
        return [
            d[0] * x[0] + d[1] * x[1] + d[3] * x[2],
            d[1] * x[0] + d[2] * x[1] + d[4] * x[2],
            d[3] * x[0] + d[4] * x[1] + d[5] * x[2],
        ]

    def scaled_from(self, c: float, other: DenseMatrixSym3) -> None:
        """Set this matrix to ``c * other``."""
        self.data = [c * v for v in other.data]

    def norm_fro(self) -> float:
        """Frobenius norm, counting off-diagonal entries twice."""
        d = self.data
        diag = d[0] * d[0] + d[2] * d[2] + d[5] * d[5]
        off = (d[1] * d[1] + d[3] * d[3] + d[4] * d[4]) * 2.0
        return math.sqrt(diag + off)

    def quad_form(self, y: Sequence[float], x: Sequence[float]) -> float:
        """Return ``y' * H * x``."""
        hx = self.mul(x)
        return y[0] * hx[0] + y[1] * hx[1] + y[2] * hx[2]

    def copy_from(self, other: DenseMatrixSym3) -> None:
        """Copy the values of ``other`` into this matrix."""
        self.data = list(other.data)

    def cholesky_3x3_explicit_factor(self, a: DenseMatrixSym3) -> bool:
        """Store the Cholesky factor of ``a`` in this matrix.

        The factor is written to the lower triangle positions (shared with the
        mirrored upper ones).  Returns False, leaving the factor incomplete,
        when a pivot is not positive.
        """
        t = a[(0, 0)]
        if t <= 0.0:
            return False
        self[(0, 0)] = math.sqrt(t)
        self[(1, 0)] = a[(1, 0)] / self[(0, 0)]

        t = a[(1, 1)] - self[(1, 0)] * self[(1, 0)]
        if t <= 0.0:
            return False
        self[(1, 1)] = math.sqrt(t)
        self[(2, 0)] = a[(2, 0)] / self[(0, 0)]
        self[(2, 1)] = (a[(2, 1)] - self[(1, 0)] * self[(2, 0)]) / self[(1, 1)]

        t = a[(2, 2)] - self[(2, 0)] * self[(2, 0)] - self[(2, 1)] * self[(2, 1)]
        if t <= 0.0:
            return False
        self[(2, 2)] = math.sqrt(t)
        return True

    def cholesky_3x3_explicit_solve(self, b: Sequence[float]) -> list[float]:
        """Solve ``L*L'*x = b`` with this matrix holding the factor ``L``."""
        l00, l10, l11 = self[(0, 0)], self[(1, 0)], self[(1, 1)]
        l20, l21, l22 = self[(2, 0)], self[(2, 1)], self[(2, 2)]

        c1 = b[0] / l00
        c2 = (b[1] * l00 - b[0] * l10) / (l00 * l11)
        c3 = (
            b[2] * l00 * l11 - b[1] * l00 * l21 + b[0] * l10 * l21 - b[0] * l11 * l20
        ) / (l00 * l11 * l22)

        x0 = (c1 * l11 * l22 - c2 * l10 * l22 + c3 * l10 * l21 - c3 * l11 * l20) / (
            l00 * l11 * l22
        )
        x1 = (c2 * l22 - c3 * l21) / (l11 * l22)
        x2 = c3 / l22
        return [x0, x1, x2]