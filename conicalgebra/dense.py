"""Dense matrices stored in column-major order, with BLAS-style products."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .types import Adjoint, MatrixShape, ShapedMatrix, Symmetric
from .vecmath import triangular_number


def _update(acc: float, alpha: float, old: float, beta: float) -> float:
    """``alpha*acc + beta*old``; ``old`` is ignored when ``beta`` is zero."""
    if beta == 0.0:
        return alpha * acc
    return alpha * acc + beta * old


def _matvec(
    mat: Any, x: Sequence[float], y: Sequence[float], alpha: float, beta: float
) -> list[float]:
    m, n = mat.nrows(), mat.ncols()
    if len(x) != n or len(y) != m:
        raise ValueError("vector lengths are incompatible with the matrix")
    return [
        _update(sum((mat[(i, j)] * x[j] for j in range(n)), 0.0), alpha, y[i], beta)
        for i in range(m)
    ]


@dataclass(init=False)
class Matrix(ShapedMatrix):
    """Dense matrix with data in column-major order."""

    m: int
    n: int
    data: list[float]

    def __init__(self, size: tuple[int, int], data: Sequence[float]) -> None:
        m, n = size
        values = [float(v) for v in data]
        if m * n != len(values):
            raise ValueError("data length must equal rows * columns")
        self.m = m
        self.n = n
        self.data = values

    # ------------------------------------------------------------------
    # construction

    @classmethod
    def zeros(cls, size: tuple[int, int]) -> Matrix:
        """An all-zero matrix of the given size."""
        m, n = size
        return cls((m, n), [0.0] * (m * n))

    @classmethod
    def identity(cls, n: int) -> Matrix:
        """The n x n identity matrix."""
        mat = cls.zeros((n, n))
        mat.set_identity()
        return mat

    @classmethod
    def hcat(cls, a: Matrix, b: Matrix) -> Matrix:
        """Horizontal concatenation ``[a b]``."""
        if a.m != b.m:
            raise ValueError("row dimensions are incompatible")
        return cls((a.m, a.n + b.n), a.data + b.data)

    @classmethod
    def vcat(cls, a: Matrix, b: Matrix) -> Matrix:
        """Vertical concatenation ``[a; b]``."""
        if a.n != b.n:
            raise ValueError("column dimensions are incompatible")
        data: list[float] = []
        for col in range(a.n):
            data.extend(a.col_slice(col))
            data.extend(b.col_slice(col))
        return cls((a.m + b.m, a.n), data)

    # ------------------------------------------------------------------
    # shape and indexing

    def nrows(self) -> int:
        return self.m

    def ncols(self) -> int:
        return self.n

    def shape(self) -> MatrixShape:
        return MatrixShape.N

    def index_linear(self, idx: tuple[int, int]) -> int:
        """Position of entry ``(row, col)`` in the column-major data."""
        row, col = idx
        return row + self.m * col

    def __getitem__(self, idx: tuple[int, int]) -> float:
        return self.data[self.index_linear(idx)]

    def __setitem__(self, idx: tuple[int, int], value: float) -> None:
        self.data[self.index_linear(idx)] = float(value)

    def __str__(self) -> str:
        rows = (
            "[ " + "".join(f" {self[(i, j)]!r}" for j in range(self.n)) + "]\n"
            for i in range(self.m)
        )
        return "\n" + "".join(rows) + "\n"

    # ------------------------------------------------------------------
    # basic manipulation

    def set_identity(self) -> None:
        """Overwrite a square matrix with the identity."""
        if self.m != self.n:
            raise ValueError("matrix must be square")
        self.data = [0.0] * (self.m * self.n)
        for i in range(self.n):
            self[(i, i)] = 1.0

    def copy_from_slice(self, src: Sequence[float]) -> Matrix:
        """Overwrite the data with ``src``; lengths must agree."""
        if len(src) != len(self.data):
            raise ValueError("source length must equal the matrix data length")
        self.data = [float(v) for v in src]
        return self

    def t(self) -> DenseAdjoint:
        """Transposed view."""
        return DenseAdjoint(self)

    def sym(self) -> DenseSymmetric:
        """Symmetric view of an upper triangular matrix."""
        if not self.is_triu():
            raise ValueError("symmetric view requires an upper triangular matrix")
        return DenseSymmetric(self)

    def symmetric_part(self) -> Matrix:
        """Replace the matrix by ``(A + A') / 2``."""
        if not self.is_square():
            raise ValueError("matrix must be square")
        for r in range(self.m):
            for c in range(r):
                val = 0.5 * (self[(r, c)] + self[(c, r)])
                self[(c, r)] = val
                self[(r, c)] = val
        return self

    def col_slice(self, col: int) -> list[float]:
        """A copy of column ``col``."""
        if not 0 <= col < self.n:
            raise IndexError("column index out of range")
        return self.data[col * self.m : (col + 1) * self.m]

    def is_triu(self) -> bool:
        """True when every entry below the diagonal is zero."""
        return all(
            self[(r, c)] == 0.0 for c in range(self.n) for r in range(c + 1, self.m)
        )

    # ------------------------------------------------------------------
    # products

    def mul(self, a: Any, b: Any, alpha: float, beta: float) -> Matrix:
        """Set this matrix to ``alpha*a*b + beta*self``."""
        if not (
            a.ncols() == b.nrows()
            and self.nrows() == a.nrows()
            and self.ncols() == b.ncols()
        ):
            raise ValueError("matrix dimensions are incompatible")
        k = a.ncols()
        for j in range(self.n):
            for i in range(self.m):
                acc = sum((a[(i, p)] * b[(p, j)] for p in range(k)), 0.0)
                self[(i, j)] = _update(acc, alpha, self[(i, j)], beta)
        return self

    def gemv(
        self, x: Sequence[float], y: Sequence[float], alpha: float, beta: float
    ) -> list[float]:
        """Return ``alpha*A*x + beta*y``."""
        return _matvec(self, x, y, alpha, beta)

    def kron(self, a: Any, b: Any) -> Matrix:
        """Set this matrix to the Kronecker product of ``a`` and ``b``."""
        pp, qq = a.size()
        rr, ss = b.size()
        if self.nrows() != pp * rr or self.ncols() != qq * ss:
            raise ValueError("matrix dimensions are incompatible")
        self.data = [
            a[(p, q)] * b[(r, s)]
            for q in range(qq)
            for s in range(ss)
            for p in range(pp)
            for r in range(rr)
        ]
        return self

    def syrk(self, a: Any, alpha: float, beta: float) -> Matrix:
        """Set the upper triangle to that of ``alpha*a*a' + beta*self``."""
        if self.nrows() != a.nrows() or self.ncols() != a.nrows():
            raise ValueError("matrix dimensions are incompatible")
        k = a.ncols()
        for j in range(self.n):
            for i in range(j + 1):
                acc = sum((a[(i, p)] * a[(j, p)] for p in range(k)), 0.0)
                self[(i, j)] = _update(acc, alpha, self[(i, j)], beta)
        return self

    def syr2k(self, a: Matrix, b: Matrix, alpha: float, beta: float) -> Matrix:
        """Set the upper triangle to that of ``alpha*(a*b' + b*a') + beta*self``."""
        if not (
            self.nrows() == a.nrows() == b.nrows()
            and self.ncols() == b.nrows()
            and a.ncols() == b.ncols()
        ):
            raise ValueError("matrix dimensions are incompatible")
        k = a.ncols()
        for j in range(self.n):
            for i in range(j + 1):
                acc = sum(
                    (a[(i, p)] * b[(j, p)] + b[(i, p)] * a[(j, p)] for p in range(k)),
                    0.0,
                )
                self[(i, j)] = _update(acc, alpha, self[(i, j)], beta)
        return self

    # ------------------------------------------------------------------
    # scaling

    def scale(self, c: float) -> None:
        """Multiply every entry by ``c``."""
        self.data = [v * c for v in self.data]

    def negate(self) -> None:
        """Negate every entry."""
        self.data = [-v for v in self.data]

    def lscale(self, l: Sequence[float]) -> None:
        """Left multiply by ``Diagonal(l)``."""
        for col in range(self.n):
            for row, lv in zip(range(self.m), l):
                self[(row, col)] *= lv

    def rscale(self, r: Sequence[float]) -> None:
        """Right multiply by ``Diagonal(r)``."""
        for col, rv in enumerate(r):
            for row in range(self.m):
                self[(row, col)] *= rv

    def lrscale(self, l: Sequence[float], r: Sequence[float]) -> None:
        """Replace the matrix by ``Diagonal(l) * A * Diagonal(r)``."""
        for i in range(self.m):
            for j in range(self.n):
                self[(i, j)] *= l[i] * r[j]

    # ------------------------------------------------------------------
    # norms

    def col_norms(self) -> list[float]:
        """Infinity norm of every column."""
        return self.col_norms_no_reset([0.0] * self.n)

    def col_norms_no_reset(self, norms: Sequence[float]) -> list[float]:
        """Elementwise maximum of ``norms`` and the column infinity norms."""
        return [
            max([norm, *(abs(v) for v in self.col_slice(col))])
            for col, norm in enumerate(norms)
        ]

    def col_norms_sym(self) -> list[float]:
        """Column maxima of the symmetric matrix stored in the upper triangle."""
        return self.col_norms_sym_no_reset([0.0] * self.n)

    def col_norms_sym_no_reset(self, norms: Sequence[float]) -> list[float]:
        """Elementwise maximum of ``norms`` and the upper triangle's entries.

        Entries are compared by value, not by magnitude.
        """
        out = list(norms)
        for c in range(self.n):
            for r in range(c + 1):
                value = self[(r, c)]
                out[r] = max(out[r], value)
                out[c] = max(out[c], value)
        return out

    def row_norms(self) -> list[float]:
        """Infinity norm of every row."""
        return self.row_norms_no_reset([0.0] * self.m)

    def row_norms_no_reset(self, norms: Sequence[float]) -> list[float]:
        """Elementwise maximum of ``norms`` and the row infinity norms."""
        out = list(norms)
        for r in range(self.m):
            for c in range(self.n):
                out[r] = max(out[r], abs(self[(r, c)]))
        return out

    def quad_form(self, y: Sequence[float], x: Sequence[float]) -> float:
        """Quadratic form over the strict upper triangle, as in the sparse loop.

        Each column's diagonal contribution is weighted by the last entry read
        above the diagonal in that column (zero for the first column).
        """
        out = 0.0
        for col in range(self.n):
            tmp1 = 0.0
            tmp2 = 0.0
            last = 0.0
            for row in range(col):
                last = self[(row, col)]
                tmp1 += last * x[row]
                tmp2 += last * y[row]
            out += tmp1 * y[col] + tmp2 * x[col]
            out += last * x[col] * y[col]
        return out


class DenseAdjoint(Adjoint):
    """Transposed view of a :class:`Matrix`."""

    def index_linear(self, idx: tuple[int, int]) -> int:
        row, col = idx
        return self.src.index_linear((col, row))

    def gemv(
        self, x: Sequence[float], y: Sequence[float], alpha: float, beta: float
    ) -> list[float]:
        """Return ``alpha*A'*x + beta*y``."""
        return _matvec(self, x, y, alpha, beta)


class DenseSymmetric(Symmetric):
    """Symmetric view of an upper triangular :class:`Matrix`."""

    def index_linear(self, idx: tuple[int, int]) -> int:
        row, col = idx
        if row <= col:
            return self.src.index_linear((row, col))
        return self.src.index_linear((col, row))

    def symv(
        self, x: Sequence[float], y: Sequence[float], alpha: float, beta: float
    ) -> list[float]:
        """Return ``alpha*S*x + beta*y`` where S is the symmetric completion."""
        if not self.is_square():
            raise ValueError("matrix must be square")
        return _matvec(self, x, y, alpha, beta)

    def pack_triu(self) -> list[float]:
        """The upper triangle packed column by column."""
        n = self.ncols()
        packed = [self.src[(row, col)] for col in range(n) for row in range(col + 1)]
        assert len(packed) == triangular_number(n)
        return packed


class ReshapedMatrix(ShapedMatrix):
    """A flat data sequence viewed as an m x n column-major matrix."""

    def __init__(self, data: Sequence[float], m: int, n: int) -> None:
        if m * n != len(data):
            raise ValueError("data length must equal rows * columns")
        self.data = data
        self.m = m
        self.n = n

    def nrows(self) -> int:
        return self.m

    def ncols(self) -> int:
        return self.n

    def shape(self) -> MatrixShape:
        return MatrixShape.N

    def index_linear(self, idx: tuple[int, int]) -> int:
        """Position of entry ``(row, col)`` in the column-major data."""
        row, col = idx
        return row + self.m * col

    def __getitem__(self, idx: tuple[int, int]) -> float:
        return self.data[self.index_linear(idx)]

    def reshape(self, size: tuple[int, int]) -> ReshapedMatrix:
        """Change the view's dimensions, keeping the element count."""
        m, n = size
        if m * n != self.m * self.n:
            raise ValueError("new size must keep the number of elements")
        self.m = m
        self.n = n
        return self