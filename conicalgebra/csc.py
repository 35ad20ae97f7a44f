"""Sparse matrices in compressed sparse column format."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from itertools import chain

from .types import (
    Adjoint,
    MatrixShape,
    ShapedMatrix,
    SparseFormatError,
    SparseFormatKind,
    Symmetric,
)

_Entry = tuple[int, float]


def _prescale(y: Sequence[float], b: float) -> list[float]:
    """Return ``b*y``, treating ``b == 0`` as an exact reset to zero."""
    if b == 0.0:
        return [0.0] * len(y)
    if b == 1.0:
        return list(y)
    if b == -1.0:
        return [-v for v in y]
    return [v * b for v in y]


@dataclass
class CscMatrix(ShapedMatrix):
    """Sparse matrix in standard compressed sparse column form.

    ``colptr`` has ``n + 1`` entries, the last of which equals the number of
    stored entries.  The constructor checks only these lengths; row bounds and
    ordering are verified by :meth:`check_format`.
    """

    m: int
    n: int
    colptr: list[int]
    rowval: list[int]
    nzval: list[float]

    def __post_init__(self) -> None:
        self.colptr = [int(p) for p in self.colptr]
        self.rowval = [int(r) for r in self.rowval]
        self.nzval = [float(v) for v in self.nzval]
        if len(self.rowval) != len(self.nzval):
            raise ValueError("rowval and nzval must have equal length")
        if len(self.colptr) != self.n + 1:
            raise ValueError("colptr must have n + 1 entries")
        if self.colptr[self.n] != len(self.rowval):
            raise ValueError("last colptr entry must equal the number of entries")

    # ------------------------------------------------------------------
    # construction

    @classmethod
    def spalloc(cls, m: int, n: int, nnz: int) -> CscMatrix:
        """An m x n matrix with room for ``nnz`` zero-valued entries."""
        colptr = [0] * (n + 1)
        colptr[n] = nnz
        return cls(m, n, colptr, [0] * nnz, [0.0] * nnz)

    @classmethod
    def identity(cls, n: int) -> CscMatrix:
        """The n x n identity matrix."""
        return cls(n, n, list(range(n + 1)), list(range(n)), [1.0] * n)

    @classmethod
    def _from_columns(
        cls, m: int, n: int, columns: Iterable[Iterable[_Entry]]
    ) -> CscMatrix:
        colptr = [0]
        rowval: list[int] = []
        nzval: list[float] = []
        for entries in columns:
            for row, value in entries:
                rowval.append(row)
                nzval.append(value)
            colptr.append(len(rowval))
        return cls(m, n, colptr, rowval, nzval)

    @classmethod
    def hcat(cls, a: CscMatrix, b: CscMatrix) -> CscMatrix:
        """Horizontal concatenation ``[a b]``."""
        if a.m != b.m:
            raise ValueError("row dimensions are incompatible")
        columns = chain(
            (a._entries(col) for col in range(a.n)),
            (b._entries(col) for col in range(b.n)),
        )
        return cls._from_columns(a.m, a.n + b.n, columns)

    @classmethod
    def vcat(cls, a: CscMatrix, b: CscMatrix) -> CscMatrix:
        """Vertical concatenation ``[a; b]``."""
        if a.n != b.n:
            raise ValueError("column dimensions are incompatible")
        columns = (
            chain(a._entries(col), ((row + a.m, v) for row, v in b._entries(col)))
            for col in range(a.n)
        )
        return cls._from_columns(a.m + b.m, a.n, columns)

    # ------------------------------------------------------------------
    # structure

    def _column(self, col: int) -> range:
        return range(self.colptr[col], self.colptr[col + 1])

    def _entries(self, col: int) -> Iterator[_Entry]:
        span = self._column(col)
        return zip(self.rowval[span.start : span.stop], self.nzval[span.start : span.stop])

    def nnz(self) -> int:
        """Number of stored entries."""
        return self.colptr[self.n]

    def nrows(self) -> int:
        return self.m

    def ncols(self) -> int:
        return self.n

    def shape(self) -> MatrixShape:
        return MatrixShape.N

    def t(self) -> CscAdjoint:
        """Transposed view."""
        return CscAdjoint(self)

    def sym(self) -> CscSymmetric:
        """Symmetric view of an upper triangular matrix."""
        if not self.is_triu():
            raise ValueError("symmetric view requires an upper triangular matrix")
        return CscSymmetric(self)

    def check_format(self) -> None:
        """Raise :class:`SparseFormatError` if the data is malformed."""
        if len(self.rowval) != len(self.nzval):
            raise SparseFormatError(SparseFormatKind.INCOMPATIBLE_DIMENSION)
        if (
            not self.colptr
            or len(self.colptr) - 1 != self.n
            or self.colptr[self.n] != len(self.rowval)
        ):
            raise SparseFormatError(SparseFormatKind.INCOMPATIBLE_DIMENSION)
        if any(p > q for p, q in zip(self.colptr, self.colptr[1:])):
            raise SparseFormatError(SparseFormatKind.BAD_COLPTR)
        for col in range(self.n):
            span = self._column(col)
            rows = self.rowval[span.start : span.stop]
            if any(r >= s for r, s in zip(rows, rows[1:])):
                raise SparseFormatError(SparseFormatKind.BAD_ROWVAL)
        if not all(r < self.m for r in self.rowval):
            raise SparseFormatError(SparseFormatKind.BAD_ROWVAL)

    def select_rows(self, rowidx: Sequence[bool]) -> CscMatrix:
        """New matrix made of the rows whose flag in ``rowidx`` is true."""
        if len(rowidx) != self.m:
            raise ValueError("row selector length must equal the number of rows")
        reduced: dict[int, int] = {}
        for row, keep in enumerate(rowidx):
            if keep:
                reduced[row] = len(reduced)
        columns = (
            ((reduced[row], v) for row, v in self._entries(col) if row in reduced)
            for col in range(self.n)
        )
        return self._from_columns(len(reduced), self.n, columns)

    def to_triu(self) -> CscMatrix:
        """New matrix holding only the upper triangle.

        Entries within each column are assumed to be sorted by row.
        """
        if self.m != self.n:
            raise ValueError("matrix must be square")
        columns = []
        for col in range(self.n):
            entries = list(self._entries(col))
            count = sum(1 for row, _ in entries if row <= col)
            columns.append(entries[:count])
        return self._from_columns(self.m, self.n, columns)

    def is_triu(self) -> bool:
        """True when no structural entry lies below the diagonal."""
        return all(
            row <= col
            for col in range(self.n)
            for row in self.rowval[self.colptr[col] : self.colptr[col + 1]]
        )

    # ------------------------------------------------------------------
    # in-place scaling

    def scale(self, c: float) -> None:
        """Multiply every entry by ``c``."""
        self.nzval = [v * c for v in self.nzval]

    def negate(self) -> None:
        """Negate every entry."""
        self.nzval = [-v for v in self.nzval]

    def lscale(self, l: Sequence[float]) -> None:
        """Left multiply by ``Diagonal(l)``."""
        self.nzval = [v * l[row] for row, v in zip(self.rowval, self.nzval)]

    def rscale(self, r: Sequence[float]) -> None:
        """Right multiply by ``Diagonal(r)``."""
        for col in range(self.n):
            for k in self._column(col):
                self.nzval[k] *= r[col]

    def lrscale(self, l: Sequence[float], r: Sequence[float]) -> None:
        """Replace the matrix by ``Diagonal(l) * A * Diagonal(r)``."""
        for col, rc in enumerate(r):
            for k in self._column(col):
                self.nzval[k] *= l[self.rowval[k]] * rc

    # ------------------------------------------------------------------
    # norms

    def col_norms(self) -> list[float]:
        """Infinity norm of every column."""
        return self.col_norms_no_reset([0.0] * self.n)

    def col_norms_no_reset(self, norms: Sequence[float]) -> list[float]:
        """Elementwise maximum of ``norms`` and the column infinity norms."""
        if len(norms) != self.n:
            raise ValueError("norms length must equal the number of columns")
        return [
            max([norm, *(abs(v) for _, v in self._entries(col))])
            for col, norm in enumerate(norms)
        ]

    def col_norms_sym(self) -> list[float]:
        """Column infinity norms of the symmetric matrix stored as a triangle."""
        return self.col_norms_sym_no_reset([0.0] * self.n)

    def col_norms_sym_no_reset(self, norms: Sequence[float]) -> list[float]:
        """Elementwise maximum of ``norms`` and the symmetric column norms."""
        if len(norms) != self.n:
            raise ValueError("norms length must equal the number of columns")
        out = list(norms)
        for col in range(self.n):
            for row, v in self._entries(col):
                magnitude = abs(v)
                out[col] = max(out[col], magnitude)
                out[row] = max(out[row], magnitude)
        return out

    def row_norms(self) -> list[float]:
        """Infinity norm of every row."""
        return self.row_norms_no_reset([0.0] * self.m)

    def row_norms_no_reset(self, norms: Sequence[float]) -> list[float]:
        """Elementwise maximum of ``norms`` and the row infinity norms."""
        if len(norms) != self.m:
            raise ValueError("norms length must equal the number of rows")
        out = list(norms)
        for row, v in zip(self.rowval, self.nzval):
            out[row] = max(out[row], abs(v))
        return out

    # ------------------------------------------------------------------
    # products

    def gemv(
        self, x: Sequence[float], y: Sequence[float], a: float, b: float
    ) -> list[float]:
        """Return ``a*A*x + b*y``."""
        if len(x) != self.n:
            raise ValueError("x length must equal the number of columns")
        if len(y) != self.m:
            raise ValueError("y length must equal the number of rows")
        out = _prescale(y, b)
        if a == 0.0:
            return out
        for col, xj in enumerate(x):
            for row, v in self._entries(col):
                out[row] += a * v * xj
        return out

    def quad_form(self, y: Sequence[float], x: Sequence[float]) -> float:
        """``y' * M * x`` for the symmetric matrix stored as its upper triangle."""
        if self.m != self.n:
            raise ValueError("matrix must be square")
        if len(x) != self.n or len(y) != self.n:
            raise ValueError("vector lengths must equal the matrix dimension")
        out = 0.0
        for col in range(self.n):
            tmp1 = 0.0
            tmp2 = 0.0
            for row, v in self._entries(col):
                if row < col:
                    tmp1 += v * x[row]
                    tmp2 += v * y[row]
                elif row == col:
                    out += v * x[col] * y[col]
                else:
                    raise ValueError("Input matrix should be triu form.")
            out += tmp1 * y[col] + tmp2 * x[col]
        return out


class CscAdjoint(Adjoint):
    """Transposed view of a :class:`CscMatrix`."""

    def gemv(
        self, x: Sequence[float], y: Sequence[float], a: float, b: float
    ) -> list[float]:
        """Return ``a*A'*x + b*y``."""
        src: CscMatrix = self.src
        if len(x) != src.m:
            raise ValueError("x length must equal the number of source rows")
        if len(y) != src.n:
            raise ValueError("y length must equal the number of source columns")
        out = _prescale(y, b)
        if a == 0.0:
            return out
        for col in range(src.n):
            for row, v in src._entries(col):
                out[col] += a * v * x[row]
        return out


class CscSymmetric(Symmetric):
    """Symmetric view of an upper triangular :class:`CscMatrix`."""

    def symv(
        self, x: Sequence[float], y: Sequence[float], a: float, b: float
    ) -> list[float]:
        """Return ``a*S*x + b*y`` where S is the symmetric completion."""
        src: CscMatrix = self.src
        if src.m != src.n:
            raise ValueError("matrix must be square")
        if len(x) != src.n or len(y) != src.n:
            raise ValueError("vector lengths must equal the matrix dimension")
        out = [v * b for v in y]
        for col, xcol in enumerate(x):
            for row, v in src._entries(col):
                out[row] += a * v * xcol
                if row != col:
                    out[col] += a * v * x[row]
        return out