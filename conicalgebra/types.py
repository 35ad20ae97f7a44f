"""Core matrix markers, views and error types shared by the algebra modules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any


class SparseFormatKind(Enum):
    """Ways in which sparse matrix data can be malformed."""

    INCOMPATIBLE_DIMENSION = "Matrix dimension fields and/or array lengths are incompatible"
    BAD_ROW_ORDERING = "Data is not sorted by row index within each column"
    BAD_ROWVAL = "Row value exceeds the matrix row dimension"
    BAD_COLPTR = "Bad column pointer values"


class SparseFormatError(ValueError):
    """Raised when compressed sparse column data fails a format check."""

    def __init__(self, kind: SparseFormatKind) -> None:
        super().__init__(kind.value)
        self.kind = kind


class DenseFactorizationKind(Enum):
    """Failure categories of dense factorization routines."""

    INCOMPATIBLE_DIMENSION = "Matrix dimension fields and/or array lengths are incompatible"
    EIGEN = "Eigendecomposition error"
    SVD = "SVD error"
    CHOLESKY = "Cholesky error"


class DenseFactorizationError(ValueError):
    """Raised when a dense factorization cannot be computed.

    ``code`` carries the routine-specific failure code, if there is one.
    """

    def __init__(self, kind: DenseFactorizationKind, code: int | None = None) -> None:
        message = kind.value if code is None else f"{kind.value} (code {code})"
        super().__init__(message)
        self.kind = kind
        self.code = code


class MatrixTriangle(Enum):
    """Marker for the upper or lower triangle of a matrix."""

    TRIU = "U"
    TRIL = "L"

    def as_blas_char(self) -> str:
        """The single character used by BLAS-style routines."""
        return self.value

    def t(self) -> MatrixTriangle:
        """The triangle obtained after transposition."""
        return MatrixTriangle.TRIL if self is MatrixTriangle.TRIU else MatrixTriangle.TRIU


class MatrixShape(Enum):
    """Marker for normal or transposed orientation."""

    N = "N"
    T = "T"

    def as_blas_char(self) -> str:
        """The single character used by BLAS-style routines."""
        return self.value

    def t(self) -> MatrixShape:
        """The orientation obtained after transposition."""
        return MatrixShape.T if self is MatrixShape.N else MatrixShape.N


class ShapedMatrix(ABC):
    """Anything with a row count, a column count and an orientation."""

    @abstractmethod
    def nrows(self) -> int:
        """Number of rows."""

    @abstractmethod
    def ncols(self) -> int:
        """Number of columns."""

    @abstractmethod
    def shape(self) -> MatrixShape:
        """Orientation of the underlying data."""

    def size(self) -> tuple[int, int]:
        """The pair (rows, columns)."""
        return (self.nrows(), self.ncols())

    def is_square(self) -> bool:
        """True when rows and columns agree."""
        return self.nrows() == self.ncols()


@dataclass(frozen=True)
class Adjoint(ShapedMatrix):
    """Transposed view of a matrix."""

    src: Any

    def nrows(self) -> int:
        return self.src.ncols()

    def ncols(self) -> int:
        return self.src.nrows()

    def shape(self) -> MatrixShape:
        return MatrixShape.T

    def __getitem__(self, idx: tuple[int, int]) -> Any:
        row, col = idx
        return self.src[(col, row)]


@dataclass(frozen=True)
class Symmetric(ShapedMatrix):
    """Symmetric view of a matrix; only its upper triangle is read."""

    src: Any

    def nrows(self) -> int:
        return self.src.nrows()

    def ncols(self) -> int:
        return self.src.ncols()

    def shape(self) -> MatrixShape:
        return MatrixShape.N

    def __getitem__(self, idx: tuple[int, int]) -> Any:
        row, col = idx
        if row <= col:
            return self.src[(row, col)]
        return self.src[(col, row)]