"""Helpers for assembling block-partitioned sparse matrices in place.

Assembly runs in three phases on a matrix made with :meth:`CscMatrix.spalloc`.

1. The ``colcount_*`` functions add per-column entry counts into ``colptr``.
2. :func:`colcount_to_colptr` turns those counts into starting offsets.
3. The ``fill_*`` functions write entries and advance each column's offset.
   :func:`backshift_colptrs` then restores a valid column pointer.

Fill functions return the positions in ``rowval``/``nzval`` at which they
placed their entries.
"""

from __future__ import annotations

from .csc import CscMatrix
from .types import MatrixShape, MatrixTriangle


def _has_missing_diag(source: CscMatrix, col: int) -> bool:
    start, stop = source.colptr[col], source.colptr[col + 1]
    return start == stop or source.rowval[stop - 1] != col


def colcount_dense_triangle(
    matrix: CscMatrix, initcol: int, blockcols: int, shape: MatrixTriangle
) -> None:
    """Count the entries of a dense triangle placed on the diagonal."""
    counts = range(1, blockcols + 1)
    if shape is MatrixTriangle.TRIL:
        counts = reversed(counts)
    for offset, count in enumerate(counts):
        matrix.colptr[initcol + offset] += count


def colcount_diag(matrix: CscMatrix, initcol: int, blockcols: int) -> None:
    """Count the entries of a square diagonal block placed on the diagonal."""
    for col in range(initcol, initcol + blockcols):
        matrix.colptr[col] += 1


def colcount_missing_diag(matrix: CscMatrix, source: CscMatrix, initcol: int) -> None:
    """Count one entry for every column of ``source`` that lacks a diagonal entry.

    ``source`` must be square and upper triangular.
    """
    if len(source.colptr) != source.n + 1:
        raise ValueError("source colptr must have n + 1 entries")
    if len(matrix.colptr) < source.n + initcol:
        raise ValueError("source block does not fit in the target matrix")
    for col in range(source.n):
        if _has_missing_diag(source, col):
            matrix.colptr[col + initcol] += 1


def colcount_colvec(matrix: CscMatrix, n: int, firstrow: int, firstcol: int) -> None:
    """Count a column vector of length ``n`` placed in column ``firstcol``."""
    matrix.colptr[firstcol] += n


def colcount_rowvec(matrix: CscMatrix, n: int, firstrow: int, firstcol: int) -> None:
    """Count a row vector of length ``n`` starting at column ``firstcol``."""
    for col in range(firstcol, firstcol + n):
        matrix.colptr[col] += 1


def colcount_block(
    matrix: CscMatrix, source: CscMatrix, initcol: int, shape: MatrixShape
) -> None:
    """Count the entries of ``source`` (or its transpose) placed from ``initcol``."""
    if shape is MatrixShape.T:
        for row in source.rowval:
            matrix.colptr[initcol + row] += 1
    else:
        for col in range(source.n):
            matrix.colptr[initcol + col] += source.colptr[col + 1] - source.colptr[col]


def _place(matrix: CscMatrix, row: int, col: int, value: float) -> int:
    dest = matrix.colptr[col]
    matrix.rowval[dest] = row
    matrix.nzval[dest] = value
    matrix.colptr[col] += 1
    return dest


def fill_colvec(matrix: CscMatrix, count: int, initrow: int, initcol: int) -> list[int]:
    """Place ``count`` structural zeros down column ``initcol`` from row ``initrow``."""
    return [_place(matrix, initrow + i, initcol, 0.0) for i in range(count)]


def fill_rowvec(matrix: CscMatrix, count: int, initrow: int, initcol: int) -> list[int]:
    """Place ``count`` structural zeros along row ``initrow`` from column ``initcol``."""
    return [_place(matrix, initrow, initcol + i, 0.0) for i in range(count)]


def fill_block(
    matrix: CscMatrix,
    source: CscMatrix,
    initrow: int,
    initcol: int,
    shape: MatrixShape,
) -> list[int]:
    """Copy ``source`` (or its transpose) into the matrix at ``(initrow, initcol)``.

    The returned list maps each stored entry of ``source`` to its new position.
    """
    mapping = [0] * source.nnz()
    for col in range(source.n):
        for k in range(source.colptr[col], source.colptr[col + 1]):
            src_row = source.rowval[k]
            if shape is MatrixShape.T:
                row, dest_col = col + initrow, src_row + initcol
            else:
                row, dest_col = src_row + initrow, col + initcol
            mapping[k] = _place(matrix, row, dest_col, source.nzval[k])
    return mapping


def fill_dense_triangle(
    matrix: CscMatrix, offset: int, blockdim: int, shape: MatrixTriangle
) -> list[int]:
    """Place a dense triangle of structural zeros on the diagonal.

    Block data is always supplied in upper triangular order, so both shapes
    write the same pattern.
    """
    return [
        _place(matrix, row, col, 0.0)
        for col in range(offset, offset + blockdim)
        for row in range(offset, col + 1)
    ]


def fill_diag(matrix: CscMatrix, offset: int, blockdim: int) -> list[int]:
    """Place structural zeros on the diagonal of a square block."""
    return [_place(matrix, col, col, 0.0) for col in range(offset, offset + blockdim)]


def fill_missing_diag(matrix: CscMatrix, source: CscMatrix, initcol: int) -> None:
    """Place structural zeros where ``source`` lacks a diagonal entry."""
    for col in range(source.n):
        if _has_missing_diag(source, col):
            _place(matrix, col + initcol, col + initcol, 0.0)


def colcount_to_colptr(matrix: CscMatrix) -> None:
    """Turn per-column counts into starting offsets."""
    current = 0
    for i, count in enumerate(matrix.colptr):
        matrix.colptr[i] = current
        current += count


def backshift_colptrs(matrix: CscMatrix) -> None:
    """Restore a valid column pointer after the fill phase."""
    matrix.colptr = [0, *matrix.colptr[:-1]]


def count_diagonal_entries(matrix: CscMatrix) -> int:
    """Number of columns whose last stored entry lies on the diagonal."""
    return sum(1 for col in range(matrix.n) if not _has_missing_diag(matrix, col))