import pytest

from conicalgebra.types import (
    Adjoint,
    DenseFactorizationError,
    DenseFactorizationKind,
    MatrixShape,
    MatrixTriangle,
    ShapedMatrix,
    SparseFormatError,
    SparseFormatKind,
    Symmetric,
)


class _Grid(ShapedMatrix):
    def __init__(self, rows):
        self.rows = rows

    def nrows(self):
        return len(self.rows)

    def ncols(self):
        return len(self.rows[0]) if self.rows else 0

    def shape(self):
        return MatrixShape.N

    def __getitem__(self, idx):
        r, c = idx
        return self.rows[r][c]


def test_triangle_blas_chars_and_transpose():
    assert MatrixTriangle.TRIU.as_blas_char() == "U"
    assert MatrixTriangle.TRIL.as_blas_char() == "L"
    assert MatrixTriangle.TRIU.t() is MatrixTriangle.TRIL
    assert MatrixTriangle.TRIL.t() is MatrixTriangle.TRIU


def test_shape_blas_chars_and_transpose():
    assert MatrixShape.N.as_blas_char() == "N"
    assert MatrixShape.T.as_blas_char() == "T"
    for shape in MatrixShape:
        assert shape.t().t() is shape
        assert shape.t() is not shape


def test_shaped_matrix_size_and_square():
    wide = Adjoint(_Grid([[1, 2], [3, 4], [5, 6]]))
    assert wide.size() == (2, 3)
    assert not wide.is_square()
    square = Symmetric(_Grid([[1, 2], [3, 4]]))
    assert square.size() == (2, 2)
    assert square.is_square()


def test_adjoint_swaps_dimensions_and_indices():
    g = _Grid([[1, 2, 3], [4, 5, 6]])
    a = Adjoint(g)
    assert a.size() == (3, 2)
    assert a.shape() is MatrixShape.T
    for r in range(2):
        for c in range(3):
            assert a[(c, r)] == g[(r, c)]


def test_symmetric_reads_upper_triangle():
    g = _Grid([[1, 2, 4], [99, 3, 5], [99, 99, 6]])
    s = Symmetric(g)
    assert s.size() == (3, 3)
    assert s.shape() is MatrixShape.N
    for r in range(3):
        for c in range(3):
            assert s[(r, c)] == s[(c, r)]
    assert s[(2, 0)] == g[(0, 2)]
    assert s[(1, 0)] == g[(0, 1)]


def test_sparse_format_error_message_and_kind():
    err = SparseFormatError(SparseFormatKind.BAD_COLPTR)
    assert err.kind is SparseFormatKind.BAD_COLPTR
    assert str(err) == "Bad column pointer values"
    with pytest.raises(ValueError):
        raise err


def test_dense_factorization_error_carries_code():
    err = DenseFactorizationError(DenseFactorizationKind.CHOLESKY, 2)
    assert err.kind is DenseFactorizationKind.CHOLESKY
    assert err.code == 2
    assert str(err).startswith("Cholesky error")
    plain = DenseFactorizationError(DenseFactorizationKind.INCOMPATIBLE_DIMENSION)
    assert plain.code is None
    assert str(plain) == DenseFactorizationKind.INCOMPATIBLE_DIMENSION.value