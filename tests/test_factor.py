import math

import pytest

from conicalgebra.dense import Matrix
from conicalgebra.factor import (
    CholeskyEngine,
    EigEngine,
    SVDEngine,
    SVDEngineAlgorithm,
)
from conicalgebra.types import DenseFactorizationError, DenseFactorizationKind
from conicalgebra.vecmath import norm_inf_diff


def _spd_matrix():
    return Matrix((3, 3), [8.0, -2.0, 4.0, -2.0, 12.0, 2.0, 4.0, 2.0, 6.0])


def test_cholesky_reconstructs():
    s = _spd_matrix()
    original = list(s.data)
    eng = CholeskyEngine(3)
    eng.cholesky(s)

    m = Matrix.zeros((3, 3))
    m.mul(eng.L, eng.L.t(), 1.0, 0.0)
    assert norm_inf_diff(m.data, original) < 1e-8


def test_cholesky_factor_is_lower_triangular():
    eng = CholeskyEngine(3)
    eng.cholesky(_spd_matrix())
    assert all(eng.L[(r, c)] == 0.0 for c in range(3) for r in range(c))
    assert eng.L[(0, 0)] == pytest.approx(math.sqrt(8.0))


def test_cholesky_writes_transposed_factor_to_upper_triangle():
    s = _spd_matrix()
    eng = CholeskyEngine(3)
    eng.cholesky(s)
    for c in range(3):
        for r in range(c + 1):
            assert s[(r, c)] == pytest.approx(eng.L[(c, r)])


def test_cholesky_reads_only_upper_triangle():
    s = _spd_matrix()
    s[(1, 0)] = 100.0
    s[(2, 0)] = -50.0
    eng = CholeskyEngine(3)
    eng.cholesky(s)
    m = Matrix.zeros((3, 3))
    m.mul(eng.L, eng.L.t(), 1.0, 0.0)
    assert norm_inf_diff(m.data, _spd_matrix().data) < 1e-8


def test_cholesky_not_positive_definite():
    a = Matrix((2, 2), [1.0, 2.0, 2.0, 1.0])
    eng = CholeskyEngine(2)
    with pytest.raises(DenseFactorizationError) as info:
        eng.cholesky(a)
    assert info.value.kind is DenseFactorizationKind.CHOLESKY
    assert info.value.code == 2


def test_cholesky_dimension_mismatch():
    eng = CholeskyEngine(2)
    with pytest.raises(DenseFactorizationError) as info:
        eng.cholesky(_spd_matrix())
    assert info.value.kind is DenseFactorizationKind.INCOMPATIBLE_DIMENSION


def _reconstruct_svd(eng, m, n):
    us = Matrix(eng.U.size(), eng.U.data)
    for c in range(us.ncols()):
        for r in range(us.nrows()):
            us[(r, c)] *= eng.s[c]
    out = Matrix.zeros((m, n))
    out.mul(us, eng.Vt, 1.0, 0.0)
    return out


@pytest.mark.parametrize(
    "algorithm",
    [SVDEngineAlgorithm.DIVIDE_AND_CONQUER, SVDEngineAlgorithm.QR_DECOMPOSITION],
)
def test_svd(algorithm):
    a = Matrix((2, 3), [3.0, 2.0, 2.0, 3.0, 2.0, -2.0])
    original = list(a.data)
    eng = SVDEngine((2, 3))
    eng.algorithm = algorithm
    eng.svd(a)
    assert norm_inf_diff(eng.s, [5.0, 3.0]) < 1e-8
    assert norm_inf_diff(_reconstruct_svd(eng, 2, 3).data, original) < 1e-8


def test_svd_tall_matrix_qr():
    a = Matrix((3, 2), [3.0, 2.0, 2.0, 2.0, 3.0, -2.0])
    original = list(a.data)
    eng = SVDEngine((3, 2))
    eng.algorithm = SVDEngineAlgorithm.QR_DECOMPOSITION
    eng.svd(a)
    assert norm_inf_diff(eng.s, [5.0, 3.0]) < 1e-8
    assert norm_inf_diff(_reconstruct_svd(eng, 3, 2).data, original) < 1e-8


def test_svd_default_algorithm():
    eng = SVDEngine((2, 2))
    assert eng.algorithm is SVDEngineAlgorithm.DIVIDE_AND_CONQUER


def test_svd_dimension_mismatch():
    eng = SVDEngine((2, 3))
    with pytest.raises(DenseFactorizationError) as info:
        eng.svd(Matrix.zeros((3, 3)))
    assert info.value.kind is DenseFactorizationKind.INCOMPATIBLE_DIMENSION


def _eig_matrix():
    return Matrix((3, 3), [3.0, 2.0, 4.0, 2.0, 0.0, 2.0, 4.0, 2.0, 3.0])


def test_eigvals():
    eng = EigEngine(3)
    eng.eigvals(_eig_matrix())
    assert norm_inf_diff(eng.eigenvalues, [-1.0, -1.0, 8.0]) < 1e-6
    assert eng.eigenvectors is None


def test_eigen_reconstructs():
    original = _eig_matrix()
    eng = EigEngine(3)
    eng.eigen(_eig_matrix())
    v = eng.eigenvectors
    vs = Matrix(v.size(), v.data)
    for c in range(3):
        for r in range(3):
            vs[(r, c)] *= eng.eigenvalues[c]
    m = Matrix.zeros((3, 3))
    m.mul(vs, v.t(), 1.0, 0.0)
    assert norm_inf_diff(m.data, original.data) < 1e-8


def test_eigvals_ascending():
    eng = EigEngine(2)
    eng.eigvals(Matrix((2, 2), [5.0, 0.0, 0.0, -3.0]))
    assert eng.eigenvalues == pytest.approx([-3.0, 5.0])


def test_eig_dimension_mismatch():
    eng = EigEngine(2)
    with pytest.raises(DenseFactorizationError) as info:
        eng.eigen(_eig_matrix())
    assert info.value.kind is DenseFactorizationKind.INCOMPATIBLE_DIMENSION


def test_eig_not_square():
    eng = EigEngine(2)
    with pytest.raises(DenseFactorizationError) as info:
        eng.eigvals(Matrix.zeros((2, 3)))
    assert info.value.kind is DenseFactorizationKind.INCOMPATIBLE_DIMENSION