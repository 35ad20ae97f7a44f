"""Dense factorizations: Cholesky, singular value and symmetric eigen decompositions."""

from __future__ import annotations

from enum import Enum

import numpy as np

from .dense import Matrix
from .types import DenseFactorizationError, DenseFactorizationKind


def _to_array(a: Matrix) -> np.ndarray:
    return np.array(a.data, dtype=float).reshape((a.m, a.n), order="F")


def _to_matrix_data(arr: np.ndarray) -> list[float]:
    return [float(v) for v in np.asarray(arr).flatten(order="F")]


def _symmetric_from_triu(arr: np.ndarray) -> np.ndarray:
    upper = np.triu(arr)
    return upper + np.triu(upper, 1).T


def _failed_minor(full: np.ndarray) -> int:
    """Order of the first leading minor that is not positive definite."""
    for k in range(1, full.shape[0] + 1):
        try:
            np.linalg.cholesky(full[:k, :k])
        except np.linalg.LinAlgError:
            return k
    return full.shape[0]


class CholeskyEngine:
    """Cholesky factorization of an n x n symmetric positive definite matrix.

    The lower triangular factor is kept in ``L`` as a square dense matrix.
    """

    def __init__(self, n: int) -> None:
        self.L = Matrix.zeros((n, n))

    def cholesky(self, a: Matrix) -> None:
        """Factor ``a`` reading only its upper triangle.

        On success the upper triangle of ``a`` is overwritten with ``L'`` and
        ``L`` holds the lower factor.  Raises :class:`DenseFactorizationError`
        on a size mismatch or when ``a`` is not positive definite.
        """
        if a.size() != self.L.size():
            raise DenseFactorizationError(DenseFactorizationKind.INCOMPATIBLE_DIMENSION)

        arr = _to_array(a)
        full = _symmetric_from_triu(arr)
        try:
            lower = np.linalg.cholesky(full)
        except np.linalg.LinAlgError:
            raise DenseFactorizationError(
                DenseFactorizationKind.CHOLESKY, _failed_minor(full)
            ) from None

        n = a.nrows()
        for col in range(n):
            for row in range(col + 1):
                a[(row, col)] = lower[col, row]

        self.L.data = _to_matrix_data(np.tril(lower))


class SVDEngineAlgorithm(Enum):
    """Method used to compute a singular value decomposition."""

    DIVIDE_AND_CONQUER = "divide_and_conquer"
    QR_DECOMPOSITION = "qr_decomposition"


class SVDEngine:
    """Economy-size singular value decomposition of an m x n matrix.

    After :meth:`svd`, ``s`` holds the singular values in descending order,
    ``U`` the left singular vectors and ``Vt`` the transposed right ones.
    """

    def __init__(self, size: tuple[int, int]) -> None:
        m, n = size
        k = min(m, n)
        self.s = [0.0] * k
        self.U = Matrix.zeros((m, k))
        self.Vt = Matrix.zeros((k, n))
        self.algorithm = SVDEngineAlgorithm.DIVIDE_AND_CONQUER

    def svd(self, a: Matrix) -> None:
        """Decompose ``a`` into ``U * diag(s) * Vt``."""
        m, n = a.size()
        if self.U.nrows() != m or self.Vt.ncols() != n:
            raise DenseFactorizationError(DenseFactorizationKind.INCOMPATIBLE_DIMENSION)

        arr = _to_array(a)
        try:
            if self.algorithm is SVDEngineAlgorithm.DIVIDE_AND_CONQUER:
                u, s, vt = np.linalg.svd(arr, full_matrices=False)
            else:
                u, s, vt = self._svd_via_eigen(arr)
        except np.linalg.LinAlgError:
            raise DenseFactorizationError(DenseFactorizationKind.SVD) from None

        self.s = [float(v) for v in s]
        self.U.data = _to_matrix_data(u)
        self.Vt.data = _to_matrix_data(vt)

    @staticmethod
    def _svd_via_eigen(arr: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """SVD from an orthogonal (QR) reduction followed by a small SVD."""
        m, n = arr.shape
        if m >= n:
            q, r = np.linalg.qr(arr, mode="reduced")
            ur, s, vt = np.linalg.svd(r)
            return q @ ur, s, vt
        q, r = np.linalg.qr(arr.T, mode="reduced")
        ur, s, vt = np.linalg.svd(r)
        return vt.T, s, (q @ ur).T


class EigEngine:
    """Eigen decomposition of an n x n symmetric matrix given by its upper triangle.

    ``eigenvalues`` are stored in ascending order; ``eigenvectors`` is ``None``
    until :meth:`eigen` is first called.
    """

    def __init__(self, n: int) -> None:
        self.eigenvalues = [0.0] * n
        self.eigenvectors: Matrix | None = None

    def _checked_array(self, a: Matrix) -> np.ndarray:
        if not a.is_square() or a.nrows() != len(self.eigenvalues):
            raise DenseFactorizationError(DenseFactorizationKind.INCOMPATIBLE_DIMENSION)
        return _symmetric_from_triu(_to_array(a))

    def eigvals(self, a: Matrix) -> None:
        """Compute the eigenvalues of ``a``."""
        full = self._checked_array(a)
        try:
            values = np.linalg.eigvalsh(full, UPLO="U")
        except np.linalg.LinAlgError:
            raise DenseFactorizationError(DenseFactorizationKind.EIGEN) from None
        self.eigenvalues = [float(v) for v in values]

    def eigen(self, a: Matrix) -> None:
        """Compute the eigenvalues and eigenvectors of ``a``."""
        full = self._checked_array(a)
        try:
            values, vectors = np.linalg.eigh(full, UPLO="U")
        except np.linalg.LinAlgError:
            raise DenseFactorizationError(DenseFactorizationKind.EIGEN) from None
        n = a.nrows()
        if self.eigenvectors is None:
            self.eigenvectors = Matrix.zeros((n, n))
        self.eigenvalues = [float(v) for v in values]
        self.eigenvectors.data = _to_matrix_data(vectors)