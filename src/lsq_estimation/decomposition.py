"""
Singular Value Decomposition and Condition Number

This module wraps scipy's SVD in a small value object that can solve
A @ x = b for arbitrary right-hand sides and report the singular values
needed for conditioning diagnostics.

For A = U @ diag(s) @ Vh the least-squares / minimum-norm solution is
    x = Vh.T @ diag(1/s) @ U.T @ b
where singular values below the rank threshold are treated as zero.
"""

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from scipy import linalg


@dataclass(frozen=True)
class SingularValueDecomposition:
    """
    Decomposition A = U @ diag(s) @ Vh of a real matrix.

    Attributes:
        u: Left singular vectors (rows, k)
        singular_values: Singular values in descending order (k,)
        vh: Right singular vectors, transposed (k, cols) or (cols, cols)
        shape: Shape of the decomposed matrix
    """

    u: NDArray[np.floating]
    singular_values: NDArray[np.floating]
    vh: NDArray[np.floating]
    shape: tuple

    @property
    def threshold(self) -> float:
        """Singular values at or below this value are treated as zero."""
        if self.singular_values.size == 0:
            return 0.0
        return max(self.shape) * np.finfo(float).eps * self.singular_values[0]

    @property
    def rank(self) -> int:
        """Numerical rank of the decomposed matrix."""
        return int(np.count_nonzero(self.singular_values > self.threshold))

    def solve(self, rhs: NDArray[np.floating]) -> NDArray[np.floating]:
        """
        Solve A @ x = rhs in the least-squares sense.

        Args:
            rhs: Right-hand side vector (rows,)

        Returns:
            Solution x (cols,); minimum-norm when A is rank deficient
        """
        rhs = np.asarray(rhs, dtype=float)
        u, s_inv, vh = self._truncated_factors()

        return vh.T @ (s_inv * (u.T @ rhs))

    def pseudo_inverse(self) -> NDArray[np.floating]:
        """
        Minimum-norm pseudo-inverse of the decomposed matrix.

        Equals the inverse for a full-rank square matrix; singular directions
        get zero weight instead of raising.

        Returns:
            Pseudo-inverse (cols, rows)
        """
        u, s_inv, vh = self._truncated_factors()

        return vh.T @ (s_inv[:, np.newaxis] * u.T)

    def _truncated_factors(self):
        """Return (U, 1/s, Vh) with 1/s set to zero below the rank threshold."""
        k = self.singular_values.size

        # Only the first k right singular vectors pair with singular values
        u = self.u[:, :k]
        vh = self.vh[:k, :]

        s_inv = np.zeros(k)
        mask = self.singular_values > self.threshold
        s_inv[mask] = 1.0 / self.singular_values[mask]

        return u, s_inv, vh


def decompose(
    matrix: NDArray[np.floating],
    full_right_vectors: bool = False,
) -> SingularValueDecomposition:
    """
    Compute the singular value decomposition of a matrix.

    Args:
        matrix: Real matrix to decompose (rows, cols)
        full_right_vectors: If True, compute the complete set of right
            singular vectors (cols, cols) instead of the thin set.

    Returns:
        SingularValueDecomposition of the matrix
    """
    matrix = np.atleast_2d(np.asarray(matrix, dtype=float))
    rows, cols = matrix.shape

    if matrix.size == 0:
        # No singular values; keep factor shapes consistent for solve()
        vh = np.eye(cols) if full_right_vectors else np.zeros((0, cols))
        return SingularValueDecomposition(
            u=np.zeros((rows, 0)), singular_values=np.zeros(0), vh=vh, shape=matrix.shape
        )

    if full_right_vectors:
        # Thin U with full V: take the full decomposition and drop unused columns of U
        u, s, vh = linalg.svd(matrix, full_matrices=True)
        u = u[:, : s.size]
    else:
        u, s, vh = linalg.svd(matrix, full_matrices=False)

    return SingularValueDecomposition(u=u, singular_values=s, vh=vh, shape=matrix.shape)


def condition_number_of_decomposition(svd: SingularValueDecomposition) -> float:
    """
    Condition number (largest / smallest singular value) of a decomposed matrix.

    Returns inf when the smallest singular value is exactly zero and nan
    for a matrix without singular values (zero rows or columns).
    """
    s = svd.singular_values
    if s.size == 0:
        return float("nan")
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(s[0], s[-1]))


def condition_number_of_information_matrix(matrix: NDArray[np.floating]) -> float:
    """Condition number of an information matrix, computed from its SVD."""
    return condition_number_of_decomposition(decompose(matrix, full_right_vectors=True))
