"""
Normal Equations for Weighted Least Squares

For a linearized observation model r = J @ dx + noise with uncorrelated
observation weights w, the inverse covariance (Fisher information) is

    C^-1 = J.T @ W @ J + P0^-1

where W = diag(w) and P0^-1 is the inverse a priori covariance.
W is never formed explicitly: pre-multiplying by a diagonal matrix is the
same as scaling every column of J element-wise by w.
"""

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .decomposition import decompose
from .errors import IllConditionedMatrixWarning, InvalidArgumentError

logger = logging.getLogger(__name__)


def weight_information_matrix(
    information_matrix: NDArray[np.floating],
    weights: NDArray[np.floating],
) -> NDArray[np.floating]:
    """
    Multiply an information matrix by a diagonal weight matrix.

    Args:
        information_matrix: Partials of observations (rows) w.r.t.
            estimated parameters (columns), shape (n_obs, n_params)
        weights: Diagonal of the observation weight matrix (n_obs,)

    Returns:
        diag(weights) @ information_matrix, shape (n_obs, n_params)
    """
    J = np.atleast_2d(np.asarray(information_matrix, dtype=float))
    w = np.asarray(weights, dtype=float).flatten()

    if w.size != J.shape[0]:
        raise InvalidArgumentError(
            "weighting information matrix",
            f"{w.size} weights given for {J.shape[0]} observations",
        )

    # Column-wise product J[:, i] * w via broadcasting
    return J * w[:, np.newaxis]


def inverse_covariance(
    information_matrix: NDArray[np.floating],
    weights: NDArray[np.floating],
    a_priori_inverse_covariance: Optional[NDArray[np.floating]] = None,
) -> NDArray[np.floating]:
    """
    Compute the inverse of the updated covariance matrix.

    Args:
        information_matrix: Partials of observations w.r.t. parameters (n_obs, n_params)
        weights: Diagonal of the observation weight matrix (n_obs,)
        a_priori_inverse_covariance: Inverse a priori covariance (n_params, n_params).
            None means no a priori information.

    Returns:
        J.T @ diag(w) @ J + P0^-1, shape (n_params, n_params)
    """
    J = np.atleast_2d(np.asarray(information_matrix, dtype=float))
    normal_matrix = J.T @ weight_information_matrix(J, weights)

    if a_priori_inverse_covariance is None:
        return normal_matrix

    P0_inv = np.asarray(a_priori_inverse_covariance, dtype=float)
    if P0_inv.shape != normal_matrix.shape:
        raise InvalidArgumentError(
            "computing inverse covariance",
            f"a priori inverse covariance has shape {P0_inv.shape}, "
            f"expected {normal_matrix.shape}",
        )

    return normal_matrix + P0_inv


def covariance_from_inverse(
    inverse_covariance_matrix: NDArray[np.floating],
    log: Optional[logging.Logger] = None,
) -> NDArray[np.floating]:
    """
    Invert an inverse covariance matrix through its SVD.

    A rank-deficient matrix (e.g. a parameter that is neither observed nor
    constrained a priori) gives the minimum-norm pseudo-inverse, with zero
    variance in the unobservable directions, and a logged warning.

    Args:
        inverse_covariance_matrix: Inverse covariance C^-1 (n_params, n_params)
        log: Destination of the rank-deficiency warning
            (default: this module's logger)

    Returns:
        Covariance C, shape (n_params, n_params)
    """
    log = log if log is not None else logger

    svd = decompose(inverse_covariance_matrix)
    n_params = svd.shape[1]

    if svd.rank < n_params:
        log.warning(
            "Warning when computing covariance, inverse covariance has rank %d of %d",
            svd.rank,
            n_params,
            extra={"rank": svd.rank, "category": IllConditionedMatrixWarning},
        )

    return svd.pseudo_inverse()
