"""
Covariance with Consider Parameters

Consider parameters are fixed (not estimated) model parameters whose
uncertainty still affects the estimate. With the noise-only covariance

    C = (J.T @ W @ J + P0^-1)^-1

the estimator maps observation residuals to a parameter correction through
S = C @ (W @ J).T. An error in the consider parameters enters the residuals
through J_c, so their covariance C_c is propagated as

    C_total = C + (S @ J_c) @ C_c @ (S @ J_c).T
"""

from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from .errors import InvalidArgumentError
from .normal_equations import (
    covariance_from_inverse,
    inverse_covariance,
    weight_information_matrix,
)


def _propagate_consider_covariance(
    information_matrix: NDArray[np.floating],
    weights: NDArray[np.floating],
    a_priori_inverse_covariance: Optional[NDArray[np.floating]],
    consider_information_matrix: NDArray[np.floating],
    consider_covariance: NDArray[np.floating],
) -> Tuple[NDArray[np.floating], NDArray[np.floating]]:
    """Return (noise-only covariance, consider contribution)."""
    J = np.atleast_2d(np.asarray(information_matrix, dtype=float))
    J_c = np.atleast_2d(np.asarray(consider_information_matrix, dtype=float))
    C_c = np.atleast_2d(np.asarray(consider_covariance, dtype=float))

    if J_c.shape[0] != J.shape[0]:
        raise InvalidArgumentError(
            "computing consider covariance",
            f"consider information matrix has {J_c.shape[0]} rows, "
            f"expected {J.shape[0]}",
        )
    if C_c.shape != (J_c.shape[1], J_c.shape[1]):
        raise InvalidArgumentError(
            "computing consider covariance",
            f"consider covariance has shape {C_c.shape}, "
            f"expected {(J_c.shape[1], J_c.shape[1])}",
        )

    noise_only_covariance = covariance_from_inverse(
        inverse_covariance(J, weights, a_priori_inverse_covariance)
    )

    # Sensitivity of the estimate to the observation residuals
    sensitivity = noise_only_covariance @ weight_information_matrix(J, weights).T

    mapped = sensitivity @ J_c
    return noise_only_covariance, mapped @ C_c @ mapped.T


def consider_covariance_contribution(
    information_matrix: NDArray[np.floating],
    weights: NDArray[np.floating],
    a_priori_inverse_covariance: Optional[NDArray[np.floating]],
    consider_information_matrix: NDArray[np.floating],
    consider_covariance: NDArray[np.floating],
) -> NDArray[np.floating]:
    """
    Compute only the covariance added by the consider parameters.

    Arguments are the same as for covariance_with_consider_parameters.

    Returns:
        (S @ J_c) @ C_c @ (S @ J_c).T, shape (n_params, n_params)
    """
    _, contribution = _propagate_consider_covariance(
        information_matrix,
        weights,
        a_priori_inverse_covariance,
        consider_information_matrix,
        consider_covariance,
    )
    return contribution


def covariance_with_consider_parameters(
    information_matrix: NDArray[np.floating],
    weights: NDArray[np.floating],
    a_priori_inverse_covariance: Optional[NDArray[np.floating]],
    consider_information_matrix: NDArray[np.floating],
    consider_covariance: NDArray[np.floating],
) -> NDArray[np.floating]:
    """
    Compute the covariance of the estimated parameters including consider parameters.

    Args:
        information_matrix: Partials of observations w.r.t. estimated parameters (n_obs, n_params)
        weights: Diagonal of the observation weight matrix (n_obs,)
        a_priori_inverse_covariance: Inverse a priori covariance (n_params, n_params),
            or None for no a priori information
        consider_information_matrix: Partials of observations w.r.t.
            consider parameters (n_obs, n_consider)
        consider_covariance: Covariance of the consider parameters (n_consider, n_consider)

    Returns:
        Total covariance C + (S @ J_c) @ C_c @ (S @ J_c).T, shape (n_params, n_params)
    """
    noise_only_covariance, contribution = _propagate_consider_covariance(
        information_matrix,
        weights,
        a_priori_inverse_covariance,
        consider_information_matrix,
        consider_covariance,
    )
    return noise_only_covariance + contribution
