"""
Least-Squares Adjustment from an Information Matrix

One iteration of a (regularized) weighted least-squares estimation, as is
typically done in orbit determination. Given the information matrix J,
observation residuals r, weights w and inverse a priori covariance P0^-1,
the correction dx minimizes

    (r - J @ dx).T @ W @ (r - J @ dx) + dx.T @ P0^-1 @ dx

and is found from the normal equations

    (J.T @ W @ J + P0^-1) @ dx = J.T @ W @ r

which are solved with an SVD (see svd_solver).
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np
from numpy.typing import NDArray

from .errors import InvalidArgumentError
from .normal_equations import covariance_from_inverse, inverse_covariance
from .svd_solver import DEFAULT_ADJUSTMENT_MAX_CONDITION, solve_system_with_svd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EstimationSettings:
    """
    Options of a single least-squares adjustment.

    Attributes:
        weights: Diagonal of the observation weight matrix (n_obs,).
            None gives unit weights (ordinary least squares).
        a_priori_inverse_covariance: Inverse a priori covariance (n_params, n_params).
            None gives a zero matrix (no a priori information).
        a_priori_adjustment: A priori estimate of the adjustment (n_params,).
            Shape-checked but does not enter the right-hand side.
        check_condition: Whether the condition number of the inverse
            covariance is checked before solving
        max_condition: Condition number above which a warning is logged
        log: Logger receiving the ill-conditioning warning
    """

    weights: Optional[NDArray[np.floating]] = None
    a_priori_inverse_covariance: Optional[NDArray[np.floating]] = None
    a_priori_adjustment: Optional[NDArray[np.floating]] = None
    check_condition: bool = True
    max_condition: float = DEFAULT_ADJUSTMENT_MAX_CONDITION
    log: Optional[logging.Logger] = None


@dataclass(frozen=True)
class EstimationResult:
    """
    Result of one least-squares adjustment.

    Unpacks as (correction, inverse_covariance).

    Attributes:
        correction: Parameter adjustment dx (n_params,)
        inverse_covariance: Inverse covariance C^-1 (n_params, n_params)
    """

    correction: NDArray[np.floating]
    inverse_covariance: NDArray[np.floating]

    def __iter__(self) -> Iterator[NDArray[np.floating]]:
        return iter((self.correction, self.inverse_covariance))

    def covariance(self) -> NDArray[np.floating]:
        """Return the formal covariance matrix C (pseudo-inverse if C^-1 is singular)."""
        return covariance_from_inverse(self.inverse_covariance)

    def formal_errors(self) -> NDArray[np.floating]:
        """Return the formal standard deviation of each parameter."""
        return np.sqrt(np.diag(self.covariance()))


def perform_least_squares_adjustment(
    information_matrix: NDArray[np.floating],
    observation_residuals: NDArray[np.floating],
    settings: Optional[EstimationSettings] = None,
    **overrides,
) -> EstimationResult:
    """
    Perform one least-squares iteration from an information matrix.

    Args:
        information_matrix: Partials of observations (rows) w.r.t.
            estimated parameters (columns), shape (n_obs, n_params)
        observation_residuals: Measured minus computed observations (n_obs,)
        settings: Estimation options (default: EstimationSettings())
        **overrides: Fields of EstimationSettings replacing those in settings

    Returns:
        EstimationResult with the parameter adjustment and inverse covariance

    Example:
        correction, inv_cov = perform_least_squares_adjustment(
            J, residuals, weights=1.0 / sigma**2
        )
    """
    settings = settings if settings is not None else EstimationSettings()
    if overrides:
        settings = dataclasses.replace(settings, **overrides)

    J = np.atleast_2d(np.asarray(information_matrix, dtype=float))
    r = np.asarray(observation_residuals, dtype=float).flatten()
    n_obs, n_params = J.shape

    if r.size != n_obs:
        raise InvalidArgumentError(
            "performing least squares adjustment",
            f"{r.size} residuals given for {n_obs} observations",
        )

    if settings.weights is None:
        w = np.ones(n_obs)
    else:
        w = np.asarray(settings.weights, dtype=float).flatten()

    if settings.a_priori_adjustment is not None:
        a_priori_adjustment = np.asarray(settings.a_priori_adjustment, dtype=float).flatten()
        if a_priori_adjustment.size != n_params:
            raise InvalidArgumentError(
                "performing least squares adjustment",
                f"a priori adjustment has {a_priori_adjustment.size} elements, "
                f"expected {n_params}",
            )

    logger.debug("Least squares adjustment: %d observations, %d parameters", n_obs, n_params)

    # Inverse covariance also validates the weights and a priori shapes
    inv_cov = inverse_covariance(J, w, settings.a_priori_inverse_covariance)

    # Right-hand side: J.T @ W @ r
    rhs = J.T @ (w * r)

    correction = solve_system_with_svd(
        inv_cov,
        rhs,
        check_condition=settings.check_condition,
        max_condition=settings.max_condition,
        log=settings.log,
    )

    return EstimationResult(correction=correction, inverse_covariance=inv_cov)
