"""
Least-Squares Polynomial Fit

Fits y = sum_j c_j * x^p_j for a user-defined set of powers p_j. The powers
need not be integer or contiguous, e.g. [0.0, 0.5] fits c_0 + c_1 * sqrt(x).

The fit is an unweighted least-squares adjustment with the information matrix

    J[i, j] = x_i ** p_j

and the dependent values as residuals.
"""

import logging
from typing import List, Mapping, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from .errors import InvalidArgumentError
from .least_squares import EstimationSettings, perform_least_squares_adjustment
from .vector_utils import keys_and_values

logger = logging.getLogger(__name__)


def polynomial_information_matrix(
    independent_values: NDArray[np.floating],
    polynomial_powers: Sequence[float],
) -> NDArray[np.floating]:
    """
    Build the information matrix of a polynomial in the independent variable.

    Args:
        independent_values: Samples of the independent variable x (n_samples,)
        polynomial_powers: Powers p_j of the polynomial terms (n_terms,)

    Returns:
        Matrix with J[i, j] = x_i ** p_j, shape (n_samples, n_terms)
    """
    x = np.asarray(independent_values, dtype=float).flatten()
    powers = np.asarray(polynomial_powers, dtype=float).flatten()

    return np.power(x[:, np.newaxis], powers[np.newaxis, :])


def least_squares_polynomial_fit(
    independent_values: NDArray[np.floating],
    dependent_values: NDArray[np.floating],
    polynomial_powers: Sequence[float],
    settings: Optional[EstimationSettings] = None,
) -> NDArray[np.floating]:
    """
    Fit a polynomial with the given powers to (x, y) samples.

    Args:
        independent_values: Samples of x (n_samples,)
        dependent_values: Samples of y (n_samples,)
        polynomial_powers: Powers of the polynomial terms (n_terms,)
        settings: Estimation options (default: unit weights, no a priori
            information)

    Returns:
        Polynomial coefficients, one per power (n_terms,)
    """
    x = np.asarray(independent_values, dtype=float).flatten()
    y = np.asarray(dependent_values, dtype=float).flatten()

    if x.size != y.size:
        raise InvalidArgumentError(
            "doing least squares polynomial fit",
            f"{x.size} independent and {y.size} dependent values",
        )

    logger.debug("Polynomial fit of %d samples with powers %s", x.size, list(polynomial_powers))

    partials = polynomial_information_matrix(x, polynomial_powers)
    return perform_least_squares_adjustment(partials, y, settings).correction


def least_squares_polynomial_fit_from_mapping(
    independent_dependent_values: Mapping[float, float],
    polynomial_powers: Sequence[float],
    settings: Optional[EstimationSettings] = None,
) -> List[float]:
    """
    Fit a polynomial to samples given as an x -> y mapping.

    Args:
        independent_dependent_values: Mapping from x to y
        polynomial_powers: Powers of the polynomial terms
        settings: Estimation options, as for least_squares_polynomial_fit

    Returns:
        Polynomial coefficients as a list, one per power
    """
    keys, values = keys_and_values(independent_dependent_values)
    coefficients = least_squares_polynomial_fit(
        np.array(keys), np.array(values), polynomial_powers, settings
    )
    return coefficients.tolist()
