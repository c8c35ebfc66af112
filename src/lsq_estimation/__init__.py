# lsq_estimation package
"""
Weighted Least-Squares Estimation Package

This package provides:
- SVD-based solution of normal equations with condition number checks
- Diagonal weighting and a priori regularization of the information matrix
- Single-iteration least-squares adjustment from an information matrix
- Covariance propagation of consider parameters
- Least-squares fit of polynomials with arbitrary powers
"""

from .errors import InvalidArgumentError, IllConditionedMatrixWarning
from .decomposition import (
    SingularValueDecomposition,
    decompose,
    condition_number_of_decomposition,
    condition_number_of_information_matrix,
)
from .svd_solver import (
    DEFAULT_SOLVE_MAX_CONDITION,
    DEFAULT_ADJUSTMENT_MAX_CONDITION,
    solve_system_with_svd,
)
from .normal_equations import (
    weight_information_matrix,
    inverse_covariance,
    covariance_from_inverse,
)
from .least_squares import (
    EstimationSettings,
    EstimationResult,
    perform_least_squares_adjustment,
)
from .consider_covariance import (
    consider_covariance_contribution,
    covariance_with_consider_parameters,
)
from .polynomial_fit import (
    polynomial_information_matrix,
    least_squares_polynomial_fit,
    least_squares_polynomial_fit_from_mapping,
)

__all__ = [
    # Errors
    "InvalidArgumentError",
    "IllConditionedMatrixWarning",
    # Decomposition
    "SingularValueDecomposition",
    "decompose",
    "condition_number_of_decomposition",
    "condition_number_of_information_matrix",
    # Solver
    "DEFAULT_SOLVE_MAX_CONDITION",
    "DEFAULT_ADJUSTMENT_MAX_CONDITION",
    "solve_system_with_svd",
    # Normal equations
    "weight_information_matrix",
    "inverse_covariance",
    "covariance_from_inverse",
    # Estimator
    "EstimationSettings",
    "EstimationResult",
    "perform_least_squares_adjustment",
    # Consider parameters
    "consider_covariance_contribution",
    "covariance_with_consider_parameters",
    # Polynomial fit
    "polynomial_information_matrix",
    "least_squares_polynomial_fit",
    "least_squares_polynomial_fit_from_mapping",
]
