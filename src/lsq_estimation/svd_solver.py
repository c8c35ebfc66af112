"""
SVD-Based Linear Solver with Condition Number Check

Solves A @ x = b through a singular value decomposition, which stays
well-defined for near-singular A where direct inversion breaks down.
The condition number check is purely advisory: an ill-conditioned system
is logged as a warning and the best-effort solution is still returned.
"""

import logging
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from .decomposition import condition_number_of_decomposition, decompose
from .errors import IllConditionedMatrixWarning, InvalidArgumentError

logger = logging.getLogger(__name__)

# Default threshold of the generic solve
DEFAULT_SOLVE_MAX_CONDITION = 1.0e-8

# Default threshold used on the least-squares adjustment path
DEFAULT_ADJUSTMENT_MAX_CONDITION = 1.0e8


def solve_system_with_svd(
    matrix: NDArray[np.floating],
    rhs: NDArray[np.floating],
    check_condition: bool = True,
    max_condition: float = DEFAULT_SOLVE_MAX_CONDITION,
    log: Optional[logging.Logger] = None,
) -> NDArray[np.floating]:
    """
    Solve A @ x = b for x using a singular value decomposition of A.

    Args:
        matrix: Matrix A (n, m)
        rhs: Right-hand side vector b (n,)
        check_condition: If True, compute the condition number of A and log a
            warning when it exceeds max_condition
        max_condition: Largest condition number accepted without a warning
        log: Destination of the ill-conditioning warning
            (default: this module's logger)

    Returns:
        Solution x (m,)
    """
    log = log if log is not None else logger

    matrix = np.atleast_2d(np.asarray(matrix, dtype=float))
    rhs = np.asarray(rhs, dtype=float).flatten()

    if rhs.size != matrix.shape[0]:
        raise InvalidArgumentError(
            "solving system of equations with SVD",
            f"right-hand side has {rhs.size} elements, matrix has {matrix.shape[0]} rows",
        )

    svd = decompose(matrix)

    if check_condition:
        condition_number = condition_number_of_decomposition(svd)
        # NaN means an all-zero matrix, which is singular as well
        if np.isnan(condition_number) or condition_number > max_condition:
            log.warning(
                "Warning when performing least squares, condition number is %g",
                condition_number,
                extra={
                    "condition_number": condition_number,
                    "category": IllConditionedMatrixWarning,
                },
            )

    return svd.solve(rhs)
