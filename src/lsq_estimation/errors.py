"""
Errors and Warnings for Least-Squares Estimation

Shape and dimension violations are the only hard failures in this package.
Ill-conditioning is reported through logging and never raised.
"""


class InvalidArgumentError(ValueError):
    """
    Error raised when array arguments have incompatible shapes.

    The message names the operation that rejected the input, e.g.
    "weighting information matrix" or "least squares polynomial fit".
    """

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"Error when {operation}: {detail}")


class IllConditionedMatrixWarning(UserWarning):
    """
    Category attached to the log record emitted for an ill-conditioned solve.

    A large condition number indicates nearly dependent parameters or poor
    scaling; the returned solution may not be numerically reliable.
    """
