"""
Vector Utilities

Small geometric helpers and container conversions used alongside the
least-squares routines.
"""

from typing import Callable, List, Mapping, Tuple

import numpy as np
from numpy.typing import NDArray

from .errors import InvalidArgumentError


def cross_product_matrix(vector: NDArray[np.floating]) -> NDArray[np.floating]:
    """
    Skew-symmetric matrix [v]x such that [v]x @ u = v x u.

    Args:
        vector: 3D vector v

    Returns:
        3x3 cross-product matrix
    """
    x, y, z = np.asarray(vector, dtype=float)
    return np.array(
        [
            [0.0, -z, y],
            [z, 0.0, -x],
            [-y, x, 0.0],
        ]
    )


def cosine_of_angle_between_vectors(
    vector0: NDArray[np.floating], vector1: NDArray[np.floating]
) -> float:
    """
    Cosine of the angle between two vectors of equal size.

    The result is clipped to [-1, 1] so that round-off never pushes it
    outside the domain of arccos.
    """
    a = np.asarray(vector0, dtype=float).flatten()
    b = np.asarray(vector1, dtype=float).flatten()

    if a.size != b.size:
        raise InvalidArgumentError(
            "computing angle between vectors",
            f"sizes {a.size} and {b.size} are incompatible",
        )

    cosine = np.dot(a / np.linalg.norm(a), b / np.linalg.norm(b))
    return float(np.clip(cosine, -1.0, 1.0))


def angle_between_vectors(
    vector0: NDArray[np.floating], vector1: NDArray[np.floating]
) -> float:
    """Angle between two vectors [rad], in [0, pi]."""
    return float(np.arccos(cosine_of_angle_between_vectors(vector0, vector1)))


def vector_difference(
    vector0: NDArray[np.floating], vector1: NDArray[np.floating]
) -> NDArray[np.floating]:
    return np.asarray(vector0, dtype=float) - np.asarray(vector1, dtype=float)


def norm_of_vector_difference(
    vector0: NDArray[np.floating], vector1: NDArray[np.floating]
) -> float:
    return float(np.linalg.norm(vector_difference(vector0, vector1)))


def vector_norm(vector: NDArray[np.floating]) -> float:
    return float(np.linalg.norm(np.asarray(vector, dtype=float)))


def vector_norm_from_function(vector_function: Callable[[], NDArray[np.floating]]) -> float:
    """Norm of the vector returned by a zero-argument function."""
    return vector_norm(vector_function())


def second_block_of_state(
    state_function: Callable[[float], NDArray[np.floating]], time: float
) -> NDArray[np.floating]:
    """
    Evaluate a 6D state function and return its second 3D block.

    For a Cartesian state [x, y, z, vx, vy, vz] this is the velocity.
    """
    state = np.asarray(state_function(time), dtype=float)
    return state[3:6]


def keys_and_values(mapping: Mapping[float, float]) -> Tuple[List[float], List[float]]:
    """
    Split a mapping into matched key and value lists, ordered by ascending key.

    Args:
        mapping: Independent -> dependent value mapping

    Returns:
        Tuple of (keys, values)
    """
    keys = sorted(mapping)
    return keys, [mapping[key] for key in keys]
