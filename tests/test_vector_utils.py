"""Tests for the geometric helpers and container conversions."""

import numpy as np
import pytest

from lsq_estimation import InvalidArgumentError
from lsq_estimation.vector_utils import (
    angle_between_vectors,
    cosine_of_angle_between_vectors,
    cross_product_matrix,
    keys_and_values,
    norm_of_vector_difference,
    second_block_of_state,
    vector_difference,
    vector_norm,
    vector_norm_from_function,
)


def test_cross_product_matrix_matches_cross(rng):
    v = rng.standard_normal(3)
    u = rng.standard_normal(3)

    S = cross_product_matrix(v)

    np.testing.assert_allclose(S @ u, np.cross(v, u), atol=1e-14)
    np.testing.assert_array_equal(S, -S.T)


def test_angle_between_orthogonal_vectors():
    assert angle_between_vectors([1.0, 0.0, 0.0], [0.0, 2.0, 0.0]) == pytest.approx(np.pi / 2)


def test_cosine_is_clipped_for_parallel_vectors():
    v = np.array([0.1, 0.2, 0.3])

    assert cosine_of_angle_between_vectors(v, 3.0 * v) <= 1.0
    assert angle_between_vectors(v, 3.0 * v) == pytest.approx(0.0, abs=1e-7)
    assert angle_between_vectors(v, -v) == pytest.approx(np.pi)


def test_angle_rejects_size_mismatch():
    with pytest.raises(InvalidArgumentError, match="angle between vectors"):
        angle_between_vectors([1.0, 0.0], [1.0, 0.0, 0.0])


def test_norms_and_differences():
    a = np.array([4.0, 6.0, 3.0])
    b = np.array([1.0, 2.0, 3.0])

    np.testing.assert_array_equal(vector_difference(a, b), [3.0, 4.0, 0.0])
    assert norm_of_vector_difference(a, b) == pytest.approx(5.0)
    assert vector_norm([3.0, 4.0, 0.0]) == pytest.approx(5.0)
    assert vector_norm_from_function(lambda: np.array([0.0, 0.0, 2.0])) == pytest.approx(2.0)


def test_second_block_of_state():
    def state_function(time):
        return np.array([1.0, 2.0, 3.0, 4.0, 5.0, 6.0]) * time

    np.testing.assert_array_equal(second_block_of_state(state_function, 2.0), [8.0, 10.0, 12.0])


def test_keys_and_values_are_sorted_by_key():
    keys, values = keys_and_values({3.0: 30.0, 1.0: 10.0, 2.0: 20.0})

    assert keys == [1.0, 2.0, 3.0]
    assert values == [10.0, 20.0, 30.0]
