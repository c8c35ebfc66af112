"""Tests for diagonal weighting and the normal-equations matrix."""

import logging

import numpy as np
import pytest

from lsq_estimation import (
    InvalidArgumentError,
    covariance_from_inverse,
    inverse_covariance,
    weight_information_matrix,
)


def test_weighting_scales_each_column(rng):
    J = rng.standard_normal((5, 3))
    w = rng.uniform(0.5, 2.0, size=5)

    J_w = weight_information_matrix(J, w)

    for i in range(J.shape[1]):
        np.testing.assert_allclose(J_w[:, i], J[:, i] * w)
    np.testing.assert_allclose(J_w, np.diag(w) @ J)


def test_unit_weights_leave_matrix_unchanged(rng):
    J = rng.standard_normal((4, 2))

    np.testing.assert_array_equal(weight_information_matrix(J, np.ones(4)), J)


def test_weighting_does_not_modify_input():
    J = np.ones((3, 2))
    weight_information_matrix(J, np.array([2.0, 3.0, 4.0]))

    np.testing.assert_array_equal(J, np.ones((3, 2)))


def test_weighting_rejects_wrong_weight_count():
    with pytest.raises(InvalidArgumentError, match="weighting information matrix"):
        weight_information_matrix(np.ones((3, 2)), np.ones(2))


def test_inverse_covariance_without_prior(rng):
    J = rng.standard_normal((6, 3))
    w = rng.uniform(1.0, 10.0, size=6)

    np.testing.assert_allclose(inverse_covariance(J, w), J.T @ np.diag(w) @ J, atol=1e-12)


def test_inverse_covariance_adds_prior(rng):
    J = rng.standard_normal((6, 3))
    w = np.ones(6)
    P0_inv = np.diag([1.0, 2.0, 3.0])

    np.testing.assert_allclose(
        inverse_covariance(J, w, P0_inv), J.T @ J + P0_inv, atol=1e-12
    )


def test_inverse_covariance_is_symmetric(rng):
    J = rng.standard_normal((10, 4))
    w = rng.uniform(0.1, 5.0, size=10)
    L = rng.standard_normal((4, 4))
    P0_inv = L @ L.T

    result = inverse_covariance(J, w, P0_inv)

    np.testing.assert_allclose(result, result.T, atol=1e-12)


def test_inverse_covariance_rejects_wrong_prior_shape():
    with pytest.raises(InvalidArgumentError, match="inverse covariance"):
        inverse_covariance(np.ones((3, 2)), np.ones(3), np.eye(3))


def test_covariance_from_full_rank_inverse(caplog, rng):
    L = rng.standard_normal((3, 3))
    inv_cov = L @ L.T + 3.0 * np.eye(3)

    with caplog.at_level(logging.WARNING, logger="lsq_estimation"):
        covariance = covariance_from_inverse(inv_cov)

    np.testing.assert_allclose(covariance, np.linalg.inv(inv_cov), atol=1e-12)
    assert caplog.records == []


def test_covariance_from_singular_inverse_logs_rank(caplog):
    sink = logging.getLogger("estimation.covariance")

    with caplog.at_level(logging.WARNING, logger="estimation.covariance"):
        covariance = covariance_from_inverse(np.diag([4.0, 0.0]), log=sink)

    np.testing.assert_allclose(covariance, np.diag([0.25, 0.0]))
    assert [record.rank for record in caplog.records] == [1]
