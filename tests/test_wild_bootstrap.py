"""
Tests for the tail/bulk wild bootstrap.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
import pytest

from stablecov.errors import InvalidParameterError
from stablecov.wild_bootstrap import (
    MAMMEN_P,
    WeightScheme,
    build_replicates,
    build_weight_matrix,
    draw_weights,
    partition_tail,
    two_point_moments,
)


class TestMammenWeights:
    """Two-point law with mean 0, variance 1 and third moment 1."""

    def test_closed_form_moments(self):
        moments = two_point_moments()
        assert moments['mean'] == pytest.approx(0.0, abs=1e-12)
        assert moments['variance'] == pytest.approx(1.0, abs=1e-12)
        assert moments['third_moment'] == pytest.approx(1.0, abs=1e-12)

    def test_two_support_points(self):
        w = draw_weights(1000, 10, WeightScheme.MAMMEN, rng=0)
        points = np.unique(np.round(w, 12))
        np.testing.assert_allclose(points, [np.sqrt(5) * (MAMMEN_P - 1), np.sqrt(5) * MAMMEN_P])

    def test_empirical_moments(self):
        w = draw_weights(100000, 1, WeightScheme.MAMMEN, rng=1).ravel()
        # Standard errors: 1/sqrt(n) for the mean, about 1/sqrt(n) for the variance
        assert abs(np.mean(w)) < 0.015
        assert abs(np.var(w) - 1.0) < 0.02
        assert abs(np.mean(w < 0) - MAMMEN_P) < 0.01


class TestAlternativeSchemes:
    """Each scheme draws a full matrix with the expected moments."""

    @pytest.mark.parametrize("scheme", [WeightScheme.MAMMEN_CONTINUOUS, WeightScheme.NORMAL,
                                        WeightScheme.RADEMACHER])
    def test_mean_zero_variance_one(self, scheme):
        w = draw_weights(50000, 2, scheme, rng=2)
        assert w.shape == (50000, 2)
        assert abs(np.mean(w)) < 0.02
        assert abs(np.var(w) - 1.0) < 0.05

    def test_rademacher_signs(self):
        w = draw_weights(100, 5, 'rademacher', rng=3)
        assert set(np.unique(w)) == {-1.0, 1.0}

    def test_multinomial_columns_sum_to_rows(self):
        w = draw_weights(30, 7, WeightScheme.MULTINOMIAL, rng=4)
        assert w.shape == (30, 7)
        np.testing.assert_array_equal(w.sum(axis=0), np.full(7, 30.0))
        assert np.all(w >= 0)

    def test_multinomial_empty_bulk(self):
        assert draw_weights(0, 4, WeightScheme.MULTINOMIAL, rng=5).shape == (0, 4)


class TestWeightMatrix:
    """Tail rows are anchored, bulk rows are reweighted."""

    def test_partition(self):
        tail, bulk = partition_tail(np.array([-3.0, 0.5, 2.0, -1.0]), 1.0)
        np.testing.assert_array_equal(tail, [True, False, True, False])
        np.testing.assert_array_equal(bulk, ~tail)

    def test_tail_rows_weight_one(self):
        x = np.array([10.0, -0.2, 0.3, -8.0, 0.1])
        w = build_weight_matrix(x, threshold=1.0, n_replicates=50, rng=6)
        assert w.shape == (5, 50)
        np.testing.assert_array_equal(w[[0, 3]], 1.0)
        assert np.all(w[[1, 2, 4]] != 1.0)

    def test_threshold_equal_to_value_is_bulk(self):
        x = np.array([1.0, 2.0])
        w = build_weight_matrix(x, threshold=2.0, n_replicates=20, rng=7)
        assert np.all(w != 1.0)

    def test_replicates_are_reweighted_sample(self):
        x = np.array([5.0, -0.5, 0.25])
        w = build_weight_matrix(x, 1.0, 8, rng=8)
        r = build_replicates(x, 1.0, 8, rng=8)
        np.testing.assert_allclose(r, x[:, None] * w)

    def test_invalid_inputs(self):
        with pytest.raises(InvalidParameterError):
            build_weight_matrix(np.ones((2, 2)), 1.0, 5)
        with pytest.raises(InvalidParameterError):
            build_weight_matrix(np.ones(3), 1.0, 0)
        with pytest.raises(ValueError):
            draw_weights(3, 3, 'poisson')


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
