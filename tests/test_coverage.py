"""
Tests for the Monte Carlo coverage estimator.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
import pytest

from stablecov.coverage import (
    SampleDistribution,
    TrialResult,
    estimate_coverage,
    percentile_interval,
    run_coverage_trials,
    run_trial,
    studentized_statistic,
    trial_from_sample,
    truncation_threshold,
)
from stablecov.errors import InvalidParameterError, NumericInstabilityWarning
from stablecov.parallel import parallel_map, spawn_seeds


class TestThreshold:
    """Rank floor(T * v1) of |x| in descending order."""

    def test_rank(self):
        x = np.array([0.5, -4.0, 3.0, -1.0, 2.0])
        # floor(5 * 0.4) = 2 -> second largest magnitude
        assert truncation_threshold(x, 0.4) == 3.0

    def test_rank_clamped_to_one(self):
        x = np.array([0.5, -4.0, 3.0])
        assert truncation_threshold(x, 0.1) == 4.0

    def test_v1_one_gives_smallest_magnitude(self):
        x = np.array([0.5, -4.0, 3.0])
        assert truncation_threshold(x, 1.0) == 0.5


class TestStatistic:
    """Studentized mean and percentile interval."""

    def test_studentized_statistic(self):
        x = np.array([1.0, 2.0, 3.0, 4.0])
        expected = np.sqrt(4) * 2.5 / np.std(x, ddof=1)
        assert studentized_statistic(x) == pytest.approx(expected)

    def test_columnwise(self):
        x = np.array([[1.0, 0.0], [2.0, 0.0], [3.0, 0.0]])
        stats = studentized_statistic(x, axis=0)
        assert stats[0] == pytest.approx(np.sqrt(3) * 2.0)
        assert np.isnan(stats[1])

    def test_interval_is_sorted(self):
        sample = np.random.default_rng(0).standard_normal(40)
        stats = np.random.default_rng(1).standard_normal(500)
        lower, upper = percentile_interval(sample, stats, 0.9)
        assert lower <= upper

    def test_interval_formula(self):
        sample = np.array([-1.0, 0.0, 1.0, 2.0])
        stats = np.linspace(-2, 2, 101)
        lower, upper = percentile_interval(sample, stats, 0.9)
        k_hi, k_lo = np.quantile(stats, [0.95, 0.05], method='hazen')
        s = np.std(sample, ddof=1)
        assert lower == pytest.approx(0.5 - s * k_hi / 2)
        assert upper == pytest.approx(0.5 - s * k_lo / 2)

    def test_nan_replicates_excluded(self):
        sample = np.array([-1.0, 0.0, 1.0, 2.0])
        stats = np.linspace(-2, 2, 101)
        with_nan = np.concatenate([stats, [np.nan, np.nan]])
        assert percentile_interval(sample, with_nan, 0.9) == percentile_interval(sample, stats, 0.9)

    def test_all_nan_gives_nan(self):
        lower, upper = percentile_interval(np.ones(3), np.full(5, np.nan), 0.9)
        assert np.isnan(lower) and np.isnan(upper)


class TestTrial:
    """Single trial behavior."""

    def test_result_fields(self):
        result = run_trial(30, 50, 1.5, 0.0, 0.9, 0.95, rng=0)
        assert isinstance(result, TrialResult)
        assert isinstance(result.covered, bool)
        assert result.lower <= result.upper
        assert result.threshold >= 0

    def test_same_seed_same_trial(self):
        assert run_trial(30, 50, 1.5, 0.3, 0.9, 0.95, rng=1) == run_trial(30, 50, 1.5, 0.3, 0.9, 0.95, rng=1)

    def test_zero_variance_replicates(self):
        """A zero sample has zero-variance replicates: not covering, with a warning."""
        with pytest.warns(NumericInstabilityWarning):
            result = trial_from_sample(np.zeros(20), 30, 0.5, 0.95, rng=2)
        assert result.covered is False
        assert np.isnan(result.lower) and np.isnan(result.upper)
        assert np.isnan(result.statistic)

    def test_double_pareto_trial(self):
        result = run_trial(30, 50, 1.5, 0.0, 0.9, 0.95,
                           distribution=SampleDistribution.DOUBLE_PARETO, rng=3)
        assert isinstance(result.covered, bool)


class TestCoverage:
    """Aggregate coverage probability."""

    def test_gaussian_near_nominal(self):
        """Without a tail (rank-1 threshold) Gaussian data cover close to h1."""
        p = estimate_coverage(50, 200, 200, 2.0, 0.0, 0.03, 0.95, seed=42)
        assert 0.85 <= p <= 1.0, f"Expected coverage near 0.95, got {p:.3f}"

    def test_gaussian_tail_anchored_threshold(self):
        """T=50, N=1000, B=400 Gaussian data with v1 = h1 = 0.95 cover within 0.05 of nominal."""
        p = estimate_coverage(50, 1000, 400, 2.0, 0.0, 0.95, 0.95, seed=0, workers=4)
        assert abs(p - 0.95) <= 0.05, f"Expected coverage near 0.95, got {p:.3f}"

    def test_probability_range(self):
        p = estimate_coverage(20, 20, 50, 1.2, 0.5, 0.8, 0.9, seed=1)
        assert 0.0 <= p <= 1.0

    def test_trials_are_ordered_and_reproducible(self):
        a = run_coverage_trials(20, 10, 30, 1.5, 0.0, 0.9, 0.95, seed=7)
        b = run_coverage_trials(20, 10, 30, 1.5, 0.0, 0.9, 0.95, seed=7)
        assert len(a) == 10
        assert a == b

    def test_workers_do_not_change_result(self):
        serial = run_coverage_trials(20, 6, 30, 1.5, 0.0, 0.9, 0.95, seed=3, workers=1)
        pooled = run_coverage_trials(20, 6, 30, 1.5, 0.0, 0.9, 0.95, seed=3, workers=2)
        assert serial == pooled

    def test_schemes(self):
        for scheme in ['mammen', 'mammen_continuous', 'normal', 'rademacher', 'multinomial']:
            p = estimate_coverage(20, 5, 30, 1.5, 0.0, 0.9, 0.95, seed=0, scheme=scheme)
            assert 0.0 <= p <= 1.0

    @pytest.mark.parametrize("kwargs", [
        dict(T=1), dict(N=0), dict(B=1), dict(v1=0.0), dict(v1=1.5),
        dict(h1=1.0), dict(h1=0.0), dict(alpha=2.5), dict(beta=-2.0),
    ])
    def test_invalid_inputs(self, kwargs):
        args = dict(T=20, N=5, B=30, alpha=1.5, beta=0.0, v1=0.9, h1=0.95)
        args.update(kwargs)
        with pytest.raises(InvalidParameterError):
            estimate_coverage(args['T'], args['N'], args['B'], args['alpha'], args['beta'],
                              args['v1'], args['h1'])


class TestParallel:
    """Fork-join helpers."""

    def test_spawn_seeds_independent(self):
        seeds = spawn_seeds(0, 3)
        draws = [np.random.default_rng(s).random() for s in seeds]
        assert len(set(draws)) == 3

    def test_spawn_seeds_reproducible(self):
        a = [np.random.default_rng(s).random() for s in spawn_seeds(5, 2)]
        b = [np.random.default_rng(s).random() for s in spawn_seeds(5, 2)]
        assert a == b

    def test_parallel_map_order(self):
        assert parallel_map(abs, [0, -1, 2, -3, 4, -5], workers=2) == [0, 1, 2, 3, 4, 5]
        assert parallel_map(abs, [0, -1, 2, -3, 4, -5], workers=1) == [0, 1, 2, 3, 4, 5]


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
