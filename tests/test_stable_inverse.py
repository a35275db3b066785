"""
Tests for the stable inverse CDF and mode lookup.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import warnings

import numpy as np
import pytest
from scipy.stats import ks_2samp, levy, levy_stable, norm

from stablecov import stable_inverse
from stablecov.errors import InvalidParameterError, NumericInstabilityWarning, RootFindingWarning
from stablecov.stable_inverse import InverseMode, invcdf, invcdf_params, stable_mode
from stablecov.stable_params import StableParams
from stablecov.stable_sampler import sample_stable

U = np.array([0.01, 0.1, 0.25, 0.5, 0.75, 0.9, 0.99])


class TestClosedForms:
    """Quantiles with a closed form bypass the iteration."""

    def test_gaussian(self):
        x = invcdf(U, 2.0, 0.0, scale=1.5, shift=0.3)
        np.testing.assert_allclose(x, np.sqrt(2) * norm.ppf(U) * 1.5 + 0.3)

    def test_cauchy(self):
        x = invcdf(U, 1.0, 0.0, scale=2.0, shift=-1.0)
        np.testing.assert_allclose(x, 2.0 * np.tan(np.pi * (U - 0.5)) - 1.0)

    def test_levy(self):
        np.testing.assert_allclose(invcdf(U, 0.5, 1.0), levy.ppf(U), rtol=1e-8)

    def test_levy_reflected(self):
        np.testing.assert_allclose(invcdf(U, 0.5, -1.0), -levy.ppf(1 - U), rtol=1e-8)

    def test_endpoints(self):
        x = invcdf([0.0, 1.0], 2.0, 0.0)
        assert x[0] == -np.inf and x[1] == np.inf

    @pytest.mark.parametrize("alpha,beta", [(1.5, 1.0), (1.5, -1.0), (1.0, 0.0), (1.2, 0.3)])
    def test_unbounded_support_endpoints(self, alpha, beta):
        x = invcdf([0.0, 1.0], alpha, beta)
        assert x[0] == -np.inf and x[1] == np.inf

    @pytest.mark.parametrize("alpha", [0.5, 0.7])
    def test_bounded_support_endpoints(self, alpha):
        """Totally skewed laws with alpha < 1 start at the shift."""
        np.testing.assert_array_equal(invcdf([0.0, 1.0], alpha, 1.0, scale=2.0, shift=3.0), [3.0, np.inf])
        np.testing.assert_array_equal(invcdf([0.0, 1.0], alpha, -1.0, scale=2.0, shift=3.0), [-np.inf, 3.0])


class TestPrecise:
    """Newton/bisection refinement against levy_stable."""

    @pytest.mark.parametrize("alpha,beta", [(1.5, 0.5), (0.8, -0.3), (1.2, 1.0)])
    def test_cdf_of_quantile(self, alpha, beta):
        u = np.array([0.05, 0.3, 0.5, 0.7, 0.95])
        x = invcdf(u, alpha, beta)
        np.testing.assert_allclose(levy_stable.cdf(x, alpha, beta), u, atol=1e-5)

    def test_exhausted_budget_warns_and_returns_best_candidate(self, monkeypatch):
        quick = invcdf(0.3, 1.5, 0.4, mode=InverseMode.QUICK)
        monkeypatch.setattr(stable_inverse, 'MAX_NEWTON_ITER', 1)
        with pytest.warns(RootFindingWarning):
            x = invcdf(0.3, 1.5, 0.4, mode=InverseMode.PRECISE)
        assert np.isfinite(x)
        assert x == pytest.approx(quick)

    def test_quick_close_to_precise_at_table_node(self):
        quick = invcdf(0.3, 1.5, 0.4, mode=InverseMode.QUICK)
        precise = invcdf(0.3, 1.5, 0.4, mode=InverseMode.PRECISE)
        assert abs(quick - precise) < 5e-3, f"quick={quick:.5f}, precise={precise:.5f}"

    def test_scale_shift(self):
        base = invcdf(0.7, 1.5, 0.2)
        assert invcdf(0.7, 1.5, 0.2, scale=2.0, shift=1.0) == pytest.approx(2.0 * base + 1.0, rel=1e-6)

    def test_string_mode(self):
        assert invcdf(0.5, 1.5, 0.0, mode='quick') == invcdf(0.5, 1.5, 0.0, mode=InverseMode.QUICK)

    def test_params_record(self):
        params = StableParams(1.5, 0.0, 2.0, 1.0)
        assert invcdf_params(0.5, params) == pytest.approx(1.0, abs=1e-6)


class TestRoundTrip:
    """invcdf(U) must reproduce the law of the sampler."""

    @pytest.mark.parametrize("alpha,beta", [
        (2.0, 0.0),
        (1.0, 0.0),
        (1.0, 1.0),
        (1.0, -1.0),
        (0.5, 1.0),
        (0.5, -1.0),
        (1.5, -1.0),
        (1.5, 0.0),
        (1.5, 1.0),
        (0.5, 0.0),
    ])
    def test_two_sample_ks(self, alpha, beta):
        rng = np.random.default_rng(123)
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', RuntimeWarning)
            x = invcdf(rng.random(100), alpha, beta)
        y = sample_stable(alpha, beta, size=4000, rng=456)
        result = ks_2samp(x, y)
        assert result.pvalue > 1e-3, f"KS p-value {result.pvalue:.2e} for alpha={alpha}, beta={beta}"


class TestEdgeCases:
    """Domain handling and diagnostics."""

    def test_scalar_returns_float(self):
        assert isinstance(invcdf(0.5, 1.5, 0.0), float)

    def test_array_shape_preserved(self):
        assert invcdf(np.full((2, 3), 0.5), 2.0, 0.0).shape == (2, 3)

    def test_out_of_range_probability_is_nan(self):
        x = invcdf([-0.1, 0.5, 1.1], 1.5, 0.0, mode='quick')
        assert np.isnan(x[0]) and np.isnan(x[2]) and np.isfinite(x[1])

    def test_zero_scale_returns_shift(self):
        np.testing.assert_allclose(invcdf([0.1, 0.9], 1.3, 0.5, scale=0.0, shift=2.5), 2.5)

    def test_alpha_near_one_warns(self):
        with pytest.warns(NumericInstabilityWarning):
            invcdf(0.5, 1.01, 0.0, mode='quick')

    def test_alpha_near_zero_warns(self):
        with pytest.warns(NumericInstabilityWarning):
            invcdf(0.5, 0.01, 0.0, mode='quick')

    @pytest.mark.parametrize("alpha,beta,scale", [(0.0, 0.0, 1.0), (2.1, 0.0, 1.0),
                                                  (1.5, -1.1, 1.0), (1.5, 0.0, -0.5)])
    def test_invalid_parameters(self, alpha, beta, scale):
        with pytest.raises(InvalidParameterError):
            invcdf(0.5, alpha, beta, scale=scale)

    def test_invalid_mode(self):
        with pytest.raises(ValueError):
            invcdf(0.5, 1.5, 0.0, mode='newton')


class TestMode:
    """Tabulated mode location."""

    def test_symmetric_mode_is_zero(self):
        assert abs(stable_mode(1.5, 0.0)) < 1e-3

    def test_levy_mode(self):
        """Levy(0, 1) has its mode at 1/3."""
        assert stable_mode(0.5, 1.0) == pytest.approx(1 / 3, abs=1e-3)

    def test_odd_in_beta(self):
        assert stable_mode(1.3, -0.45) == pytest.approx(-stable_mode(1.3, 0.45))

    def test_invalid(self):
        with pytest.raises(InvalidParameterError):
            stable_mode(1.5, 2.0)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
