"""
Tests for the static lookup tables and the clamped grid interpolator.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
import pytest

from stablecov.stable_tables import (
    MCCULLOCH_ALPHA_TABLE,
    QUANTILE_TABLE,
    ClampedGridInterpolator,
    ecf_k,
    mcculloch_alpha,
    stable_quantile,
)


class TestTables:
    """Immutable data with consistent shapes."""

    def test_read_only(self):
        with pytest.raises(ValueError):
            MCCULLOCH_ALPHA_TABLE[0, 0] = 0.0

    def test_quantile_table_shape(self):
        assert QUANTILE_TABLE.shape == (9, 6, 20)

    def test_symmetric_median_is_zero(self):
        """beta = 0 quantiles at u = 0.5 vanish for every alpha."""
        np.testing.assert_allclose(QUANTILE_TABLE[4, 0, :], 0.0, atol=1e-4)

    def test_gaussian_column(self):
        """alpha = 2 column holds sqrt(2) * normal quantiles."""
        from scipy.stats import norm
        u = np.arange(1, 10) * 0.1
        np.testing.assert_allclose(QUANTILE_TABLE[:, 0, -1], np.sqrt(2) * norm.ppf(u), atol=1e-3)

    def test_gaussian_percentile_ratio(self):
        """nu_alpha = 2.439 (Gaussian) maps to alpha = 2."""
        assert float(mcculloch_alpha(2.439, 0.0)) == pytest.approx(2.0)


class TestInterpolator:
    """Linear interpolation clamped to the table edges."""

    def test_linear_between_nodes(self):
        interp = ClampedGridInterpolator((np.array([0.0, 1.0]),), np.array([0.0, 10.0]))
        assert float(interp(0.25)) == pytest.approx(2.5)

    def test_clamped_outside(self):
        interp = ClampedGridInterpolator((np.array([0.0, 1.0]),), np.array([0.0, 10.0]))
        np.testing.assert_allclose(interp(np.array([-5.0, 7.0])), [0.0, 10.0])

    def test_broadcast_shapes(self):
        values = stable_quantile(np.array([0.2, 0.5, 0.8]), 0.0, 1.5)
        assert values.shape == (3,)
        assert values[0] == pytest.approx(-values[2], abs=1e-4)

    def test_ecf_table_clamps_sample_size(self):
        assert float(ecf_k(1.5, 10 ** 6)) == float(ecf_k(1.5, 1600))


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
