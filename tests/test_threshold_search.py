"""
Tests for the truncation-fraction search and the (alpha, beta) sweep.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import numpy as np
import pandas as pd
import pytest

from stablecov.errors import InvalidParameterError
from stablecov.threshold_search import (
    DEFAULT_GRID,
    SearchResult,
    closest_to_target,
    make_grid,
    search,
    sweep,
)

# Small problem so the search runs in a couple of seconds
SMALL = dict(T=20, N=8, B=30)
GRID = [0.5, 0.7, 0.9]


class TestGrid:
    """Inclusive grids and target matching."""

    def test_make_grid_inclusive(self):
        np.testing.assert_allclose(make_grid(0.5, 1.0, 0.05), np.linspace(0.5, 1.0, 11))

    def test_default_grid(self):
        assert DEFAULT_GRID[0] == 0.5
        assert DEFAULT_GRID[-1] == 0.98
        assert DEFAULT_GRID.size == 25

    def test_make_grid_invalid(self):
        with pytest.raises(InvalidParameterError):
            make_grid(0.5, 1.0, 0.0)
        with pytest.raises(InvalidParameterError):
            make_grid(1.0, 0.5, 0.1)

    def test_closest_to_target(self):
        assert closest_to_target([0.80, 0.93, 0.99], 0.95) == 1

    def test_ties_pick_first(self):
        assert closest_to_target([0.90, 1.00, 0.90], 0.95) == 0

    def test_empty(self):
        with pytest.raises(InvalidParameterError):
            closest_to_target([], 0.95)


class TestSearch:
    """Grid search over v1."""

    def test_result(self):
        result = search(SMALL['T'], SMALL['N'], SMALL['B'], 1.5, 0.0, 0.95, GRID, seed=0)
        assert isinstance(result, SearchResult)
        assert result.v1 in GRID
        assert result.coverages.shape == (3,)
        assert result.p == result.coverages[GRID.index(result.v1)]
        assert np.argmin(np.abs(result.coverages - 0.95)) == GRID.index(result.v1)
        assert (result.alpha, result.beta) == (1.5, 0.0)

    def test_deterministic_for_seed(self):
        a = search(SMALL['T'], SMALL['N'], SMALL['B'], 1.3, 0.5, 0.9, GRID, seed=11)
        b = search(SMALL['T'], SMALL['N'], SMALL['B'], 1.3, 0.5, 0.9, GRID, seed=11)
        assert (a.v1, a.p) == (b.v1, b.p)
        np.testing.assert_array_equal(a.coverages, b.coverages)

    def test_independent_of_worker_count(self):
        serial = search(SMALL['T'], SMALL['N'], SMALL['B'], 1.5, 0.0, 0.95, GRID, seed=5, workers=1)
        pooled = search(SMALL['T'], SMALL['N'], SMALL['B'], 1.5, 0.0, 0.95, GRID, seed=5, workers=2)
        np.testing.assert_array_equal(serial.coverages, pooled.coverages)
        assert serial.v1 == pooled.v1

    def test_invalid_grid(self):
        with pytest.raises(InvalidParameterError):
            search(SMALL['T'], SMALL['N'], SMALL['B'], 1.5, 0.0, 0.95, [], seed=0)
        with pytest.raises(InvalidParameterError):
            search(SMALL['T'], SMALL['N'], SMALL['B'], 1.5, 0.0, 0.95, [0.5, 1.2], seed=0)


class TestSweep:
    """One row per (alpha, beta) pair."""

    def test_table(self):
        pairs = [(1.5, 0.0), (1.8, 0.5)]
        table = sweep(SMALL['T'], SMALL['N'], SMALL['B'], pairs, 0.95, GRID, seed=1, progress=False)
        assert isinstance(table, pd.DataFrame)
        assert list(table.columns) == ['v1', 'p', 'alpha', 'beta']
        assert len(table) == 2
        assert list(table['alpha']) == [1.5, 1.8]
        assert table['v1'].isin(GRID).all()
        assert table['p'].between(0, 1).all()

    def test_callback(self):
        seen = []
        sweep(SMALL['T'], SMALL['N'], SMALL['B'], [(1.5, 0.0)], 0.95, GRID, seed=2,
              progress=False, on_result=seen.append)
        assert len(seen) == 1 and isinstance(seen[0], SearchResult)

    def test_reproducible(self):
        pairs = [(1.5, 0.0)]
        a = sweep(SMALL['T'], SMALL['N'], SMALL['B'], pairs, 0.95, GRID, seed=3, progress=False)
        b = sweep(SMALL['T'], SMALL['N'], SMALL['B'], pairs, 0.95, GRID, seed=3, progress=False)
        pd.testing.assert_frame_equal(a, b)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
