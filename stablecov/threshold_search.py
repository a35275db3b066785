"""
Search for the truncation fraction v1 whose coverage is closest to a target level.

For each (alpha, beta) pair the coverage probability is estimated at every v1
of a grid; the grid point with |p - h1| smallest wins (first one on ties).
"""

from typing import Callable, Iterable, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from tqdm import tqdm

from .coverage import SampleDistribution, estimate_coverage, validate_coverage_inputs
from .errors import InvalidParameterError
from .parallel import SeedLike, parallel_map, spawn_seeds
from .wild_bootstrap import WeightScheme

RESULT_COLUMNS = ['v1', 'p', 'alpha', 'beta']


def make_grid(start: float, stop: float, step: float) -> np.ndarray:
    """Evenly spaced grid from start to stop inclusive."""
    if not step > 0:
        raise InvalidParameterError(f"step must be positive, got {step}")
    if stop < start:
        raise InvalidParameterError(f"stop ({stop}) must not be below start ({start})")
    n = int(np.floor((stop - start) / step + 1e-9)) + 1
    return np.round(start + step * np.arange(n), 10)


DEFAULT_GRID = make_grid(0.5, 0.98, 0.02)


class SearchResult(NamedTuple):
    """
    Best truncation fraction for one (alpha, beta) pair.

    Attributes:
        v1: Selected grid point
        p: Coverage probability at v1
        alpha: Stability index
        beta: Skewness
        coverages: Coverage probability at every grid point
    """
    v1: float
    p: float
    alpha: float
    beta: float
    coverages: np.ndarray

    def to_row(self):
        return {'v1': self.v1, 'p': self.p, 'alpha': self.alpha, 'beta': self.beta}


def closest_to_target(probabilities: Sequence[float], h1: float) -> int:
    """Index of the probability closest to h1; the first one wins ties."""
    probabilities = np.asarray(probabilities, dtype=float)
    if probabilities.size == 0:
        raise InvalidParameterError("Cannot pick from an empty list of probabilities")
    return int(np.argmin(np.abs(probabilities - h1)))


def _grid_point_task(task) -> float:
    seed, T, N, B, alpha, beta, v1, h1, scheme, distribution = task
    return estimate_coverage(T, N, B, alpha, beta, v1, h1, seed=seed, workers=1,
                             scheme=scheme, distribution=distribution)


def _as_grid(grid: Optional[Sequence[float]]) -> np.ndarray:
    grid = DEFAULT_GRID if grid is None else np.asarray(grid, dtype=float)
    if grid.ndim != 1 or grid.size == 0:
        raise InvalidParameterError("grid must be a non-empty 1-D sequence of v1 values")
    return grid


def search(T: int, N: int, B: int, alpha: float, beta: float, h1: float,
           grid: Optional[Sequence[float]] = None, *,
           seed: SeedLike = None,
           workers: int = 1,
           scheme: Union[WeightScheme, str] = WeightScheme.MAMMEN,
           distribution: Union[SampleDistribution, str] = SampleDistribution.STABLE) -> SearchResult:
    """
    Pick the v1 in grid whose coverage is closest to h1.

    Grid points fan out over `workers` processes; each runs its trials
    serially on its own seed substream, so the result is the same for any
    worker count.

    Args:
        T, N, B: Sample size, trials, bootstrap replicates
        alpha, beta: Law of the data
        h1: Target confidence level
        grid: Candidate v1 values (defaults to 0.5:0.02:0.98)
        seed: Root seed
        workers: Worker processes
        scheme: Bulk weight scheme
        distribution: Law of the data

    Returns:
        SearchResult
    """
    grid = _as_grid(grid)
    for v1 in grid:
        validate_coverage_inputs(T, N, B, alpha, beta, v1, h1, distribution)
    scheme = WeightScheme(scheme)
    distribution = SampleDistribution(distribution)

    tasks = [(child, T, N, B, alpha, beta, float(v1), h1, scheme, distribution)
             for v1, child in zip(grid, spawn_seeds(seed, grid.size))]
    coverages = np.array(parallel_map(_grid_point_task, tasks, workers))

    best = closest_to_target(coverages, h1)
    return SearchResult(
        v1=float(grid[best]),
        p=float(coverages[best]),
        alpha=float(alpha),
        beta=float(beta),
        coverages=coverages,
    )


def sweep(T: int, N: int, B: int, pairs: Iterable[Tuple[float, float]], h1: float,
          grid: Optional[Sequence[float]] = None, *,
          seed: SeedLike = None,
          workers: int = 1,
          scheme: Union[WeightScheme, str] = WeightScheme.MAMMEN,
          distribution: Union[SampleDistribution, str] = SampleDistribution.STABLE,
          progress: bool = True,
          on_result: Optional[Callable[[SearchResult], None]] = None) -> pd.DataFrame:
    """
    Run `search` for every (alpha, beta) pair and collect one row per pair.

    Args:
        pairs: (alpha, beta) combinations
        progress: Show a tqdm progress bar
        on_result: Called with every SearchResult as soon as it is available
        (other arguments as in `search`)

    Returns:
        DataFrame with columns v1, p, alpha, beta
    """
    pairs = list(pairs)
    rows = []
    seeds = spawn_seeds(seed, len(pairs))
    for (alpha, beta), child in tqdm(zip(pairs, seeds), total=len(pairs),
                                     desc="Threshold search", disable=not progress):
        result = search(T, N, B, alpha, beta, h1, grid, seed=child, workers=workers,
                        scheme=scheme, distribution=distribution)
        rows.append(result.to_row())
        if on_result is not None:
            on_result(result)

    return pd.DataFrame(rows, columns=RESULT_COLUMNS)
