"""
Monte Carlo estimate of bootstrap confidence-interval coverage.

One trial:
1. Draw a sample of size T from S(alpha, beta, 1, 0) (or a double-Pareto law)
2. Threshold v = value at rank floor(T * v1) of |x| sorted descending
3. B wild bootstrap replicates, tail rows (|x| > v) left untouched
4. Studentized statistic sqrt(T) * mean / std on every replicate
5. Percentile interval for the mean from the (1 +- h1)/2 quantiles
6. Covered iff the interval contains the true mean 0

The coverage probability p is the fraction of N independent trials that cover.
"""

import warnings
from enum import Enum
from typing import List, NamedTuple, Tuple, Union

import numpy as np

from .errors import InvalidParameterError, NumericInstabilityWarning
from .parallel import SeedLike, parallel_map, spawn_seeds
from .stable_params import validate_params
from .stable_sampler import RandomSource, as_generator, sample_double_pareto, sample_stable
from .wild_bootstrap import WeightScheme, build_replicates


class SampleDistribution(Enum):
    STABLE = 'stable'
    DOUBLE_PARETO = 'double_pareto'


class TrialResult(NamedTuple):
    """
    Outcome of a single Monte Carlo trial.

    Attributes:
        covered: Whether the interval strictly contains 0
        lower: Smaller interval endpoint (NaN if undefined)
        upper: Larger interval endpoint (NaN if undefined)
        threshold: Truncation threshold v used for the tail/bulk split
        statistic: Studentized statistic of the original sample
    """
    covered: bool
    lower: float
    upper: float
    threshold: float
    statistic: float


def validate_coverage_inputs(T: int, N: int, B: int, alpha: float, beta: float, v1: float, h1: float,
                             distribution: Union[SampleDistribution, str] = SampleDistribution.STABLE):
    """
    Check the arguments of a coverage run.

    Raises:
        InvalidParameterError: if any argument is outside its domain
    """
    if int(T) != T or T < 2:
        raise InvalidParameterError(f"T must be an integer >= 2, got {T}")
    if int(N) != N or N < 1:
        raise InvalidParameterError(f"N must be an integer >= 1, got {N}")
    if int(B) != B or B < 2:
        raise InvalidParameterError(f"B must be an integer >= 2, got {B}")
    if not (0.0 < v1 <= 1.0):
        raise InvalidParameterError(f"v1 must lie in (0, 1], got {v1}")
    if not (0.0 < h1 < 1.0):
        raise InvalidParameterError(f"h1 must lie in (0, 1), got {h1}")

    if SampleDistribution(distribution) is SampleDistribution.STABLE:
        validate_params(alpha, beta)
    elif not (np.isfinite(alpha) and alpha > 0):
        raise InvalidParameterError(f"Double-Pareto tail index must be positive, got {alpha}")


def draw_sample(T: int, alpha: float, beta: float,
                distribution: Union[SampleDistribution, str] = SampleDistribution.STABLE,
                rng: RandomSource = None) -> np.ndarray:
    """Draw the data of one trial; beta is ignored for the double-Pareto law."""
    if SampleDistribution(distribution) is SampleDistribution.DOUBLE_PARETO:
        return sample_double_pareto(alpha, T, rng=rng)
    return sample_stable(alpha, beta, 1.0, 0.0, size=T, rng=rng)


def truncation_threshold(sample: np.ndarray, v1: float) -> float:
    """
    Value at rank floor(T * v1) (1-based) of |sample| sorted in descending order.

    The rank is clamped to [1, T].
    """
    magnitudes = np.sort(np.abs(np.asarray(sample, dtype=float)))[::-1]
    rank = int(np.floor(magnitudes.size * v1))
    rank = min(max(rank, 1), magnitudes.size)
    return float(magnitudes[rank - 1])


def studentized_statistic(x: np.ndarray, axis: int = 0):
    """
    sqrt(n) * mean(x) / std(x) along axis (std with ddof=1).

    Zero-variance inputs give NaN.
    """
    x = np.asarray(x, dtype=float)
    n = x.shape[axis]
    mean = np.mean(x, axis=axis)
    std = np.std(x, axis=axis, ddof=1)
    with np.errstate(divide='ignore', invalid='ignore'):
        stat = np.where(std > 0, np.sqrt(n) * mean / std, np.nan)
    if stat.ndim == 0:
        return float(stat)
    return stat


def percentile_interval(sample: np.ndarray, replicate_stats: np.ndarray, h1: float) -> Tuple[float, float]:
    """
    Percentile-t interval for the mean of sample.

    Takes the (1+h1)/2 and (1-h1)/2 quantiles k_hi, k_lo of the finite
    replicate statistics and maps them through mean - std * k / sqrt(T).

    Returns:
        (lower, upper), sorted; (nan, nan) if no replicate statistic is finite
    """
    sample = np.asarray(sample, dtype=float)
    stats = np.asarray(replicate_stats, dtype=float)
    stats = stats[np.isfinite(stats)]
    if stats.size == 0:
        return np.nan, np.nan

    k_hi, k_lo = np.quantile(stats, [(1 + h1) / 2, (1 - h1) / 2], method='hazen')
    t = sample.size
    bounds = np.mean(sample) - np.std(sample, ddof=1) * np.array([k_hi, k_lo]) / np.sqrt(t)
    lower, upper = np.sort(bounds)
    return float(lower), float(upper)


def trial_from_sample(sample: np.ndarray, B: int, v1: float, h1: float,
                      scheme: Union[WeightScheme, str] = WeightScheme.MAMMEN,
                      rng: RandomSource = None) -> TrialResult:
    """Bootstrap interval and coverage indicator for a given sample."""
    sample = np.asarray(sample, dtype=float)
    threshold = truncation_threshold(sample, v1)
    replicates = build_replicates(sample, threshold, B, scheme, rng)

    replicate_stats = studentized_statistic(replicates, axis=0)
    lower, upper = percentile_interval(sample, replicate_stats, h1)

    if np.isnan(lower):
        warnings.warn("All bootstrap replicates have zero variance; trial counted as not covering",
                      NumericInstabilityWarning, stacklevel=2)
        covered = False
    else:
        covered = bool(lower < 0 < upper)

    return TrialResult(
        covered=covered,
        lower=lower,
        upper=upper,
        threshold=threshold,
        statistic=studentized_statistic(sample),
    )


def run_trial(T: int, B: int, alpha: float, beta: float, v1: float, h1: float,
              scheme: Union[WeightScheme, str] = WeightScheme.MAMMEN,
              distribution: Union[SampleDistribution, str] = SampleDistribution.STABLE,
              rng: RandomSource = None) -> TrialResult:
    """
    Run one Monte Carlo trial.

    Args:
        T: Sample size
        B: Number of bootstrap replicates
        alpha, beta: Law of the data (stable, or double-Pareto tail index)
        v1: Truncation fraction in (0, 1]
        h1: Nominal confidence level in (0, 1)
        scheme: Bulk weight scheme
        distribution: Law of the data
        rng: Seed, SeedSequence or numpy Generator consumed by this trial

    Returns:
        TrialResult
    """
    gen = as_generator(rng)
    sample = draw_sample(T, alpha, beta, distribution, gen)
    return trial_from_sample(sample, B, v1, h1, scheme, gen)


def _trial_task(task) -> TrialResult:
    seed, T, B, alpha, beta, v1, h1, scheme, distribution = task
    return run_trial(T, B, alpha, beta, v1, h1, scheme, distribution, rng=seed)


def run_coverage_trials(T: int, N: int, B: int, alpha: float, beta: float, v1: float, h1: float, *,
                        seed: SeedLike = None,
                        workers: int = 1,
                        scheme: Union[WeightScheme, str] = WeightScheme.MAMMEN,
                        distribution: Union[SampleDistribution, str] = SampleDistribution.STABLE
                        ) -> List[TrialResult]:
    """
    Run N independent trials, each on its own seed substream.

    Results are in trial order and do not depend on `workers`.
    """
    validate_coverage_inputs(T, N, B, alpha, beta, v1, h1, distribution)
    scheme = WeightScheme(scheme)
    distribution = SampleDistribution(distribution)

    tasks = [(child, int(T), int(B), alpha, beta, v1, h1, scheme, distribution)
             for child in spawn_seeds(seed, int(N))]
    return parallel_map(_trial_task, tasks, workers)


def estimate_coverage(T: int, N: int, B: int, alpha: float, beta: float, v1: float, h1: float, *,
                      seed: SeedLike = None,
                      workers: int = 1,
                      scheme: Union[WeightScheme, str] = WeightScheme.MAMMEN,
                      distribution: Union[SampleDistribution, str] = SampleDistribution.STABLE) -> float:
    """
    Empirical coverage probability of the bootstrap interval.

    Args:
        T: Sample size per trial
        N: Number of Monte Carlo trials
        B: Bootstrap replicates per trial
        alpha: Stability index (or double-Pareto tail index)
        beta: Skewness (ignored for double-Pareto data)
        v1: Truncation fraction in (0, 1]
        h1: Nominal confidence level in (0, 1)
        seed: Root seed; each trial gets its own child stream
        workers: Worker processes for the trial fan-out
        scheme: Bulk weight scheme
        distribution: Law of the data

    Returns:
        Fraction of trials whose interval covers 0
    """
    trials = run_coverage_trials(T, N, B, alpha, beta, v1, h1, seed=seed, workers=workers,
                                 scheme=scheme, distribution=distribution)
    return float(np.mean([trial.covered for trial in trials]))
