"""
Wild bootstrap with a tail/bulk split.

Observations whose magnitude exceeds a threshold v ("tail") keep weight 1 in
every replicate. The remaining "bulk" observations are multiplied by
independent random weights with mean 0 and variance 1.

Reference:
    Mammen, E. (1993). "Bootstrap and wild bootstrap for high dimensional
        linear models." Annals of Statistics 21(1), 255-285.
"""

from enum import Enum
from typing import Dict, Tuple, Union

import numpy as np

from .errors import InvalidParameterError
from .stable_sampler import RandomSource, as_generator

SQRT5 = np.sqrt(5.0)
# Probability of the negative Mammen point
MAMMEN_P = (SQRT5 + 1) / (2 * SQRT5)


class WeightScheme(Enum):
    MAMMEN = 'mammen'
    MAMMEN_CONTINUOUS = 'mammen_continuous'
    NORMAL = 'normal'
    RADEMACHER = 'rademacher'
    MULTINOMIAL = 'multinomial'


def two_point_moments() -> Dict[str, float]:
    """
    Closed-form mean, variance and third moment of the Mammen two-point law.

    The law puts mass p on sqrt(5)*(p-1) and 1-p on sqrt(5)*p.
    """
    low, high = SQRT5 * (MAMMEN_P - 1), SQRT5 * MAMMEN_P
    probs = np.array([MAMMEN_P, 1 - MAMMEN_P])
    points = np.array([low, high])
    mean = float(np.dot(probs, points))
    return {
        'mean': mean,
        'variance': float(np.dot(probs, (points - mean) ** 2)),
        'third_moment': float(np.dot(probs, points ** 3)),
    }


def partition_tail(sample: np.ndarray, threshold: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split sample indices into tail (|x| > threshold) and bulk (|x| <= threshold).

    Returns:
        (tail_mask, bulk_mask) boolean arrays
    """
    tail = np.abs(np.asarray(sample)) > threshold
    return tail, ~tail


def draw_weights(n_rows: int, n_cols: int, scheme: Union[WeightScheme, str] = WeightScheme.MAMMEN,
                 rng: RandomSource = None) -> np.ndarray:
    """
    Draw an (n_rows, n_cols) matrix of bootstrap multipliers.

    Args:
        n_rows: Number of observations being reweighted
        n_cols: Number of replicates
        scheme: Weight distribution
        rng: Seed, SeedSequence or numpy Generator

    Returns:
        Weight matrix
    """
    scheme = WeightScheme(scheme)
    gen = as_generator(rng)
    shape = (n_rows, n_cols)

    if scheme is WeightScheme.MAMMEN:
        return SQRT5 * (MAMMEN_P - gen.binomial(1, MAMMEN_P, size=shape))
    if scheme is WeightScheme.MAMMEN_CONTINUOUS:
        return gen.standard_normal(shape) / np.sqrt(2) + (gen.standard_normal(shape) ** 2 - 1) / 2
    if scheme is WeightScheme.NORMAL:
        return gen.standard_normal(shape)
    if scheme is WeightScheme.RADEMACHER:
        return 2.0 * gen.binomial(1, 0.5, size=shape) - 1.0
    # Efron bootstrap: multinomial counts over the rows, one draw per replicate
    if n_rows == 0:
        return np.zeros(shape)
    counts = gen.multinomial(n_rows, np.full(n_rows, 1.0 / n_rows), size=n_cols)
    return counts.T.astype(float)


def build_weight_matrix(sample: np.ndarray, threshold: float, n_replicates: int,
                        scheme: Union[WeightScheme, str] = WeightScheme.MAMMEN,
                        rng: RandomSource = None) -> np.ndarray:
    """
    Build the T x B wild bootstrap weight matrix for one sample.

    Args:
        sample: Data vector of length T
        threshold: Truncation threshold v
        n_replicates: Number of replicates B
        scheme: Weight distribution for bulk rows
        rng: Seed, SeedSequence or numpy Generator

    Returns:
        Array of shape (T, B): ones on tail rows, random weights on bulk rows
    """
    sample = np.asarray(sample, dtype=float)
    if sample.ndim != 1:
        raise InvalidParameterError(f"sample must be 1-D, got shape {sample.shape}")
    if n_replicates < 1:
        raise InvalidParameterError(f"n_replicates must be positive, got {n_replicates}")

    tail, bulk = partition_tail(sample, threshold)
    weights = np.ones((sample.size, n_replicates))
    weights[bulk] = draw_weights(int(np.sum(bulk)), n_replicates, scheme, rng)
    return weights


def build_replicates(sample: np.ndarray, threshold: float, n_replicates: int,
                     scheme: Union[WeightScheme, str] = WeightScheme.MAMMEN,
                     rng: RandomSource = None) -> np.ndarray:
    """Bootstrap replicate matrix: column b is sample * W[:, b]."""
    sample = np.asarray(sample, dtype=float)
    weights = build_weight_matrix(sample, threshold, n_replicates, scheme, rng)
    return sample[:, None] * weights
