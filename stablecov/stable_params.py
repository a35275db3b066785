"""
Parameter record and domain checks for the alpha-stable law.

All parameters follow the S1 parameterization of Samorodnitsky & Taqqu (1994),
which is also the default of scipy.stats.levy_stable.
"""

import math
import warnings
from typing import Dict, NamedTuple

from .errors import InvalidParameterError, NumericInstabilityWarning

# |alpha - 1| below this is treated as exactly 1
ALPHA_ONE_TOL = 1e-5

# Distance to the 0/1 boundary where the density becomes hard to evaluate
SCARY_ALPHA_MARGIN = 0.02


class StableParams(NamedTuple):
    """
    Four parameters of an alpha-stable distribution.

    Attributes:
        alpha: Characteristic exponent in (0, 2]
        beta: Skewness in [-1, 1]
        gamma: Scale (>= 0)
        delta: Location
    """
    alpha: float
    beta: float
    gamma: float = 1.0
    delta: float = 0.0

    def validate(self) -> 'StableParams':
        validate_params(self.alpha, self.beta, self.gamma, self.delta)
        return self

    def to_dict(self) -> Dict[str, float]:
        return {
            'alpha': float(self.alpha),
            'beta': float(self.beta),
            'gamma': float(self.gamma),
            'delta': float(self.delta),
        }


def _is_scalar_number(value) -> bool:
    try:
        float(value)
    except (TypeError, ValueError):
        return False
    return True


def validate_params(alpha: float, beta: float, scale: float = 1.0, shift: float = 0.0):
    """
    Check that (alpha, beta, scale, shift) is a valid stable parameter set.

    Raises:
        InvalidParameterError: if any parameter is outside its domain
    """
    for name, value in (('alpha', alpha), ('beta', beta), ('scale', scale), ('shift', shift)):
        if not _is_scalar_number(value):
            raise InvalidParameterError(f'"{name}" must be a real scalar, got {value!r}')

    if not (0.0 < alpha <= 2.0):
        raise InvalidParameterError(f'"alpha" must lie in the interval (0,2], got {alpha}')
    if not (-1.0 <= beta <= 1.0):
        raise InvalidParameterError(f'"beta" must lie in the interval [-1,1], got {beta}')
    if not (scale >= 0.0) or math.isinf(scale):
        raise InvalidParameterError(f'"scale" must be a finite non-negative scalar, got {scale}')
    if not math.isfinite(shift):
        raise InvalidParameterError(f'"shift" must be finite, got {shift}')


def warn_if_scary_alpha(alpha: float):
    """Emit a NumericInstabilityWarning when alpha is close to 0 or 1."""
    near_one = ALPHA_ONE_TOL < abs(alpha - 1.0) < SCARY_ALPHA_MARGIN
    if near_one or alpha < SCARY_ALPHA_MARGIN:
        warnings.warn(
            f"Difficult to approximate stable cdf/pdf for alpha={alpha:.4f} (close to 0 or 1)",
            NumericInstabilityWarning,
            stacklevel=3,
        )
