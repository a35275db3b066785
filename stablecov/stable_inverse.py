"""
Inverse CDF of the alpha-stable distribution.

Two modes are available:

1. QUICK - trilinear interpolation of a table of standard quantiles, with the
   asymptotic power-law tail (Samorodnitsky & Taqqu 1994, Property 1.2.15)
   outside u in [0.1, 0.9].
2. PRECISE - the QUICK value refined by Newton's method against the true
   CDF/PDF, with a bisection safeguard.

The CDF and PDF are evaluated with scipy.stats.levy_stable (S1
parameterization, scipy's default).

Reference:
    Samorodnitsky, G. & Taqqu, M. S. (1994). "Stable Non-Gaussian Random
    Processes." Chapman & Hall.
"""

import warnings
from enum import Enum
from typing import Union

import numpy as np
from scipy import special
from scipy.stats import levy_stable, norm

from .errors import RootFindingWarning
from .stable_params import ALPHA_ONE_TOL, StableParams, validate_params, warn_if_scary_alpha
from .stable_tables import stable_mode_table, stable_quantile

# Newton / bisection budget
MAX_NEWTON_ITER = 30
MAX_BISECTIONS = 30
CDF_TOL = 1e-8
# A Newton step must shrink the residual to at most this fraction of the previous one
RESIDUAL_SHRINK = 0.9

# Range of u covered by the quantile table
TABLE_U_LOW = 0.1
TABLE_U_HIGH = 0.9


class InverseMode(Enum):
    QUICK = 'quick'
    PRECISE = 'precise'


def stable_cdf(x, alpha: float, beta: float, scale: float = 1.0, loc: float = 0.0) -> np.ndarray:
    """CDF of S(alpha, beta, scale, loc) in the S1 parameterization."""
    return levy_stable.cdf(x, alpha, beta, loc=loc, scale=scale)


def stable_pdf(x, alpha: float, beta: float, scale: float = 1.0, loc: float = 0.0) -> np.ndarray:
    """PDF of S(alpha, beta, scale, loc) in the S1 parameterization."""
    return levy_stable.pdf(x, alpha, beta, loc=loc, scale=scale)


def _tail_constant(alpha: float) -> float:
    if alpha != 1:
        return (1 - alpha) / (special.gamma(2 - alpha) * np.cos(np.pi * alpha / 2))
    return 2 / np.pi


def initial_guess(alpha: float, beta: float, u: np.ndarray) -> np.ndarray:
    """
    Approximate standard (S0 frame) stable quantiles for beta in [0, 1].

    Table interpolation for 0.1 <= u <= 0.9, asymptotic tail formulas
    otherwise. When beta == 1 the left tail is not power-law, so low u values
    are pulled back to the table edge.
    """
    u = np.asarray(u, dtype=float)
    u_lookup = u.copy()
    alpha = max(alpha, 0.1)
    if beta == 1:
        u_lookup[u_lookup < TABLE_U_LOW] = TABLE_U_LOW

    high = u_lookup > TABLE_U_HIGH
    low = u_lookup < TABLE_U_LOW
    middle = ~high & ~low

    x0 = np.zeros_like(u)
    if np.any(high | low):
        c = _tail_constant(alpha)
        with np.errstate(divide='ignore', over='ignore'):
            x0[high] = ((1 - u[high]) / (c * 0.5 * (1 + beta))) ** (-1 / alpha)
            x0[low] = -(u[low] / (c * 0.5 * (1 - beta))) ** (-1 / alpha)

    if np.any(middle):
        x0[middle] = stable_quantile(u_lookup[middle], beta, alpha)

    return x0


def _refine(x: np.ndarray, u: np.ndarray, alpha: float, beta: float, delta_m: float) -> np.ndarray:
    """
    Newton iteration on CDF(x) - u with a bisection safeguard.

    Returns the iterate with the smallest residual for every point.
    """
    with np.errstate(invalid='ignore'):
        f = stable_cdf(x, alpha, beta, 1.0, delta_m) - u
    best_x = x.copy()
    best_f = np.abs(f)
    active = np.abs(f) > CDF_TOL
    x_old = x.copy()
    f_old = f.copy()

    n_iter = 1
    while np.any(active) and n_iter < MAX_NEWTON_ITER:
        fprime = stable_pdf(x[active], alpha, beta, 1.0, delta_m)
        with np.errstate(divide='ignore', invalid='ignore'):
            step = x[active] - f[active] / fprime
        blowup = ~np.isfinite(step)
        step[blowup] = x_old[active][blowup] / 2
        x[active] = step
        f[active] = stable_cdf(x[active], alpha, beta, 1.0, delta_m) - u[active]

        # Bisect back toward the previous iterate until the residual shrinks
        no_progress = active & (np.abs(f) > RESIDUAL_SHRINK * np.abs(f_old))
        n_bisect = 0
        while np.any(no_progress) and n_bisect < MAX_BISECTIONS:
            x[no_progress] = 0.5 * (x[no_progress] + x_old[no_progress])
            f[no_progress] = stable_cdf(x[no_progress], alpha, beta, 1.0, delta_m) - u[no_progress]
            no_progress = no_progress & (np.abs(f) > RESIDUAL_SHRINK * np.abs(f_old))
            n_bisect += 1

        improved = np.abs(f) < best_f
        best_x[improved] = x[improved]
        best_f[improved] = np.abs(f[improved])

        active = np.abs(f) > CDF_TOL
        x_old = x.copy()
        f_old = f.copy()
        n_iter += 1

    unconverged = int(np.sum(best_f > CDF_TOL))
    if unconverged:
        warnings.warn(
            f"Inverse CDF did not reach |CDF(x)-u| < {CDF_TOL:g} for {unconverged} point(s) "
            f"(alpha={alpha:.4f}, beta={beta:.4f}); returning best candidates",
            RootFindingWarning,
            stacklevel=3,
        )
    return best_x


def invcdf(u, alpha: float, beta: float, scale: float = 1.0, shift: float = 0.0,
           mode: Union[InverseMode, str] = InverseMode.PRECISE):
    """
    Inverse CDF (quantile function) of the alpha-stable law S(alpha, beta, scale, shift).

    Args:
        u: Probability or array of probabilities
        alpha: Characteristic exponent in (0, 2]
        beta: Skewness in [-1, 1]
        scale: Scale (>= 0)
        shift: Location
        mode: InverseMode.QUICK (table + asymptotics) or InverseMode.PRECISE (Newton)

    Returns:
        Quantile(s) with the shape of u; a float for scalar u.
        Probabilities outside [0, 1] map to NaN.

    Raises:
        InvalidParameterError: for parameters outside their domain
    """
    validate_params(alpha, beta, scale, shift)
    mode = InverseMode(mode)
    warn_if_scary_alpha(alpha)

    scalar_input = np.ndim(u) == 0
    u = np.array(u, dtype=float, ndmin=1)
    u[(u < 0) | (u > 1)] = np.nan

    if scale == 0:
        x = np.where(np.isnan(u), np.nan, float(shift))
    else:
        x = _invcdf_array(u, float(alpha), float(beta), float(scale), float(shift), mode)

    if scalar_input:
        return float(x.reshape(-1)[0])
    return x


def _support_bounds(alpha: float, beta: float, shift: float):
    """Lower and upper end of the support; finite only for alpha < 1 and |beta| == 1."""
    if alpha < 1 and beta == 1:
        return shift, np.inf
    if alpha < 1 and beta == -1:
        return -np.inf, shift
    return -np.inf, np.inf


def _invcdf_array(u: np.ndarray, alpha: float, beta: float, scale: float, shift: float,
                  mode: InverseMode) -> np.ndarray:
    x = _quantiles(u, alpha, beta, scale, shift, mode)
    lower, upper = _support_bounds(alpha, beta, shift)
    x[u == 0] = lower
    x[u == 1] = upper
    return x


def _quantiles(u: np.ndarray, alpha: float, beta: float, scale: float, shift: float,
               mode: InverseMode) -> np.ndarray:
    with np.errstate(divide='ignore'):
        if alpha == 2:
            return np.sqrt(2.0) * norm.ppf(u) * scale + shift
        if alpha == 1 and beta == 0:
            return np.tan(np.pi * (u - 0.5)) * scale + shift
        if alpha == 0.5 and abs(beta) == 1:
            tail_u = u if beta > 0 else 1 - u
            return beta * 0.5 / special.erfcinv(tail_u) ** 2 * scale + shift

    if abs(alpha - 1) <= ALPHA_ONE_TOL:
        alpha = 1.0

    # Work with beta >= 0 and reflect at the end
    sign_beta = 1.0
    if beta < 0:
        sign_beta = -1.0
        u = 1 - u
        beta = -beta

    delta_m = -beta * np.tan(alpha * np.pi / 2) if alpha != 1 else 0.0

    # Endpoints are filled in from the support by the caller
    finite = np.isfinite(u) & (u > 0) & (u < 1)
    x = np.full_like(u, np.nan)
    if np.any(finite):
        x_std = initial_guess(alpha, beta, u[finite])
        if mode is InverseMode.PRECISE:
            # Initial guess is in the S0 frame; the law evaluated is S1 shifted by delta_m
            x_std = _refine(x_std, u[finite], alpha, beta, delta_m)
        x[finite] = x_std

    if alpha != 1:
        return sign_beta * (x - delta_m) * scale + shift
    return sign_beta * (x * scale + (2 / np.pi) * beta * scale * np.log(scale)) + shift


def invcdf_params(u, params: StableParams, mode: Union[InverseMode, str] = InverseMode.PRECISE):
    """Inverse CDF for a StableParams record."""
    return invcdf(u, params.alpha, params.beta, params.gamma, params.delta, mode=mode)


def stable_mode(alpha: float, beta: float) -> float:
    """
    Approximate mode of the standard stable law S(alpha, beta, 1, 0).

    Bilinear interpolation of a tabulated grid (alpha in [0.1, 2],
    |beta| in [0, 1]); the mode is odd in beta.
    """
    validate_params(alpha, beta)
    value = float(stable_mode_table(abs(beta), alpha))
    return value if beta >= 0 else -value
