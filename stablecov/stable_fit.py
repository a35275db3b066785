"""
Estimation of the four alpha-stable parameters from data.

Implements two methods:
1. Percentile (McCulloch 1986) - quick, always used as the starting point
2. ECF (Koutrouvelis 1980, 1981) - iterative regression on the empirical
   characteristic function, weighted by its analytic covariance after the
   first pass

References:
    Koutrouvelis, I. A. (1980). "Regression-type estimation of the parameters
        of stable laws." JASA 75(372).
    Koutrouvelis, I. A. (1981). "An iterative procedure for the estimation of
        the parameters of stable laws." Commun. Stat. Simul. Comput. 10(1), 17-28.
    McCulloch, J. H. (1986). "Simple consistent estimators of stable
        distribution parameters." Commun. Stat. Simul. Comput. 15(4).
    Welsh, A. H. (1986). "Implementing empirical characteristic function
        procedures." Stat. Prob. Letters 4, 65-67.
"""

import warnings
from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np
import torch
from scipy import linalg

from .errors import (
    IllConditionedRegressionWarning,
    InvalidParameterError,
    NonFiniteEstimateWarning,
    NumericInstabilityWarning,
)
from .stable_inverse import InverseMode, invcdf
from .stable_params import SCARY_ALPHA_MARGIN, StableParams
from .stable_tables import ecf_k, ecf_l, mcculloch_alpha, mcculloch_beta

# McCulloch's tables cover nu_alpha in [2.439, 25]
NU_ALPHA_MIN = 2.439
NU_ALPHA_MAX = 25.0

MIN_SAMPLES = 5

# Range of (alpha, N) covered by the Koutrouvelis tables
TABLE_ALPHA_RANGE = (0.3, 1.9)
TABLE_N_RANGE = (200, 1600)

# Largest covariance condition number accepted for generalized least squares
MAX_CONDITION = 1.0 / np.finfo(float).eps

ECF_ROOT_TOL = 1e-3
ECF_ROOT_MAX_ITER = 10 ** 4


class FitMethod(Enum):
    ECF = 'ecf'
    PERCENTILE = 'percentile'


def preprocess_sample(data: Union[torch.Tensor, np.ndarray, list]) -> np.ndarray:
    """
    Flatten data to a 1-D float array and drop non-finite values.

    Args:
        data: Tensor, array or sequence of observations

    Returns:
        1-D numpy array of finite values
    """
    if isinstance(data, torch.Tensor):
        data = data.detach().cpu().numpy()

    x = np.asarray(data, dtype=float).ravel()
    finite = np.isfinite(x)
    if not np.all(finite):
        warnings.warn(f"Dropping {int(np.sum(~finite))} non-finite value(s) before fitting")
        x = x[finite]
    return x


def percentiles(x: np.ndarray, q) -> np.ndarray:
    """Percentiles with the midpoint (Hazen) plotting positions."""
    return np.percentile(x, q, method='hazen')


def mcculloch_alpha_beta(x: np.ndarray) -> Tuple[float, float]:
    """
    Initial (alpha, beta) from the 5/25/50/75/95 percentiles of the data.

    Returns:
        (alpha, beta), beta truncated to [-1, 1]
    """
    x95, x75, x50, x25, x5 = percentiles(x, [95, 75, 50, 25, 5])
    spread = x95 - x5
    if not spread > 0:
        raise InvalidParameterError("Data has no spread between its 5th and 95th percentiles")

    iqr = x75 - x25
    nu_alpha = spread / iqr if iqr > 0 else np.inf
    nu_beta = (x95 + x5 - 2 * x50) / spread

    # Bring into table range
    if nu_alpha < NU_ALPHA_MIN:
        nu_alpha = NU_ALPHA_MIN + 1e-12
    elif nu_alpha > NU_ALPHA_MAX:
        nu_alpha = NU_ALPHA_MAX - 1e-12

    alpha = float(mcculloch_alpha(nu_alpha, abs(nu_beta)))
    beta = float(np.sign(nu_beta) * mcculloch_beta(nu_alpha, abs(nu_beta)))
    return alpha, float(np.clip(beta, -1.0, 1.0))


def mcculloch_scale_location(x: np.ndarray, alpha: float, beta: float) -> Tuple[float, float]:
    """
    Scale and location from the interquartile range and median, given (alpha, beta).

    Theoretical quantiles come from the quick inverse CDF, which reproduces
    McCulloch's tables.
    """
    x75, x50, x25 = percentiles(x, [75, 50, 25])

    # Too close to 1 for the quick table to be reliable
    if abs(alpha - 1) < SCARY_ALPHA_MARGIN:
        alpha = 1.0

    shift_m = -beta * np.tan(np.pi * alpha / 2) if alpha != 1 else 0.0
    with warnings.catch_warnings():
        warnings.simplefilter('ignore', NumericInstabilityWarning)
        q75, q25 = invcdf([0.75, 0.25], alpha, beta, 1.0, 0.0, mode=InverseMode.QUICK)
        q50 = invcdf(0.5, alpha, beta, 1.0, shift_m, mode=InverseMode.QUICK)

    gamma = (x75 - x25) / (q75 - q25)
    zeta = x50 - gamma * q50
    if alpha != 1:
        delta = zeta - beta * gamma * np.tan(alpha * np.pi / 2)
    elif gamma > 0:
        delta = zeta - (2 / np.pi) * beta * gamma * np.log(gamma)
    else:
        delta = zeta
    return float(gamma), float(delta)


def choose_k(alpha: float, n: int) -> int:
    """Number of frequencies for the alpha/scale regression (Koutrouvelis Table 1)."""
    alpha = float(np.clip(alpha, *TABLE_ALPHA_RANGE))
    n = float(np.clip(n, *TABLE_N_RANGE))
    return int(np.round(ecf_k(alpha, n)))


def choose_l(alpha: float, n: int) -> int:
    """Number of frequencies for the beta/location regression (Koutrouvelis Table 2)."""
    alpha = float(np.clip(alpha, *TABLE_ALPHA_RANGE))
    n = float(np.clip(n, *TABLE_N_RANGE))
    return int(np.round(ecf_l(alpha, n)))


def empirical_cf(theta: np.ndarray, x: np.ndarray) -> np.ndarray:
    """Empirical characteristic function (1/n) sum exp(i theta x_j) at each theta."""
    theta = np.asarray(theta, dtype=float).reshape(-1, 1)
    return np.mean(np.exp(1j * theta * x.reshape(1, -1)), axis=1)


def ecf_root(x: np.ndarray) -> float:
    """First positive zero of the real part of the empirical characteristic function (Welsh 1986)."""
    m = np.mean(np.abs(x))
    if m == 0:
        return np.inf

    a = 0.0
    val = 1.0
    n_iter = 0
    while abs(val) > ECF_ROOT_TOL and n_iter < ECF_ROOT_MAX_ITER:
        a += val / m
        val = np.mean(np.cos(a * x))
        n_iter += 1
    return a


def _frequency_grid(t: np.ndarray):
    tj = np.repeat(t.reshape(-1, 1), t.size, axis=1)
    tk = tj.T
    return tj, tk


def char_cov_modulus(t: np.ndarray, n: int, alpha: float, beta: float, gamma: float = 1.0) -> np.ndarray:
    """
    Covariance matrix of y = log(-log|phi(t)|^2) for the ECF of n stable observations.
    """
    w = np.tan(alpha * np.pi / 2)
    c = gamma ** alpha
    tj, tk = _frequency_grid(t)
    tj_a = np.abs(tj) ** alpha
    tk_a = np.abs(tk) ** alpha
    tp = tj + tk
    tm = tj - tk
    tp_a = np.abs(tp) ** alpha
    tm_a = np.abs(tm) ** alpha

    a = c * (tj_a + tk_a - tm_a)
    b = c * beta * (-tj_a * np.sign(tj) * w + tk_a * np.sign(tk) * w + tm_a * np.sign(tm) * w)
    d = c * (tj_a + tk_a - tp_a)
    e = c * beta * (tj_a * np.sign(tj) * w + tk_a * np.sign(tk) * w - tp_a * np.sign(tp) * w)

    return ((np.exp(a) * np.cos(b) + np.exp(d) * np.cos(e) - 2)
            / (2 * n * gamma ** (2 * alpha) * np.abs(tj * tk) ** alpha))


def char_cov_phase(t: np.ndarray, n: int, alpha: float, beta: float, gamma: float = 1.0) -> np.ndarray:
    """
    Covariance matrix of z = arg(phi(t)) for the ECF of n stable observations.
    """
    w = np.tan(alpha * np.pi / 2)
    c = gamma ** alpha
    tj, tk = _frequency_grid(t)
    tj_a = np.abs(tj) ** alpha
    tk_a = np.abs(tk) ** alpha
    tp = tj + tk
    tm = tj - tk
    tp_a = np.abs(tp) ** alpha
    tm_a = np.abs(tm) ** alpha

    b = c * beta * (-tj_a * np.sign(tj) * w + tk_a * np.sign(tk) * w + tm_a * np.sign(tm) * w)
    e = c * beta * (tj_a * np.sign(tj) * w + tk_a * np.sign(tk) * w - tp_a * np.sign(tp) * w)
    f = c * (tj_a + tk_a)
    g = -c * tm_a
    h = -c * tp_a

    return np.exp(f) * (np.exp(g) * np.cos(b) - np.exp(h) * np.cos(e)) / (2 * n)


def ordinary_lstsq(design: np.ndarray, y: np.ndarray) -> np.ndarray:
    coef, _, _, _ = linalg.lstsq(design, y)
    return coef


def generalized_lstsq(design: np.ndarray, y: np.ndarray, cov: np.ndarray) -> np.ndarray:
    """
    Least squares with error covariance `cov`, solved by Cholesky whitening.

    Raises:
        LinAlgError: if cov is not positive definite or is ill-conditioned
        ValueError: if cov contains non-finite entries
    """
    if np.linalg.cond(cov) > MAX_CONDITION:
        raise linalg.LinAlgError("covariance matrix is ill-conditioned")
    chol = linalg.cholesky(cov, lower=True)
    design_w = linalg.solve_triangular(chol, design, lower=True)
    y_w = linalg.solve_triangular(chol, y, lower=True)
    return ordinary_lstsq(design_w, y_w)


def weighted_regression(design: np.ndarray, y: np.ndarray, cov: np.ndarray) -> Optional[np.ndarray]:
    """
    Generalized least squares, degrading to diagonal weights.

    Returns:
        Coefficients, or None if neither the full nor the diagonal
        covariance can be used
    """
    try:
        return generalized_lstsq(design, y, cov)
    except (linalg.LinAlgError, ValueError):
        pass

    warnings.warn("Badly conditioned ECF covariance matrix; using its diagonal only",
                  IllConditionedRegressionWarning, stacklevel=3)
    try:
        return generalized_lstsq(design, y, np.diag(np.diag(cov) + np.finfo(float).eps))
    except (linalg.LinAlgError, ValueError):
        warnings.warn("Diagonal ECF covariance also unusable; stopping iteration",
                      IllConditionedRegressionWarning, stacklevel=3)
        return None


class RegressionState:
    """
    Parameter estimate carried across ECF iterations.

    Keeps the snapshot with the smallest squared change in (alpha, delta),
    which is what the fit returns.
    """

    def __init__(self, alpha: float, beta: float, gamma: float, delta: float):
        self.alpha = alpha
        self.beta = beta
        self.gamma = gamma
        self.delta = delta
        self.alpha_old = alpha
        self.delta_old = delta
        self.best: Optional[StableParams] = None
        self.diff_best = np.inf

    def truncate(self):
        self.alpha = min(max(self.alpha, 0.0), 2.0)
        self.beta = min(max(self.beta, -1.0), 1.0)
        self.gamma = max(self.gamma, 0.0)

    def params(self) -> StableParams:
        return StableParams(float(self.alpha), float(self.beta), float(self.gamma), float(self.delta))

    def is_finite(self) -> bool:
        return bool(np.all(np.isfinite([self.alpha, self.beta, self.gamma, self.delta])))

    def record(self, tol: float) -> bool:
        """
        Track the best snapshot so far.

        Returns:
            True once the change from the previous iteration is below tol
        """
        diff = (self.alpha - self.alpha_old) ** 2 + (self.delta - self.delta_old) ** 2
        converged = False
        if abs(diff) < self.diff_best:
            self.best = self.params()
            self.diff_best = diff
            converged = diff < tol
        self.alpha_old = self.alpha
        self.delta_old = self.delta
        return converged


def _truncated(params: StableParams) -> StableParams:
    return StableParams(
        alpha=min(max(params.alpha, 0.0), 2.0),
        beta=min(max(params.beta, -1.0), 1.0),
        gamma=max(params.gamma, 0.0),
        delta=params.delta,
    )


def fit(data: Union[torch.Tensor, np.ndarray, list],
        method: Union[FitMethod, str] = FitMethod.ECF,
        max_iter: int = 5,
        tol: float = 0.01,
        verbose: bool = False) -> StableParams:
    """
    Fit an alpha-stable distribution to data.

    Args:
        data: Observations (tensor, array or sequence)
        method: FitMethod.ECF (default) or FitMethod.PERCENTILE
        max_iter: Maximum number of ECF iterations
        tol: Stop once the squared change in (alpha, delta) drops below tol
        verbose: Print the estimate after each iteration

    Returns:
        StableParams with alpha in [0, 2], beta in [-1, 1], gamma >= 0

    Raises:
        InvalidParameterError: for unusable data or options
    """
    method = FitMethod(method)
    if max_iter < 0:
        raise InvalidParameterError(f"max_iter must be non-negative, got {max_iter}")
    if not tol > 0:
        raise InvalidParameterError(f"tol must be positive, got {tol}")

    x = preprocess_sample(data)
    n = x.size
    if n < MIN_SAMPLES:
        raise InvalidParameterError(f"Need at least {MIN_SAMPLES} finite observations, got {n}")

    # Step 1 - McCulloch estimate, then standardize
    alpha, beta = mcculloch_alpha_beta(x)
    gamma, delta = mcculloch_scale_location(x, alpha, beta)
    if gamma == 0:
        gamma = float(np.std(x, ddof=1))

    if verbose:
        print(f"{'iteration':>10} {'alpha':>12} {'beta':>12} {'gamma':>12} {'delta':>12}")
        print(f"{0:>10d} {alpha:>12.6g} {beta:>12.6g} {gamma:>12.6g} {delta:>12.6g}")

    initial = _truncated(StableParams(alpha, beta, gamma, delta))
    if method is FitMethod.PERCENTILE or max_iter == 0:
        return initial

    state = RegressionState(alpha, beta, gamma, delta)
    s = (x - delta) / gamma

    # Step 2 - iterate the two regressions
    for iteration in range(1, max_iter + 1):
        # 2.1 alpha and scale from the modulus of the ECF
        if iteration <= 2:
            k = choose_k(state.alpha, n)
            t = np.arange(1, k + 1) * np.pi / 25
            design_a = np.column_stack([np.log(np.abs(t)), np.ones(k)])

        with np.errstate(divide='ignore', invalid='ignore'):
            y = np.log(-np.log(np.abs(empirical_cf(t, s)) ** 2))

        if not np.all(np.isfinite(y)):
            # |ecf| == 1 at some frequency, so log(-log|ecf|^2) is undefined
            warnings.warn("Non-finite ECF modulus regression target; stopping iteration",
                          NonFiniteEstimateWarning, stacklevel=2)
            break
        if iteration == 1:
            ell = ordinary_lstsq(design_a, y)
        else:
            cov = char_cov_modulus(t, n, state.alpha, state.beta)
            ell = weighted_regression(design_a, y, cov)
        if ell is None:
            break

        state.alpha = ell[0]
        with np.errstate(divide='ignore', over='ignore', invalid='ignore'):
            gamma_hat = (np.exp(ell[1]) / 2) ** (1 / state.alpha)
        state.gamma = state.gamma * gamma_hat

        # 2.2 rescale data, truncate
        s = s / gamma_hat
        state.truncate()
        if not state.is_finite():
            break

        # 2.3 beta and location from the phase of the ECF
        if iteration <= 2:
            l_count = choose_l(state.alpha, n)
            # Keep the phase continuous: stay below the first zero of Re(ecf)
            root = ecf_root(s)
            u = np.arange(1, l_count + 1) * min(np.pi / 50, root / l_count)

        phase = np.angle(empirical_cf(u, s))
        design_b = np.column_stack([u, np.sign(u) * np.abs(u) ** state.alpha])
        if iteration == 1:
            ell = ordinary_lstsq(design_b, phase)
        else:
            cov = char_cov_phase(u, n, state.alpha, state.beta)
            ell = weighted_regression(design_b, phase, cov)
        if ell is None:
            break

        with np.errstate(divide='ignore', invalid='ignore'):
            state.beta = ell[1] / np.tan(state.alpha * np.pi / 2)
        state.delta = state.delta + state.gamma * ell[0]
        state.truncate()

        # 2.4 remove estimated shift
        s = s - ell[0]

        if verbose:
            print(f"{iteration:>10d} {state.alpha:>12.6g} {state.beta:>12.6g} "
                  f"{state.gamma:>12.6g} {state.delta:>12.6g}")

        if not state.is_finite():
            break

        # 2.5 convergence
        if state.record(tol):
            break

    if not state.is_finite():
        warnings.warn("Non-finite stable parameter estimate; returning best snapshot",
                      NonFiniteEstimateWarning, stacklevel=2)

    best = state.best if state.best is not None else initial
    return _truncated(best)
