"""Alpha-stable estimation, sampling and bootstrap coverage utilities."""

from .coverage import SampleDistribution, TrialResult, estimate_coverage, run_coverage_trials
from .errors import (
    IllConditionedRegressionWarning,
    InvalidParameterError,
    NonFiniteEstimateWarning,
    NumericInstabilityWarning,
    RootFindingWarning,
    StableCoverageWarning,
)
from .stable_fit import FitMethod, fit
from .stable_inverse import InverseMode, invcdf, invcdf_params, stable_mode
from .stable_params import StableParams
from .stable_sampler import sample, sample_double_pareto, sample_stable
from .threshold_search import SearchResult, make_grid, search, sweep
from .wild_bootstrap import WeightScheme, build_replicates, build_weight_matrix

__all__ = [
    "StableParams",
    "fit",
    "FitMethod",
    "sample",
    "sample_stable",
    "sample_double_pareto",
    "invcdf",
    "invcdf_params",
    "InverseMode",
    "stable_mode",
    "WeightScheme",
    "build_weight_matrix",
    "build_replicates",
    "estimate_coverage",
    "run_coverage_trials",
    "SampleDistribution",
    "TrialResult",
    "search",
    "sweep",
    "make_grid",
    "SearchResult",
    "InvalidParameterError",
    "StableCoverageWarning",
    "NumericInstabilityWarning",
    "IllConditionedRegressionWarning",
    "NonFiniteEstimateWarning",
    "RootFindingWarning",
]
