"""
Exception and warning types for stablecov.

Malformed parameters are hard failures (InvalidParameterError). Everything
numerical is recoverable: it is reported through the warnings module and the
caller gets a best-effort result.
"""


class InvalidParameterError(ValueError):
    """Raised when a distribution or procedure parameter is outside its domain."""


class StableCoverageWarning(RuntimeWarning):
    """Base class for recoverable numerical diagnostics."""


class NumericInstabilityWarning(StableCoverageWarning):
    """Stable density is ill-conditioned (alpha near 0 or 1) or a trial is degenerate."""


class IllConditionedRegressionWarning(StableCoverageWarning):
    """Weighted least squares covariance could not be used as given."""


class NonFiniteEstimateWarning(StableCoverageWarning):
    """A fitted parameter became NaN or Inf mid-iteration."""


class RootFindingWarning(StableCoverageWarning):
    """Inverse CDF iteration budget exhausted before reaching tolerance."""
