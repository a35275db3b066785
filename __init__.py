"""
Bootstrap coverage under alpha-stable data

Monte Carlo study of percentile-t confidence intervals built with a
tail/bulk wild bootstrap, plus alpha-stable fitting, sampling and inversion.
"""

__version__ = "0.1.0"
__author__ = "Research Team"
