"""
Log-space probability helpers.

Association scores are differences of log-probabilities. Zero counts are a
meaningful outcome (the pair never co-occurred), so these helpers return
``-inf`` for ``log(0)`` instead of raising like :func:`math.log` does.

Functions:
    safe_log: Natural log that maps 0 to -inf
    log_ratio: log(numerator / denominator) for counts
"""

from __future__ import annotations

import numpy as np


__all__ = [
    'safe_log',
    'log_ratio',
]


def safe_log(value: float) -> float:
    """
    Natural logarithm that tolerates zero and undefined inputs.

    Args:
        value: Non-negative number (count or probability)

    Returns:
        ``log(value)`` as a Python float; ``-inf`` for 0 and ``nan`` for nan.

    Example:
        >>> safe_log(0)
        -inf
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.log(np.float64(value)))


def log_ratio(numerator: float, denominator: float) -> float:
    """
    Log of a count ratio, ``log(numerator / denominator)``.

    The division is done in float64 so ``0 / 0`` yields ``nan`` and
    ``0 / n`` yields ``-inf`` after the log rather than raising.

    Args:
        numerator: Event count
        denominator: Total number of observations

    Returns:
        Log-probability as a Python float.
    """
    with np.errstate(divide='ignore', invalid='ignore'):
        return float(np.log(np.float64(numerator) / np.float64(denominator)))
