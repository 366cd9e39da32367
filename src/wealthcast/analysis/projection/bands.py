"""Percentile banding of a simulated ensemble.

Linear interpolation between order statistics (the R-7 method):
idx = p/100 * (n - 1), result = s[floor] * (1 - w) + s[ceil] * w.
"""

import logging
import math

import numpy as np

from . import InvalidParameterError, QuantileBand

logger = logging.getLogger(__name__)

BAND_PERCENTILES = (10, 50, 90)


def percentile(values, p: float) -> float:
    """Linear-interpolation percentile of a 1-D sample.

    >>> percentile([1, 2, 3], 100)
    3.0
    """
    sample = np.sort(np.asarray(values, dtype=np.float64).ravel())
    if sample.size == 0:
        raise InvalidParameterError("percentile of an empty sample")
    return float(_interpolate(sample, p))


def aggregate(ensemble: np.ndarray, day: int) -> dict[str, float]:
    """p10/p50/p90 of the cross-section of all paths at one day."""
    ensemble = _check_ensemble(ensemble)
    if not 0 <= day < ensemble.shape[1]:
        raise InvalidParameterError(
            f"day {day} outside ensemble horizon 0..{ensemble.shape[1] - 1}"
        )
    column = np.sort(ensemble[:, day])
    return {f"p{p}": float(_interpolate(column, p)) for p in BAND_PERCENTILES}


def aggregate_all(ensemble: np.ndarray) -> QuantileBand:
    """p10/p50/p90 for every day of the ensemble in one column-wise sort."""
    ensemble = _check_ensemble(ensemble)
    ordered = np.sort(ensemble, axis=0)
    band = {f"p{p}": _interpolate(ordered, p) for p in BAND_PERCENTILES}

    logger.debug(
        "Aggregated %d paths x %d days into percentile bands",
        ensemble.shape[0], ensemble.shape[1],
    )
    return QuantileBand(p10=band["p10"], p50=band["p50"], p90=band["p90"])


def _interpolate(ordered: np.ndarray, p: float):
    """Interpolate along axis 0 of an already sorted sample."""
    if not 0 <= p <= 100:
        raise InvalidParameterError(f"percentile must be within [0, 100], got {p}")

    n = ordered.shape[0]
    index = (p / 100) * (n - 1)
    lower = math.floor(index)
    upper = math.ceil(index)
    weight = index - lower

    if upper >= n:
        return ordered[n - 1]
    return ordered[lower] * (1 - weight) + ordered[upper] * weight


def _check_ensemble(ensemble) -> np.ndarray:
    ensemble = np.asarray(ensemble, dtype=np.float64)
    if ensemble.ndim != 2 or ensemble.shape[0] == 0 or ensemble.shape[1] == 0:
        raise InvalidParameterError(
            f"ensemble must be a non-empty (paths, days) array, got shape {ensemble.shape}"
        )
    return ensemble
