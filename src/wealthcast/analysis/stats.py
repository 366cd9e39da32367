"""Descriptive statistics shared by projection summaries."""

import numpy as np


def coefficient_of_variation(values) -> float:
    """Population standard deviation divided by the mean.

    Returns 0.0 for an empty sample or a zero mean.
    """
    sample = np.asarray(values, dtype=np.float64).ravel()
    if sample.size == 0:
        return 0.0

    mean = float(np.mean(sample))
    if mean == 0:
        return 0.0
    return float(np.std(sample) / mean)
