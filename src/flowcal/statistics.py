"""Summary statistics over Monte Carlo output samples."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from .entities import MeanAndVariance


def mean_and_variance(samples: Sequence[float] | np.ndarray) -> MeanAndVariance:
    """Compute arithmetic mean and population variance of the samples.

    Args:
        samples: Ordered sample values, at least one.

    Returns:
        MeanAndVariance with variance normalised by N (0.0 for a single sample).

    Raises:
        ValueError: If no samples are given.
    """
    arr = np.asarray(samples, dtype=float)
    if arr.size == 0:
        raise ValueError("mean_and_variance requires at least one sample")

    mean = float(np.mean(arr))
    variance = float(np.mean((arr - mean) ** 2))
    return MeanAndVariance(mean=mean, variance=variance, n_samples=int(arr.size))


def probability_summary(
    samples: Sequence[float] | np.ndarray,
    center: float,
    bands: Sequence[float],
) -> dict[str, Any]:
    """Empirical probabilities of the samples lying near `center`.

    Args:
        samples: Sample values, at least one.
        center: Reference value (usually the reported mean).
        bands: Relative half-widths, e.g. 0.05 for center * (1 +/- 5%).

    Returns:
        Dictionary with per-band probabilities and the 5th/95th percentiles.
    """
    arr = np.asarray(samples, dtype=float)
    if arr.size == 0:
        raise ValueError("probability_summary requires at least one sample")

    within = []
    for band in bands:
        half_width = abs(center) * band
        inside = np.abs(arr - center) <= half_width
        within.append(
            {
                "band": float(band),
                "low": float(center - half_width),
                "high": float(center + half_width),
                "probability": float(np.mean(inside)),
            }
        )

    return {
        "within": within,
        "p5": float(np.percentile(arr, 5)),
        "p95": float(np.percentile(arr, 95)),
        "min": float(np.min(arr)),
        "max": float(np.max(arr)),
    }
