"""
Nearest-prototype search for data with missing values.

Missing values are any non-finite cells (NaN, +/-inf). A dimension is
skipped in a distance whenever either the data cell or the prototype
cell is non-finite, so partially observed points can still be matched.
"""

import numpy as np
from typing import Tuple


def nearest_prototype(
    prototypes: np.ndarray,
    data: np.ndarray
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Find the best-matching prototype for every data point.

    Args:
        prototypes: Prototype vectors, shape (c, dim) or (dim,)
        data: Data matrix, shape (n, dim)

    Returns:
        Tuple of (0-based index of the closest prototype per point,
                  Euclidean quantization error per point)
    """
    prototypes = np.atleast_2d(np.asarray(prototypes, dtype=float))
    data = np.atleast_2d(np.asarray(data, dtype=float))

    if prototypes.shape[1] != data.shape[1]:
        raise ValueError(
            f"Prototype dimension {prototypes.shape[1]} does not match "
            f"data dimension {data.shape[1]}"
        )

    n_points = data.shape[0]
    sq_dists = np.empty((n_points, prototypes.shape[0]))

    for j, proto in enumerate(prototypes):
        diff = data - proto
        diff[~np.isfinite(diff)] = 0.0
        sq_dists[:, j] = np.sum(diff ** 2, axis=1)

    # argmin returns the first minimum, so ties go to the lowest index
    bmus = np.argmin(sq_dists, axis=1)
    qerrors = np.sqrt(sq_dists[np.arange(n_points), bmus])

    return bmus, qerrors


def nan_mean(data: np.ndarray) -> np.ndarray:
    """Per-dimension mean over finite cells; NaN where a column has none."""
    data = np.atleast_2d(np.asarray(data, dtype=float))
    known = np.isfinite(data)
    counts = known.sum(axis=0)
    sums = np.where(known, data, 0.0).sum(axis=0)

    means = np.full(data.shape[1], np.nan)
    np.divide(sums, counts, out=means, where=counts > 0)
    return means


def quantization_error(prototypes: np.ndarray, data: np.ndarray) -> float:
    """Sum of squared distances from each point to its closest prototype."""
    _, qerrors = nearest_prototype(prototypes, data)
    return float(np.sum(qerrors ** 2))
