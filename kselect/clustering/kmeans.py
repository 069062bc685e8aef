"""
Batch k-means for datasets with missing values.

One call to `run_partition` is a single k-means trial: pick k distinct
data rows as initial prototypes, then alternate nearest-prototype
assignment and centroid updates until the assignment stops changing
or the iteration cap is reached. Missing cells are ignored both when
measuring distances and when averaging cluster members.
"""

from dataclasses import dataclass

import numpy as np
from sklearn.utils import check_random_state

from ..exceptions import DegenerateTrialError
from .quantization import nearest_prototype


@dataclass
class PartitionRun:
    """Outcome of a single k-means trial."""
    prototypes: np.ndarray  # (k, dim)
    labels: np.ndarray      # (n,), values 1..k
    error: float            # sum of squared quantization errors
    n_iter: int

    @property
    def k(self) -> int:
        return self.prototypes.shape[0]


def _update_prototypes(
    data: np.ndarray,
    bmus: np.ndarray,
    prototypes: np.ndarray
) -> np.ndarray:
    """Recompute each prototype as the finite-cell mean of its members."""
    known = np.isfinite(data)
    filled = np.where(known, data, 0.0)
    updated = prototypes.copy()

    for j in range(prototypes.shape[0]):
        members = bmus == j
        if not members.any():
            continue
        counts = known[members].sum(axis=0)
        sums = filled[members].sum(axis=0)
        has_values = counts > 0
        updated[j, has_values] = sums[has_values] / counts[has_values]

    return updated


def run_partition(
    data: np.ndarray,
    k: int,
    max_iter: int = 100,
    random_state=None
) -> PartitionRun:
    """
    Run one batch k-means trial.

    Args:
        data: Data matrix (n, dim); non-finite cells are missing
        k: Number of clusters
        max_iter: Maximum number of assignment/update rounds
        random_state: Seed or RandomState for the initial prototypes

    Returns:
        PartitionRun with prototypes, 1-based labels and error

    Raises:
        DegenerateTrialError: if k > n or a cluster ends up empty
    """
    data = np.asarray(data, dtype=float)
    n_points = data.shape[0]

    if k > n_points:
        raise DegenerateTrialError(
            k, k - n_points,
            f"Cannot form {k} clusters from {n_points} data points"
        )

    rng = check_random_state(random_state)
    init_idx = rng.choice(n_points, size=k, replace=False)
    prototypes = data[init_idx].copy()

    bmus = None
    n_iter = 0
    for n_iter in range(1, max_iter + 1):
        new_bmus, _ = nearest_prototype(prototypes, data)
        if bmus is not None and np.array_equal(new_bmus, bmus):
            break
        bmus = new_bmus
        prototypes = _update_prototypes(data, bmus, prototypes)

    # Final assignment against the last prototypes
    bmus, qerrors = nearest_prototype(prototypes, data)

    n_empty = k - np.unique(bmus).size
    if n_empty > 0:
        raise DegenerateTrialError(k, n_empty)

    return PartitionRun(
        prototypes=prototypes,
        labels=bmus + 1,
        error=float(np.sum(qerrors ** 2)),
        n_iter=n_iter
    )
