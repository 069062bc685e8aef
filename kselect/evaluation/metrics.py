"""
Cluster validity metrics.

The Davies-Bouldin index compares within-cluster dispersion to the
separation between cluster prototypes. Lower values mean tighter,
better separated clusters. Degenerate clusterings never raise here;
they produce NaN instead.
"""

import numpy as np

from ..exceptions import InvalidInputError


def cluster_dispersions(
    data: np.ndarray,
    prototypes: np.ndarray,
    labels: np.ndarray,
    p: float = 2
) -> np.ndarray:
    """
    Dispersion S_i of each cluster around its prototype.

    S_i is the p-th order mean of the Euclidean distances from the
    members of cluster i to prototype i. Clusters with fewer than two
    members have no dispersion estimate (NaN).

    Args:
        data: Data matrix (n, dim)
        prototypes: Prototype vectors (c, dim)
        labels: Cluster of each data point, values 1..c
        p: Norm order

    Returns:
        Array of length c
    """
    n_clusters = prototypes.shape[0]
    dispersions = np.full(n_clusters, np.nan)

    for i in range(n_clusters):
        members = data[labels == i + 1]
        if len(members) > 1:
            dists = np.sqrt(np.sum((members - prototypes[i]) ** 2, axis=1))
            dispersions[i] = np.mean(dists ** p) ** (1.0 / p)

    return dispersions


def prototype_separations(prototypes: np.ndarray, p: float = 2) -> np.ndarray:
    """Minkowski distances of order p between all prototype pairs (c, c)."""
    diffs = np.abs(prototypes[:, np.newaxis, :] - prototypes[np.newaxis, :, :])
    return np.sum(diffs ** p, axis=2) ** (1.0 / p)


def davies_bouldin_index(
    data: np.ndarray,
    prototypes: np.ndarray,
    labels: np.ndarray,
    p: float = 2
) -> float:
    """
    Compute the Davies-Bouldin index of a clustering.

    For each cluster the worst (largest) similarity R_ij = (S_i + S_j) / M_ij
    to any other cluster is taken, skipping pairs with an undefined
    dispersion. The index is the mean of these maxima over the clusters
    where one is defined and finite.

    Args:
        data: Data matrix (n, dim)
        prototypes: Prototype vectors (c, dim)
        labels: Cluster of each data point, values 1..c
        p: Norm order (default 2)

    Returns:
        Index value, or NaN when it cannot be evaluated
    """
    if p <= 0:
        raise InvalidInputError(f"Norm order p must be positive, got {p}")

    data = np.atleast_2d(np.asarray(data, dtype=float))
    prototypes = np.atleast_2d(np.asarray(prototypes, dtype=float))
    labels = np.asarray(labels).ravel()

    n_clusters = prototypes.shape[0]
    if n_clusters < 2:
        return np.nan

    S = cluster_dispersions(data, prototypes, labels, p)
    M = prototype_separations(prototypes, p)

    R = np.full((n_clusters, n_clusters), np.nan)
    with np.errstate(divide='ignore', invalid='ignore'):
        for i in range(n_clusters):
            for j in range(i + 1, n_clusters):
                R[i, j] = (S[i] + S[j]) / M[i, j]
                R[j, i] = R[i, j]

    # Max over defined pairs only; a row with none stays NaN
    r = np.full(n_clusters, np.nan)
    for i in range(n_clusters):
        defined = R[i][~np.isnan(R[i])]
        if defined.size:
            r[i] = defined.max()

    r = r[np.isfinite(r)]
    if r.size == 0:
        return np.nan
    return float(r.mean())
