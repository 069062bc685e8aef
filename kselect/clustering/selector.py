"""
Cluster-count selection with repeated k-means.

For every k in 1..n_max the data is clustered several times with
k-means, the run with the smallest sum of squared errors is kept, and
the Davies-Bouldin index of that run is recorded. The caller inspects
the resulting table to pick k; nothing here decides it.

References:
    Jain, A.K., Dubes, R.C., "Algorithms for Clustering Data",
    Prentice Hall, 1988, pp. 96-101.

    Davies, D.L., Bouldin, D.W., "A Cluster Separation Measure",
    IEEE Transactions on Pattern Analysis and Machine Intelligence,
    vol. PAMI-1, no. 2, 1979, pp. 224-227.

    Vesanto, J., Alhoniemi, E., "Clustering of the Self-Organizing
    Map", IEEE Transactions on Neural Networks, 2000.
"""

import math
import warnings
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

import numpy as np
import pandas as pd
from joblib import Parallel, delayed

from ..data.loader import as_dataset
from ..evaluation.metrics import davies_bouldin_index
from ..exceptions import AllTrialsFailedError, DegenerateTrialError, InvalidInputError
from .kmeans import PartitionRun, run_partition
from .quantization import nan_mean, quantization_error

DEFAULT_C_MAX = 5
DEFAULT_MAX_ITER = 100


@dataclass
class KClustering:
    """Best clustering found for one value of k."""
    k: int
    prototypes: Optional[np.ndarray]
    labels: Optional[np.ndarray]
    error: float
    db_index: float
    n_trials: int = 0
    n_failed_trials: int = 0

    @property
    def failed(self) -> bool:
        return self.prototypes is None


@dataclass
class ClusteringResults:
    """Per-k clusterings for k = 1..n_max, in order."""
    clusterings: List[KClustering]
    random_seed: Optional[int] = None

    @property
    def n_max(self) -> int:
        return len(self.clusterings)

    def __len__(self) -> int:
        return len(self.clusterings)

    def __getitem__(self, k: int) -> KClustering:
        """Look up the clustering for k (1-based, like the k values)."""
        if not 1 <= k <= len(self.clusterings):
            raise KeyError(f"No clustering for k={k} (n_max={self.n_max})")
        return self.clusterings[k - 1]

    @property
    def centers(self) -> List[Optional[np.ndarray]]:
        return [c.prototypes for c in self.clusterings]

    @property
    def clusters(self) -> List[Optional[np.ndarray]]:
        return [c.labels for c in self.clusterings]

    @property
    def errors(self) -> np.ndarray:
        return np.array([c.error for c in self.clusterings], dtype=float)

    @property
    def db_indices(self) -> np.ndarray:
        return np.array([c.db_index for c in self.clusterings], dtype=float)

    def as_tuple(self):
        """Return (centers, clusters, errors, db_indices)."""
        return self.centers, self.clusters, self.errors, self.db_indices

    def to_frame(self) -> pd.DataFrame:
        """Summary table with one row per k."""
        return pd.DataFrame({
            'k': [c.k for c in self.clusterings],
            'error': self.errors,
            'db_index': self.db_indices,
            'n_trials': [c.n_trials for c in self.clusterings],
            'n_failed_trials': [c.n_failed_trials for c in self.clusterings],
            'failed': [c.failed for c in self.clusterings],
        })


def trial_seeds(random_seed: int, k: int, c_max: int) -> List[int]:
    """
    Derive one independent seed per trial.

    Each seed depends only on (random_seed, k, trial index), so adding
    trials or running them in parallel never changes earlier ones.
    """
    seeds = []
    for trial in range(c_max):
        seq = np.random.SeedSequence(random_seed, spawn_key=(k, trial))
        seeds.append(int(seq.generate_state(1)[0]))
    return seeds


def _run_trial(data: np.ndarray, k: int, max_iter: int, seed: int) -> Optional[PartitionRun]:
    try:
        return run_partition(data, k, max_iter=max_iter, random_state=seed)
    except DegenerateTrialError:
        return None


def best_of_restarts(
    data: np.ndarray,
    k: int,
    c_max: int = DEFAULT_C_MAX,
    max_iter: int = DEFAULT_MAX_ITER,
    seeds: Optional[Sequence[int]] = None,
    n_jobs: Optional[int] = None,
    verbose: int = 0
) -> KClustering:
    """
    Run k-means c_max times and keep the run with the lowest error.

    Args:
        data: Data matrix (n, dim)
        k: Number of clusters (2 <= k <= n)
        c_max: Number of k-means runs
        max_iter: Iteration cap for each run
        seeds: Optional seed per run (length c_max)
        n_jobs: joblib workers for running trials in parallel
        verbose: Prints a counter per run when >= 2

    Returns:
        KClustering of the best run (db_index not yet computed)

    Raises:
        AllTrialsFailedError: if no run produced k non-empty clusters
    """
    if c_max < 1:
        raise InvalidInputError(f"c_max must be positive, got {c_max}")
    if seeds is None:
        seeds = [None] * c_max
    elif len(seeds) != c_max:
        raise InvalidInputError(f"Expected {c_max} seeds, got {len(seeds)}")

    if n_jobs is not None and n_jobs != 1:
        runs = Parallel(n_jobs=n_jobs)(
            delayed(_run_trial)(data, k, max_iter, seed) for seed in seeds
        )
    else:
        runs = []
        for j, seed in enumerate(seeds, start=1):
            if verbose >= 2:
                print(f"  k={k}: k-means run {j}/{c_max}", end='\r')
            runs.append(_run_trial(data, k, max_iter, seed))
        if verbose >= 2:
            print()

    # Strict less-than: ties keep the earliest run, failed runs never win
    best, best_error = None, math.inf
    for run in runs:
        if run is not None and run.error < best_error:
            best, best_error = run, run.error

    n_failed = sum(run is None for run in runs)
    if best is None:
        raise AllTrialsFailedError(k, c_max)

    return KClustering(
        k=k,
        prototypes=best.prototypes,
        labels=best.labels,
        error=best.error,
        db_index=np.nan,
        n_trials=c_max,
        n_failed_trials=n_failed
    )


def baseline_clustering(data: np.ndarray) -> KClustering:
    """
    The k=1 clustering: one prototype at the finite-cell mean.

    The Davies-Bouldin index is undefined for a single cluster.
    """
    prototype = nan_mean(data)[np.newaxis, :]
    return KClustering(
        k=1,
        prototypes=prototype,
        labels=np.ones(data.shape[0], dtype=int),
        error=quantization_error(prototype, data),
        db_index=np.nan
    )


def _resolve(value, default):
    if value is None:
        return default
    if isinstance(value, float) and math.isnan(value):
        return default
    return value


def compute_clusterings(
    dataset,
    n_max: Optional[int] = None,
    c_max: Optional[int] = None,
    verbose: Optional[int] = 0,
    max_iter: int = DEFAULT_MAX_ITER,
    norm_p: float = 2,
    random_seed: Optional[int] = None,
    n_jobs: Optional[int] = None,
    observer: Optional[Callable[[ClusteringResults], None]] = None
) -> ClusteringResults:
    """
    Cluster the data with k-means for k = 1..n_max.

    Args:
        dataset: Data matrix, DataFrame, or map/data struct with a
            'data' or 'codebook' field
        n_max: Largest k tried; defaults to ceil(sqrt(n))
        c_max: k-means runs per k; defaults to 5
        verbose: 0 silent, 1 one line per k, 2 also per run
        max_iter: Iteration cap for each k-means run
        norm_p: Norm order used in the Davies-Bouldin index
        random_seed: Seed for the run seeds; drawn fresh when None
        n_jobs: joblib workers for the runs of each k
        observer: Called with the partial results after each k

    Returns:
        ClusteringResults with one entry per k
    """
    data = as_dataset(dataset)
    n_points = data.shape[0]

    n_max = int(_resolve(n_max, math.ceil(math.sqrt(n_points))))
    c_max = int(_resolve(c_max, DEFAULT_C_MAX))
    verbose = int(_resolve(verbose, 0))

    if n_max < 1:
        raise InvalidInputError(f"n_max must be positive, got {n_max}")
    if c_max < 1:
        raise InvalidInputError(f"c_max must be positive, got {c_max}")
    if max_iter < 1:
        raise InvalidInputError(f"max_iter must be positive, got {max_iter}")

    if random_seed is None:
        random_seed = int(np.random.SeedSequence().generate_state(1)[0])

    results = ClusteringResults(clusterings=[], random_seed=random_seed)

    # k=1 needs no k-means, and the Davies-Bouldin index is undefined
    results.clusterings.append(baseline_clustering(data))
    if observer is not None:
        observer(results)

    if verbose and n_max >= 2:
        print(f"Doing k-means for 2-{n_max} clusters")

    for k in range(2, n_max + 1):
        try:
            best = best_of_restarts(
                data, k,
                c_max=c_max,
                max_iter=max_iter,
                seeds=trial_seeds(random_seed, k, c_max),
                n_jobs=n_jobs,
                verbose=verbose
            )
        except AllTrialsFailedError as e:
            warnings.warn(str(e), RuntimeWarning)
            best = KClustering(
                k=k, prototypes=None, labels=None,
                error=np.nan, db_index=np.nan,
                n_trials=c_max, n_failed_trials=c_max
            )
        else:
            best.db_index = davies_bouldin_index(
                data, best.prototypes, best.labels, p=norm_p
            )

        results.clusterings.append(best)

        if verbose:
            print(f"  k={k:3d}: SSE = {best.error:.4f}, "
                  f"Davies-Bouldin = {best.db_index:.4f}")

        if observer is not None:
            observer(results)

    return results
