"""K-means clustering and cluster-count selection."""

from .quantization import nearest_prototype, nan_mean, quantization_error
from .kmeans import PartitionRun, run_partition
from .selector import (
    KClustering,
    ClusteringResults,
    trial_seeds,
    best_of_restarts,
    baseline_clustering,
    compute_clusterings
)
from .reporting import suggest_k, print_selection_summary, save_results

__all__ = [
    'nearest_prototype',
    'nan_mean',
    'quantization_error',
    'PartitionRun',
    'run_partition',
    'KClustering',
    'ClusteringResults',
    'trial_seeds',
    'best_of_restarts',
    'baseline_clustering',
    'compute_clusterings',
    'suggest_k',
    'print_selection_summary',
    'save_results'
]
