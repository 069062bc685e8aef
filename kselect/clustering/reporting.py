"""Summaries and persistence of cluster-count selection results."""

import json
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np

from .selector import ClusteringResults


def suggest_k(results: ClusteringResults) -> Optional[int]:
    """
    The k with the smallest defined Davies-Bouldin index.

    Only a hint for the reader; the index curve should still be
    inspected before committing to a clustering.
    """
    indices = results.db_indices
    if not np.isfinite(indices).any():
        return None
    return int(np.argmin(np.where(np.isfinite(indices), indices, np.inf))) + 1


def print_selection_summary(results: ClusteringResults):
    """Print one row per k with error and index."""
    print("\n" + "=" * 60)
    print("CLUSTER COUNT SELECTION")
    print("=" * 60)
    print(f"{'k':>4} | {'SSE':>14} | {'Davies-Bouldin':>15} | {'failed runs':>11}")
    print("-" * 60)

    for c in results.clusterings:
        if c.failed:
            print(f"{c.k:>4} | {'-':>14} | {'-':>15} | {c.n_failed_trials:>5}/{c.n_trials:<5}")
            continue
        print(f"{c.k:>4} | {c.error:>14.4f} | {c.db_index:>15.4f} | "
              f"{c.n_failed_trials:>5}/{c.n_trials:<5}")

    best_k = suggest_k(results)
    print("-" * 60)
    if best_k is not None:
        print(f"Smallest Davies-Bouldin index at k={best_k} "
              f"({results[best_k].db_index:.4f})")
    else:
        print("Davies-Bouldin index undefined for every k")
    print("=" * 60)


def save_results(
    results: ClusteringResults,
    output_path: Union[str, Path],
    verbose: bool = True
) -> Dict[str, Path]:
    """
    Save the selection table, per-k clusterings and a JSON summary.

    Args:
        results: Output of compute_clusterings
        output_path: Directory to write into
        verbose: Whether to print progress

    Returns:
        Dictionary of written file paths
    """
    output_path = Path(output_path)
    output_path.mkdir(parents=True, exist_ok=True)
    paths = {}

    # Per-k table
    csv_path = output_path / 'cluster_selection.csv'
    results.to_frame().to_csv(csv_path, index=False)
    paths['table'] = csv_path

    if verbose:
        print(f"✓ Saved {csv_path}")

    # Prototypes and labels for each successful k
    arrays = {}
    for c in results.clusterings:
        if c.failed:
            continue
        arrays[f'centers_k{c.k}'] = c.prototypes
        arrays[f'labels_k{c.k}'] = c.labels

    npz_path = output_path / 'clusterings.npz'
    np.savez(npz_path, **arrays)
    paths['clusterings'] = npz_path

    if verbose:
        print(f"✓ Saved {npz_path}")

    best_k = suggest_k(results)
    summary = {
        'n_max': results.n_max,
        'random_seed': results.random_seed,
        'suggested_k': best_k,
        'errors': [None if np.isnan(e) else float(e) for e in results.errors],
        'db_indices': [None if not np.isfinite(v) else float(v) for v in results.db_indices],
        'failed_k': [c.k for c in results.clusterings if c.failed],
    }

    json_path = output_path / 'summary.json'
    with open(json_path, 'w') as f:
        json.dump(summary, f, indent=2)
    paths['summary'] = json_path

    if verbose:
        print(f"✓ Saved {json_path}")

    return paths
