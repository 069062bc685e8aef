#!/usr/bin/env python3
"""
Cluster-count selection with repeated k-means

Main entry point for the pipeline. This script orchestrates:
1. Data loading
2. k-means with several runs for each k = 1..n_max
3. Davies-Bouldin index of the best run for each k
4. Saving results and plots

Usage:
    python main.py --data data/points.csv
    python main.py --data data/codebook.npz --n-max 12 --c-max 10 --seed 7
    python main.py --data data/points.npy --live-plot --verbose 2
"""

import argparse
import warnings

import matplotlib

from config import Config, get_config_from_args
from kselect.data import load_dataset
from kselect.clustering import (
    compute_clusterings,
    print_selection_summary,
    save_results,
    suggest_k
)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Select the number of k-means clusters with the Davies-Bouldin index'
    )

    # Data
    parser.add_argument('--data', type=str, required=True,
                        help='Path to dataset (.csv, .npy or .npz)')

    # Clustering
    parser.add_argument('--n-max', type=int, default=None,
                        help='Maximum number of clusters (default: ceil(sqrt(n)))')
    parser.add_argument('--c-max', type=int, default=None,
                        help='Number of k-means runs per k (default: 5)')
    parser.add_argument('--max-iter', type=int, default=None,
                        help='Iteration cap for each k-means run (default: 100)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for the k-means runs')
    parser.add_argument('--n-jobs', type=int, default=None,
                        help='Parallel workers for the k-means runs')

    # Output
    parser.add_argument('--output-dir', type=str, default='outputs',
                        help='Output directory')
    parser.add_argument('--experiment-name', type=str, default='experiment',
                        help='Name for this experiment')

    # Other
    parser.add_argument('--no-plots', action='store_true',
                        help='Disable plot generation')
    parser.add_argument('--live-plot', action='store_true',
                        help='Redraw the index and SSE curves after every k')
    parser.add_argument('--verbose', type=int, default=1,
                        help='Verbose level (0, 1 or 2)')

    return parser.parse_args(argv)


def run_pipeline(config: Config, data_path: str, live_plot: bool = False):
    """Run the complete pipeline."""
    if not live_plot:
        matplotlib.use('Agg')
    from kselect.visualization import (
        LivePlotObserver,
        plot_cluster_selection,
        plot_clustering
    )

    config.paths.create_dirs()
    verbose = config.verbose

    print("\n" + "=" * 80)
    print("CLUSTER COUNT SELECTION")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Data Loading
    # =========================================================================
    data = load_dataset(data_path, verbose=bool(verbose))

    # =========================================================================
    # STEP 2: k-means for every k
    # =========================================================================
    observer = LivePlotObserver() if live_plot else None
    cfg = config.clustering

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter('always', RuntimeWarning)
        results = compute_clusterings(
            data,
            n_max=cfg.n_max,
            c_max=cfg.c_max,
            verbose=verbose,
            max_iter=cfg.max_iter,
            norm_p=cfg.norm_p,
            random_seed=cfg.random_seed,
            n_jobs=cfg.n_jobs,
            observer=observer
        )
    for w in caught:
        print(f"\n⚠️  WARNING: {w.message}")

    if observer is not None:
        observer.close()

    # =========================================================================
    # STEP 3: Results
    # =========================================================================
    print_selection_summary(results)
    save_results(results, config.paths.results_dir, verbose=bool(verbose))

    if config.save_plots:
        plot_cluster_selection(
            results,
            save_path=str(config.paths.plots_dir / 'cluster_selection.png'),
            show=False
        )
        best_k = suggest_k(results)
        if best_k is not None:
            best = results[best_k]
            plot_clustering(
                data, best.labels, best.prototypes,
                title=f'k-means, {best_k} clusters',
                save_path=str(config.paths.plots_dir / f'clustering_k{best_k}.png'),
                show=False
            )

    print(f"\nOutputs saved to: {config.paths.base_dir}")
    print(f"  Random seed: {results.random_seed}")

    return results


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)
    config = get_config_from_args(args)
    return run_pipeline(config, args.data, live_plot=args.live_plot)


if __name__ == '__main__':
    main()
