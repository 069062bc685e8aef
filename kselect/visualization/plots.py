"""
Visualization functions for cluster-count selection.

This module provides plotting utilities for:
- Davies-Bouldin index and SSE curves over k
- Live redrawing of those curves while the selection runs
- 2D views of a single clustering
"""

import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns
from sklearn.decomposition import PCA
from typing import Optional

from ..clustering.quantization import nan_mean
from ..clustering.selector import ClusteringResults


# Set plotting style
plt.style.use('seaborn-v0_8-darkgrid')
sns.set_palette("husl")


def _draw_selection_curves(axes, results: ClusteringResults):
    k_values = np.arange(1, len(results) + 1)

    ax = axes[0]
    ax.clear()
    ax.plot(k_values, results.db_indices, 'bo-', linewidth=2, markersize=6)
    ax.set_ylabel('Davies-Bouldin Index', fontsize=11)
    ax.set_title("Davies-Bouldin's index", fontsize=13, fontweight='bold')
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    ax.clear()
    ax.plot(k_values, results.errors, 'go-', linewidth=2, markersize=6)
    ax.set_xlabel('Number of Clusters (k)', fontsize=11)
    ax.set_ylabel('SSE', fontsize=11)
    ax.set_title('SSE', fontsize=13, fontweight='bold')
    ax.grid(True, alpha=0.3)


def plot_cluster_selection(
    results: ClusteringResults,
    save_path: Optional[str] = None,
    show: bool = True
) -> plt.Figure:
    """
    Plot Davies-Bouldin index and SSE for every k.

    Args:
        results: Output of compute_clusterings
        save_path: Optional path to save figure
        show: Whether to display the figure

    Returns:
        Matplotlib figure
    """
    fig, axes = plt.subplots(2, 1, figsize=(10, 8), sharex=True)
    _draw_selection_curves(axes, results)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"✓ Saved {save_path}")

    if show:
        plt.show()

    return fig


class LivePlotObserver:
    """
    Redraws the selection curves each time a k finishes.

    Pass an instance as the `observer` of compute_clusterings.
    """

    def __init__(self, pause: float = 0.01):
        self.pause = pause
        self.fig = None
        self.axes = None
        self.n_updates = 0

    def __call__(self, results: ClusteringResults):
        if self.fig is None:
            self.fig, self.axes = plt.subplots(2, 1, figsize=(10, 8), sharex=True)
        _draw_selection_curves(self.axes, results)
        self.fig.canvas.draw_idle()
        plt.pause(self.pause)
        self.n_updates += 1

    def close(self):
        if self.fig is not None:
            plt.close(self.fig)
            self.fig = None


def plot_clustering(
    data: np.ndarray,
    labels: np.ndarray,
    prototypes: Optional[np.ndarray] = None,
    title: Optional[str] = None,
    save_path: Optional[str] = None,
    show: bool = True
) -> plt.Figure:
    """
    Create a 2D view of one clustering using PCA.

    Missing cells are filled with the column mean for display only.

    Args:
        data: Data matrix (n, dim)
        labels: Cluster of each data point, values 1..k
        prototypes: Optional prototype vectors to overlay
        title: Optional figure title
        save_path: Optional path to save figure
        show: Whether to display the figure

    Returns:
        Matplotlib figure
    """
    means = np.nan_to_num(nan_mean(data))
    filled = np.where(np.isfinite(data), data, means)

    if filled.shape[1] >= 2:
        pca = PCA(n_components=2)
        points = pca.fit_transform(filled)
        xlabel = f'PC1 ({pca.explained_variance_ratio_[0]:.1%} variance)'
        ylabel = f'PC2 ({pca.explained_variance_ratio_[1]:.1%} variance)'
    else:
        pca = None
        points = np.column_stack([filled[:, 0], np.zeros(len(filled))])
        xlabel, ylabel = 'x', ''

    fig, ax = plt.subplots(figsize=(9, 7))

    for c in np.unique(labels):
        mask = labels == c
        ax.scatter(points[mask, 0], points[mask, 1], label=f"C{c}", alpha=0.6, s=30)

    if prototypes is not None:
        protos = np.where(np.isfinite(prototypes), prototypes, means)
        if pca is not None:
            protos = pca.transform(protos)
        else:
            protos = np.column_stack([protos[:, 0], np.zeros(len(protos))])
        ax.scatter(protos[:, 0], protos[:, 1], marker='X', s=200, c='black',
                   label='Prototypes', zorder=10)

    ax.set_xlabel(xlabel, fontsize=11)
    ax.set_ylabel(ylabel, fontsize=11)
    ax.set_title(title or f'{len(np.unique(labels))} clusters',
                 fontsize=14, fontweight='bold')
    ax.legend(loc='upper left', bbox_to_anchor=(1, 1), fontsize=9)
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"✓ Saved {save_path}")

    if show:
        plt.show()

    return fig
