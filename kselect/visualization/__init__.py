"""Visualization utilities for cluster-count selection."""

from .plots import (
    plot_cluster_selection,
    plot_clustering,
    LivePlotObserver
)

__all__ = [
    'plot_cluster_selection',
    'plot_clustering',
    'LivePlotObserver'
]
