"""Cluster validity metrics."""

from .metrics import (
    cluster_dispersions,
    prototype_separations,
    davies_bouldin_index
)

__all__ = [
    'cluster_dispersions',
    'prototype_separations',
    'davies_bouldin_index'
]
