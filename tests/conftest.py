"""Shared fixtures for the test suite."""

import matplotlib
matplotlib.use('Agg')

import numpy as np
import pytest


@pytest.fixture
def two_pairs():
    """Two well separated clusters of two points each."""
    return np.array([
        [0.0, 0.0],
        [0.0, 1.0],
        [10.0, 0.0],
        [10.0, 1.0],
    ])


@pytest.fixture
def blobs():
    """Three Gaussian blobs in 3-D, 20 points each."""
    rng = np.random.RandomState(0)
    centers = np.array([
        [0.0, 0.0, 0.0],
        [8.0, 8.0, 0.0],
        [0.0, 8.0, 8.0],
    ])
    return np.vstack([c + rng.randn(20, 3) for c in centers])


@pytest.fixture
def blobs_with_missing(blobs):
    """The blobs with roughly 10% of cells missing."""
    rng = np.random.RandomState(1)
    data = blobs.copy()
    data[rng.rand(*data.shape) < 0.1] = np.nan
    # every point keeps at least one observed dimension
    data[:, 0] = np.where(np.isnan(data).all(axis=1), 0.0, data[:, 0])
    return data
