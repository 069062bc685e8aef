"""
Cluster-count selection with repeated k-means.

This package provides modules for:
- Data loading and struct unwrapping
- Batch k-means with missing values
- Multi-restart selection of the best clustering per k
- Davies-Bouldin cluster validity
- Visualization of the selection curves
"""

from . import data
from . import clustering
from . import evaluation
from .clustering import compute_clusterings
from .exceptions import (
    KSelectError,
    InvalidInputError,
    DegenerateTrialError,
    AllTrialsFailedError
)

__version__ = "1.0.0"
