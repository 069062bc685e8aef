"""
Data loading utilities.

This module turns the supported input shapes (plain matrices, pandas
DataFrames, and map/data structs carrying a 'data' or 'codebook'
field) into the float matrix the clustering code works on.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Union

import numpy as np
import pandas as pd

from ..exceptions import InvalidInputError

STRUCT_FIELDS = ('data', 'codebook')


def _unwrap_struct(obj):
    """Return the 'data' field of a struct, else its 'codebook' field."""
    for name in STRUCT_FIELDS:
        if isinstance(obj, Mapping):
            if name in obj:
                return obj[name]
        elif hasattr(obj, name):
            return getattr(obj, name)
    raise InvalidInputError(
        f"Struct input of type {type(obj).__name__} has neither a "
        f"'data' nor a 'codebook' field"
    )


def as_dataset(obj) -> np.ndarray:
    """
    Normalize any supported input into an (n, dim) float matrix.

    Args:
        obj: ndarray or nested list, DataFrame, or a mapping/object
            with a 'data' or 'codebook' field

    Returns:
        Float64 copy of the data; non-finite cells mark missing values
    """
    if isinstance(obj, pd.DataFrame):
        data = obj.select_dtypes(include=[np.number]).to_numpy(dtype=float)
    elif isinstance(obj, (np.ndarray, list, tuple)):
        try:
            data = np.array(obj, dtype=float)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"Data is not numeric: {e}") from e
    else:
        return as_dataset(_unwrap_struct(obj))

    if data.ndim == 1:
        data = data[:, np.newaxis]
    if data.ndim != 2:
        raise InvalidInputError(f"Data must be 2-D, got shape {data.shape}")

    n_points, dim = data.shape
    if n_points == 0 or dim == 0:
        raise InvalidInputError(f"Data is empty (shape {data.shape})")

    return data


def load_dataset(path: Union[str, Path], verbose: bool = True) -> np.ndarray:
    """
    Load a dataset from CSV, NPY or NPZ.

    CSV files keep only their numeric columns. NPZ archives are read
    like structs: the 'data' array if present, otherwise 'codebook'.

    Args:
        path: Path to the data file
        verbose: Whether to print loading statistics

    Returns:
        Data matrix (n, dim)
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == '.csv':
        data = as_dataset(pd.read_csv(path))
    elif suffix == '.npy':
        data = as_dataset(np.load(path))
    elif suffix == '.npz':
        with np.load(path) as archive:
            data = as_dataset(_unwrap_struct(dict(archive)))
    else:
        raise InvalidInputError(f"Unsupported data file type: {path.suffix}")

    if verbose:
        n_missing = int((~np.isfinite(data)).sum())
        print(f"✓ Loaded {path.name}: {data.shape[0]} points x {data.shape[1]} dims "
              f"({n_missing} missing values)")

    return data
