"""Data loading modules."""

from .loader import as_dataset, load_dataset

__all__ = [
    'as_dataset',
    'load_dataset'
]
