"""
nn_feature_select.io
====================
Reading datasets from text files and formatting subsets and accuracies the
way the console report prints them.

File format: one sample per line, whitespace-separated numbers, class label
first.  Blank lines are ignored.  Scientific notation is fine::

    2.0000000e+00   1.2340000e+00   -3.5000000e-01
    1.0000000e+00   4.1000000e-01    2.2000000e+00
"""

from __future__ import annotations

import os
from typing import Iterable

import numpy as np

from .exceptions import MalformedDatasetError
from .metric import check_dataset


__all__ = ["format_accuracy", "format_subset", "load_dataset"]


def load_dataset(path: str | os.PathLike) -> np.ndarray:
    """Load a whitespace-separated dataset file.

    Parameters
    ----------
    path : str or path-like

    Returns
    -------
    np.ndarray of float, shape (n_samples, n_features + 1)

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    MalformedDatasetError
        If rows have different numbers of values, a value is not numeric,
        or the file holds fewer than 2 samples.
    """
    try:
        data = np.loadtxt(path, dtype=float, ndmin=2)
    except ValueError as exc:
        raise MalformedDatasetError(f"Could not parse {os.fspath(path)}: {exc}") from exc
    return check_dataset(data)


def format_subset(subset: Iterable[int]) -> str:
    """``(1, 4, 2)`` -> ``'{1, 4, 2}'`` (order preserved)."""
    return "{" + ", ".join(str(f) for f in subset) + "}"


def format_accuracy(accuracy: float) -> str:
    """``0.953`` -> ``'95.3%'``."""
    return f"{accuracy * 100:.1f}%"
