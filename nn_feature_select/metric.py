"""
nn_feature_select.metric
========================
Leave-one-out accuracy of a 1-nearest-neighbour classifier restricted to a
feature subset.

The dataset layout follows the classic text-file format used for this kind
of search: one sample per row, column 0 holds the class label and columns
``1..F`` hold the feature values.  A feature subset is a collection of
column indices drawn from ``[1, F]``.

    acc(S) = (1 / N) * Σ_i  1[ label(nn_S(i)) == label(i) ]

where ``nn_S(i)`` is the sample ``k != i`` closest to ``i`` by Euclidean
distance over the columns in S only.

Computational notes
-------------------
* Every call recomputes all pairwise distances, O(N² |S|).
* Distances are computed in row blocks with SciPy's ``cdist`` so memory
  stays at O(block * N) instead of O(N²).
* The nearest neighbour is the *first* sample, in ascending row order, that
  attains the minimum distance.  ``np.argmin`` returns the first minimum,
  which gives exactly that tie-break.
* Subset indices are sorted before slicing, so the floating-point distance
  sum does not depend on the order the caller listed them in.
"""

from __future__ import annotations

from numbers import Integral
from typing import Iterable

import numpy as np
from scipy.spatial.distance import cdist

from .exceptions import InvalidFeatureIndexError, MalformedDatasetError


__all__ = ["check_dataset", "check_subset", "loocv_accuracy", "nearest_neighbors"]


_BLOCK_ROWS = 1024


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

def check_dataset(data) -> np.ndarray:
    """Convert ``data`` to a float array and check it can be searched.

    Parameters
    ----------
    data : array-like, shape (n_samples, n_features + 1)
        Column 0 is the class label, the remaining columns are features.
        A list of equal-length rows is accepted; anything else (arrays,
        DataFrames) goes through ``np.asarray``.

    Returns
    -------
    np.ndarray of float, shape (n_samples, n_features + 1)

    Raises
    ------
    MalformedDatasetError
        If rows have unequal length, the table is not 2-D, contains
        non-finite values, or has fewer than 2 samples.
    """
    if isinstance(data, (list, tuple)):
        shapes = {np.shape(row) for row in data}
        if len(shapes) > 1:
            raise MalformedDatasetError(
                f"All samples must have the same length, got shapes "
                f"{sorted(shapes)}."
            )
    arr = np.asarray(data, dtype=float)

    if arr.ndim != 2 or arr.shape[1] < 1:
        raise MalformedDatasetError(
            f"Dataset must be a 2-D table with the label in column 0, "
            f"got shape {arr.shape}."
        )
    if arr.shape[0] < 2:
        raise MalformedDatasetError(
            f"Leave-one-out evaluation needs at least 2 samples, "
            f"got {arr.shape[0]}."
        )
    if not np.isfinite(arr).all():
        raise MalformedDatasetError("Dataset contains NaN or infinite values.")
    return arr


def check_subset(subset: Iterable[int], n_features: int) -> tuple[int, ...]:
    """Return the sorted, de-duplicated feature indices of ``subset``.

    Raises
    ------
    InvalidFeatureIndexError
        If an index is not an integer or lies outside ``[1, n_features]``.
    """
    indices = set()
    for idx in subset:
        if isinstance(idx, bool) or not isinstance(idx, Integral):
            raise InvalidFeatureIndexError(
                f"Feature indices must be integers, got {idx!r}."
            )
        if not 1 <= idx <= n_features:
            raise InvalidFeatureIndexError(
                f"Feature index {idx} is outside [1, {n_features}]."
            )
        indices.add(int(idx))
    return tuple(sorted(indices))


# ---------------------------------------------------------------------------
# Public functions
# ---------------------------------------------------------------------------

def nearest_neighbors(data, subset: Iterable[int]) -> np.ndarray:
    """Row index of each sample's nearest other sample under ``subset``.

    Parameters
    ----------
    data : array-like, shape (n_samples, n_features + 1)
    subset : iterable of int
        Feature indices in ``[1, n_features]``.  May be empty, in which case
        all samples coincide and the first other row wins every time.

    Returns
    -------
    nn : np.ndarray of int, shape (n_samples,)
        -1 where no other sample lies at a finite distance (coordinates so
        large that every distance overflows); such samples count as
        misclassified.
    """
    arr = check_dataset(data)
    cols = check_subset(subset, arr.shape[1] - 1)
    return _nearest_neighbors(arr, cols)


def loocv_accuracy(data, subset: Iterable[int]) -> float:
    """Leave-one-out 1-NN accuracy using only the features in ``subset``.

    Parameters
    ----------
    data : array-like, shape (n_samples, n_features + 1)
        Column 0 is the class label.
    subset : iterable of int
        Feature indices in ``[1, n_features]``.  Order and duplicates are
        ignored.  The empty subset is legal.

    Returns
    -------
    float
        Fraction of samples whose nearest neighbour carries the same label,
        in ``[0, 1]``.

    Raises
    ------
    MalformedDatasetError
        If ``data`` is ragged or has fewer than 2 samples.
    InvalidFeatureIndexError
        If ``subset`` holds an index outside ``[1, n_features]``.

    Examples
    --------
    >>> data = [[1, 1.0, 10], [1, 1.1, 10], [2, 5.0, 10], [2, 5.1, 10]]
    >>> loocv_accuracy(data, {1})
    1.0
    """
    arr = check_dataset(data)
    cols = check_subset(subset, arr.shape[1] - 1)
    return _loocv_accuracy(arr, cols)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _loocv_accuracy(arr: np.ndarray, cols: tuple[int, ...]) -> float:
    """Accuracy on an already validated array and sorted column tuple."""
    labels = arr[:, 0]
    nn = _nearest_neighbors(arr, cols)
    hit = (nn >= 0) & (labels[nn] == labels)
    return float(np.count_nonzero(hit)) / len(arr)


def _nearest_neighbors(arr: np.ndarray, cols: tuple[int, ...]) -> np.ndarray:
    n = len(arr)

    # --- empty subset: every distance is 0 ----------------------------------
    if not cols:
        nn = np.zeros(n, dtype=np.intp)
        nn[0] = 1
        return nn

    X = arr[:, list(cols)]
    nn = np.empty(n, dtype=np.intp)
    for start in range(0, n, _BLOCK_ROWS):
        stop = min(start + _BLOCK_ROWS, n)
        dist = cdist(X[start:stop], X, metric="euclidean")
        rows = np.arange(stop - start)
        dist[rows, rows + start] = np.inf      # a sample is not its own neighbour
        best = np.argmin(dist, axis=1)
        # only overflowed (infinite) distances left: no neighbour
        best[~np.isfinite(dist[rows, best])] = -1
        nn[start:stop] = best
    return nn
