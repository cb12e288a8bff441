"""
nn_feature_select.selector
==========================
Scikit-learn compatible estimator wrapping the greedy LOOCV 1-NN search.

The estimator follows the standard sklearn API:

    selector = GreedyNNFeatureSelector(direction="backward", verbose=1)
    selector.fit(X_train, y_train)
    X_reduced = selector.transform(X_train)

``X`` uses ordinary 0-based columns.  Internally the label is prepended as
column 0, so the search itself works with 1-based feature ids; ``history_``
and ``result_`` keep those ids, while ``selected_features_`` is translated
back to columns of ``X``.
"""

from __future__ import annotations

import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.utils.validation import check_is_fitted

from .io import format_accuracy, format_subset
from .metric import _loocv_accuracy
from .search import (
    DIRECTIONS,
    FORWARD,
    CandidateEvaluated,
    GreedySearch,
    LevelCompleted,
    SearchFinished,
)


__all__ = ["GreedyNNFeatureSelector"]


class GreedyNNFeatureSelector(TransformerMixin, BaseEstimator):
    """Greedy wrapper feature selector scored by leave-one-out 1-NN accuracy.

    At each level every single-feature change (an addition for
    ``direction="forward"``, a removal for ``direction="backward"``) is
    scored by leave-one-out cross-validation of a 1-nearest-neighbour
    classifier with Euclidean distance on the candidate features.  The best
    change is committed and the search continues until no feature is left
    to add or remove.  The subset with the highest accuracy at any level is
    selected.

    Parameters
    ----------
    direction : {"forward", "backward"}, default="forward"
        Search direction.
    n_jobs : int, default=1
        Parallel jobs used to score the candidates of one level.
        Pass ``-1`` to use all available cores.
    verbose : int, default=0
        Verbosity level (0 = silent, 1 = one line per level,
        2 = every candidate).

    Attributes
    ----------
    selected_features_ : tuple of int
        Sorted 0-based column indices of ``X`` in the best subset.
    accuracy_ : float
        LOOCV accuracy of the selected subset.
    baseline_accuracy_ : float
        LOOCV accuracy using all features.
    history_ : list of LevelCompleted
        Change committed at each level (1-based feature ids).
    result_ : SearchResult
        Full search outcome.
    n_features_in_ : int
        Total number of features seen during fit.
    classes_ : np.ndarray
        Distinct labels of ``y``.

    Examples
    --------
    >>> from sklearn.datasets import load_iris
    >>> from nn_feature_select import GreedyNNFeatureSelector
    >>>
    >>> X, y = load_iris(return_X_y=True)
    >>> selector = GreedyNNFeatureSelector(direction="forward")
    >>> selector.fit(X, y)
    GreedyNNFeatureSelector()
    >>> X_reduced = selector.transform(X)
    """

    def __init__(
        self,
        direction: str = FORWARD,
        n_jobs: int = 1,
        verbose: int = 0,
    ):
        self.direction = direction
        self.n_jobs    = n_jobs
        self.verbose   = verbose

    # ------------------------------------------------------------------
    # sklearn API
    # ------------------------------------------------------------------

    def fit(self, X: np.ndarray, y: np.ndarray) -> "GreedyNNFeatureSelector":
        """Run the greedy search on ``(X, y)``.

        Parameters
        ----------
        X : array-like, shape (n_samples, n_features)
            Training data.
        y : array-like, shape (n_samples,)
            Class labels.

        Returns
        -------
        self
        """
        self._validate_params()

        X_arr = np.asarray(X, dtype=float)
        y_arr = np.asarray(y)
        if X_arr.ndim != 2:
            raise ValueError(f"X must be 2-D, got shape {X_arr.shape}.")
        if y_arr.ndim != 1 or len(y_arr) != len(X_arr):
            raise ValueError(
                f"y must be 1-D with one label per row of X, got shape "
                f"{y_arr.shape} for X of shape {X_arr.shape}."
            )
        self.n_features_in_ = X_arr.shape[1]

        # class codes, so string labels compare exactly like numeric ones
        self.classes_, y_codes = np.unique(y_arr, return_inverse=True)

        search = GreedySearch(
            np.column_stack([y_codes.astype(float), X_arr]),
            direction=self.direction,
            n_jobs=self.n_jobs,
        )
        all_features = tuple(range(1, self.n_features_in_ + 1))
        self.baseline_accuracy_ = _loocv_accuracy(search.data, all_features)

        if self.verbose >= 1:
            print(
                f"[GreedyNNFeatureSelector] {self.direction} search over "
                f"{self.n_features_in_} features, {len(X_arr)} samples.  "
                f"All-features accuracy = {format_accuracy(self.baseline_accuracy_)}"
            )

        self.result_  = search.run(callback=self._report)
        self.history_ = self.result_.history

        self.selected_features_ = tuple(
            sorted(f - 1 for f in self.result_.best_subset)
        )
        self.accuracy_ = self.result_.best_accuracy
        return self

    def transform(self, X: np.ndarray) -> np.ndarray:
        """Project X onto the selected feature subset.

        Parameters
        ----------
        X : array-like, shape (n_samples, n_features)

        Returns
        -------
        X_reduced : np.ndarray, shape (n_samples, n_selected)
        """
        check_is_fitted(self, "selected_features_")
        X_arr = np.asarray(X, dtype=float)
        return X_arr[:, list(self.selected_features_)]

    def get_support(self, indices: bool = False):
        """Return a mask or indices of the selected features.

        Parameters
        ----------
        indices : bool, default=False
            If ``True``, return indices; otherwise return a boolean mask.

        Returns
        -------
        mask : np.ndarray of bool, or np.ndarray of int
        """
        check_is_fitted(self, "selected_features_")
        mask = np.zeros(self.n_features_in_, dtype=bool)
        mask[list(self.selected_features_)] = True
        if indices:
            return np.where(mask)[0]
        return mask

    def get_feature_names_out(self, input_features=None):
        """Get feature names for the selected features.

        Parameters
        ----------
        input_features : array-like of str, optional
            Input feature names.  If ``None``, uses ``x0``, ``x1``, etc.

        Returns
        -------
        feature_names_out : np.ndarray of str
        """
        check_is_fitted(self, "selected_features_")
        if input_features is None:
            input_features = [f"x{i}" for i in range(self.n_features_in_)]
        return np.array([input_features[i] for i in self.selected_features_])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate_params(self):
        if self.direction not in DIRECTIONS:
            raise ValueError(
                f"direction must be one of {DIRECTIONS}, got {self.direction!r}."
            )
        if self.n_jobs == 0:
            raise ValueError("n_jobs must be a non-zero integer.")

    def _report(self, event):
        if isinstance(event, CandidateEvaluated):
            if self.verbose >= 2:
                print(
                    f"  level {event.level}  features={format_subset(event.subset)}  "
                    f"accuracy={format_accuracy(event.accuracy)}"
                )
        elif isinstance(event, LevelCompleted):
            if self.verbose >= 1:
                verb = "added" if self.direction == FORWARD else "removed"
                print(
                    f"[GreedyNNFeatureSelector] Level {event.level}: {verb} "
                    f"feature {event.feature}, accuracy = "
                    f"{format_accuracy(event.accuracy)}"
                )
        elif isinstance(event, SearchFinished):
            if self.verbose >= 1:
                print(
                    f"[GreedyNNFeatureSelector] Done.  "
                    f"Best subset: {format_subset(event.best_subset)}  "
                    f"accuracy = {format_accuracy(event.best_accuracy)}"
                )

    def summary(self) -> str:
        """Return a human-readable summary of the fitted selector."""
        check_is_fitted(self, "selected_features_")
        lines = [
            "GreedyNNFeatureSelector – fit summary",
            f"  direction              : {self.direction}",
            f"  n_features_in          : {self.n_features_in_}",
            f"  subsets evaluated      : {self.result_.n_evaluations}",
            f"  all-features accuracy  : {format_accuracy(self.baseline_accuracy_)}",
            f"  selected features      : {self.selected_features_}",
            f"  LOOCV 1-NN accuracy    : {format_accuracy(self.accuracy_)}",
            f"  search time            : {self.result_.elapsed_seconds:.2f} s",
        ]
        return "\n".join(lines)
