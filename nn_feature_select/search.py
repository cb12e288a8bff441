"""
nn_feature_select.search
========================
Greedy wrapper search over feature subsets, scored by
:func:`~nn_feature_select.metric.loocv_accuracy`.

Two directions share one routine:

**forward**
    Start from the empty subset.  At every level try adding each unused
    feature and keep the addition with the highest accuracy.

**backward**
    Start from the full subset.  At every level try removing each remaining
    feature and keep the removal with the highest accuracy.

Within a level the first candidate is the provisional best and a later
candidate replaces it only with a strictly higher accuracy, so ties go to
the candidate tried first (lowest feature index).  The chosen change is
committed even when it lowers the accuracy; the best subset seen at any
level is tracked separately and also only replaced on strict improvement.

The search is exposed as a lazy, restartable stream of events:

    search = GreedySearch(data, direction="forward")
    for event in search:
        ...
    result = search.run()
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Iterator

from joblib import Parallel, delayed

from .metric import _loocv_accuracy, check_dataset


__all__ = [
    "BACKWARD",
    "FORWARD",
    "CandidateEvaluated",
    "GreedySearch",
    "LevelCompleted",
    "SearchFinished",
    "SearchResult",
    "SearchStarted",
    "run_backward_search",
    "run_forward_search",
]


FORWARD  = "forward"
BACKWARD = "backward"
DIRECTIONS = (FORWARD, BACKWARD)


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SearchStarted:
    """Starting subset and its accuracy.

    Backward search seeds its best-so-far with this accuracy.  Forward search
    seeds it with 0.0, so the empty subset is only reported when there are
    no features at all.
    """

    direction: str
    subset: tuple[int, ...]
    accuracy: float


@dataclass(frozen=True)
class CandidateEvaluated:
    """One candidate subset tried at ``level``.

    ``feature`` is the feature added (forward) or removed (backward) to
    form ``subset``.
    """

    level: int
    feature: int
    subset: tuple[int, ...]
    accuracy: float


@dataclass(frozen=True)
class LevelCompleted:
    """The change committed at ``level`` and the resulting current subset."""

    level: int
    feature: int
    accuracy: float
    subset: tuple[int, ...]


@dataclass(frozen=True)
class SearchFinished:
    best_subset: tuple[int, ...]
    best_accuracy: float


@dataclass
class SearchResult:
    """Outcome of :meth:`GreedySearch.run`.

    Attributes
    ----------
    direction : str
        ``"forward"`` or ``"backward"``.
    best_subset : tuple of int
        Best subset seen across all levels (may differ from the final one).
    best_accuracy : float
        LOOCV accuracy of ``best_subset``.
    initial_accuracy : float
        Accuracy of the starting subset (empty or full).
    history : list of LevelCompleted
        One entry per level, in order.
    n_evaluations : int
        Number of candidate subsets evaluated.
    elapsed_seconds : float
        Wall-clock duration of the run.
    """

    direction: str
    best_subset: tuple[int, ...]
    best_accuracy: float
    initial_accuracy: float
    history: list[LevelCompleted] = field(default_factory=list)
    n_evaluations: int = 0
    elapsed_seconds: float = 0.0


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

class GreedySearch:
    """Level-by-level greedy feature search.

    Parameters
    ----------
    data : array-like, shape (n_samples, n_features + 1)
        Column 0 is the class label.
    direction : {"forward", "backward"}, default="forward"
    n_jobs : int, default=1
        Number of joblib workers used to score the candidates of one level.
        Scores are collected in candidate order, so the outcome does not
        depend on ``n_jobs``.

    Iterating the object runs the search from scratch and yields
    :class:`SearchStarted`, then :class:`CandidateEvaluated` and
    :class:`LevelCompleted` events for every level, then
    :class:`SearchFinished`.
    """

    def __init__(self, data, direction: str = FORWARD, n_jobs: int = 1):
        if direction not in DIRECTIONS:
            raise ValueError(
                f"direction must be one of {DIRECTIONS}, got {direction!r}."
            )
        if n_jobs == 0:
            raise ValueError("n_jobs must be a non-zero integer.")
        self.data      = check_dataset(data)
        self.direction = direction
        self.n_jobs    = n_jobs

    @property
    def n_features(self) -> int:
        return self.data.shape[1] - 1

    def __iter__(self) -> Iterator:
        return self._events()

    def run(self, callback: Callable | None = None) -> SearchResult:
        """Run the search to completion.

        Parameters
        ----------
        callback : callable, optional
            Called with every event as it is produced.

        Returns
        -------
        SearchResult
        """
        t0 = time.perf_counter()
        history = []
        n_evaluations = 0
        for event in self:
            if callback is not None:
                callback(event)
            if isinstance(event, SearchStarted):
                initial_accuracy = event.accuracy
            elif isinstance(event, CandidateEvaluated):
                n_evaluations += 1
            elif isinstance(event, LevelCompleted):
                history.append(event)
            elif isinstance(event, SearchFinished):
                finished = event

        return SearchResult(
            direction=self.direction,
            best_subset=finished.best_subset,
            best_accuracy=finished.best_accuracy,
            initial_accuracy=initial_accuracy,
            history=history,
            n_evaluations=n_evaluations,
            elapsed_seconds=time.perf_counter() - t0,
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _events(self):
        features = tuple(range(1, self.n_features + 1))
        current  = () if self.direction == FORWARD else features

        accuracy = self._score(current)
        yield SearchStarted(self.direction, current, accuracy)

        # forward only reports subsets some level committed, unless F == 0
        best_subset, best_accuracy = current, accuracy
        if self.direction == FORWARD and features:
            best_accuracy = 0.0

        level = 0
        while True:
            candidates = self._candidates(current, features)
            if not candidates:
                break
            level += 1

            chosen = None
            scores = self._score_all([subset for _, subset in candidates])
            for (feature, subset), acc in zip(candidates, scores):
                yield CandidateEvaluated(level, feature, subset, acc)
                if chosen is None or acc > chosen[2]:
                    chosen = (feature, subset, acc)

            feature, current, accuracy = chosen
            yield LevelCompleted(level, feature, accuracy, current)

            if accuracy > best_accuracy:
                best_subset, best_accuracy = current, accuracy

        yield SearchFinished(best_subset, best_accuracy)

    def _candidates(self, current, features):
        """(feature, candidate subset) pairs for one level, in trial order."""
        if self.direction == FORWARD:
            used = set(current)
            return [(f, current + (f,)) for f in features if f not in used]
        return [
            (f, current[:i] + current[i + 1:])
            for i, f in enumerate(current)
        ]

    def _score(self, subset) -> float:
        return _loocv_accuracy(self.data, tuple(sorted(subset)))

    def _score_all(self, subsets):
        if self.n_jobs == 1:
            # lazy, so events stream out as each candidate is scored
            return (self._score(s) for s in subsets)
        return Parallel(n_jobs=self.n_jobs)(
            delayed(_loocv_accuracy)(self.data, tuple(sorted(s)))
            for s in subsets
        )


# ---------------------------------------------------------------------------
# Convenience wrappers
# ---------------------------------------------------------------------------

def run_forward_search(
    data,
    callback: Callable | None = None,
    n_jobs: int = 1,
) -> tuple[tuple[int, ...], float]:
    """Forward selection; return ``(best_subset, best_accuracy)``.

    Examples
    --------
    >>> data = [[1, 1.0, 10], [1, 1.1, 10], [2, 5.0, 10], [2, 5.1, 10]]
    >>> run_forward_search(data)
    ((1,), 1.0)
    """
    result = GreedySearch(data, FORWARD, n_jobs=n_jobs).run(callback)
    return result.best_subset, result.best_accuracy


def run_backward_search(
    data,
    callback: Callable | None = None,
    n_jobs: int = 1,
) -> tuple[tuple[int, ...], float]:
    """Backward elimination; return ``(best_subset, best_accuracy)``."""
    result = GreedySearch(data, BACKWARD, n_jobs=n_jobs).run(callback)
    return result.best_subset, result.best_accuracy
