"""
nn_feature_select
=================
Greedy wrapper feature selection scored by leave-one-out 1-nearest-neighbour
accuracy, with a scikit-learn compatible estimator on top.

Core idea
---------
**Evaluator**
    For a candidate feature subset S, classify every sample by the label of
    its nearest other sample (Euclidean distance over S only) and count the
    hits::

        acc(S) = (number of correctly classified samples) / (total samples)

    Ties between equally near neighbours go to the lowest row index.

**Greedy search**
    *Forward selection* starts from no features and, level by level, adds
    the feature whose addition scores best.  *Backward elimination* starts
    from all features and removes the feature whose removal scores best.
    Every level commits exactly one change; the best subset seen at any
    level is reported.

Datasets are tables with the class label in column 0 and features in
columns ``1..F``; feature subsets use those 1-based column ids.

Public API
----------
GreedyNNFeatureSelector   – sklearn-compatible estimator
loocv_accuracy            – LOOCV 1-NN accuracy of one feature subset
GreedySearch              – lazy, restartable stream of search events
run_forward_search        – forward selection, returns (subset, accuracy)
run_backward_search       – backward elimination, returns (subset, accuracy)
load_dataset              – read a whitespace-separated dataset file
"""

from .exceptions import (
    InvalidFeatureIndexError,
    MalformedDatasetError,
    NNFeatureSelectError,
)
from .io       import format_accuracy, format_subset, load_dataset
from .metric   import check_dataset, check_subset, loocv_accuracy, nearest_neighbors
from .search   import (
    BACKWARD,
    FORWARD,
    CandidateEvaluated,
    GreedySearch,
    LevelCompleted,
    SearchFinished,
    SearchResult,
    SearchStarted,
    run_backward_search,
    run_forward_search,
)
from .selector import GreedyNNFeatureSelector

__all__ = [
    "BACKWARD",
    "FORWARD",
    "CandidateEvaluated",
    "GreedyNNFeatureSelector",
    "GreedySearch",
    "InvalidFeatureIndexError",
    "LevelCompleted",
    "MalformedDatasetError",
    "NNFeatureSelectError",
    "SearchFinished",
    "SearchResult",
    "SearchStarted",
    "check_dataset",
    "check_subset",
    "format_accuracy",
    "format_subset",
    "load_dataset",
    "loocv_accuracy",
    "nearest_neighbors",
    "run_backward_search",
    "run_forward_search",
]

__version__ = "0.1.0"
