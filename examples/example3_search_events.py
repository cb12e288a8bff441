"""
Example 3 – Using the Search Directly (No Estimator)
=====================================================
The low-level API works on a single table with the class label in column 0:
``loocv_accuracy`` scores one subset, ``GreedySearch`` streams every step
of the search as events.
"""

import numpy as np
from nn_feature_select import (
    CandidateEvaluated,
    GreedySearch,
    LevelCompleted,
    format_accuracy,
    format_subset,
    loocv_accuracy,
)

# ---------------------------------------------------------------------------
# Synthetic dataset: label + 2 informative features + 2 noise features
# ---------------------------------------------------------------------------
rng = np.random.default_rng(0)
n   = 200

data = np.column_stack([
    np.array([1.0]*(n//2) + [2.0]*(n//2)),
    np.vstack([rng.normal([0, 0], 0.6, (n//2, 2)),
               rng.normal([2, 2], 0.6, (n//2, 2))]),   # informative
    rng.normal(0, 1, (n, 2)),                            # noise
])

print("Feature ids: 1,2 = informative | 3,4 = noise\n")

# ---------------------------------------------------------------------------
# Score specific subsets
# ---------------------------------------------------------------------------
for subset in [(1, 2), (3, 4), (1, 3), (2, 4), (1, 2, 3, 4)]:
    acc = loocv_accuracy(data, subset)
    print(f"  acc{format_subset(subset)} = {format_accuracy(acc)}")

# ---------------------------------------------------------------------------
# Walk the backward elimination event stream
# ---------------------------------------------------------------------------
print("\nBackward elimination:")
search = GreedySearch(data, direction="backward")
for event in search:
    if isinstance(event, CandidateEvaluated):
        print(f"    try {format_subset(event.subset)}: {format_accuracy(event.accuracy)}")
    elif isinstance(event, LevelCompleted):
        print(f"  level {event.level}: removed {event.feature}")

result = search.run()
print(
    f"\nBest subset {format_subset(result.best_subset)} "
    f"({format_accuracy(result.best_accuracy)}), "
    f"{result.n_evaluations} subsets evaluated"
)
