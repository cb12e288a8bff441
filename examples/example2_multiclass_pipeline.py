"""
Example 2 – Multi-class Classification & sklearn Pipeline
==========================================================
Demonstrates:
  * Multi-class support (Iris dataset, 3 classes)
  * Integration with a scikit-learn Pipeline
  * Plotting the selected 2-D feature space with LOOCV errors marked

The selector fits inside a Pipeline like any other transformer.
"""

import numpy as np
from sklearn.datasets import load_iris
from sklearn.neighbors import KNeighborsClassifier
from sklearn.preprocessing import StandardScaler
from sklearn.pipeline import Pipeline
from sklearn.model_selection import cross_val_score

from nn_feature_select import GreedyNNFeatureSelector
from nn_feature_select.plot import plot_feature_space_2d, plot_search_trace

# ---------------------------------------------------------------------------
# 1. Load data
# ---------------------------------------------------------------------------
X, y = load_iris(return_X_y=True)
feature_names = load_iris().feature_names

print(f"Dataset: {X.shape[0]} samples, {X.shape[1]} features, 3 classes\n")

# ---------------------------------------------------------------------------
# 2. Use selector inside a Pipeline
# ---------------------------------------------------------------------------
pipe = Pipeline([
    ("scaler",   StandardScaler()),
    ("selector", GreedyNNFeatureSelector(direction="forward", verbose=2)),
    ("clf",      KNeighborsClassifier(n_neighbors=1)),
])

pipe.fit(X, y)

selector = pipe.named_steps["selector"]
print()
print(selector.summary())

# ---------------------------------------------------------------------------
# 3. Cross-validate the full pipeline
# ---------------------------------------------------------------------------
scores = cross_val_score(pipe, X, y, cv=5, scoring="accuracy")
print(f"\n5-fold CV accuracy (full pipeline): {scores.mean():.4f} ± {scores.std():.4f}")

# ---------------------------------------------------------------------------
# 4. Visualise
# ---------------------------------------------------------------------------
plot_search_trace(
    selector.result_,
    title="Iris – forward selection",
    save_path="example2_trace.png",
)

X_scaled = pipe.named_steps["scaler"].transform(X)
data = np.column_stack([y, X_scaled])
first_two = tuple(ev.feature for ev in selector.history_[:2])
plot_feature_space_2d(
    data,
    feature_indices=first_two,
    feature_names=feature_names,
    title="Iris – first two features added",
    save_path="example2_feature_space.png",
)

print("\nPlots saved: example2_trace.png, example2_feature_space.png")
