"""
Example 1 – Breast Cancer (Binary Classification)
==================================================
Forward selection vs backward elimination on a real dataset.

Dataset : Wisconsin Breast Cancer (30 features, 2 classes, 569 samples)
Task    : Greedy search for the subset with the best LOOCV 1-NN accuracy
"""

from sklearn.datasets import load_breast_cancer
from sklearn.model_selection import train_test_split
from sklearn.neighbors import KNeighborsClassifier
from sklearn.metrics import accuracy_score
from sklearn.preprocessing import StandardScaler

from nn_feature_select import GreedyNNFeatureSelector
from nn_feature_select.plot import plot_search_trace

# ---------------------------------------------------------------------------
# 1. Load data
# ---------------------------------------------------------------------------
X, y = load_breast_cancer(return_X_y=True)
feature_names = load_breast_cancer().feature_names.tolist()

X_train, X_test, y_train, y_test = train_test_split(
    X, y, test_size=0.2, random_state=42, stratify=y,
)

# Nearest-neighbour distances are scale sensitive
scaler  = StandardScaler().fit(X_train)
X_train = scaler.transform(X_train)
X_test  = scaler.transform(X_test)

print(f"Dataset: {X.shape[0]} samples, {X.shape[1]} features, 2 classes")

# ---------------------------------------------------------------------------
# 2. Run both search directions
# ---------------------------------------------------------------------------
selectors = {}
for direction in ("forward", "backward"):
    selector = GreedyNNFeatureSelector(direction=direction, n_jobs=-1, verbose=1)
    selector.fit(X_train, y_train)
    print()
    print(selector.summary())
    print("  names:", list(selector.get_feature_names_out(feature_names)))
    print()
    selectors[direction] = selector

# ---------------------------------------------------------------------------
# 3. Evaluate on held-out test set
# ---------------------------------------------------------------------------
for direction, selector in selectors.items():
    clf = KNeighborsClassifier(n_neighbors=1)
    clf.fit(selector.transform(X_train), y_train)
    acc = accuracy_score(y_test, clf.predict(selector.transform(X_test)))
    print(f"Test accuracy (1-NN, {direction} subset): {acc:.4f}")

# ---------------------------------------------------------------------------
# 4. Visualise
# ---------------------------------------------------------------------------
for direction, selector in selectors.items():
    plot_search_trace(
        selector.result_,
        title=f"Breast cancer – {direction} search",
        save_path=f"example1_{direction}_trace.png",
    )

print("\nPlots saved: example1_forward_trace.png, example1_backward_trace.png")
