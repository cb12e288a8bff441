"""
nn_feature_select.plot
======================
Visualization helpers for the greedy nearest-neighbour feature search.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from .io import format_subset
from .metric import check_dataset, nearest_neighbors
from .search import FORWARD, SearchResult


__all__ = ["plot_feature_space_2d", "plot_search_trace"]


def plot_search_trace(
    result: SearchResult,
    *,
    title: str | None = None,
    ax: Optional[plt.Axes] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Bar chart of the accuracy committed at each search level.

    Parameters
    ----------
    result : SearchResult
        Output of :meth:`~nn_feature_select.GreedySearch.run` (or the
        ``result_`` attribute of a fitted selector).
    title : str, optional
        Plot title.  Defaults to the search direction.
    ax : matplotlib Axes, optional
    save_path : str, optional

    Returns
    -------
    matplotlib.figure.Figure
    """
    history = result.history
    sign    = "+" if result.direction == FORWARD else "−"
    labels  = [f"{sign}{ev.feature}" for ev in history]
    scores  = [ev.accuracy for ev in history]
    colors  = ["#C44E52" if ev.subset == result.best_subset else "#4C72B0"
               for ev in history]

    if ax is None:
        fig, ax = plt.subplots(figsize=(max(6, len(history) * 0.45), 4))
    else:
        fig = ax.get_figure()

    ax.bar(range(len(history)), scores, color=colors, edgecolor="white", linewidth=0.5)
    ax.set_xticks(range(len(history)))
    ax.set_xticklabels(labels, rotation=60, ha="right", fontsize=8)
    ax.set_xlabel("Level (feature added / removed)", fontsize=11)
    ax.set_ylabel("LOOCV 1-NN accuracy", fontsize=11)
    ax.set_ylim(0, 1.05)
    ax.axhline(
        result.initial_accuracy, color="grey", linestyle="--", linewidth=1,
        label=f"Start ({result.initial_accuracy * 100:.1f}%)",
    )
    ax.set_title(title or f"{result.direction.capitalize()} search", fontsize=13)

    patch = mpatches.Patch(
        color="#C44E52",
        label=f"Best: {format_subset(result.best_subset)} "
              f"({result.best_accuracy * 100:.1f}%)",
    )
    handles, _ = ax.get_legend_handles_labels()
    ax.legend(handles=handles + [patch], fontsize=9)

    fig.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    return fig


def plot_feature_space_2d(
    data,
    feature_indices: tuple[int, int],
    *,
    feature_names: Sequence[str] | None = None,
    title: str = "Feature space with leave-one-out errors",
    ax: Optional[plt.Axes] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Scatter plot of two features, marking points misclassified by LOOCV 1-NN.

    Parameters
    ----------
    data : array-like, shape (n_samples, n_features + 1)
        Column 0 is the class label.
    feature_indices : (int, int)
        Pair of 1-based feature indices to plot; the nearest neighbours are
        computed in this 2-D subspace.
    feature_names : sequence of str, optional
        Names for features ``1..F`` (``feature_names[0]`` names feature 1).
    title : str
    ax : matplotlib Axes, optional
    save_path : str, optional

    Returns
    -------
    matplotlib.figure.Figure
    """
    arr    = check_dataset(data)
    labels = arr[:, 0]
    i, j   = feature_indices
    nn     = nearest_neighbors(arr, (i, j))
    wrong  = (nn < 0) | (labels[nn] != labels)

    classes   = np.unique(labels)
    cmap      = plt.cm.tab10(np.linspace(0, 0.85, len(classes)))
    class_col = {cls: cmap[k] for k, cls in enumerate(classes)}

    if ax is None:
        fig, ax = plt.subplots(figsize=(7, 6))
    else:
        fig = ax.get_figure()

    legend_handles = []
    for cls in classes:
        mask = (labels == cls) & ~wrong
        ax.scatter(
            arr[mask, i], arr[mask, j],
            c=[class_col[cls]], s=30, edgecolors="white",
            linewidths=0.4, zorder=3,
        )
        legend_handles.append(
            mpatches.Patch(color=class_col[cls], label=f"Class {cls:g}")
        )

    # Misclassified points in a distinct marker
    if wrong.any():
        ax.scatter(
            arr[wrong, i], arr[wrong, j],
            c="black", s=35, marker="x", linewidths=1.2, zorder=4,
        )
        legend_handles.append(
            mpatches.Patch(color="black", label="Misclassified")
        )

    if feature_names is not None:
        ax.set_xlabel(feature_names[i - 1], fontsize=12)
        ax.set_ylabel(feature_names[j - 1], fontsize=12)
    else:
        ax.set_xlabel(f"Feature {i}", fontsize=12)
        ax.set_ylabel(f"Feature {j}", fontsize=12)

    ax.set_title(f"{title}\naccuracy = {1.0 - wrong.mean():.3f}", fontsize=13)
    ax.legend(handles=legend_handles, fontsize=9, loc="best")
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")
    return fig
