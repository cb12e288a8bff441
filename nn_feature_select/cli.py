"""
nn_feature_select.cli
=====================
Console front end: load a dataset file, report the all-features baseline,
run forward selection or backward elimination and print every step.

    $ nn-feature-select data/small_55.txt --algorithm 1
    $ python -m nn_feature_select            # prompts for file and algorithm
"""

from __future__ import annotations

import argparse
import sys
import time
from functools import partial

from .exceptions import NNFeatureSelectError
from .io import format_accuracy, format_subset, load_dataset
from .metric import loocv_accuracy
from .search import (
    BACKWARD,
    FORWARD,
    CandidateEvaluated,
    GreedySearch,
    LevelCompleted,
    SearchFinished,
)


__all__ = ["main"]


ALGORITHMS = {"1": FORWARD, "2": BACKWARD, FORWARD: FORWARD, BACKWARD: BACKWARD}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="nn-feature-select",
        description="Greedy feature selection scored by leave-one-out "
                    "1-nearest-neighbour accuracy.",
    )
    p.add_argument("path", nargs="?", help="whitespace-separated dataset, label in column 0")
    p.add_argument(
        "-a", "--algorithm", choices=sorted(ALGORITHMS),
        help="1/forward = Forward Selection, 2/backward = Backward Elimination",
    )
    p.add_argument("-j", "--n-jobs", type=int, default=1,
                   help="parallel workers per search level (-1 = all cores)")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    print("Welcome to the Nearest Neighbor Feature Selection Algorithm.")
    path = args.path
    if path is None:
        path = input("Type in the name of the file to test: ").strip()
        print()

    try:
        data = load_dataset(path)
    except (OSError, NNFeatureSelectError) as exc:
        print(f"Error loading {path}: {exc}", file=sys.stderr)
        return 1

    choice = args.algorithm
    if choice is None:
        print("Type in the number of the algorithm you want to run.")
        print("   1) Forward Selection")
        print("   2) Backward Elimination")
        choice = input().strip()
    if choice not in ALGORITHMS:
        print("Not a valid choice.", file=sys.stderr)
        return 2
    direction = ALGORITHMS[choice]

    try:
        search = GreedySearch(data, direction=direction, n_jobs=args.n_jobs)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    t0 = time.perf_counter()
    n_samples, n_features = data.shape[0], data.shape[1] - 1
    baseline = loocv_accuracy(data, range(1, n_features + 1))

    print(
        f"This dataset has {n_features} features (not including the class "
        f"attribute), with {n_samples} instances."
    )
    print(
        f"Running nearest neighbor with all {n_features} features, using "
        f"\"leaving-one-out\" evaluation, I get an accuracy of "
        f"{format_accuracy(baseline)}"
    )

    if direction == FORWARD:
        print("Beginning search.")
    else:
        print("Beginning backward elimination.")
    search.run(callback=partial(_print_event, direction))

    print(f"Runtime: {time.perf_counter() - t0:.2f} seconds")
    return 0


def _print_event(direction, event):
    if isinstance(event, CandidateEvaluated):
        print(
            f"   Using feature(s) {format_subset(event.subset)} accuracy is "
            f"{format_accuracy(event.accuracy)}"
        )
    elif isinstance(event, LevelCompleted):
        if direction == FORWARD:
            print(
                f"Feature set {format_subset((event.feature,))} was best, "
                f"accuracy is {format_accuracy(event.accuracy)}"
            )
        else:
            print(
                f"Removing feature {event.feature} for best accuracy of "
                f"{format_accuracy(event.accuracy)}"
            )
    elif isinstance(event, SearchFinished):
        print(
            f"Finished search. The best feature subset is "
            f"{format_subset(event.best_subset)}, which has an accuracy of "
            f"{format_accuracy(event.best_accuracy)}"
        )
