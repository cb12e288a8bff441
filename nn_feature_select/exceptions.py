"""
nn_feature_select.exceptions
============================
Errors raised when a dataset or feature subset cannot be evaluated.

Both concrete errors also derive from ``ValueError`` so callers that only
catch ``ValueError`` (as scikit-learn code usually does) still see them.
"""

__all__ = [
    "NNFeatureSelectError",
    "MalformedDatasetError",
    "InvalidFeatureIndexError",
]


class NNFeatureSelectError(Exception):
    """Base class for all errors raised by this package."""


class MalformedDatasetError(NNFeatureSelectError, ValueError):
    """The dataset is not a rectangular numeric table with at least 2 rows."""


class InvalidFeatureIndexError(NNFeatureSelectError, ValueError):
    """A feature subset refers to a column outside ``[1, n_features]``."""
