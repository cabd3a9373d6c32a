"""Dataset loading and stacking.

A dataset is an ordered list of feature vectors read once per run. Dataset files hold
one record per line: the feature values followed by a label token, separated by
whitespace.

Malformed lines:
----------------
Reading stops at the first line that cannot be parsed and the records read up to that
point are returned. There is no skip-and-continue; a warning names the offending line
so a truncated dataset does not go unnoticed.
"""

import os
from collections.abc import Sequence

import jax.numpy as jnp
from jaxtyping import Array, Bool, Int
from loguru import logger

from knn_sweep.datasets.feature_vector import FeatureVector


def read_dataset(
    path: str | os.PathLike, n_features: int, positive_label: str
) -> list[FeatureVector]:
    """Read a dataset file.

    Args:
        path: path of the dataset file.
        n_features: the number of features of every record.
        positive_label: the token naming the positive class.

    Returns:
        The records of the file up to the first malformed line.

    Raises:
        OSError: if the file cannot be opened.
    """
    records: list[FeatureVector] = []
    with open(path, encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                record = FeatureVector.from_line(line, n_features, positive_label)
            except ValueError as e:
                logger.warning(f"Stopped reading {path} at line {line_number}: {e}")
                break
            records.append(record)

    logger.debug(f"Read {len(records)} records from {path}")
    return records


def feature_ranges(
    dataset: Sequence[FeatureVector],
) -> tuple[tuple[int, ...], tuple[int, ...]]:
    """Compute the inclusive range of every feature over a dataset.

    Args:
        dataset: the records to scan.

    Returns:
        The per-feature minimums and maximums.
    """
    if not dataset:
        raise ValueError("Cannot compute feature ranges of an empty dataset")

    columns = list(zip(*(record.features for record in dataset), strict=True))
    return tuple(min(c) for c in columns), tuple(max(c) for c in columns)


def stack_features(
    dataset: Sequence[FeatureVector],
) -> Int[Array, "n_records n_features"]:
    """Stack the features of a dataset into a matrix."""
    if len({record.n_features for record in dataset}) > 1:
        raise ValueError(
            "All records of a dataset must have the same number of features"
        )
    return jnp.asarray([record.features for record in dataset], dtype=jnp.int32)


def stack_labels(dataset: Sequence[FeatureVector]) -> Bool[Array, " n_records"]:
    """Stack the labels of a dataset into a vector."""
    return jnp.asarray([record.label for record in dataset], dtype=bool)
