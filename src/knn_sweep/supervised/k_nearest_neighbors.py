"""K-Nearest Neighbors (KNN) Implementation.

This module provides a binary k-nearest neighbors classifier with a pluggable distance
metric. KNN is a non-parametric, lazy algorithm: it makes no assumption about the
distribution of the data and does not learn a discriminative function. It stores the
training data and performs all of its computation at prediction time.

A query is classified by computing its distance to every training record, ordering
the records by distance and taking a strict majority vote among the labels of the
``k`` closest ones. The ordering is a stable sort, so records at equal distance keep
their training set order and predictions are reproducible even for metrics that
produce many exact ties, such as Chebyshev or Hamming.

References:
- Cover, T., & Hart, P. (1967). Nearest neighbor pattern classification. IEEE
  Transactions on Information Theory, 13(1), 21-27.
  Available at: https://ieeexplore.ieee.org/document/1053964

"""

from collections.abc import Sequence

import jax.numpy as jnp
from jaxtyping import Array, Bool

from knn_sweep.datasets.dataset import stack_features, stack_labels
from knn_sweep.datasets.feature_vector import FeatureVector
from knn_sweep.supervised.distance_metrics import Metric, pairwise_distances


class EmptyTrainingSetError(ValueError):
    """Raised when a prediction is requested without any training records."""


def nearest_labels(
    queries: Sequence[FeatureVector],
    training_dataset: Sequence[FeatureVector],
    metric: Metric,
) -> Bool[Array, "n_queries n_training"]:
    """Order the training labels by distance to every query.

    Args:
        queries: the records to classify.
        training_dataset: the reference records.
        metric: the distance metric.

    Returns:
        For every query, the labels of all training records from nearest to farthest.
        Records at equal distance keep their training set order.

    Raises:
        EmptyTrainingSetError: if the training dataset is empty.
    """
    if not training_dataset:
        raise EmptyTrainingSetError("Cannot classify against an empty training set")

    distances = pairwise_distances(
        metric, stack_features(queries), stack_features(training_dataset)
    )
    order = jnp.argsort(distances, axis=1, stable=True)
    return stack_labels(training_dataset)[order]


def majority_vote(
    sorted_labels: Bool[Array, "n_queries n_training"], k: int
) -> Bool[Array, " n_queries"]:
    """Apply the strict majority rule to the ``k`` nearest labels.

    ``k`` is clamped to the number of training records. A query is positive only if
    more than half of its neighbors are; an exact tie is negative.

    Args:
        sorted_labels: the labels ordered by distance, one row per query.
        k: the number of neighbors to consider.

    Returns:
        The predicted label of every query.
    """
    if k < 1:
        raise ValueError(f"k must be a positive integer, got {k}")

    effective_k = min(k, sorted_labels.shape[1])
    positive_count = jnp.sum(sorted_labels[:, :effective_k], axis=1)
    return 2 * positive_count > effective_k


def predict_many(
    queries: Sequence[FeatureVector],
    training_dataset: Sequence[FeatureVector],
    k: int,
    metric: Metric,
) -> list[bool]:
    """Predict the labels of several queries.

    Args:
        queries: the records to classify.
        training_dataset: the reference records.
        k: the number of neighbors to consider.
        metric: the distance metric.

    Returns:
        The predicted label of every query, in order.
    """
    if not queries:
        return []
    return majority_vote(nearest_labels(queries, training_dataset, metric), k).tolist()


def predict(
    query: FeatureVector,
    training_dataset: Sequence[FeatureVector],
    k: int,
    metric: Metric,
) -> bool:
    """Predict the label of a query record.

    Args:
        query: the record to classify.
        training_dataset: the reference records.
        k: the number of neighbors to consider.
        metric: the distance metric.

    Returns:
        ``True`` if a strict majority of the ``k`` nearest neighbors is positive.

    Raises:
        EmptyTrainingSetError: if the training dataset is empty.
    """
    return predict_many([query], training_dataset, k, metric)[0]
