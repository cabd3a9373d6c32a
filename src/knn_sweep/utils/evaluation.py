"""Evaluation utilities."""

import dataclasses
from collections.abc import Iterable, Sequence

from loguru import logger

from knn_sweep.datasets.feature_vector import FeatureVector
from knn_sweep.supervised.distance_metrics import Metric
from knn_sweep.supervised.k_nearest_neighbors import majority_vote, nearest_labels


class EmptyValidationSetError(ValueError):
    """Raised when an error rate is requested for an empty validation set."""


@dataclasses.dataclass(frozen=True)
class EvaluationResult:
    """Error rates of a sweep over metrics and k values.

    Attributes:
        metric_names: the metric of every row.
        k_values: the k of every column.
        error_rates: row-major matrix of error percentages.
    """

    metric_names: tuple[str, ...]
    k_values: tuple[int, ...]
    error_rates: tuple[tuple[float, ...], ...]

    def rate(self, metric_name: str, k: int) -> float:
        """Look up the error rate of one metric and k."""
        return self.error_rates[self.metric_names.index(metric_name)][
            self.k_values.index(k)
        ]


def error_rate(predicted: Sequence[bool], actual: Sequence[bool]) -> float:
    """Compute the percentage of mismatching labels.

    Raises:
        EmptyValidationSetError: if there are no labels to compare.
    """
    if len(actual) == 0:
        raise EmptyValidationSetError("Cannot compute an error rate without records")
    if len(predicted) != len(actual):
        raise ValueError(f"Got {len(predicted)} predictions for {len(actual)} records")

    mismatches = sum(p != a for p, a in zip(predicted, actual))
    return 100 * mismatches / len(actual)


def evaluate_metric(
    training_dataset: Sequence[FeatureVector],
    validation_dataset: Sequence[FeatureVector],
    metric: Metric,
    k_values: Sequence[int],
) -> list[float]:
    """Compute the error rate of one metric for every k.

    The neighbor ordering of every validation record is computed once and reused for
    all values of k.

    Args:
        training_dataset: the reference records.
        validation_dataset: the records to classify, with their true labels.
        metric: the distance metric.
        k_values: the neighbor counts to sweep.

    Returns:
        The error percentage for every k, in order.
    """
    if not validation_dataset:
        raise EmptyValidationSetError("Cannot evaluate an empty validation set")

    sorted_labels = nearest_labels(validation_dataset, training_dataset, metric)
    actual = [record.label for record in validation_dataset]
    return [
        error_rate(majority_vote(sorted_labels, k).tolist(), actual) for k in k_values
    ]


def evaluate(
    training_dataset: Sequence[FeatureVector],
    validation_dataset: Sequence[FeatureVector],
    metrics: Iterable[tuple[Metric, str]],
    k_values: Sequence[int],
) -> EvaluationResult:
    """Sweep metrics and k values over a validation set.

    Args:
        training_dataset: the reference records.
        validation_dataset: the records to classify, with their true labels.
        metrics: pairs of metric function and display name, one row each. Any
          iterable works, so callers can wrap it in a progress tracker.
        k_values: the neighbor counts to sweep, one column each.

    Returns:
        The error rate matrix.
    """
    names = []
    rows = []
    for metric, name in metrics:
        logger.debug(f"Evaluating {name} metric for k in {list(k_values)}")
        rows.append(
            tuple(
                evaluate_metric(training_dataset, validation_dataset, metric, k_values)
            )
        )
        names.append(name)

    return EvaluationResult(
        metric_names=tuple(names),
        k_values=tuple(k_values),
        error_rates=tuple(rows),
    )
