"""Tests for error rate evaluation."""

import pytest

from knn_sweep.supervised.distance_metrics import (
    euclidean_distance,
    hamming_distance,
    manhattan_distance,
)
from knn_sweep.supervised.k_nearest_neighbors import predict
from knn_sweep.utils.evaluation import (
    EmptyValidationSetError,
    error_rate,
    evaluate,
    evaluate_metric,
)
from tests.utils import classification_dataset, repeated


def test_error_rate():
    """Test the percentage of mismatching labels."""
    assert error_rate([True, False], [True, True]) == 50.0
    assert error_rate([True, False, True, False], [True, False, True, False]) == 0.0

    with pytest.raises(EmptyValidationSetError):
        error_rate([], [])
    with pytest.raises(ValueError):
        error_rate([True], [True, False])


def test_half_misclassified():
    """Test a validation set with one correct and one incorrect prediction."""
    training = [repeated(0), repeated(100, label=True)]
    validation = [repeated(1), repeated(2, label=True)]

    result = evaluate(training, validation, [(manhattan_distance, "Manhattan")], [1])

    assert result.rate("Manhattan", 1) == pytest.approx(50.0)


def test_evaluate_matrix():
    """Test the layout of the error rate matrix."""
    training, validation = classification_dataset(n_samples=100)
    metrics = [
        (euclidean_distance, "Euclidean"),
        (manhattan_distance, "Manhattan"),
        (hamming_distance, "Hamming"),
    ]
    k_values = [1, 3, 5, 7]

    result = evaluate(training, validation, metrics, k_values)

    assert result.metric_names == ("Euclidean", "Manhattan", "Hamming")
    assert result.k_values == (1, 3, 5, 7)
    assert len(result.error_rates) == 3
    for row in result.error_rates:
        assert len(row) == 4
        assert all(0.0 <= rate <= 100.0 for rate in row)
    assert result.rate("Hamming", 5) == result.error_rates[2][2]


@pytest.mark.parametrize("k", [1, 4, 9])
def test_evaluate_metric_matches_predict(k):
    """Test that the sweep agrees with classifying records one at a time."""
    training, validation = classification_dataset(n_samples=60)

    mismatches = sum(
        predict(record, training, k, manhattan_distance) != record.label
        for record in validation
    )

    (rate,) = evaluate_metric(training, validation, manhattan_distance, [k])
    assert rate == pytest.approx(100 * mismatches / len(validation))


def test_empty_validation_set():
    """Test that evaluating an empty validation set fails explicitly."""
    training = [repeated(0), repeated(100, label=True)]

    with pytest.raises(EmptyValidationSetError):
        evaluate(training, [], [(euclidean_distance, "Euclidean")], [1, 3])


def test_evaluate_accepts_iterator():
    """Test that metrics can be consumed once, as from a progress tracker."""
    training = [repeated(0), repeated(100, label=True)]
    validation = [repeated(1), repeated(99, label=True)]
    metrics = iter([(manhattan_distance, "Manhattan"), (hamming_distance, "Hamming")])

    result = evaluate(training, validation, metrics, [1])

    assert result.metric_names == ("Manhattan", "Hamming")
    assert result.rate("Manhattan", 1) == 0.0
