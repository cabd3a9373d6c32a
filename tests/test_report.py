"""Tests for console tables."""

from rich.console import Console

from knn_sweep.datasets.feature_vector import FeatureVector
from knn_sweep.report import demo_table, error_rate_table
from knn_sweep.utils.evaluation import EvaluationResult


def render(table) -> str:
    """Render a table to plain text."""
    console = Console(record=True, width=120)
    console.print(table)
    return console.export_text()


def test_error_rate_table():
    """Test one row per metric and one column per k."""
    result = EvaluationResult(
        metric_names=("Euclidean", "Railway"),
        k_values=(1, 3),
        error_rates=((12.5, 0.0), (100.0, 33.333)),
    )

    text = render(error_rate_table(result))

    assert "K = 1" in text
    assert "K = 3" in text
    assert "12.50%" in text
    assert "33.33%" in text
    assert "100.00%" in text
    assert "Railway" in text


def test_demo_table():
    """Test synthetic records rendered with their predicted tokens."""
    records = [FeatureVector(features=(1, 10, 3)), FeatureVector(features=(4, 5, 6))]

    text = render(demo_table(records, [True, False], "type2", "type1"))

    assert "[ 1|10| 3]" in text
    assert "type2" in text
    assert "type1" in text
