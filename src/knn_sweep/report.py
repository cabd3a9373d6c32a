"""Console tables for sweep results and synthetic records."""

from collections.abc import Sequence

from rich.table import Table
from rich.text import Text

from knn_sweep.datasets.feature_vector import FeatureVector, label_token
from knn_sweep.utils.evaluation import EvaluationResult


def error_rate_table(result: EvaluationResult) -> Table:
    """Render an error rate matrix as a table.

    Args:
        result: the sweep result.

    Returns:
        A table with one row per metric and one column per k.
    """
    table = Table(title="Misclassification rate")
    table.add_column("Metric", justify="left")
    for k in result.k_values:
        table.add_column(f"K = {k}", justify="right")

    for name, rates in zip(result.metric_names, result.error_rates, strict=True):
        table.add_row(name, *(f"{rate:.2f}%" for rate in rates))
    return table


def demo_table(
    records: Sequence[FeatureVector],
    predictions: Sequence[bool],
    positive_label: str,
    negative_label: str,
    title: str | None = None,
) -> Table:
    """Render synthetic records with their predicted labels."""
    table = Table(title=title)
    table.add_column("Record", justify="left")
    table.add_column("Predicted", justify="left")

    for record, predicted in zip(records, predictions, strict=True):
        table.add_row(
            Text(str(record)), label_token(predicted, positive_label, negative_label)
        )
    return table
