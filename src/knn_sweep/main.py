"""Sweep k-nearest neighbors error rates over distance metrics and k values."""

from collections.abc import Sequence
from typing import Annotated

import jax
import typer
from loguru import logger
from rich.progress import Progress

from knn_sweep.config import KNNSweepConfig
from knn_sweep.datasets.dataset import feature_ranges, read_dataset
from knn_sweep.datasets.feature_vector import FeatureVector
from knn_sweep.report import demo_table, error_rate_table
from knn_sweep.supervised.distance_metrics import DistanceMetric, get_metric
from knn_sweep.supervised.k_nearest_neighbors import (
    EmptyTrainingSetError,
    predict_many,
)
from knn_sweep.utils.evaluation import (
    EmptyValidationSetError,
    EvaluationResult,
    evaluate,
)
from knn_sweep.utils.logging import console, get_progress_widgets, setup_logger
from knn_sweep.utils.reproducability import make_key

TRAINING_FILE_ERROR = 1
VALIDATION_FILE_ERROR = 2
EMPTY_DATASET_ERROR = 3

app = typer.Typer(pretty_exceptions_show_locals=False)


def load_dataset(path: str, config: KNNSweepConfig, exit_code: int):
    """Read a dataset, exiting with ``exit_code`` if the file cannot be opened."""
    try:
        return read_dataset(path, config.n_features, config.positive_label)
    except OSError as e:
        logger.debug(f"Failed to open {path}: {e}")
        console.print(f"Cannot read file {path}", markup=False)
        raise typer.Exit(code=exit_code) from e


def sweep(
    training_dataset: Sequence[FeatureVector],
    validation_dataset: Sequence[FeatureVector],
    config: KNNSweepConfig,
) -> EvaluationResult:
    """Evaluate every configured metric and k with a progress bar."""
    metrics = [(get_metric(name), name.display_name) for name in config.metrics]
    with Progress(*get_progress_widgets(), console=console, transient=True) as progress:
        return evaluate(
            training_dataset,
            validation_dataset,
            progress.track(metrics, description="Evaluating metrics"),
            config.k_values,
        )


def classify_random_records(
    training_dataset: Sequence[FeatureVector], config: KNNSweepConfig
) -> tuple[list[FeatureVector], list[bool]]:
    """Generate synthetic records within the training ranges and classify them."""
    min_range, max_range = feature_ranges(training_dataset)
    keys = jax.random.split(make_key(config.seed), config.n_random_records)
    records = [FeatureVector.random(key, min_range, max_range) for key in keys]

    predictions = predict_many(
        records, training_dataset, config.demo_k, get_metric(config.demo_metric)
    )
    return records, predictions


@app.command()
def main(
    training_path: Annotated[
        str, typer.Option(help="The training dataset path")
    ] = KNNSweepConfig.training_path,
    validation_path: Annotated[
        str, typer.Option(help="The validation dataset path")
    ] = KNNSweepConfig.validation_path,
    n_features: Annotated[
        int, typer.Option(help="The number of features per record", min=1)
    ] = KNNSweepConfig.n_features,
    positive_label: Annotated[
        str, typer.Option(help="The label token of the positive class")
    ] = KNNSweepConfig.positive_label,
    negative_label: Annotated[
        str, typer.Option(help="The label token of the negative class")
    ] = KNNSweepConfig.negative_label,
    k_values: Annotated[
        list[int] | None, typer.Option("--k", help="A neighbor count to sweep", min=1)
    ] = None,
    metrics: Annotated[
        list[DistanceMetric] | None,
        typer.Option("--metric", help="A distance metric to sweep"),
    ] = None,
    n_random_records: Annotated[
        int, typer.Option(help="The number of synthetic records to classify", min=0)
    ] = KNNSweepConfig.n_random_records,
    demo_metric: Annotated[
        DistanceMetric, typer.Option(help="The metric for synthetic records")
    ] = KNNSweepConfig.demo_metric,
    demo_k: Annotated[
        int, typer.Option(help="The neighbor count for synthetic records", min=1)
    ] = KNNSweepConfig.demo_k,
    seed: Annotated[
        int | None, typer.Option(help="The random seed for synthetic records")
    ] = None,
    verbose: Annotated[bool, typer.Option(help="Log debug messages")] = False,
):
    """Report the error rate of every metric and k on a validation dataset."""
    setup_logger(verbose)

    config = KNNSweepConfig(
        training_path=training_path,
        validation_path=validation_path,
        n_features=n_features,
        positive_label=positive_label,
        negative_label=negative_label,
        n_random_records=n_random_records,
        demo_metric=demo_metric,
        demo_k=demo_k,
        seed=seed,
    )
    if k_values:
        config.k_values = tuple(k_values)
    if metrics:
        config.metrics = tuple(metrics)

    training_dataset = load_dataset(training_path, config, TRAINING_FILE_ERROR)
    validation_dataset = load_dataset(validation_path, config, VALIDATION_FILE_ERROR)
    logger.info(
        f"Loaded {len(training_dataset)} training and "
        f"{len(validation_dataset)} validation records"
    )

    try:
        result = sweep(training_dataset, validation_dataset, config)
    except (EmptyTrainingSetError, EmptyValidationSetError) as e:
        console.print(str(e), markup=False)
        raise typer.Exit(code=EMPTY_DATASET_ERROR) from e
    console.print(error_rate_table(result))

    if config.n_random_records > 0:
        records, predictions = classify_random_records(training_dataset, config)
        console.print(
            demo_table(
                records,
                predictions,
                config.positive_label,
                config.negative_label,
                title=(
                    f"Synthetic records ({config.demo_metric.display_name}, "
                    f"K = {config.demo_k})"
                ),
            )
        )


if __name__ == "__main__":
    app()
