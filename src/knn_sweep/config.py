"""Configuration for a k-nearest neighbors sweep."""

from dataclasses import dataclass, field

from knn_sweep.supervised.distance_metrics import DistanceMetric


@dataclass
class KNNSweepConfig:
    """Configuration for a k-nearest neighbors sweep.

    Attributes:
        training_path: the dataset of reference records
        validation_path: the dataset of records with known labels to classify
        n_features: the number of features of every record
        positive_label: the token naming the positive class, any other token is
          read as negative
        negative_label: the token used when printing the negative class
        k_values: the neighbor counts to sweep, one table column each
        metrics: the distance metrics to sweep, one table row each
        n_random_records: the number of synthetic records to classify after the
          sweep
        demo_metric: the metric used to classify the synthetic records
        demo_k: the neighbor count used to classify the synthetic records
        seed: the seed of the synthetic records, drawn at random when None
    """

    # Datasets
    training_path: str = "datasets/training_dataset.txt"
    validation_path: str = "datasets/validation_dataset.txt"
    n_features: int = 9
    positive_label: str = "type2"
    negative_label: str = "type1"

    # Sweep
    k_values: tuple[int, ...] = (1, 3, 5, 7, 9, 11, 13, 15, 17)
    metrics: tuple[DistanceMetric, ...] = field(
        default_factory=lambda: tuple(DistanceMetric)
    )

    # Synthetic records
    n_random_records: int = 10
    demo_metric: DistanceMetric = DistanceMetric.euclidean
    demo_k: int = 5
    seed: int | None = None
