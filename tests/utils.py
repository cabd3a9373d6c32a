"""Common testing utilities."""

from knn_sweep.datasets.feature_vector import FeatureVector
from sklearn.datasets import make_classification
from sklearn.model_selection import train_test_split
from sklearn.preprocessing import StandardScaler


def classification_dataset(
    n_samples: int = 500,
    split_size: float = 0.4,
    n_features: int = 9,
    scale: int = 10,
    seed: int = 1,
    shuffle=False,
):
    """Return a classification dataset of integer feature vectors.

    Args:
        n_samples: Number of samples.
        split_size: Validation split size.
        n_features: Number of features.
        scale: Factor applied to the standardized features before rounding.
        seed: Random seed.
        shuffle: Shuffle the data.

    Returns:
        training: Training records.
        validation: Validation records.
    """
    X, y = make_classification(
        n_samples=n_samples,
        n_features=n_features,
        n_informative=5,
        n_redundant=0,
        class_sep=2.0,
        random_state=seed,
    )

    X = (StandardScaler().fit_transform(X) * scale).round().astype(int)

    X_train, X_test, y_train, y_test = train_test_split(
        X, y, test_size=split_size, shuffle=shuffle
    )

    return to_records(X_train, y_train), to_records(X_test, y_test)


def to_records(X, y) -> list[FeatureVector]:
    """Convert a feature matrix and labels to feature vectors."""
    return [
        FeatureVector(features=tuple(row), label=bool(label))
        for row, label in zip(X.tolist(), y.tolist(), strict=True)
    ]


def repeated(value: int, label: bool = False, n_features: int = 9) -> FeatureVector:
    """Return a feature vector with every feature set to ``value``."""
    return FeatureVector(features=(value,) * n_features, label=label)


def write_dataset(path, lines: list[str]):
    """Write dataset lines to a file and return its path as a string."""
    path.write_text("\n".join(lines) + "\n")
    return str(path)
