"""Distance metrics for k-nearest neighbors.

Every metric is a pure function of two feature arrays of the same length that returns
a scalar dissimilarity, where smaller means more similar. Metrics are written for a
single pair of vectors and lifted to whole datasets with ``jax.vmap``, so they must
not branch on array values in Python.

Features arrive as int32 arrays. Differences and equality tests are done on the
integers, where a float32 copy would round values above 2**24 together, and results
are converted to float32 afterwards.

Available metrics:
    - euclidean: square root of the sum of squared differences.
    - manhattan: sum of absolute differences.
    - chebyshev: largest absolute difference.
    - railway: zero for equal vectors, otherwise the sum of both norms.
    - hamming: number of positions holding different values.
    - correlation: Pearson correlation coefficient of the two vectors.
"""

from collections.abc import Callable
from enum import Enum

import jax
import jax.numpy as jnp
from jaxtyping import Array, Float, Int

from knn_sweep.datasets.feature_vector import FeatureVector

Metric = Callable[[jnp.ndarray, jnp.ndarray], jnp.ndarray]


def euclidean_distance(x: jnp.ndarray, y: jnp.ndarray) -> jnp.ndarray:
    """Euclidean distance.

    Defined as:

        d(x, y) = sqrt(sum_i (x_i - y_i)^2)

    Args:
        x: An array representing the first feature vector.
        y: An array representing the second feature vector.

    Returns:
        The Euclidean distance between the vectors.
    """
    difference = (x - y).astype(jnp.float32)
    return jnp.sqrt(jnp.sum(difference**2))


def manhattan_distance(x: jnp.ndarray, y: jnp.ndarray) -> jnp.ndarray:
    """Manhattan (taxicab) distance.

    Defined as:

        d(x, y) = sum_i |x_i - y_i|

    Args:
        x: An array representing the first feature vector.
        y: An array representing the second feature vector.

    Returns:
        The Manhattan distance between the vectors.
    """
    return jnp.sum(jnp.abs(x - y).astype(jnp.float32))


def chebyshev_distance(x: jnp.ndarray, y: jnp.ndarray) -> jnp.ndarray:
    """Chebyshev distance.

    Defined as:

        d(x, y) = max_i |x_i - y_i|

    Args:
        x: An array representing the first feature vector.
        y: An array representing the second feature vector.

    Returns:
        The Chebyshev distance between the vectors.
    """
    return jnp.max(jnp.abs(x - y)).astype(jnp.float32)


def railway_distance(x: jnp.ndarray, y: jnp.ndarray) -> jnp.ndarray:
    """Railway distance.

    Every route between two different points passes through the origin (the hub), so
    the distance is the sum of both distances to the origin. Equal vectors are at
    distance zero:

        d(x, y) = 0                    if x == y
        d(x, y) = ||x||_2 + ||y||_2    otherwise

    Args:
        x: An array representing the first feature vector.
        y: An array representing the second feature vector.

    Returns:
        The railway distance between the vectors.
    """
    x_float = x.astype(jnp.float32)
    y_float = y.astype(jnp.float32)
    through_hub = jnp.sqrt(jnp.sum(x_float**2)) + jnp.sqrt(jnp.sum(y_float**2))
    return jnp.where(jnp.all(x == y), 0.0, through_hub)


def hamming_distance(x: jnp.ndarray, y: jnp.ndarray) -> jnp.ndarray:
    """Hamming distance.

    Counts the positions at which the two vectors hold different values.

    Args:
        x: An array representing the first feature vector.
        y: An array representing the second feature vector.

    Returns:
        The number of differing positions.
    """
    return jnp.sum(x != y).astype(jnp.float32)


def correlation_distance(x: jnp.ndarray, y: jnp.ndarray) -> jnp.ndarray:
    """Pearson correlation of two feature vectors.

    Both vectors are centered on their own mean. The mean product of the centered
    features is divided by the product of the population standard deviations:

        r(x, y) = (1 / n) sum_i (x_i - mean(x)) (y_i - mean(y)) / (std(x) std(y))

    Note that this is the raw coefficient and not the usual ``1 - r`` distance, so
    strongly correlated vectors rank as the most distant neighbors. A vector whose
    features are all equal has zero variance and the result is NaN.

    Args:
        x: An array representing the first feature vector.
        y: An array representing the second feature vector.

    Returns:
        The correlation coefficient of the vectors.
    """
    n = x.shape[-1]
    x = x.astype(jnp.float32)
    y = y.astype(jnp.float32)
    x_centered = x - jnp.mean(x)
    y_centered = y - jnp.mean(y)
    std_x = jnp.sqrt(jnp.sum(x_centered**2) / n)
    std_y = jnp.sqrt(jnp.sum(y_centered**2) / n)
    return jnp.dot(x_centered, y_centered) / n / (std_x * std_y)


class DistanceMetric(str, Enum):
    """Names of the available distance metrics."""

    euclidean = "euclidean"
    manhattan = "manhattan"
    chebyshev = "chebyshev"
    railway = "railway"
    hamming = "hamming"
    correlation = "correlation"

    @property
    def display_name(self) -> str:
        """The capitalized name used in reports."""
        return self.value.capitalize()


METRICS: dict[DistanceMetric, Metric] = {
    DistanceMetric.euclidean: euclidean_distance,
    DistanceMetric.manhattan: manhattan_distance,
    DistanceMetric.chebyshev: chebyshev_distance,
    DistanceMetric.railway: railway_distance,
    DistanceMetric.hamming: hamming_distance,
    DistanceMetric.correlation: correlation_distance,
}


def get_metric(name: str | DistanceMetric) -> Metric:
    """Look up a metric function by name.

    Raises:
        ValueError: if the name is not a known metric.
    """
    return METRICS[DistanceMetric(name)]


def distance(metric: Metric, x: FeatureVector, y: FeatureVector) -> float:
    """Evaluate a metric on two feature vectors."""
    return float(metric(x.to_array(), y.to_array()))


def pairwise_distances(
    metric: Metric,
    queries: Int[Array, "n_queries n_features"],
    references: Int[Array, "n_references n_features"],
) -> Float[Array, "n_queries n_references"]:
    """Compute the distance from every query to every reference.

    Args:
        metric: the metric to evaluate.
        queries: the query feature matrix.
        references: the reference feature matrix.

    Returns:
        A matrix where entry ``(i, j)`` is ``metric(queries[i], references[j])``.
    """
    return _pairwise(metric)(queries, references)


_compiled: dict[Metric, Callable] = {}


def _pairwise(metric: Metric) -> Callable:
    if metric not in _compiled:
        to_references = jax.vmap(metric, in_axes=(None, 0))
        _compiled[metric] = jax.jit(jax.vmap(to_references, in_axes=(0, None)))
    return _compiled[metric]
