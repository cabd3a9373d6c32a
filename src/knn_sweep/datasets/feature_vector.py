"""Feature vectors.

A feature vector is a fixed-arity tuple of signed integers together with a binary
class label. It is the atomic unit every distance metric, the classifier and the
evaluator operate on.

Label tokens:
-------------
Datasets name the two classes with string tokens (``type1`` and ``type2`` by default).
Only the positive token is recognised when parsing; every other token, including
typos, silently maps to the negative class. This keeps older dataset files readable
but means a misspelled positive token is never reported. Check new datasets before
relying on the error rates they produce.
"""

import dataclasses
from collections.abc import Sequence

import jax
import jax.numpy as jnp
from jaxtyping import Array, Int

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


@dataclasses.dataclass(frozen=True)
class FeatureVector:
    """An immutable feature vector with a binary label.

    Two vectors are equal when all of their features match. The label takes no part
    in equality or hashing.

    Attributes:
        features: the feature values, one integer per feature.
        label: the class label, ``True`` for the positive class.
    """

    features: tuple[int, ...]
    label: bool = dataclasses.field(default=False, compare=False)

    def __post_init__(self):
        """Normalize the features to a tuple of 32-bit ints."""
        object.__setattr__(self, "features", tuple(int(v) for v in self.features))
        for value in self.features:
            if not INT32_MIN <= value <= INT32_MAX:
                raise ValueError(f"Feature value {value} does not fit in 32 bits")

    @property
    def n_features(self) -> int:
        """The number of features of the vector."""
        return len(self.features)

    def _check_index(self, index: int):
        if not 0 <= index < len(self.features):
            raise IndexError(
                f"Feature index {index} out of range for {len(self.features)} features"
            )

    def __getitem__(self, index: int) -> int:
        """Return the value of a feature."""
        self._check_index(index)
        return self.features[index]

    def get(self, index: int) -> int:
        """Return the value of a feature.

        Args:
            index: the 0-based feature index.

        Raises:
            IndexError: if the index is outside ``[0, n_features)``.
        """
        return self[index]

    def with_feature(self, index: int, value: int) -> "FeatureVector":
        """Return a copy of the vector with one feature replaced.

        Args:
            index: the 0-based feature index.
            value: the new feature value.

        Raises:
            IndexError: if the index is outside ``[0, n_features)``.
        """
        self._check_index(index)
        features = list(self.features)
        features[index] = value
        return dataclasses.replace(self, features=tuple(features))

    def to_array(self) -> Int[Array, " n_features"]:
        """Return the features as an int32 array."""
        return jnp.asarray(self.features, dtype=jnp.int32)

    def __str__(self) -> str:
        return "[" + "|".join(f"{v:>2}" for v in self.features) + "]"

    @classmethod
    def from_line(
        cls, line: str, n_features: int, positive_label: str
    ) -> "FeatureVector":
        """Parse a feature vector from one line of a dataset file.

        The line holds ``n_features`` whitespace separated integers followed by a
        label token.

        Args:
            line: the text of the line.
            n_features: the expected number of features.
            positive_label: the token naming the positive class.

        Returns:
            The parsed feature vector.

        Raises:
            ValueError: if the token count is wrong or a feature is not a 32-bit
                integer.
        """
        tokens = line.split()
        if len(tokens) != n_features + 1:
            raise ValueError(
                f"Expected {n_features + 1} tokens but found {len(tokens)}: {line!r}"
            )
        *values, token = tokens
        return cls(
            features=tuple(int(v) for v in values), label=token == positive_label
        )

    @classmethod
    def random(
        cls,
        key: jax.Array,
        min_range: Sequence[int],
        max_range: Sequence[int],
    ) -> "FeatureVector":
        """Generate a synthetic feature vector within per-feature ranges.

        The label is drawn first. Each feature is then drawn uniformly from
        ``[0, max - min]``; for the negative class the draw is halved before the
        range minimum is added, which biases negative vectors towards the low end of
        every range.

        Args:
            key: the PRNG key to draw from.
            min_range: inclusive lower bound of every feature.
            max_range: inclusive upper bound of every feature.

        Returns:
            The generated feature vector.
        """
        if len(min_range) != len(max_range):
            raise ValueError("min_range and max_range must have the same length")

        label_key, feature_key = jax.random.split(key)
        label = bool(jax.random.bernoulli(label_key))

        low = jnp.asarray(min_range, dtype=jnp.int32)
        span = jnp.asarray(max_range, dtype=jnp.int32) - low + 1
        values = jax.random.randint(
            feature_key, shape=low.shape, minval=0, maxval=span
        )
        if not label:
            values = values // 2

        return cls(features=tuple((values + low).tolist()), label=label)


def label_token(label: bool, positive_label: str, negative_label: str) -> str:
    """Render a label back to its display token."""
    return positive_label if label else negative_label
