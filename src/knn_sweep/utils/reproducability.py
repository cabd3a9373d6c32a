"""Reproducability utilities."""

import secrets

import jax


def make_key(seed: int | None = None) -> jax.Array:
    """Create a PRNG key.

    Args:
        seed: the random seed. A fresh seed is drawn when omitted.

    Returns:
        The PRNG key.
    """
    if seed is None:
        seed = secrets.randbits(31)
    return jax.random.PRNGKey(seed)
