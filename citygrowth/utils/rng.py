"""Seeded random number generators.

Every consumer of randomness receives an explicit ``numpy.random.Generator``.
Generators are derived from a user seed plus an optional stream name, so two
concerns seeded from the same value still draw independent sequences.
"""
import zlib
from typing import Optional, Union

import numpy as np

Seed = Union[int, str]


def _crc32_u32(text: str) -> int:
    return zlib.crc32(text.encode('utf-8')) & 0xFFFFFFFF


def seed_to_int(seed: Seed) -> int:
    """Fold an int or string seed into an unsigned 32-bit integer.

    Args:
        seed: The user-facing seed.

    Returns:
        A non-negative integer suitable for a SeedSequence.
    """
    if isinstance(seed, str):
        return _crc32_u32(seed)
    return int(seed) & 0xFFFFFFFF


def make_rng(seed: Seed, stream: Optional[str] = None) -> np.random.Generator:
    """Create a deterministic generator for a seed and an optional stream name.

    Args:
        seed: The user-facing seed.
        stream: Optional name separating independent consumers of one seed.

    Returns:
        A PCG64-backed numpy Generator.
    """
    entropy = [seed_to_int(seed)]
    if stream:
        entropy.append(_crc32_u32(stream))
    return np.random.Generator(np.random.PCG64(np.random.SeedSequence(entropy)))


def random_angle(rng: np.random.Generator, limit: float) -> float:
    """Draw a non-zero angle in (-limit, limit) biased towards small values.

    A uniform draw v is kept with probability 1 - |v|^3 / |limit|^3.

    Args:
        rng: Generator to draw from.
        limit: Largest absolute angle in degrees.

    Returns:
        The drawn angle in degrees, or 0 when limit is 0.
    """
    if limit == 0:
        return 0.0
    non_uniform_norm = abs(limit) ** 3
    value = 0.0
    while value == 0 or rng.random() < abs(value) ** 3 / non_uniform_norm:
        value = float(rng.uniform(-limit, limit))
    return value
