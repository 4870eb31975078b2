"""Population density field sampled by the road growth rules."""
from typing import Callable

from noise import pnoise2

from citygrowth.citygen.dataclass import Point

NoiseSampler = Callable[[float, float], float]


class PerlinNoise:
    """Deterministic 2D Perlin noise with values roughly in [-1, 1].

    The ``base`` offset selects a different permutation of the noise lattice,
    which acts as the noise seed.
    """

    def __init__(self, base: int = 0, octaves: int = 1):
        """Initialize the sampler.

        Args:
            base: Permutation offset used as seed.
            octaves: Number of noise octaves summed per sample.
        """
        self.base = int(base)
        self.octaves = octaves

    def __call__(self, x: float, y: float) -> float:
        """Sample the noise at (x, y)."""
        return pnoise2(x, y, octaves=self.octaves, base=self.base)


class PopulationField:
    """Population density built from three coherent-noise samples.

    Density is ``((n1 + 1) / 2 * (n2 + 1) / 2 + (n3 + 1) / 2) / 2`` squared,
    with n1 sampled at full scale and n2, n3 at half scale with fixed offsets.
    Squaring favours sparse dense pockets.
    """

    def __init__(self, noise2: NoiseSampler):
        """Initialize the field.

        Args:
            noise2: Any deterministic sampler mapping (x, y) to [-1, 1].
        """
        self.noise2 = noise2

    def population_at(self, x: float, y: float) -> float:
        """Return the density at a coordinate, in [0, 1]."""
        value1 = (self.noise2(x / 10000, y / 10000) + 1) / 2
        value2 = (self.noise2(x / 20000 + 500, y / 20000 + 500) + 1) / 2
        value3 = (self.noise2(x / 20000 + 1000, y / 20000 + 1000) + 1) / 2
        return pow((value1 * value2 + value3) / 2, 2)

    def population_at_point(self, point: Point) -> float:
        """Return the density at a point."""
        return self.population_at(point.x, point.y)
