"""
Noise Source

Seedable random source for the elevation and heart-rate models. Pass a
seed to get repeatable tracks.
"""

from typing import Optional

import numpy as np


class NoiseSource:
    """Uniform random draws backed by a numpy Generator"""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def uniform(self, low: float, high: float) -> float:
        """Draw a float from [low, high)"""
        return float(self._rng.uniform(low, high))

    def chance(self, probability: float) -> bool:
        """Return True with the given probability"""
        return bool(self._rng.random() < probability)
