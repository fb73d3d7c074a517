"""
Random sources for the engine.

Every stochastic calculation takes a ``RandomSource`` argument so a run can be
replayed from a seed, and tests can feed an exact sequence of draws through
``ScriptedRandom``.
"""

import hashlib
from typing import Iterable, List, Optional, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


class RandomSource:
    """Seedable uniform source; every helper is derived from ``random()``."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._generator = np.random.default_rng(seed)

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return float(self._generator.random())

    def uniform(self, low: float, high: float) -> float:
        return low + (high - low) * self.random()

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both ends inclusive."""
        span = high - low + 1
        return low + min(span - 1, int(self.random() * span))

    def chance(self, probability: float) -> bool:
        return self.random() < probability

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("cannot choose from an empty sequence")
        return items[self.randint(0, len(items) - 1)]

    def sample(self, items: Sequence[T], k: int) -> List[T]:
        pool = list(items)
        k = max(0, min(k, len(pool)))
        for i in range(k):
            j = self.randint(i, len(pool) - 1)
            pool[i], pool[j] = pool[j], pool[i]
        return pool[:k]


class ScriptedRandom(RandomSource):
    """Replays a fixed list of draws, cycling when exhausted."""

    def __init__(self, values: Iterable[float]):
        super().__init__(seed=0)
        self.values = [float(v) for v in values]
        if not self.values:
            raise ValueError("ScriptedRandom needs at least one value")
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


def stable_hash(*parts: object) -> int:
    """32-bit hash that is identical across processes and platforms."""
    key = "|".join(str(p) for p in parts).encode("utf-8")
    return int.from_bytes(hashlib.blake2b(key, digest_size=4).digest(), "big")


def platform_bias(artist_id: str, platform: str) -> float:
    """Fixed per-(artist, platform) affinity in [0.7, 1.5)."""
    generator = np.random.default_rng(stable_hash(artist_id, platform))
    return 0.7 + 0.8 * float(generator.random())
