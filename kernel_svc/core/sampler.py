# File: kernel_svc/core/sampler.py

"""
Deterministic sampling primitives.

``IndexPool`` hands out training indices without replacement and redraws a
fresh permutation once a pass is exhausted. ``spawn_seeds`` derives one
independent seed sequence per binary sub-problem from the estimator's own
seed, so results do not depend on the order in which sub-problems run.
"""

import numpy as np
from typing import List, Optional, Union

SeedLike = Union[int, np.random.SeedSequence]


class IndexPool:
    """Stateful index sampler: a permutation array plus a cursor."""

    def __init__(self, n_samples: int, rng: np.random.Generator):
        if n_samples < 1:
            raise ValueError(f"n_samples must be at least 1, got {n_samples}")
        self.n_samples = n_samples
        self.rng = rng
        self._indices = np.empty(0, dtype=np.int64)
        self._cursor = 0
        self.n_refills = 0

    def __len__(self) -> int:
        return self._indices.shape[0] - self._cursor

    def __iter__(self):
        return self

    def __next__(self) -> int:
        return self.next_index()

    def next_index(self) -> int:
        if self._cursor >= self._indices.shape[0]:
            self._refill()
        index = int(self._indices[self._cursor])
        self._cursor += 1
        return index

    def _refill(self) -> None:
        self._indices = self.rng.permutation(self.n_samples)
        self._cursor = 0
        self.n_refills += 1


def make_seed_sequence(seed: Optional[SeedLike] = None) -> np.random.SeedSequence:
    """Build the root seed sequence; None pulls fresh OS entropy."""
    if isinstance(seed, np.random.SeedSequence):
        return seed
    return np.random.SeedSequence(seed)


def derive_seed(root: np.random.SeedSequence, key: int) -> np.random.SeedSequence:
    """
    Child seed sequence for sub-problem ``key``.

    Equivalent to the ``key``-th child of ``root.spawn`` but does not advance
    the root's spawn counter, so refitting yields the same children.
    """
    return np.random.SeedSequence(root.entropy, spawn_key=tuple(root.spawn_key) + (int(key),))


def spawn_seeds(root: np.random.SeedSequence, n_children: int) -> List[np.random.SeedSequence]:
    return [derive_seed(root, key) for key in range(n_children)]


def derive_generator(root: np.random.SeedSequence, key: int) -> np.random.Generator:
    return np.random.default_rng(derive_seed(root, key))
