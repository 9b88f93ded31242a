from __future__ import annotations

import numpy as np

PERM_SIZE = 256


def fade(t: np.ndarray) -> np.ndarray:
    """Quintic fade curve used by Improved Perlin Noise (2002)."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lerp(a: np.ndarray, b: np.ndarray, t: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def make_permutation(seed: int) -> np.ndarray:
    """Seeded 0..255 shuffle, doubled so `p[i + 1]` never needs a wrap."""
    rng = np.random.default_rng(int(seed) & 0xFFFFFFFFFFFFFFFF)
    p = rng.permutation(PERM_SIZE).astype(np.int32)
    return np.concatenate([p, p])


_GRAD1 = np.array([1.0, -1.0], dtype=np.float64)


def grad1_from_hash(h: np.ndarray) -> np.ndarray:
    idx = (h & 1).astype(np.int32)
    return _GRAD1[idx]


def lattice_index(x: np.ndarray) -> np.ndarray:
    # floor, not truncation: negative x must land on the cell to its left
    return np.floor(x).astype(np.int64) & (PERM_SIZE - 1)
