from __future__ import annotations

import numpy as np

_MASK64 = 0xFFFFFFFFFFFFFFFF


def stable_hash(*args: int) -> int:
    """Mix integers into one 64-bit value.

    Same result in every process, unlike the builtin `hash()`.
    """
    x = 0x345678ABCDEF1234
    for a in args:
        a = int(a) & _MASK64
        a ^= a >> 33
        a = (a * 0xFF51AFD7ED558CCD) & _MASK64
        a ^= a >> 33
        x ^= a
        x = (x * 0xC4CEB9FE1A85EC53) & _MASK64
    return x


def float_bits(x: float) -> int:
    """IEEE-754 bit pattern of `x` as an unsigned int (500 and 500.0 agree)."""
    return int(np.array(float(x), dtype=np.float64).view(np.uint64))


def range_seed(min_x: int, max_x: int, seed: int) -> int:
    return stable_hash(int(min_x), int(max_x), int(seed))


def tree_seed(x: float, seed: int) -> int:
    return stable_hash(float_bits(x), int(seed))


def draw_world_seed(
    rng: np.random.Generator | None = None, *, low: int, high: int
) -> int:
    """Pick a world seed in [low, high)."""
    rng = np.random.default_rng() if rng is None else rng
    return int(rng.integers(int(low), int(high)))
