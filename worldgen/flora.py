from __future__ import annotations

import math
from typing import Callable

import numpy as np

from worldgen.config import DEFAULT_CONFIG, WorldConfig
from worldgen.seeding import range_seed
from worldgen.tree import Tree


class Flora:
    """Decides where trees grow in a range and builds them.

    Planting uses one stream per requested range; each tree's own shape uses
    a stream seeded by (x, world seed) only.
    """

    def __init__(
        self,
        height_at: Callable[[float], float],
        *,
        seed: int,
        config: WorldConfig = DEFAULT_CONFIG,
    ):
        self.height_at = height_at
        self.seed = int(seed)
        self.config = config

    def slots(self, min_x: float, max_x: float) -> list[int]:
        """`(max_x - min_x) // spacing` slots starting at `ceil(min_x)`."""
        spacing = int(self.config.tree_spacing)
        count = max(int(math.floor((float(max_x) - float(min_x)) / spacing)), 0)
        first = int(math.ceil(float(min_x)))
        return [first + i * spacing for i in range(count)]

    def plant(self, x: float) -> Tree:
        return Tree(x, self.height_at(x), seed=self.seed, config=self.config)

    def build(self, min_x: int, max_x: int) -> list[Tree]:
        slots = self.slots(min_x, max_x)
        if not slots:
            return []

        rng = np.random.default_rng(range_seed(min_x, max_x, self.seed))
        draws = rng.random(len(slots))
        p = float(self.config.planting_probability)
        return [self.plant(x) for x, u in zip(slots, draws) if u < p]
