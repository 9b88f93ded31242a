from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterator

import numpy as np

from worldgen.config import DEFAULT_CONFIG, WorldConfig
from worldgen.scene import Layer
from worldgen.seeding import tree_seed


@dataclass(frozen=True)
class Trunk:
    center_x: float
    base_y: float
    width: float
    height: float

    @property
    def top_y(self) -> float:
        return self.base_y - self.height

    @property
    def center(self) -> tuple[float, float]:
        return self.center_x, self.base_y - self.height * 0.5

    def covers_x(self, x: float) -> bool:
        return abs(float(x) - self.center_x) <= self.width * 0.5


@dataclass(frozen=True)
class LeafSway:
    """Back-and-forth sway as a pure function of elapsed time.

    The leaf rests until `delay`, then ping-pongs linearly from the min
    values to the max values and back, `half_period` seconds per leg.
    """

    delay: float
    half_period: float
    min_width_factor: float
    max_width_factor: float
    min_angle: float
    max_angle: float

    def phase(self, t: float) -> float | None:
        """Position along the current leg in [0, 1], or None before the delay."""
        elapsed = float(t) - self.delay
        if elapsed < 0.0:
            return None
        legs = elapsed / self.half_period
        k = math.floor(legs)
        frac = legs - k
        return frac if k % 2 == 0 else 1.0 - frac

    def sample(self, t: float) -> tuple[float, float]:
        s = self.phase(t)
        if s is None:
            return 1.0, 0.0
        width = self.min_width_factor + s * (self.max_width_factor - self.min_width_factor)
        angle = self.min_angle + s * (self.max_angle - self.min_angle)
        return width, angle


@dataclass(frozen=True)
class Leaf:
    x: float
    y: float
    size: float
    sway: LeafSway

    def width_at(self, t: float) -> float:
        return self.size * self.sway.sample(t)[0]

    def angle_at(self, t: float) -> float:
        return self.sway.sample(t)[1]


class FruitState(Enum):
    AVAILABLE = "available"
    CONSUMED = "consumed"


class Fruit:
    """Fruit with a consume/regrow cycle driven by absolute wake times."""

    def __init__(self, *, x: float, y: float, size: float):
        self.x = float(x)
        self.y = float(y)
        self.size = float(size)
        self.state = FruitState.AVAILABLE
        self.wake_time: float | None = None

    def __repr__(self) -> str:
        return f"Fruit(x={self.x:.2f}, y={self.y:.2f}, state={self.state.value})"

    @property
    def is_available(self) -> bool:
        return self.state is FruitState.AVAILABLE

    # consumed fruit neither renders nor collides
    is_visible = is_available
    is_solid = is_available

    def touches(self, px: float, py: float, radius: float) -> bool:
        reach = float(radius) + self.size * 0.5
        dx = float(px) - self.x
        dy = float(py) - self.y
        return dx * dx + dy * dy <= reach * reach

    def consume(self, now: float, *, regrow_delay: float) -> bool:
        if self.state is not FruitState.AVAILABLE:
            return False
        self.state = FruitState.CONSUMED
        self.wake_time = float(now) + float(regrow_delay)
        return True

    def regrow(self, now: float) -> bool:
        if self.state is not FruitState.CONSUMED or self.wake_time is None:
            return False
        if float(now) < self.wake_time:
            return False
        self.state = FruitState.AVAILABLE
        self.wake_time = None
        return True


TreePart = Trunk | Leaf | Fruit


class Tree:
    """A trunk with leaves and fruit, all derived from (x, world seed).

    Building the same x under the same world seed always gives the same
    trunk size, leaf and fruit counts, and positions, whichever range asked
    for it.
    """

    def __init__(
        self,
        x: float,
        ground_y: float,
        *,
        seed: int,
        config: WorldConfig = DEFAULT_CONFIG,
    ):
        self.x = float(x)
        self.seed = int(seed)
        self.config = config

        rng = np.random.default_rng(tree_seed(self.x, self.seed))
        self.trunk = self._make_trunk(rng, float(ground_y))
        self.leaves = [self._make_leaf(rng) for _ in range(self._count(rng, config.max_leaves))]
        self.fruits = [self._make_fruit(rng) for _ in range(self._count(rng, config.max_fruits))]

    def __repr__(self) -> str:
        return (
            f"Tree(x={self.x:.1f}, leaves={len(self.leaves)}, fruits={len(self.fruits)})"
        )

    @staticmethod
    def _count(rng: np.random.Generator, max_count: int) -> int:
        return int(rng.integers(0, int(max_count) + 1))

    def _make_trunk(self, rng: np.random.Generator, ground_y: float) -> Trunk:
        c = self.config
        height = float(rng.uniform(c.min_trunk_height, c.max_trunk_height))
        width = float(rng.uniform(c.min_trunk_width, c.max_trunk_width))
        return Trunk(center_x=self.x, base_y=ground_y, width=width, height=height)

    def _canopy_point(self, rng: np.random.Generator) -> tuple[float, float]:
        c = self.config
        half = c.tree_top_size * 0.5
        top = self.trunk.top_y
        px = float(rng.uniform(self.trunk.center_x - half, self.trunk.center_x + half))
        py = float(
            rng.uniform(top - c.tree_top_size + c.tree_top_offset, top + c.tree_top_offset)
        )
        return px, py

    def _make_leaf(self, rng: np.random.Generator) -> Leaf:
        c = self.config
        px, py = self._canopy_point(rng)
        sway = LeafSway(
            delay=float(rng.uniform(0.0, c.max_sway_delay)),
            half_period=c.leaf_sway_time,
            min_width_factor=c.leaf_sway_min_width_factor,
            max_width_factor=c.leaf_sway_max_width_factor,
            min_angle=c.leaf_sway_min_angle,
            max_angle=c.leaf_sway_max_angle,
        )
        return Leaf(x=px, y=py, size=c.leaf_size, sway=sway)

    def _make_fruit(self, rng: np.random.Generator) -> Fruit:
        px, py = self._canopy_point(rng)
        while self.trunk.covers_x(px):
            px, py = self._canopy_point(rng)
        return Fruit(x=px, y=py, size=self.config.fruit_size)

    def entities(self) -> Iterator[tuple[TreePart, Layer]]:
        yield self.trunk, Layer.TRUNK
        for leaf in self.leaves:
            yield leaf, Layer.LEAVES
        for fruit in self.fruits:
            yield fruit, Layer.FRUIT

    def apply(self, action: Callable[[TreePart, Layer], None]) -> None:
        """Run an add or remove callback once per trunk, leaf and fruit."""
        for entity, layer in self.entities():
            action(entity, layer)

    def trunk_position(self) -> tuple[float, float]:
        return self.trunk.center

    def signature(self) -> tuple:
        """Hashable summary of the static structure."""
        t = self.trunk
        return (
            (t.center_x, t.base_y, t.width, t.height),
            tuple((leaf.x, leaf.y, leaf.sway.delay) for leaf in self.leaves),
            tuple((f.x, f.y) for f in self.fruits),
        )
