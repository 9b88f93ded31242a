from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from worldgen.config import DEFAULT_CONFIG, WorldConfig
from worldgen.flora import Flora
from worldgen.scene import SceneGraph
from worldgen.scheduler import Scheduler
from worldgen.seeding import draw_world_seed
from worldgen.streaming import WorldStreamer
from worldgen.terrain import HeightField, TerrainBuilder, surface_y
from worldgen.tree import Fruit

logger = logging.getLogger(__name__)


@dataclass
class Observer:
    x: float
    y: float
    energy: float = 0.0


class WorldSession:
    """Bootstrap plus a minimal step driver around a WorldStreamer.

    Owns the clock and the fruit regrow scheduler. Rendering, input and the
    real game loop live elsewhere; `step` is what such a loop would call
    once per frame.
    """

    def __init__(
        self,
        *,
        seed: int,
        config: WorldConfig = DEFAULT_CONFIG,
        contact_radius: float = 25.0,
    ):
        self.seed = int(seed)
        self.config = config
        self.contact_radius = float(contact_radius)
        self.time = 0.0

        self.height_field = HeightField(seed=self.seed, config=config)
        self.terrain = TerrainBuilder(self.height_field, config=config)
        self.flora = Flora(self.height_field.height_at, seed=self.seed, config=config)
        self.scene = SceneGraph()
        self.scheduler = Scheduler(now=self.time)
        self.streamer = WorldStreamer(self.terrain, self.flora, self.scene, config=config)

        min_x, max_x = config.initial_range
        self.streamer.ensure_initial_range(min_x, max_x)

        start_x = config.window_width * 0.5
        self.observer = Observer(
            x=start_x, y=self.ground_y(start_x), energy=config.max_energy
        )
        logger.info("world session started with seed %d", self.seed)

    @classmethod
    def create(
        cls,
        seed: int | None = None,
        *,
        config: WorldConfig = DEFAULT_CONFIG,
        rng: np.random.Generator | None = None,
        **kwargs: float,
    ) -> WorldSession:
        if seed is None:
            seed = draw_world_seed(rng, low=config.min_seed, high=config.max_seed)
        return cls(seed=seed, config=config, **kwargs)

    def height_at(self, x: float) -> float:
        return self.height_field.height_at(x)

    def ground_y(self, x: float) -> float:
        return float(surface_y(self.height_field, x, block_size=self.config.block_size))

    def step(self, observer_x: float, dt: float | None = None, *, observer_y: float | None = None) -> float:
        """Advance one frame; returns the energy gained from fruit this frame.

        Fruit in reach is eaten even at full energy; energy is capped at
        `max_energy`, so the return value is what was actually added.
        """
        dt = self.config.frame_time if dt is None else float(dt)
        if dt < 0:
            raise ValueError("dt must be >= 0")
        self.time += dt
        self.scheduler.advance(self.time)

        self.observer.x = float(observer_x)
        self.observer.y = (
            self.ground_y(observer_x) if observer_y is None else float(observer_y)
        )
        self.streamer.on_observer_moved(self.observer.x)

        boost = 0.0
        for fruit in self._fruits_in_reach():
            if fruit.consume(self.time, regrow_delay=self.config.cycle_length):
                self.scheduler.schedule(fruit, fruit.wake_time)
                boost += self.config.fruit_energy_boost

        before = self.observer.energy
        self.observer.energy = min(before + boost, self.config.max_energy)
        return self.observer.energy - before

    def _fruits_in_reach(self) -> list[Fruit]:
        chunk = self.streamer.chunk_of(self.observer.x)
        out: list[Fruit] = []
        for c in (chunk - 1, chunk, chunk + 1):
            for tree in self.streamer.trees_in(c):
                for fruit in tree.fruits:
                    if fruit.is_available and fruit.touches(
                        self.observer.x, self.observer.y, self.contact_radius
                    ):
                        out.append(fruit)
        return out
