from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from perlin.noise_1d import OctaveNoise1D
from worldgen.chunks import chunk_index, grid_points
from worldgen.config import DEFAULT_CONFIG, WorldConfig


class HeightField:
    """Ground elevation as a pure function of x for one world seed.

    `height_at(x) = baseline + octave_noise(x)`. The scalar path goes through
    the vectorised one, so a point sampled alone or inside a batch gives the
    same float.
    """

    def __init__(self, *, seed: int, config: WorldConfig = DEFAULT_CONFIG):
        self.seed = int(seed)
        self.config = config
        self.baseline = config.baseline
        self._noise = OctaveNoise1D(seed=self.seed, wavelength=config.noise_wavelength)

    @property
    def amplitude(self) -> float:
        return self._noise.wavelength

    def heights(self, xs: np.ndarray) -> np.ndarray:
        x = np.asarray(xs, dtype=np.float64)
        return self.baseline + self._noise.noise(x)

    def height_at(self, x: float) -> float:
        return float(self.heights(np.array([float(x)], dtype=np.float64))[0])


@dataclass(frozen=True)
class Block:
    """Immovable ground tile; (x, y) is its top-left corner."""

    x: int
    y: int
    size: int

    @property
    def center(self) -> tuple[float, float]:
        half = self.size * 0.5
        return self.x + half, self.y + half


class TerrainBuilder:
    def __init__(self, height_field: HeightField, *, config: WorldConfig = DEFAULT_CONFIG):
        self.height_field = height_field
        self.config = config

    def column_tops(self, xs: list[int]) -> np.ndarray:
        """Grid-snapped top y of the column at each x."""
        b = int(self.config.block_size)
        h = self.height_field.heights(np.asarray(xs, dtype=np.float64))
        return (np.floor(h / b) * b).astype(np.int64)

    def build(self, min_x: float, max_x: float) -> list[Block]:
        """Ground blocks for every block-grid column in [min_x, max_x).

        Columns sit on the global block grid rather than on `min_x`, so
        neighbouring ranges tile without gaps or overlaps.
        """

        if float(max_x) <= float(min_x):
            return []

        b = int(self.config.block_size)
        depth = int(self.config.terrain_depth)
        xs = grid_points(min_x, max_x, step=b)
        if not xs:
            return []

        blocks: list[Block] = []
        for x, top in zip(xs, self.column_tops(xs)):
            top = int(top)
            for i in range(depth):
                blocks.append(Block(x=int(x), y=top + i * b, size=b))
        return blocks

    def chunk_of(self, block: Block) -> int:
        return chunk_index(block.x, chunk_size=self.config.chunk_size)


def surface_y(height_field: HeightField, x: float, *, block_size: int) -> int:
    """Top of the ground block column containing x."""
    b = int(block_size)
    column = int(math.floor(float(x) / b)) * b
    return int(math.floor(height_field.height_at(column) / b)) * b
