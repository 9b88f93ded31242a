"""Build-time constants for world generation and streaming."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class WorldConfig:
    """Sizing and tuning constants.

    Units are world units (pixels at zoom 1). `y` grows downward, so the
    ground baseline sits two thirds of the way down the window.
    """

    window_width: float = 1600.0
    window_height: float = 768.0

    chunk_size: int = 820
    block_size: int = 30
    terrain_depth: int = 20
    ground_height_factor: float = 2.0 / 3.0
    noise_factor: int = 7

    tree_spacing: int = 100
    planting_probability: float = 0.1

    min_trunk_height: float = 70.0
    max_trunk_height: float = 140.0
    min_trunk_width: float = 15.0
    max_trunk_width: float = 30.0
    tree_top_size: float = 90.0
    tree_top_offset: float = 20.0

    max_leaves: int = 150
    leaf_size: float = 20.0
    leaf_sway_time: float = 0.5
    leaf_sway_min_angle: float = -10.0
    leaf_sway_max_angle: float = 10.0
    leaf_sway_min_width_factor: float = 0.8
    leaf_sway_max_width_factor: float = 1.2
    max_sway_delay: float = 0.8

    max_fruits: int = 5
    fruit_size: float = 10.0
    fruit_energy_boost: float = 10.0
    max_energy: float = 500.0

    cycle_length: float = 30.0
    min_seed: int = 1000
    max_seed: int = 10000

    target_framerate: int = 45
    initial_chunks: int = 3

    def __post_init__(self) -> None:
        for name in ("chunk_size", "block_size", "terrain_depth", "tree_spacing"):
            if int(getattr(self, name)) <= 0:
                raise ValueError(f"{name} must be > 0")
        if self.window_height <= 0 or self.window_width <= 0:
            raise ValueError("window dimensions must be > 0")
        if not (0.0 <= self.planting_probability <= 1.0):
            raise ValueError("planting_probability must be in [0, 1]")
        if self.min_trunk_height > self.max_trunk_height:
            raise ValueError("min_trunk_height must be <= max_trunk_height")
        if self.min_trunk_width > self.max_trunk_width:
            raise ValueError("min_trunk_width must be <= max_trunk_width")
        # fruit placement rejects draws over the trunk; it needs room beside it
        if self.tree_top_size <= self.max_trunk_width:
            raise ValueError("tree_top_size must be wider than max_trunk_width")
        if self.max_leaves < 0 or self.max_fruits < 0:
            raise ValueError("max_leaves and max_fruits must be >= 0")
        if self.min_seed >= self.max_seed:
            raise ValueError("min_seed must be < max_seed")
        if self.max_energy <= 0 or self.fruit_energy_boost < 0:
            raise ValueError("max_energy must be > 0 and fruit_energy_boost >= 0")
        if self.cycle_length <= 0 or self.leaf_sway_time <= 0:
            raise ValueError("cycle_length and leaf_sway_time must be > 0")
        if self.target_framerate <= 0 or self.initial_chunks <= 0:
            raise ValueError("target_framerate and initial_chunks must be > 0")

    @property
    def baseline(self) -> float:
        return float(self.window_height) * float(self.ground_height_factor)

    @property
    def noise_wavelength(self) -> float:
        return float(self.block_size * self.noise_factor)

    @property
    def initial_range(self) -> tuple[int, int]:
        return 0, int(self.chunk_size) * int(self.initial_chunks)

    @property
    def frame_time(self) -> float:
        return 1.0 / float(self.target_framerate)


DEFAULT_CONFIG = WorldConfig()

__all__ = ["DEFAULT_CONFIG", "WorldConfig"]
