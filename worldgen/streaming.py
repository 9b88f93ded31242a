from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator

from worldgen.chunks import chunk_bounds, chunk_index, chunk_span
from worldgen.config import DEFAULT_CONFIG, WorldConfig
from worldgen.flora import Flora
from worldgen.scene import Layer, Scene
from worldgen.terrain import Block, TerrainBuilder
from worldgen.tree import Tree

logger = logging.getLogger(__name__)


@dataclass
class StreamStats:
    built: int = 0
    evicted: int = 0
    reentered: int = 0
    triggers: int = 0


@dataclass
class EvictedChunk:
    chunk: int
    blocks: list[Block] = field(default_factory=list)
    trees: list[Tree] = field(default_factory=list)


class WorldStreamer:
    """Keeps a window of chunks materialised around a moving observer.

    The window is two chunk bounds. Each side is checked on its own every
    step: once the observer is within one chunk of a bound, the next chunk
    past it is built (or, if it is still registered from earlier, the far
    chunk on the opposite side is evicted instead), and both bounds shift
    one chunk in that direction.

    Chunks between the bounds are always registered. Chunks outside them
    may stay registered for a while after a reversal; they are dropped by
    the re-entry branch, so the registry stays within a couple of chunks of
    the window width.
    """

    def __init__(
        self,
        terrain: TerrainBuilder,
        flora: Flora,
        scene: Scene,
        *,
        config: WorldConfig = DEFAULT_CONFIG,
    ):
        self.terrain = terrain
        self.flora = flora
        self.scene = scene
        self.config = config
        self.left: int | None = None
        self.right: int | None = None
        self.stats = StreamStats()
        self._blocks: dict[int, list[Block]] = {}
        self._trees: dict[int, list[Tree]] = {}

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------
    @property
    def window(self) -> tuple[int, int]:
        if self.left is None or self.right is None:
            raise RuntimeError("no window yet; call ensure_initial_range first")
        return self.left, self.right

    def chunk_of(self, x: float) -> int:
        return chunk_index(x, chunk_size=self.config.chunk_size)

    def height_at(self, x: float) -> float:
        return self.terrain.height_field.height_at(x)

    def is_loaded(self, chunk: int) -> bool:
        return int(chunk) in self._blocks

    def loaded_chunks(self) -> list[int]:
        return sorted(self._blocks)

    def blocks_in(self, chunk: int) -> tuple[Block, ...]:
        return tuple(self._blocks.get(int(chunk), ()))

    def trees_in(self, chunk: int) -> tuple[Tree, ...]:
        return tuple(self._trees.get(int(chunk), ()))

    def trees(self) -> Iterator[Tree]:
        for chunk in sorted(self._trees):
            yield from self._trees[chunk]

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def ensure_initial_range(self, min_x: int, max_x: int) -> tuple[int, int] | None:
        """Materialise [min_x, max_x) and set the window to the chunks it spans.

        An empty or reversed range registers nothing and leaves the window
        unset; the return value is then None.
        """
        if float(max_x) <= float(min_x):
            logger.debug("empty initial range [%s, %s), nothing loaded", min_x, max_x)
            return None
        left, right = chunk_span(min_x, max_x, chunk_size=self.config.chunk_size)
        self._register(self.terrain.build(min_x, max_x), self.flora.build(min_x, max_x))
        for chunk in range(left, right + 1):
            self._blocks.setdefault(chunk, [])
        self.left, self.right = left, right
        logger.debug("initial window [%d, %d] from x in [%s, %s)", left, right, min_x, max_x)
        return left, right

    def load_chunk(self, chunk: int) -> None:
        min_x, max_x = chunk_bounds(chunk=int(chunk), chunk_size=self.config.chunk_size)
        blocks = self.terrain.build(min_x, max_x)
        trees = self.flora.build(min_x, max_x)
        self._register(blocks, trees)
        self._blocks.setdefault(int(chunk), [])
        self.stats.built += 1
        logger.debug(
            "built chunk %d: %d blocks, %d trees", chunk, len(blocks), len(trees)
        )

    def evict(self, chunk: int) -> EvictedChunk | None:
        """Detach and unregister everything in `chunk`. Unknown chunks are a no-op."""
        chunk = int(chunk)
        trees = self._trees.pop(chunk, None)
        blocks = self._blocks.pop(chunk, None)
        if trees is None and blocks is None:
            return None

        for tree in trees or ():
            tree.apply(self.scene.remove_entity)
        for block in blocks or ():
            self.scene.remove_entity(block, Layer.STATIC_OBJECTS)

        self.stats.evicted += 1
        logger.debug("evicted chunk %d", chunk)
        return EvictedChunk(chunk=chunk, blocks=blocks or [], trees=trees or [])

    def on_observer_moved(self, x: float) -> int:
        """Stream chunks for the observer at world x; returns triggers fired."""
        observer = self.chunk_of(x)
        fired = 0
        if self._advance(observer, toward_right=False):
            fired += 1
        if self._advance(observer, toward_right=True):
            fired += 1
        return fired

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------
    def _advance(self, observer: int, *, toward_right: bool) -> bool:
        left, right = self.window
        if toward_right:
            if observer < right - 1:
                return False
            new_chunk, far_chunk = right + 1, left - 1
        else:
            if observer > left + 1:
                return False
            new_chunk, far_chunk = left - 1, right + 1

        self.stats.triggers += 1
        if self.is_loaded(new_chunk):
            # stale chunk re-entered: free the far side instead of building
            self.stats.reentered += 1
            self.evict(far_chunk)
        else:
            self.load_chunk(new_chunk)

        if toward_right:
            self.left, self.right = left + 1, new_chunk
        else:
            self.left, self.right = new_chunk, right - 1
        return True

    def _register(self, blocks: list[Block], trees: list[Tree]) -> None:
        for block in blocks:
            self.scene.add_entity(block, Layer.STATIC_OBJECTS)
            self._blocks.setdefault(self.terrain.chunk_of(block), []).append(block)
        for tree in trees:
            tree.apply(self.scene.add_entity)
            chunk = self.chunk_of(tree.trunk_position()[0])
            self._trees.setdefault(chunk, []).append(tree)
