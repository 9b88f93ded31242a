from __future__ import annotations

from worldgen.chunks import chunk_bounds, chunk_index, chunk_origin, chunk_span
from worldgen.config import DEFAULT_CONFIG, WorldConfig
from worldgen.flora import Flora
from worldgen.scene import Layer, Scene, SceneGraph
from worldgen.scheduler import Scheduler
from worldgen.session import WorldSession
from worldgen.streaming import EvictedChunk, StreamStats, WorldStreamer
from worldgen.terrain import Block, HeightField, TerrainBuilder
from worldgen.tree import Fruit, FruitState, Leaf, LeafSway, Tree, Trunk

__all__ = [
    "Block",
    "DEFAULT_CONFIG",
    "EvictedChunk",
    "Flora",
    "Fruit",
    "FruitState",
    "HeightField",
    "Layer",
    "Leaf",
    "LeafSway",
    "Scene",
    "SceneGraph",
    "Scheduler",
    "StreamStats",
    "TerrainBuilder",
    "Tree",
    "Trunk",
    "WorldConfig",
    "WorldSession",
    "WorldStreamer",
    "chunk_bounds",
    "chunk_index",
    "chunk_origin",
    "chunk_span",
]
