from __future__ import annotations

from enum import IntEnum
from typing import Iterator, Protocol


class Layer(IntEnum):
    BACKGROUND = -200
    STATIC_OBJECTS = -100
    TRUNK = -99
    LEAVES = -98
    FRUIT = -97
    DEFAULT = 0


class Scene(Protocol):
    def add_entity(self, entity: object, layer: Layer) -> None:  # pragma: no cover
        ...

    def remove_entity(self, entity: object, layer: Layer) -> None:  # pragma: no cover
        ...


class SceneGraph:
    """In-memory scene keyed by layer and entity identity.

    Frozen dataclass entities compare by value, so identity keeps a rebuilt
    block distinct from the one it replaced.
    """

    def __init__(self) -> None:
        self._layers: dict[Layer, dict[int, object]] = {}

    def add_entity(self, entity: object, layer: Layer) -> None:
        bucket = self._layers.setdefault(Layer(layer), {})
        if id(entity) in bucket:
            raise ValueError(f"entity already in layer {Layer(layer).name}")
        bucket[id(entity)] = entity

    def remove_entity(self, entity: object, layer: Layer) -> None:
        bucket = self._layers.get(Layer(layer), {})
        if id(entity) not in bucket:
            raise KeyError(f"entity not in layer {Layer(layer).name}")
        del bucket[id(entity)]

    def contains(self, entity: object, layer: Layer) -> bool:
        return id(entity) in self._layers.get(Layer(layer), {})

    def entities(self, layer: Layer) -> Iterator[object]:
        yield from self._layers.get(Layer(layer), {}).values()

    def count(self, layer: Layer | None = None) -> int:
        if layer is None:
            return sum(len(b) for b in self._layers.values())
        return len(self._layers.get(Layer(layer), {}))
