from __future__ import annotations

import math


def chunk_index(x: float, *, chunk_size: int) -> int:
    """Chunk holding world x. Floors, so x=-1 is chunk -1, not chunk 0."""
    return int(math.floor(float(x) / int(chunk_size)))


def chunk_origin(*, chunk: int, chunk_size: int) -> int:
    return int(chunk) * int(chunk_size)


def chunk_bounds(*, chunk: int, chunk_size: int) -> tuple[int, int]:
    """Half-open world range [min_x, max_x) covered by `chunk`."""
    left = chunk_origin(chunk=chunk, chunk_size=chunk_size)
    return left, left + int(chunk_size)


def chunk_span(min_x: float, max_x: float, *, chunk_size: int) -> tuple[int, int]:
    """Inclusive chunk indices touched by the half-open range [min_x, max_x)."""
    if float(max_x) <= float(min_x):
        raise ValueError("max_x must be > min_x")
    first = chunk_index(min_x, chunk_size=chunk_size)
    last = int(math.ceil(float(max_x) / int(chunk_size))) - 1
    return first, last


def grid_points(min_x: float, max_x: float, *, step: int) -> list[int]:
    """Multiples of `step` inside [min_x, max_x)."""
    step = int(step)
    first = int(math.ceil(float(min_x) / step)) * step
    return list(range(first, int(math.ceil(float(max_x))), step))
