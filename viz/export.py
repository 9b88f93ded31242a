from __future__ import annotations

import io
import math

import numpy as np
from PIL import Image

from worldgen.scene import Layer, SceneGraph

SKY_RGB = np.array([128, 198, 229], dtype=np.float64) / 255.0
GROUND_RGB = np.array([212, 123, 74], dtype=np.float64) / 255.0
TRUNK_RGB = np.array([100, 50, 20], dtype=np.float64) / 255.0
LEAF_RGB = np.array([50, 200, 30], dtype=np.float64) / 255.0
FRUIT_RGB = np.array([200, 50, 50], dtype=np.float64) / 255.0


def _fill_rect(
    img: np.ndarray,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    *,
    left: float,
    top: float,
    ppu: float,
    color: np.ndarray,
) -> None:
    h, w = img.shape[:2]
    c0 = max(int(math.floor((x0 - left) * ppu)), 0)
    c1 = min(int(math.ceil((x1 - left) * ppu)), w)
    r0 = max(int(math.floor((y0 - top) * ppu)), 0)
    r1 = min(int(math.ceil((y1 - top) * ppu)), h)
    if c0 < c1 and r0 < r1:
        img[r0:r1, c0:c1] = color


def scene_to_rgb01(
    scene: SceneGraph,
    *,
    left: float,
    right: float,
    top: float,
    bottom: float,
    pixels_per_unit: float = 0.25,
    t: float = 0.0,
) -> np.ndarray:
    """Rasterise a scene view into an HxWx3 float image in 0..1.

    Layers are painted back to front: ground, trunks, leaves (at their sway
    width for time `t`), then fruit that is still available.
    """

    ppu = float(pixels_per_unit)
    if ppu <= 0.0:
        raise ValueError("pixels_per_unit must be > 0")
    if right <= left or bottom <= top:
        raise ValueError("view must have positive width and height")

    w = max(int(math.ceil((right - left) * ppu)), 1)
    h = max(int(math.ceil((bottom - top) * ppu)), 1)
    img = np.empty((h, w, 3), dtype=np.float64)
    img[...] = SKY_RGB

    kw = dict(left=float(left), top=float(top), ppu=ppu)

    for block in scene.entities(Layer.STATIC_OBJECTS):
        x, y, s = block.x, block.y, block.size
        _fill_rect(img, x, y, x + s, y + s, color=GROUND_RGB, **kw)

    for trunk in scene.entities(Layer.TRUNK):
        half = trunk.width * 0.5
        _fill_rect(
            img,
            trunk.center_x - half,
            trunk.top_y,
            trunk.center_x + half,
            trunk.base_y,
            color=TRUNK_RGB,
            **kw,
        )

    for leaf in scene.entities(Layer.LEAVES):
        hw = leaf.width_at(t) * 0.5
        hs = leaf.size * 0.5
        _fill_rect(
            img, leaf.x - hw, leaf.y - hs, leaf.x + hw, leaf.y + hs, color=LEAF_RGB, **kw
        )

    for fruit in scene.entities(Layer.FRUIT):
        if not fruit.is_visible:
            continue
        hs = fruit.size * 0.5
        _fill_rect(
            img, fruit.x - hs, fruit.y - hs, fruit.x + hs, fruit.y + hs, color=FRUIT_RGB, **kw
        )

    return img


def rgb01_to_png_bytes(rgb01: np.ndarray) -> bytes:
    rgb = np.asarray(rgb01, dtype=np.float64)
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError("rgb01 must be HxWx3")
    img = np.clip(rgb * 255.0, 0.0, 255.0).astype(np.uint8)
    out = io.BytesIO()
    Image.fromarray(img).save(out, format="PNG")
    return out.getvalue()


def heights_to_npy_bytes(xs: np.ndarray, heights: np.ndarray) -> bytes:
    """Save a 2xN array of (x, height) samples."""
    x = np.asarray(xs, dtype=np.float64)
    z = np.asarray(heights, dtype=np.float64)
    if x.shape != z.shape or x.ndim != 1:
        raise ValueError("xs and heights must be 1D arrays of the same shape")
    out = io.BytesIO()
    np.save(out, np.stack([x, z]))
    return out.getvalue()
