import io

import numpy as np
import pytest
from PIL import Image

from viz.export import (
    FRUIT_RGB,
    GROUND_RGB,
    SKY_RGB,
    heights_to_npy_bytes,
    rgb01_to_png_bytes,
    scene_to_rgb01,
)
from worldgen.scene import Layer, SceneGraph
from worldgen.session import WorldSession
from worldgen.terrain import Block
from worldgen.tree import Fruit


def _has_color(img, color):
    return bool(np.any(np.all(np.isclose(img, color), axis=-1)))


def test_scene_to_rgb01_shape_and_colors():
    sess = WorldSession(seed=1500)
    img = scene_to_rgb01(sess.scene, left=0.0, right=1600.0, top=0.0, bottom=768.0)
    assert img.shape == (192, 400, 3)
    assert img.min() >= 0.0
    assert img.max() <= 1.0
    assert _has_color(img, SKY_RGB)
    assert _has_color(img, GROUND_RGB)
    # sky on top, ground at the bottom edge
    assert np.allclose(img[0, 0], SKY_RGB)
    assert np.allclose(img[-1, 0], GROUND_RGB)


def test_scene_to_rgb01_skips_consumed_fruit():
    scene = SceneGraph()
    fruit = Fruit(x=50.0, y=50.0, size=10.0)
    scene.add_entity(fruit, Layer.FRUIT)
    kw = dict(left=0.0, right=100.0, top=0.0, bottom=100.0, pixels_per_unit=1.0)

    assert _has_color(scene_to_rgb01(scene, **kw), FRUIT_RGB)
    fruit.consume(0.0, regrow_delay=30.0)
    assert not _has_color(scene_to_rgb01(scene, **kw), FRUIT_RGB)


def test_scene_to_rgb01_clips_to_view():
    scene = SceneGraph()
    scene.add_entity(Block(x=-60, y=-60, size=30), Layer.STATIC_OBJECTS)
    img = scene_to_rgb01(scene, left=0.0, right=10.0, top=0.0, bottom=10.0, pixels_per_unit=1.0)
    assert not _has_color(img, GROUND_RGB)


def test_scene_to_rgb01_rejects_bad_view():
    scene = SceneGraph()
    with pytest.raises(ValueError):
        scene_to_rgb01(scene, left=10.0, right=0.0, top=0.0, bottom=10.0)
    with pytest.raises(ValueError):
        scene_to_rgb01(scene, left=0.0, right=10.0, top=0.0, bottom=10.0, pixels_per_unit=0.0)


def test_rgb01_to_png_bytes():
    rgb = np.zeros((3, 4, 3), dtype=np.float64)
    rgb[..., 1] = 1.0
    data = rgb01_to_png_bytes(rgb)
    assert data[:8] == b"\x89PNG\r\n\x1a\n"

    img = Image.open(io.BytesIO(data))
    assert img.size == (4, 3)
    assert np.array(img)[0, 0].tolist() == [0, 255, 0]

    with pytest.raises(ValueError):
        rgb01_to_png_bytes(np.zeros((3, 4)))


def test_heights_to_npy_bytes_roundtrip():
    xs = np.arange(5, dtype=np.float64)
    hs = xs * 2.0
    out = np.load(io.BytesIO(heights_to_npy_bytes(xs, hs)))
    assert out.shape == (2, 5)
    assert np.array_equal(out[1], hs)

    with pytest.raises(ValueError):
        heights_to_npy_bytes(xs, hs[:3])
