from __future__ import annotations

import pytest

from worldgen.config import DEFAULT_CONFIG
from worldgen.scene import Layer, SceneGraph
from worldgen.tree import Fruit, FruitState, LeafSway, Tree


def _trees(n: int = 200, seed: int = 42) -> list[Tree]:
    return [Tree(float(x), 512.0, seed=seed) for x in range(0, 100 * n, 100)]


def test_same_x_and_seed_rebuild_identically() -> None:
    a = Tree(500, 512.0, seed=42)
    b = Tree(500.0, 512.0, seed=42)
    assert a.signature() == b.signature()
    assert len(a.leaves) == len(b.leaves)
    assert len(a.fruits) == len(b.fruits)


def test_trunk_ranges_and_base() -> None:
    c = DEFAULT_CONFIG
    for tree in _trees():
        t = tree.trunk
        assert c.min_trunk_width <= t.width < c.max_trunk_width
        assert c.min_trunk_height <= t.height < c.max_trunk_height
        assert t.base_y == 512.0
        assert t.top_y == pytest.approx(512.0 - t.height)
        assert tree.trunk_position() == (tree.x, pytest.approx(512.0 - t.height / 2))


def test_counts_within_bounds_and_vary() -> None:
    trees = _trees()
    leaf_counts = {len(t.leaves) for t in trees}
    fruit_counts = {len(t.fruits) for t in trees}
    assert max(leaf_counts) <= DEFAULT_CONFIG.max_leaves
    assert max(fruit_counts) <= DEFAULT_CONFIG.max_fruits
    assert len(leaf_counts) > 10
    assert fruit_counts == set(range(DEFAULT_CONFIG.max_fruits + 1))


def test_leaves_and_fruit_inside_canopy() -> None:
    c = DEFAULT_CONFIG
    half = c.tree_top_size / 2
    for tree in _trees(60):
        top = tree.trunk.top_y
        for part in [*tree.leaves, *tree.fruits]:
            assert tree.x - half <= part.x <= tree.x + half
            assert top - c.tree_top_size + c.tree_top_offset <= part.y <= top + c.tree_top_offset


def test_fruit_never_over_trunk_footprint() -> None:
    fruits = 0
    for tree in _trees():
        for fruit in tree.fruits:
            fruits += 1
            assert abs(fruit.x - tree.trunk.center_x) > tree.trunk.width / 2
    assert fruits > 0


def test_leaf_sway_delays_vary_within_limit() -> None:
    delays = [leaf.sway.delay for tree in _trees(20) for leaf in tree.leaves]
    assert delays
    assert all(0.0 <= d < DEFAULT_CONFIG.max_sway_delay for d in delays)
    assert len(set(delays)) > 1


def test_apply_adds_and_removes_every_part() -> None:
    tree = next(t for t in _trees() if t.leaves and t.fruits)
    scene = SceneGraph()
    tree.apply(scene.add_entity)
    assert scene.count(Layer.TRUNK) == 1
    assert scene.count(Layer.LEAVES) == len(tree.leaves)
    assert scene.count(Layer.FRUIT) == len(tree.fruits)
    assert scene.contains(tree.trunk, Layer.TRUNK)

    tree.apply(scene.remove_entity)
    assert scene.count() == 0


def test_entities_tagged_by_layer() -> None:
    tree = Tree(700.0, 500.0, seed=3)
    layers = [layer for _, layer in tree.entities()]
    assert layers[0] is Layer.TRUNK
    assert layers.count(Layer.LEAVES) == len(tree.leaves)
    assert layers.count(Layer.FRUIT) == len(tree.fruits)


def test_leaf_sway_rests_then_ping_pongs() -> None:
    sway = LeafSway(
        delay=0.3,
        half_period=0.5,
        min_width_factor=0.8,
        max_width_factor=1.2,
        min_angle=-10.0,
        max_angle=10.0,
    )
    assert sway.sample(0.0) == (1.0, 0.0)
    assert sway.sample(0.29) == (1.0, 0.0)
    assert sway.sample(0.3) == pytest.approx((0.8, -10.0))
    assert sway.sample(0.55) == pytest.approx((1.0, 0.0))
    assert sway.sample(0.8) == pytest.approx((1.2, 10.0))
    assert sway.sample(1.05) == pytest.approx((1.0, 0.0))
    assert sway.sample(1.3) == pytest.approx((0.8, -10.0))


def test_leaf_width_follows_sway() -> None:
    tree = next(t for t in _trees() if t.leaves)
    leaf = tree.leaves[0]
    assert leaf.width_at(0.0) == leaf.size
    t = leaf.sway.delay + leaf.sway.half_period
    assert leaf.width_at(t) == pytest.approx(leaf.size * 1.2)
    assert leaf.angle_at(t) == pytest.approx(10.0)


def test_fruit_consume_and_regrow_cycle() -> None:
    fruit = Fruit(x=12.0, y=34.0, size=10.0)
    assert fruit.is_available and fruit.is_visible and fruit.is_solid

    assert fruit.consume(5.0, regrow_delay=30.0)
    assert fruit.state is FruitState.CONSUMED
    assert fruit.wake_time == 35.0
    assert not fruit.is_visible
    assert not fruit.is_solid
    assert not fruit.consume(6.0, regrow_delay=30.0)
    assert fruit.wake_time == 35.0

    assert not fruit.regrow(34.9)
    assert fruit.state is FruitState.CONSUMED
    assert fruit.regrow(35.0)
    assert fruit.state is FruitState.AVAILABLE
    assert fruit.wake_time is None
    assert (fruit.x, fruit.y) == (12.0, 34.0)
    assert not fruit.regrow(100.0)


def test_fruits_cycle_independently() -> None:
    a = Fruit(x=0.0, y=0.0, size=10.0)
    b = Fruit(x=50.0, y=0.0, size=10.0)
    a.consume(0.0, regrow_delay=30.0)
    b.consume(10.0, regrow_delay=30.0)
    assert a.regrow(30.0)
    assert not b.regrow(30.0)
    assert b.state is FruitState.CONSUMED
    assert b.regrow(40.0)


def test_fruit_touches_radius() -> None:
    fruit = Fruit(x=100.0, y=100.0, size=10.0)
    assert fruit.touches(100.0, 100.0, 0.0)
    assert fruit.touches(120.0, 100.0, 15.0)
    assert not fruit.touches(121.0, 100.0, 15.0)
