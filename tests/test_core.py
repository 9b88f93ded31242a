import numpy as np

from perlin.core import fade, lattice_index, lerp, make_permutation


def test_fade_endpoints():
    t = np.array([0.0, 1.0], dtype=np.float64)
    out = fade(t)
    assert out[0] == 0.0
    assert out[1] == 1.0


def test_lerp_basic():
    a = np.array([0.0, 10.0])
    b = np.array([10.0, 20.0])
    t = np.array([0.0, 0.5])
    out = lerp(a, b, t)
    assert np.allclose(out, np.array([0.0, 15.0]))


def test_make_permutation_is_doubled_shuffle():
    p = make_permutation(7)
    assert p.shape == (512,)
    assert np.array_equal(p[:256], p[256:])
    assert sorted(p[:256].tolist()) == list(range(256))
    assert np.array_equal(p, make_permutation(7))


def test_lattice_index_floors_negative_values():
    idx = lattice_index(np.array([-0.5, -1.0, 0.0, 0.5, 255.5, 256.0]))
    assert idx.tolist() == [255, 255, 0, 0, 255, 0]
