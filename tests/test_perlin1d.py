import numpy as np

from perlin.noise_1d import OctaveNoise1D, Perlin1D, octave_wavelengths


def test_perlin1d_deterministic_for_seed():
    p1 = Perlin1D(seed=123)
    p2 = Perlin1D(seed=123)
    x = np.array([0.1, 1.25, 10.5])
    assert np.allclose(p1.noise(x), p2.noise(x))


def test_perlin1d_changes_with_seed():
    p1 = Perlin1D(seed=1)
    p2 = Perlin1D(seed=2)
    x = np.linspace(0.1, 40.1, 200)
    assert not np.allclose(p1.noise(x), p2.noise(x))


def test_perlin1d_zero_on_lattice_and_bounded():
    p = Perlin1D(seed=0)
    assert np.allclose(p.noise(np.arange(-5.0, 6.0)), 0.0)
    z = p.noise(np.linspace(-20.0, 20.0, 4001))
    assert np.isfinite(z).all()
    assert float(np.max(np.abs(z))) < 0.5 + 1e-9


def test_perlin1d_continuity_small_step():
    p = Perlin1D(seed=0)
    x = np.linspace(-10.0, 10.0, 256)
    dx = 1e-4
    z0 = p.noise(x)
    z1 = p.noise(x + dx)
    assert float(np.max(np.abs(z1 - z0))) < 0.1


def test_octave_wavelengths_halve_down_to_one():
    ws = octave_wavelengths(210.0)
    assert ws[0] == 210.0
    assert ws[-1] >= 1.0
    assert ws[-1] * 0.5 < 1.0
    assert all(b == a * 0.5 for a, b in zip(ws, ws[1:]))
    assert octave_wavelengths(0.5) == []


def test_octave_noise_bounded_by_wavelength():
    n = OctaveNoise1D(seed=42, wavelength=210.0)
    x = np.linspace(-5000.0, 5000.0, 20001)
    z = n.noise(x)
    assert float(np.max(np.abs(z))) < 210.0
    assert float(np.std(z)) > 1.0


def test_octave_noise_scalar_matches_batch():
    n = OctaveNoise1D(seed=9, wavelength=210.0)
    xs = np.array([-1234.5, -1.0, 0.0, 17.25, 999.0])
    batch = n.noise(xs)
    for x, z in zip(xs, batch):
        assert float(n.noise(np.array([x]))[0]) == float(z)


def test_octave_noise_not_pinned_at_base_wavelength_multiples():
    n = OctaveNoise1D(seed=42, wavelength=210.0)
    z = n.noise(np.arange(-20, 21, dtype=np.float64) * 210.0)
    assert np.count_nonzero(z == 0.0) == 0
    assert float(np.std(z)) > 1.0


def test_octave_phases_seeded_and_off_lattice():
    a = OctaveNoise1D(seed=5, wavelength=210.0)
    b = OctaveNoise1D(seed=5, wavelength=210.0)
    assert np.array_equal(a.phases, b.phases)
    assert len(a.phases) == len(a.wavelengths)
    assert np.all((a.phases >= 0.1) & (a.phases < 0.9))
