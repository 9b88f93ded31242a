from __future__ import annotations

import numpy as np

from .core import PERM_SIZE, fade, grad1_from_hash, lattice_index, lerp, make_permutation


class Perlin1D:
    """1D gradient noise. Zero at every integer, roughly within [-0.5, 0.5]."""

    def __init__(self, *, seed: int = 0):
        self.seed = int(seed)
        self.perm = make_permutation(self.seed)

    def noise(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)

        xi0 = lattice_index(x)
        xi1 = (xi0 + 1) & (PERM_SIZE - 1)

        xf = x - np.floor(x)
        u = fade(xf)

        p = self.perm
        ga = grad1_from_hash(p[xi0])
        gb = grad1_from_hash(p[xi1])

        d0 = ga * xf
        d1 = gb * (xf - 1.0)
        return lerp(d0, d1, u)


def octave_wavelengths(wavelength: float) -> list[float]:
    """Halve `wavelength` until it drops below one world unit."""
    w = float(wavelength)
    out: list[float] = []
    while w >= 1.0:
        out.append(w)
        w *= 0.5
    return out


class OctaveNoise1D:
    """Sum of Perlin1D octaves, each scaled by its own wavelength.

    Octave k samples `noise_k(x / w_k + phase_k) * w_k` with w_0 = wavelength
    and w_{k+1} = w_k / 2. The seeded phases keep the octaves from all
    crossing zero together at multiples of the base wavelength. The amplitude
    sum is below 2 * wavelength and each octave is at most half its
    wavelength, so |output| < wavelength.
    """

    def __init__(self, *, seed: int, wavelength: float):
        self.seed = int(seed)
        self.wavelength = float(wavelength)
        self.wavelengths = octave_wavelengths(self.wavelength)
        self.octaves = [
            Perlin1D(seed=self.seed * 31 + i) for i in range(len(self.wavelengths))
        ]
        rng = np.random.default_rng(self.seed & 0xFFFFFFFFFFFFFFFF)
        # lattice phase in (0.1, 0.9): never on an integer
        self.phases = rng.uniform(0.1, 0.9, size=len(self.wavelengths))

    def noise(self, x: np.ndarray) -> np.ndarray:
        x = np.asarray(x, dtype=np.float64)
        total = np.zeros_like(x, dtype=np.float64)
        for octave, w, phase in zip(self.octaves, self.wavelengths, self.phases):
            total += octave.noise(x / w + phase) * w
        return total
