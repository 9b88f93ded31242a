from .noise_1d import OctaveNoise1D, Perlin1D, octave_wavelengths

__all__ = ["OctaveNoise1D", "Perlin1D", "octave_wavelengths"]
