"""
Seeded 3D gradient noise and its fractal compositions.

Vectorized with numpy: every entry point accepts scalars or arrays
and broadcasts them, so a whole frame grid is sampled in one call.
Scalar inputs return plain floats.
"""

import enum
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Tuple, Union

import numpy as np

# 32-bit linear congruential generator driving the permutation shuffle
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
UINT32_MASK = 0xFFFFFFFF

ArrayLike = Union[float, np.ndarray]


class Composition(str, enum.Enum):
    """How octaves of raw noise are combined into a field."""

    FBM = "fbm"
    TURBULENCE = "turbulence"
    RIDGED = "ridged"


def build_permutation(seed: int) -> np.ndarray:
    """
    Build the 512-entry lattice permutation table for a seed.

    Fisher-Yates over 0..255, walking i from 255 down to 1. The LCG state
    starts at ``seed mod 2**32`` and is advanced before every swap, so
    seed 0 still yields a shuffled table.

    Args:
        seed: Any integer; negative seeds wrap like unsigned 32-bit values.

    Returns:
        (512,) int64 array, the shuffled table repeated twice. Read-only.
    """
    table = list(range(256))
    state = int(seed) & UINT32_MASK
    for i in range(255, 0, -1):
        state = (state * LCG_MULTIPLIER + LCG_INCREMENT) & UINT32_MASK
        j = state % (i + 1)
        table[i], table[j] = table[j], table[i]

    permutation = np.array(table + table, dtype=np.int64)
    permutation.setflags(write=False)
    return permutation


def _fade(t: np.ndarray) -> np.ndarray:
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(t: np.ndarray, a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return a + t * (b - a)


def _grad(hash_value: np.ndarray, x: np.ndarray, y: np.ndarray, z: np.ndarray) -> np.ndarray:
    """Dot product with one of the 12 cube-edge gradients selected by hash & 15."""
    h = hash_value & 15
    u = np.where(h < 8, x, y)
    v = np.where(h < 4, y, np.where((h == 12) | (h == 14), x, z))
    return np.where((h & 1) == 0, u, -u) + np.where((h & 2) == 0, v, -v)


class NoiseField:
    """
    Improved Perlin noise over a seeded permutation.

    Immutable after construction. Every composition calls ``self.noise``,
    so a subclass that overrides ``noise`` changes all of them at once.
    """

    def __init__(self, seed: int = 0):
        self.seed = int(seed)
        self.permutation = build_permutation(self.seed)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(seed={self.seed})"

    def noise(self, x: ArrayLike, y: ArrayLike, z: ArrayLike) -> ArrayLike:
        """
        Raw gradient noise.

        Args:
            x, y, z: Sample coordinates, scalars or broadcastable arrays.

        Returns:
            Values in [-1, 1] with the broadcast shape of the inputs.
        """
        x, y, z = np.broadcast_arrays(
            np.asarray(x, dtype=np.float64),
            np.asarray(y, dtype=np.float64),
            np.asarray(z, dtype=np.float64),
        )
        xf, yf, zf = np.floor(x), np.floor(y), np.floor(z)
        xi = xf.astype(np.int64) & 255
        yi = yf.astype(np.int64) & 255
        zi = zf.astype(np.int64) & 255

        x = x - xf
        y = y - yf
        z = z - zf
        u, v, w = _fade(x), _fade(y), _fade(z)

        p = self.permutation
        a = p[xi] + yi
        aa = p[a] + zi
        ab = p[a + 1] + zi
        b = p[xi + 1] + yi
        ba = p[b] + zi
        bb = p[b + 1] + zi

        result = _lerp(
            w,
            _lerp(
                v,
                _lerp(u, _grad(p[aa], x, y, z), _grad(p[ba], x - 1, y, z)),
                _lerp(u, _grad(p[ab], x, y - 1, z), _grad(p[bb], x - 1, y - 1, z)),
            ),
            _lerp(
                v,
                _lerp(u, _grad(p[aa + 1], x, y, z - 1), _grad(p[ba + 1], x - 1, y, z - 1)),
                _lerp(u, _grad(p[ab + 1], x, y - 1, z - 1), _grad(p[bb + 1], x - 1, y - 1, z - 1)),
            ),
        )
        result = np.clip(result, -1.0, 1.0)
        if result.ndim == 0:
            return float(result)
        return result

    def _octaves(self, x, y, z, octaves: int) -> Iterator[Tuple[ArrayLike, float]]:
        if octaves < 1:
            raise ValueError(f"octaves must be >= 1, got {octaves}")
        x = np.asarray(x, dtype=np.float64)
        y = np.asarray(y, dtype=np.float64)
        z = np.asarray(z, dtype=np.float64)
        amplitude = 1.0
        frequency = 1.0
        for _ in range(octaves):
            yield self.noise(x * frequency, y * frequency, z * frequency), amplitude
            amplitude *= 0.5
            frequency *= 2.0

    def fbm(self, x: ArrayLike, y: ArrayLike, z: ArrayLike, octaves: int = 4) -> ArrayLike:
        """Fractal Brownian motion, normalized by total amplitude into [-1, 1]."""
        total = 0.0
        max_value = 0.0
        for value, amplitude in self._octaves(x, y, z, octaves):
            total = total + value * amplitude
            max_value += amplitude
        return total / max_value

    def turbulence(self, x: ArrayLike, y: ArrayLike, z: ArrayLike, octaves: int = 4) -> ArrayLike:
        """Sum of |noise| over octaves. Non-negative, not normalized."""
        total = 0.0
        for value, amplitude in self._octaves(x, y, z, octaves):
            total = total + np.abs(value) * amplitude
        return total

    def ridged(self, x: ArrayLike, y: ArrayLike, z: ArrayLike, octaves: int = 4) -> ArrayLike:
        """Sum of (1 - |noise|)^2 over octaves. Non-negative, not normalized."""
        total = 0.0
        for value, amplitude in self._octaves(x, y, z, octaves):
            ridge = 1.0 - np.abs(value)
            total = total + ridge * ridge * amplitude
        return total

    def sample(self, kind: Union[Composition, str], x, y, z, octaves: int) -> ArrayLike:
        """Dispatch to the composition named by ``kind``."""
        return getattr(self, Composition(kind).value)(x, y, z, octaves)


@dataclass(frozen=True)
class FieldSpec:
    """
    One named scalar field derived from a NoiseField.

    ``frequency`` is a scalar or an (fx, fy, fz) triple for anisotropic
    fields. ``offset`` is added to all three scaled coordinates and
    decorrelates fields that share a frequency. ``drift`` adds
    ``drift * spin`` to the x coordinate for features that move faster
    than the body itself.
    """

    name: str
    frequency: Union[float, Tuple[float, float, float]]
    octaves: int
    kind: Composition = Composition.FBM
    offset: float = 0.0
    drift: float = 0.0

    @property
    def frequencies(self) -> Tuple[float, float, float]:
        if isinstance(self.frequency, (tuple, list)):
            fx, fy, fz = self.frequency
            return float(fx), float(fy), float(fz)
        f = float(self.frequency)
        return f, f, f

    def evaluate(self, noise: NoiseField, x, y, z, spin: float = 0.0) -> ArrayLike:
        fx, fy, fz = self.frequencies
        return noise.sample(
            self.kind,
            np.asarray(x) * fx + self.offset + self.drift * spin,
            np.asarray(y) * fy + self.offset,
            np.asarray(z) * fz + self.offset,
            self.octaves,
        )


class SampleFrequencyStack:
    """Ordered set of FieldSpecs that a body type samples at every pixel."""

    def __init__(self, fields: Iterable[FieldSpec]):
        self.fields = tuple(fields)
        names = [f.name for f in self.fields]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate field names: {', '.join(duplicates)}")

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def sample(self, noise: NoiseField, x, y, z, spin: float = 0.0) -> Dict[str, ArrayLike]:
        """
        Evaluate every field at the given world coordinates.

        Args:
            noise: Field source for this sprite.
            x, y, z: Rotated world coordinates.
            spin: Current rotation angle, used by drifting fields.

        Returns:
            Mapping of field name to sampled values.
        """
        return {spec.name: spec.evaluate(noise, x, y, z, spin) for spec in self.fields}
