"""Noise primitives for terrain generation.

Provides gradient (Perlin-style) noise, cell (Voronoi-style) noise, and
domain warping. Every function evaluates element-wise over scalars or
numpy arrays, so a value at a given coordinate does not depend on the
shape of the batch it was computed in.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .hashing import hash2d, lattice_floor, unit_random, wrap_int32
from .types import NoiseKind

_DEG_TO_RAD = np.pi / 180.0
_SQRT_2 = np.sqrt(2.0)


def fade(t: ArrayLike) -> NDArray[np.float64]:
    """Quintic smoothstep 6t^5 - 15t^4 + 10t^3."""
    t = np.asarray(t, dtype=np.float64)
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def lerp(a: ArrayLike, b: ArrayLike, t: ArrayLike) -> NDArray[np.float64]:
    """Linear interpolation."""
    return a + t * (np.subtract(b, a))


def gradient_angle(hash_value) -> NDArray[np.float64]:
    """Convert a lattice hash to a gradient angle in radians.

    The hash is rounded to single precision and reduced with a truncated
    remainder, so negative hashes give negative angles.

    Args:
        hash_value: Signed 32-bit hash (int or int array).

    Returns:
        Angle in radians, in (-2*pi, 2*pi).
    """
    as_float = np.asarray(hash_value).astype(np.float32)
    degrees = np.fmod(as_float, np.float32(360.0))
    return degrees.astype(np.float64) * _DEG_TO_RAD


def _corner_dot(hash_value, dx: NDArray[np.float64], dy: NDArray[np.float64]):
    """Dot product of the corner's unit gradient with a displacement."""
    angle = gradient_angle(hash_value)
    return np.cos(angle) * dx + np.sin(angle) * dy


def perlin2d(x: ArrayLike, y: ArrayLike, seed: int) -> NDArray[np.float64]:
    """Sample 2D gradient noise.

    Hashes the four corners of the lattice cell containing each point into
    unit gradients, takes their dot products with the corner-to-point
    displacements, and blends them with the quintic fade curve.

    Args:
        x: X coordinate(s).
        y: Y coordinate(s).
        seed: Seed for gradient directions.

    Returns:
        Noise value(s), nominally in [-1, 1]. Not clamped.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    seed = wrap_int32(int(seed))

    x0 = lattice_floor(x)
    y0 = lattice_floor(y)
    x1 = x0 + 1
    y1 = y0 + 1

    lx = x - x0
    ly = y - y0
    sx = fade(lx)
    sy = fade(ly)

    g00 = _corner_dot(hash2d(x0, y0, seed), lx, ly)
    g10 = _corner_dot(hash2d(x1, y0, seed), lx - 1.0, ly)
    g01 = _corner_dot(hash2d(x0, y1, seed), lx, ly - 1.0)
    g11 = _corner_dot(hash2d(x1, y1, seed), lx - 1.0, ly - 1.0)

    nx0 = lerp(g00, g10, sx)
    nx1 = lerp(g01, g11, sx)
    return lerp(nx0, nx1, sy)


def voronoi2d(x: ArrayLike, y: ArrayLike, seed: int) -> NDArray[np.float64]:
    """Sample 2D cell noise (distance to nearest feature point).

    Each integer cell holds one feature point at a hashed offset. The
    distance to the closest point among the 3x3 surrounding cells is mapped
    from [0, sqrt(2)] to [-1, 1].

    Args:
        x: X coordinate(s).
        y: Y coordinate(s).
        seed: Seed for feature point placement.

    Returns:
        Noise value(s), nominally in [-1, 1]. Not clamped.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    seed = wrap_int32(int(seed))

    xi = lattice_floor(x)
    yi = lattice_floor(y)

    f1_squared = np.full(x.shape, np.inf)
    for di in (-1, 0, 1):
        for dj in (-1, 0, 1):
            cell_x = xi + di
            cell_y = yi + dj
            feature_x = cell_x + unit_random(cell_x, cell_y, seed)
            feature_y = cell_y + unit_random(cell_x, cell_y, seed + 1)
            dist_squared = (feature_x - x) ** 2 + (feature_y - y) ** 2
            f1_squared = np.minimum(f1_squared, dist_squared)

    f1 = np.sqrt(f1_squared)
    return 2.0 * (f1 / _SQRT_2) - 1.0


_PRIMITIVES = {
    NoiseKind.GRADIENT: perlin2d,
    NoiseKind.CELL: voronoi2d,
}


def sample_noise(
    kind: NoiseKind,
    x: ArrayLike,
    y: ArrayLike,
    seed: int,
) -> NDArray[np.float64]:
    """Sample the noise primitive selected by kind."""
    return _PRIMITIVES[NoiseKind(kind)](x, y, seed)


def domain_warp(
    x: ArrayLike,
    y: ArrayLike,
    warp_factor: float,
    seed: int,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Offset sample coordinates by gradient noise.

    Two independent noise samples (seed + 100 for x, seed + 200 for y),
    scaled by warp_factor, are added to the input coordinates.

    Args:
        x: X coordinate(s).
        y: Y coordinate(s).
        warp_factor: Displacement magnitude.
        seed: Base seed for the warp noise.

    Returns:
        Tuple of warped (x, y).
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    seed = wrap_int32(int(seed))

    dx = perlin2d(x, y, seed + 100) * warp_factor
    dy = perlin2d(x, y, seed + 200) * warp_factor
    return x + dx, y + dy
