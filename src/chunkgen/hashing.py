"""Integer lattice hashing.

All arithmetic is signed 32-bit with wraparound. Inputs may be Python ints
or int64 numpy arrays; both paths produce identical values.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray

_MASK_32 = 0xFFFFFFFF
_SIGN_32 = 0x80000000
_MAX_31 = 0x7FFFFFFF

# Lattice mixing constants (large odd multipliers)
_PRIME_X = 374761393
_PRIME_Y = 668265263
_PRIME_SEED = 31
_PRIME_MIX = 1274126177


def wrap_int32(value):
    """Reduce an integer (or int64 array) to its signed 32-bit value.

    Keeps the low 32 bits and reinterprets bit 31 as the sign, matching
    two's complement overflow of a fixed-width int.
    """
    return ((value & _MASK_32) ^ _SIGN_32) - _SIGN_32


def hash2d(i, j, seed):
    """Hash integer lattice coordinates with a seed.

    Args:
        i: Lattice x coordinate (int or int64 array).
        j: Lattice y coordinate (int or int64 array).
        seed: Seed value.

    Returns:
        Signed 32-bit hash, as an int or int64 array.
    """
    h = wrap_int32(
        wrap_int32(i) * _PRIME_X
        + wrap_int32(j) * _PRIME_Y
        + wrap_int32(seed) * _PRIME_SEED
    )
    h = wrap_int32((h ^ (h >> 13)) * _PRIME_MIX)
    return h ^ (h >> 16)


def unit_random(i, j, seed) -> float | NDArray[np.float64]:
    """Pseudo-random value in [0, 1] from the low 31 bits of the hash."""
    h = hash2d(i, j, seed)
    return (h & _MAX_31) / float(_MAX_31)


def lattice_floor(x: ArrayLike) -> NDArray[np.int64]:
    """Floor real coordinates to int64 lattice indices."""
    return np.floor(x).astype(np.int64)
