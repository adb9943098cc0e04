"""Fractal (multi-octave) accumulation of warped noise."""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .config import NoiseLayerConfig
from .exceptions import InvalidConfigError
from .hashing import wrap_int32
from .noise import domain_warp, sample_noise


def fractal_layer(
    world_x: ArrayLike,
    world_y: ArrayLike,
    layer: NoiseLayerConfig,
    seed: int,
) -> NDArray[np.float64]:
    """Sum octaves of domain-warped noise for one layer.

    Each octave scales the world coordinate by scale * frequency, warps it
    with seed * (200 + seed_offset), and samples the layer's primitive with
    seed + seed_offset. Amplitude falls by persistence and frequency grows
    by lacunarity between octaves.

    Args:
        world_x: World x coordinate(s).
        world_y: World y coordinate(s).
        layer: Layer parameters.
        seed: Generator seed.

    Returns:
        Amplitude-weighted mean of the octaves, nominally in [-1, 1].

    Raises:
        InvalidConfigError: If the layer has no octaves.
    """
    if layer.octaves < 1:
        raise InvalidConfigError(f"octaves must be >= 1, got {layer.octaves}")

    world_x = np.asarray(world_x, dtype=np.float64)
    world_y = np.asarray(world_y, dtype=np.float64)

    warp_seed = wrap_int32(seed * (200 + layer.seed_offset))
    noise_seed = wrap_int32(seed + layer.seed_offset)

    total = np.zeros(np.broadcast_shapes(world_x.shape, world_y.shape))
    amplitude = 1.0
    frequency = 1.0
    amplitude_sum = 0.0

    for _ in range(layer.octaves):
        base_x = world_x * layer.scale * frequency
        base_y = world_y * layer.scale * frequency
        warped_x, warped_y = domain_warp(base_x, base_y, layer.warp_factor, warp_seed)

        total = total + sample_noise(layer.kind, warped_x, warped_y, noise_seed) * amplitude
        amplitude_sum += amplitude

        amplitude *= layer.persistence
        frequency *= layer.lacunarity

    return total / amplitude_sum
