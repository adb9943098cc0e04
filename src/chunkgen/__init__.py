"""Procedural terrain height chunks from domain-warped fractal noise.

This package implements lattice hashing, gradient and cell noise, domain
warping, multi-octave fractal layers, multi-band blending into integer
height chunks, and finite-difference gradients of the result.
"""

from .chunks import Chunk, ChunkCache, chunk_coords, local_coords, world_coords
from .compositor import composite, recenter_mean, threshold, to_height
from .config import GeneratorConfig, NoiseLayerConfig, default_bands, load_config
from .exceptions import ChunkGenError, InvalidConfigError, InvalidGridError
from .fractal import fractal_layer
from .generator import (
    ChunkGenerator,
    generate_chunk,
    generate_chunk_with_gradient,
    generate_region,
    generate_region_with_gradient,
)
from .gradient import compute_gradient
from .hashing import hash2d
from .noise import domain_warp, perlin2d, sample_noise, voronoi2d
from .persistence import load_heights, save_heights
from .types import GradientGrid, HeightGrid, NoiseKind

__all__ = [
    "Chunk",
    "ChunkCache",
    "ChunkGenError",
    "ChunkGenerator",
    "GeneratorConfig",
    "GradientGrid",
    "HeightGrid",
    "InvalidConfigError",
    "InvalidGridError",
    "NoiseKind",
    "NoiseLayerConfig",
    "chunk_coords",
    "composite",
    "compute_gradient",
    "default_bands",
    "domain_warp",
    "fractal_layer",
    "generate_chunk",
    "generate_chunk_with_gradient",
    "generate_region",
    "generate_region_with_gradient",
    "hash2d",
    "load_config",
    "load_heights",
    "local_coords",
    "perlin2d",
    "recenter_mean",
    "sample_noise",
    "save_heights",
    "threshold",
    "to_height",
    "voronoi2d",
    "world_coords",
]
