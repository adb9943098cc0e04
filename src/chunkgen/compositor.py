"""Multi-band blending and mapping of noise to integer heights."""

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .config import GeneratorConfig
from .exceptions import InvalidGridError
from .fractal import fractal_layer
from .types import HEIGHT_MAX, HEIGHT_MIN


def composite(
    world_x: ArrayLike,
    world_y: ArrayLike,
    config: GeneratorConfig,
) -> NDArray[np.float64]:
    """Blend the configured fractal bands at world coordinates.

    Args:
        world_x: World x coordinate(s).
        world_y: World y coordinate(s).
        config: Generator configuration (seed and bands).

    Returns:
        Weighted sum of the band values, nominally in [-1, 1].
    """
    total = 0.0
    for band in config.bands:
        total = total + band.weight * fractal_layer(world_x, world_y, band, config.seed)
    return np.asarray(total, dtype=np.float64)


def to_height(value: ArrayLike, config: GeneratorConfig) -> NDArray[np.uint8]:
    """Map blended noise to heights in [0, 255].

    Rescales [-1, 1] onto [min_value, max_value], shifts so the nominal
    midpoint lands on mean_target, truncates toward zero, and clamps.

    Args:
        value: Blended noise value(s).
        config: Generator configuration.

    Returns:
        Height value(s) as uint8.
    """
    value = np.asarray(value, dtype=np.float64)
    span = config.max_value - config.min_value
    scaled = config.min_value + span * (value + 1.0) / 2.0
    shift = config.mean_target - (config.min_value + config.max_value) / 2.0
    heights = np.trunc(scaled + shift)
    return np.clip(heights, HEIGHT_MIN, HEIGHT_MAX).astype(np.uint8)


def recenter_mean(grid: ArrayLike, target_mean: float) -> NDArray[np.uint8]:
    """Shift a height grid so its mean lands on target_mean.

    Grid-level post-process: the offset depends on every cell, so applying
    it per chunk makes neighbouring chunks disagree at their seams.

    Args:
        grid: 2D height grid.
        target_mean: Desired mean height.

    Returns:
        New uint8 grid, truncated and clamped to [0, 255].

    Raises:
        InvalidGridError: If the grid is empty.
    """
    values = np.asarray(grid, dtype=np.float64)
    if values.size == 0:
        raise InvalidGridError("Cannot recenter an empty grid")

    offset = target_mean - values.mean()
    shifted = np.trunc(values + offset)
    return np.clip(shifted, HEIGHT_MIN, HEIGHT_MAX).astype(np.uint8)


def threshold(grid: ArrayLike, cutoff: int) -> NDArray[np.uint8]:
    """Split heights into 0 (below cutoff) and 255 (at or above)."""
    values = np.asarray(grid)
    return np.where(values < cutoff, HEIGHT_MIN, HEIGHT_MAX).astype(np.uint8)
