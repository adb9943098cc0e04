"""Chunk generation orchestration."""

import time

import numpy as np
import structlog
from numpy.typing import NDArray
from pydantic import ValidationError

from .compositor import composite, recenter_mean, to_height
from .config import GeneratorConfig
from .exceptions import InvalidConfigError
from .gradient import compute_gradient
from .types import GradientGrid, HeightGrid

logger = structlog.get_logger()


def _check_chunk_size(chunk_size: int) -> None:
    if chunk_size <= 0:
        raise InvalidConfigError(f"chunk_size must be positive, got {chunk_size}")


def chunk_world_coords(
    chunk_x: int,
    chunk_y: int,
    chunk_size: int,
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """World coordinates of every cell in a chunk.

    Args:
        chunk_x: Chunk x coordinate.
        chunk_y: Chunk y coordinate.
        chunk_size: Cells per chunk side.

    Returns:
        Tuple of (world_x, world_y), each of shape (chunk_size, chunk_size)
        and indexed [y, x].
    """
    _check_chunk_size(chunk_size)
    local = np.arange(chunk_size, dtype=np.int64)
    xs = chunk_x * chunk_size + local
    ys = chunk_y * chunk_size + local
    world_y, world_x = np.meshgrid(ys, xs, indexing="ij")
    return world_x.astype(np.float64), world_y.astype(np.float64)


def generate_chunk(
    chunk_x: int,
    chunk_y: int,
    config: GeneratorConfig | None = None,
) -> HeightGrid:
    """Generate the height grid of one chunk.

    Args:
        chunk_x: Chunk x coordinate.
        chunk_y: Chunk y coordinate.
        config: Generation parameters (defaults if None).

    Returns:
        Read-only uint8 array of shape (chunk_size, chunk_size), indexed [y, x].

    Raises:
        InvalidConfigError: If chunk_size is not positive.
    """
    config = config or GeneratorConfig()
    world_x, world_y = chunk_world_coords(chunk_x, chunk_y, config.chunk_size)

    heights = to_height(composite(world_x, world_y, config), config)
    if config.recenter:
        heights = recenter_mean(heights, config.mean_target)

    heights.flags.writeable = False
    logger.debug(
        "chunk_generated",
        chunk_x=chunk_x,
        chunk_y=chunk_y,
        seed=config.seed,
        mean=float(heights.mean()),
    )
    return heights


def generate_chunk_with_gradient(
    chunk_x: int,
    chunk_y: int,
    config: GeneratorConfig | None = None,
) -> tuple[HeightGrid, GradientGrid]:
    """Generate a chunk's height grid and its gradient grid."""
    heights = generate_chunk(chunk_x, chunk_y, config)
    return heights, compute_gradient(heights)


def _normalize_rect(x0: int, y0: int, x1: int, y1: int) -> tuple[int, int, int, int]:
    return min(x0, x1), min(y0, y1), max(x0, x1), max(y0, y1)


def generate_region(
    chunk_x0: int,
    chunk_y0: int,
    chunk_x1: int,
    chunk_y1: int,
    config: GeneratorConfig | None = None,
) -> HeightGrid:
    """Generate an inclusive rectangle of chunks stitched into one grid.

    Corners may be given in any order.

    Args:
        chunk_x0: First corner chunk x.
        chunk_y0: First corner chunk y.
        chunk_x1: Opposite corner chunk x.
        chunk_y1: Opposite corner chunk y.
        config: Generation parameters (defaults if None).

    Returns:
        Read-only uint8 array of shape (rows * chunk_size, cols * chunk_size).
    """
    config = config or GeneratorConfig()
    x0, y0, x1, y1 = _normalize_rect(chunk_x0, chunk_y0, chunk_x1, chunk_y1)

    start_time = time.perf_counter()
    rows = [
        [generate_chunk(cx, cy, config) for cx in range(x0, x1 + 1)]
        for cy in range(y0, y1 + 1)
    ]
    region = np.block(rows)
    region.flags.writeable = False

    logger.info(
        "region_generated",
        chunks=(x1 - x0 + 1) * (y1 - y0 + 1),
        shape=region.shape,
        seed=config.seed,
        elapsed_ms=round((time.perf_counter() - start_time) * 1000, 1),
    )
    return region


def generate_region_with_gradient(
    chunk_x0: int,
    chunk_y0: int,
    chunk_x1: int,
    chunk_y1: int,
    config: GeneratorConfig | None = None,
) -> tuple[HeightGrid, GradientGrid]:
    """Generate a stitched region and the gradient of the whole region."""
    heights = generate_region(chunk_x0, chunk_y0, chunk_x1, chunk_y1, config)
    return heights, compute_gradient(heights)


class ChunkGenerator:
    """Chunk generator bound to a configuration.

    Per-call seed and chunk_size overrides leave the bound configuration
    untouched.
    """

    def __init__(self, config: GeneratorConfig | None = None):
        self.config = config or GeneratorConfig()

    @property
    def seed(self) -> int:
        return self.config.seed

    @property
    def chunk_size(self) -> int:
        return self.config.chunk_size

    def _resolve(self, seed: int | None, chunk_size: int | None) -> GeneratorConfig:
        update = {}
        if seed is not None:
            update["seed"] = seed
        if chunk_size is not None:
            update["chunk_size"] = chunk_size
        if not update:
            return self.config
        try:
            return GeneratorConfig.model_validate({**self.config.model_dump(), **update})
        except ValidationError as e:
            raise InvalidConfigError(f"Invalid per-call override {update}: {e}") from e

    def generate_chunk(
        self,
        chunk_x: int,
        chunk_y: int,
        seed: int | None = None,
        chunk_size: int | None = None,
    ) -> HeightGrid:
        """Generate one chunk's height grid."""
        return generate_chunk(chunk_x, chunk_y, self._resolve(seed, chunk_size))

    def generate_chunk_with_gradient(
        self,
        chunk_x: int,
        chunk_y: int,
        seed: int | None = None,
        chunk_size: int | None = None,
    ) -> tuple[HeightGrid, GradientGrid]:
        """Generate one chunk's height grid and gradient grid."""
        return generate_chunk_with_gradient(
            chunk_x, chunk_y, self._resolve(seed, chunk_size)
        )

    def generate_region(
        self,
        chunk_x0: int,
        chunk_y0: int,
        chunk_x1: int,
        chunk_y1: int,
    ) -> HeightGrid:
        """Generate an inclusive rectangle of chunks as one grid."""
        return generate_region(chunk_x0, chunk_y0, chunk_x1, chunk_y1, self.config)

    def base_height(self, world_x: float, world_y: float) -> int:
        """Height at a single world coordinate, without recentering."""
        return int(to_height(composite(world_x, world_y, self.config), self.config))
