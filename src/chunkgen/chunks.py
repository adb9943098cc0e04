"""Chunk coordinates and a memoizing chunk store."""

import threading
from dataclasses import dataclass
from typing import Iterator

import numpy as np
import structlog

from .generator import ChunkGenerator
from .types import GradientGrid, HeightGrid

logger = structlog.get_logger()


def chunk_coords(x: int, y: int, chunk_size: int) -> tuple[int, int]:
    """Convert world coordinates to chunk coordinates."""
    return (x // chunk_size, y // chunk_size)


def world_coords(
    chunk_x: int, chunk_y: int, local_x: int, local_y: int, chunk_size: int
) -> tuple[int, int]:
    """Convert chunk + local offset to world coordinates."""
    return (chunk_x * chunk_size + local_x, chunk_y * chunk_size + local_y)


def local_coords(x: int, y: int, chunk_size: int) -> tuple[int, int]:
    """Convert world coordinates to local coordinates within a chunk."""
    return (x % chunk_size, y % chunk_size)


@dataclass(frozen=True)
class Chunk:
    """A generated chunk_size x chunk_size tile of the height field."""

    chunk_x: int
    chunk_y: int
    heights: HeightGrid  # Shape: (chunk_size, chunk_size)
    gradient: GradientGrid  # Shape: (chunk_size, chunk_size, 2)

    @property
    def size(self) -> int:
        return self.heights.shape[0]

    def height_at(self, local_x: int, local_y: int) -> int:
        """Height at a local cell."""
        return int(self.heights[local_y, local_x])


class ChunkCache:
    """Generated chunks keyed by chunk coordinate.

    Each key is generated at most once, even when several threads ask for
    it at the same time.
    """

    def __init__(self, generator: ChunkGenerator):
        self.generator = generator
        self._chunks: dict[tuple[int, int], Chunk] = {}
        self._lock = threading.Lock()
        self._key_locks: dict[tuple[int, int], threading.Lock] = {}

    def __contains__(self, key: tuple[int, int]) -> bool:
        with self._lock:
            return key in self._chunks

    def __len__(self) -> int:
        with self._lock:
            return len(self._chunks)

    def keys(self) -> list[tuple[int, int]]:
        """Coordinates of all cached chunks."""
        with self._lock:
            return list(self._chunks)

    def get(self, chunk_x: int, chunk_y: int) -> Chunk:
        """Return the chunk at coordinates, generating it on first use."""
        key = (chunk_x, chunk_y)
        with self._lock:
            chunk = self._chunks.get(key)
            if chunk is not None:
                return chunk
            key_lock = self._key_locks.setdefault(key, threading.Lock())

        # Generate under the per-key lock only
        with key_lock:
            with self._lock:
                chunk = self._chunks.get(key)
            if chunk is not None:
                return chunk

            heights, gradient = self.generator.generate_chunk_with_gradient(
                chunk_x, chunk_y
            )
            chunk = Chunk(chunk_x=chunk_x, chunk_y=chunk_y, heights=heights, gradient=gradient)

            with self._lock:
                self._chunks[key] = chunk
                self._key_locks.pop(key, None)

        logger.debug("chunk_cached", chunk_x=chunk_x, chunk_y=chunk_y)
        return chunk

    def chunks_in_rect(
        self, chunk_x0: int, chunk_y0: int, chunk_x1: int, chunk_y1: int
    ) -> Iterator[Chunk]:
        """Yield chunks of an inclusive rectangle in row-major order.

        Missing chunks are generated. Corners may be given in any order.
        """
        x0, x1 = sorted((chunk_x0, chunk_x1))
        y0, y1 = sorted((chunk_y0, chunk_y1))
        for cy in range(y0, y1 + 1):
            for cx in range(x0, x1 + 1):
                yield self.get(cx, cy)

    def stitch(
        self, chunk_x0: int, chunk_y0: int, chunk_x1: int, chunk_y1: int
    ) -> HeightGrid:
        """Stitch the cached heights of a chunk rectangle into one grid."""
        x0, x1 = sorted((chunk_x0, chunk_x1))
        y0, y1 = sorted((chunk_y0, chunk_y1))
        rows = [
            [self.get(cx, cy).heights for cx in range(x0, x1 + 1)]
            for cy in range(y0, y1 + 1)
        ]
        stitched = np.block(rows)
        stitched.flags.writeable = False
        return stitched

    def clear(self) -> None:
        """Drop all cached chunks."""
        with self._lock:
            self._chunks.clear()
            self._key_locks.clear()
