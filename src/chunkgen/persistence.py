"""Save and load generated height grids."""

import json
from datetime import datetime, timezone
from pathlib import Path

import numpy as np
import structlog
from numpy.typing import NDArray

from .config import GeneratorConfig
from .types import GradientGrid, HeightGrid

logger = structlog.get_logger()

FORMAT_VERSION = 1


def save_heights(
    path: Path,
    heights: HeightGrid,
    config: GeneratorConfig,
    gradient: GradientGrid | None = None,
) -> Path:
    """Save a height grid (and optional gradient) to disk.

    Uses numpy's compressed .npz format; the .npz suffix is appended when
    missing.

    Args:
        path: Output path (should end with .npz).
        heights: Height grid.
        config: Generation configuration used.
        gradient: Optional gradient grid of the same rows/cols.

    Returns:
        Path actually written.
    """
    path = Path(path)
    if path.suffix != ".npz":
        path = path.with_name(path.name + ".npz")

    metadata = {
        "version": FORMAT_VERSION,
        "seed": config.seed,
        "chunk_size": config.chunk_size,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "config": config.model_dump(mode="json"),
    }

    arrays: dict[str, NDArray | bytes] = {
        "heights": np.asarray(heights, dtype=np.uint8),
        "metadata": json.dumps(metadata).encode("utf-8"),
    }
    if gradient is not None:
        arrays["gradient"] = np.asarray(gradient, dtype=np.float32)

    np.savez_compressed(path, **arrays)

    file_size = path.stat().st_size / 1024
    logger.info("heights_saved", path=str(path), size_kb=round(file_size, 1))
    return path


def load_heights(
    path: Path,
) -> tuple[HeightGrid, GradientGrid | None, dict]:
    """Load a height grid from disk.

    Args:
        path: Path to .npz file.

    Returns:
        Tuple of (heights, gradient or None, metadata dict).

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If file format is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Height file not found: {path}")

    with np.load(path) as data:
        if "heights" not in data:
            raise ValueError("Invalid height file: missing 'heights' array")
        heights = data["heights"]
        gradient = data["gradient"] if "gradient" in data else None

        if "metadata" in data:
            metadata = json.loads(data["metadata"].tobytes().decode("utf-8"))
        else:
            metadata = {}

    logger.info("heights_loaded", path=str(path), shape=heights.shape)
    return heights, gradient, metadata


def config_from_metadata(metadata: dict) -> GeneratorConfig | None:
    """Rebuild the generation config stored alongside a height grid."""
    if "config" not in metadata:
        return None
    return GeneratorConfig.model_validate(metadata["config"])
