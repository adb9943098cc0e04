"""Shared test fixtures for chunk generation tests."""

import numpy as np
import pytest

from chunkgen.config import GeneratorConfig, NoiseLayerConfig


@pytest.fixture
def default_config() -> GeneratorConfig:
    """Built-in defaults."""
    return GeneratorConfig()


@pytest.fixture
def seed3_config() -> GeneratorConfig:
    """Defaults with seed 3, chunk size 16."""
    return GeneratorConfig(seed=3, chunk_size=16)


@pytest.fixture
def busy_config() -> GeneratorConfig:
    """Zoomed-in config so a single chunk spans many lattice cells."""
    return GeneratorConfig(seed=7, chunk_size=16, scale=0.2, mean_target=127.5)


@pytest.fixture
def single_band_config() -> GeneratorConfig:
    """One unwarped gradient band with full weight."""
    return GeneratorConfig(
        seed=11,
        bands=(NoiseLayerConfig(scale=0.1, octaves=1, warp_factor=0.0, weight=1.0),),
    )


@pytest.fixture
def ramp_grid() -> np.ndarray:
    """3x3 grid with values 0..8 in row-major order."""
    return np.arange(9, dtype=np.uint8).reshape(3, 3)
