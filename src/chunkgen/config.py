"""Chunk generation configuration models and TOML loading."""

import math
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .exceptions import InvalidConfigError
from .types import NoiseKind

DEFAULT_SCALE = 0.002
DEFAULT_PERSISTENCE = 0.6
DEFAULT_LACUNARITY = 2.5
DEFAULT_WARP_FACTOR = 0.5

# Low/mid/high bands: (scale multiplier, octaves, seed offset, weight)
DEFAULT_BAND_LAYOUT: tuple[tuple[float, int, int, float], ...] = (
    (0.5, 2, 0, 0.5),
    (1.0, 3, 10, 0.3),
    (2.0, 4, 20, 0.2),
)


class NoiseLayerConfig(BaseModel):
    """Parameters for a single fractal noise layer."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    scale: float = Field(
        default=DEFAULT_SCALE, gt=0, description="World-to-noise coordinate scale"
    )
    octaves: int = Field(default=3, ge=1, description="Number of octaves")
    persistence: float = Field(
        default=DEFAULT_PERSISTENCE, gt=0, description="Amplitude multiplier per octave"
    )
    lacunarity: float = Field(
        default=DEFAULT_LACUNARITY, gt=0, description="Frequency multiplier per octave"
    )
    seed_offset: int = Field(default=0, description="Added to the seed for this layer")
    warp_factor: float = Field(
        default=DEFAULT_WARP_FACTOR, description="Domain warp displacement magnitude"
    )
    kind: NoiseKind = Field(
        default=NoiseKind.GRADIENT, description="Noise primitive to sample"
    )
    weight: float = Field(default=1.0, ge=0, description="Blend weight in the compositor")


def default_bands(
    scale: float = DEFAULT_SCALE,
    persistence: float = DEFAULT_PERSISTENCE,
    lacunarity: float = DEFAULT_LACUNARITY,
    warp_factor: float = DEFAULT_WARP_FACTOR,
    kind: NoiseKind = NoiseKind.GRADIENT,
) -> tuple[NoiseLayerConfig, ...]:
    """Build the low/mid/high frequency bands around a base scale."""
    return tuple(
        NoiseLayerConfig(
            scale=scale * multiplier,
            octaves=octaves,
            persistence=persistence,
            lacunarity=lacunarity,
            seed_offset=seed_offset,
            warp_factor=warp_factor,
            kind=kind,
            weight=weight,
        )
        for multiplier, octaves, seed_offset, weight in DEFAULT_BAND_LAYOUT
    )


class GeneratorConfig(BaseModel):
    """Complete chunk generation configuration.

    When bands are not given they are derived from the base scale,
    persistence, lacunarity, warp factor, and kind.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    seed: int = Field(default=1, description="Seed for all pseudo-randomness")
    chunk_size: int = Field(default=16, gt=0, description="Chunk width and height")

    scale: float = Field(default=DEFAULT_SCALE, gt=0, description="Base noise scale")
    persistence: float = Field(
        default=DEFAULT_PERSISTENCE, gt=0, description="Amplitude multiplier per octave"
    )
    lacunarity: float = Field(
        default=DEFAULT_LACUNARITY, gt=0, description="Frequency multiplier per octave"
    )
    warp_factor: float = Field(
        default=DEFAULT_WARP_FACTOR, description="Domain warp displacement magnitude"
    )
    kind: NoiseKind = Field(
        default=NoiseKind.GRADIENT, description="Noise primitive for default bands"
    )

    mean_target: float = Field(default=64.0, description="Target mean height (0-255)")
    min_value: float = Field(default=0.0, description="Height mapped from noise -1")
    max_value: float = Field(default=255.0, description="Height mapped from noise +1")
    recenter: bool = Field(
        default=False,
        description="Shift each chunk to its own mean (breaks seam continuity)",
    )

    bands: tuple[NoiseLayerConfig, ...] = Field(
        default=(), description="Fractal layers blended into the height"
    )

    @model_validator(mode="before")
    @classmethod
    def _fill_default_bands(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("bands"):
            data = dict(data)
            try:
                data["bands"] = default_bands(
                    scale=data.get("scale", DEFAULT_SCALE),
                    persistence=data.get("persistence", DEFAULT_PERSISTENCE),
                    lacunarity=data.get("lacunarity", DEFAULT_LACUNARITY),
                    warp_factor=data.get("warp_factor", DEFAULT_WARP_FACTOR),
                    kind=NoiseKind(data.get("kind", NoiseKind.GRADIENT)),
                )
            except (TypeError, ValueError):
                # Bad base values are reported by their own field validation
                data.pop("bands", None)
        return data

    @model_validator(mode="after")
    def _check_consistency(self) -> "GeneratorConfig":
        if not self.bands:
            raise ValueError("at least one band is required")
        total_weight = sum(band.weight for band in self.bands)
        if not math.isclose(total_weight, 1.0, abs_tol=1e-6):
            raise ValueError(f"band weights must sum to 1.0, got {total_weight}")
        if self.min_value >= self.max_value:
            raise ValueError(
                f"min_value ({self.min_value}) must be below max_value ({self.max_value})"
            )
        return self

    def with_seed(self, seed: int) -> "GeneratorConfig":
        """Return a copy with a different seed."""
        return self.model_copy(update={"seed": seed})


def load_config(config_path: Path) -> GeneratorConfig:
    """Load configuration from a TOML file.

    Generator settings live under a [generator] table; bands may be given
    as [[generator.bands]] entries.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed GeneratorConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        InvalidConfigError: If values fail validation.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    try:
        return GeneratorConfig.model_validate(data.get("generator", {}))
    except ValidationError as e:
        raise InvalidConfigError(f"Invalid config {config_path}: {e}") from e


def find_config(name: str) -> Path:
    """Resolve a config path, or the name of a bundled config under configs/.

    Raises:
        FileNotFoundError: If no such file exists.
    """
    candidate = Path(name)
    if candidate.suffix != ".toml" and len(candidate.parts) == 1:
        candidate = _configs_dir() / f"{name}.toml"
    if not candidate.exists():
        raise FileNotFoundError(
            f"Config '{name}' not found. Bundled configs: {list_configs()}"
        )
    return candidate


def list_configs() -> list[str]:
    """List available config names."""
    configs_dir = _configs_dir()
    if not configs_dir.exists():
        return []
    return sorted(p.stem for p in configs_dir.glob("*.toml"))


def _configs_dir() -> Path:
    return Path(__file__).parent.parent.parent / "configs"
