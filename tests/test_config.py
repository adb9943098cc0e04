"""Tests for configuration models and TOML loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from chunkgen.config import (
    GeneratorConfig,
    NoiseLayerConfig,
    default_bands,
    find_config,
    list_configs,
    load_config,
)
from chunkgen.exceptions import ChunkGenError, InvalidConfigError
from chunkgen.types import NoiseKind

CONFIGS_DIR = Path(__file__).parent.parent / "configs"


class TestNoiseLayerConfig:
    """Tests for NoiseLayerConfig."""

    def test_defaults(self) -> None:
        """Defaults match the documented layer parameters."""
        layer = NoiseLayerConfig()
        assert layer.scale == 0.002
        assert layer.octaves == 3
        assert layer.persistence == 0.6
        assert layer.lacunarity == 2.5
        assert layer.warp_factor == 0.5
        assert layer.kind == NoiseKind.GRADIENT
        assert layer.weight == 1.0

    @pytest.mark.parametrize(
        "field, value",
        [
            ("scale", 0.0),
            ("octaves", 0),
            ("persistence", -0.5),
            ("lacunarity", 0.0),
            ("weight", -0.1),
            ("kind", "simplex"),
            ("scale", float("inf")),
            ("persistence", float("nan")),
            ("warp_factor", float("nan")),
            ("warp_factor", float("-inf")),
        ],
    )
    def test_invalid_values(self, field: str, value: object) -> None:
        """Out-of-range values fail validation."""
        with pytest.raises(ValidationError):
            NoiseLayerConfig(**{field: value})

    def test_frozen(self) -> None:
        """Layers are immutable."""
        layer = NoiseLayerConfig()
        with pytest.raises(ValidationError):
            layer.scale = 0.5


class TestDefaultBands:
    """Tests for default_bands."""

    def test_layout(self) -> None:
        """Low, mid and high bands around the base scale."""
        bands = default_bands(scale=0.01)
        assert [b.scale for b in bands] == [0.005, 0.01, 0.02]
        assert [b.octaves for b in bands] == [2, 3, 4]
        assert [b.seed_offset for b in bands] == [0, 10, 20]
        assert [b.weight for b in bands] == [0.5, 0.3, 0.2]

    def test_kind_propagates(self) -> None:
        """Every band uses the requested kind."""
        assert all(b.kind == NoiseKind.CELL for b in default_bands(kind=NoiseKind.CELL))


class TestGeneratorConfig:
    """Tests for GeneratorConfig."""

    def test_defaults(self, default_config: GeneratorConfig) -> None:
        """Defaults match the documented generator parameters."""
        assert default_config.seed == 1
        assert default_config.chunk_size == 16
        assert default_config.mean_target == 64.0
        assert default_config.min_value == 0.0
        assert default_config.max_value == 255.0
        assert default_config.recenter is False
        assert default_config.bands == default_bands()

    def test_bands_follow_base_parameters(self) -> None:
        """Derived bands pick up the base scale and kind."""
        config = GeneratorConfig(scale=0.1, persistence=0.4, kind="cell")
        assert [b.scale for b in config.bands] == [0.05, 0.1, 0.2]
        assert all(b.persistence == 0.4 for b in config.bands)
        assert all(b.kind == NoiseKind.CELL for b in config.bands)

    def test_explicit_bands_kept(self, single_band_config: GeneratorConfig) -> None:
        """Explicit bands are not replaced."""
        assert len(single_band_config.bands) == 1
        assert single_band_config.bands[0].scale == 0.1

    def test_weights_must_sum_to_one(self) -> None:
        """Band weights are a convex combination."""
        with pytest.raises(ValidationError):
            GeneratorConfig(
                bands=(
                    NoiseLayerConfig(weight=0.25),
                    NoiseLayerConfig(weight=0.25, seed_offset=1),
                )
            )

    @pytest.mark.parametrize("chunk_size", [0, -16])
    def test_chunk_size_positive(self, chunk_size: int) -> None:
        """chunk_size must be positive."""
        with pytest.raises(ValidationError):
            GeneratorConfig(chunk_size=chunk_size)

    def test_min_below_max(self) -> None:
        """min_value must be below max_value."""
        with pytest.raises(ValidationError):
            GeneratorConfig(min_value=200.0, max_value=100.0)

    def test_bad_scale_reported(self) -> None:
        """A bad base scale is a validation error, not a crash."""
        with pytest.raises(ValidationError):
            GeneratorConfig(scale=-1.0)

    @pytest.mark.parametrize(
        "field", ["scale", "warp_factor", "mean_target", "min_value", "max_value"]
    )
    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_rejected(self, field: str, value: float) -> None:
        """Infinite and NaN parameters fail validation."""
        with pytest.raises(ValidationError):
            GeneratorConfig(**{field: value})

    def test_frozen_and_hashable(self, default_config: GeneratorConfig) -> None:
        """Configs are immutable and usable as dict keys."""
        with pytest.raises(ValidationError):
            default_config.seed = 5
        assert hash(default_config) == hash(GeneratorConfig())

    def test_with_seed(self, default_config: GeneratorConfig) -> None:
        """with_seed copies with only the seed changed."""
        other = default_config.with_seed(42)
        assert other.seed == 42
        assert other.bands == default_config.bands
        assert default_config.seed == 1


class TestLoadConfig:
    """Tests for TOML loading."""

    def test_default_file_matches_builtin(self) -> None:
        """The shipped default config equals the built-in defaults."""
        assert load_config(CONFIGS_DIR / "default.toml") == GeneratorConfig()

    def test_cells_file(self) -> None:
        """The cells config mixes gradient and cell bands."""
        config = load_config(CONFIGS_DIR / "cells.toml")
        assert config.seed == 3
        assert config.chunk_size == 32
        assert [b.kind for b in config.bands] == [NoiseKind.GRADIENT, NoiseKind.CELL]

    def test_tmp_file_without_bands(self, tmp_path: Path) -> None:
        """Files without bands derive them from the base scale."""
        path = tmp_path / "small.toml"
        path.write_text("[generator]\nseed = 9\nscale = 0.05\n")
        config = load_config(path)
        assert config.seed == 9
        assert config.bands == default_bands(scale=0.05)

    def test_missing_table_uses_defaults(self, tmp_path: Path) -> None:
        """A file without a [generator] table loads the defaults."""
        path = tmp_path / "empty.toml"
        path.write_text("# nothing here\n")
        assert load_config(path) == GeneratorConfig()

    def test_invalid_values(self, tmp_path: Path) -> None:
        """Validation failures raise InvalidConfigError."""
        path = tmp_path / "bad.toml"
        path.write_text("[generator]\nchunk_size = 0\n")
        with pytest.raises(InvalidConfigError) as exc_info:
            load_config(path)
        assert isinstance(exc_info.value, ChunkGenError)

    def test_non_finite_values(self, tmp_path: Path) -> None:
        """TOML inf and nan literals are rejected."""
        path = tmp_path / "inf.toml"
        path.write_text("[generator]\nscale = inf\nwarp_factor = nan\n")
        with pytest.raises(InvalidConfigError):
            load_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")


class TestFindConfig:
    """Tests for config discovery."""

    def test_by_name(self) -> None:
        """Names resolve inside the configs directory."""
        assert find_config("default") == CONFIGS_DIR / "default.toml"

    def test_by_path(self, tmp_path: Path) -> None:
        """Paths are returned as given when they exist."""
        path = tmp_path / "mine.toml"
        path.write_text("[generator]\n")
        assert find_config(str(path)) == path

    def test_missing(self) -> None:
        """Unknown names raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            find_config("does-not-exist")
        with pytest.raises(FileNotFoundError):
            find_config("missing/path.toml")

    def test_list_configs(self) -> None:
        """Shipped configs are listed by stem."""
        assert list_configs() == ["cells", "default"]
