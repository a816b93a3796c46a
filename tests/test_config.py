"""Tests for world configuration."""

import pytest
from pydantic import ValidationError

from riverworld.config import (
    GenerationConfig,
    WorldConfig,
    find_config,
    list_configs,
    load_config,
)


class TestGenerationConfig:
    def test_defaults(self) -> None:
        config = GenerationConfig()
        assert config.chunk_size == 10
        assert config.river_min_width == 1
        assert config.river_max_width == 2
        assert config.river_fork_probability == 0.08
        assert config.river_convergence_probability == 0.02
        assert config.river_turn_probability == 0.15
        assert config.river_sources_min == 1
        assert config.river_sources_max == 1
        assert config.river_segment_length == 8
        assert config.river_meander_amount == 0.3

    def test_chunk_too_small(self) -> None:
        with pytest.raises(ValidationError, match="chunk_size"):
            GenerationConfig(chunk_size=8)

    def test_width_bounds_ordered(self) -> None:
        with pytest.raises(ValidationError, match="widths"):
            GenerationConfig(river_min_width=3, river_max_width=2)

    def test_source_bounds_ordered(self) -> None:
        with pytest.raises(ValidationError, match="sources"):
            GenerationConfig(river_sources_min=0)

    def test_probability_range(self) -> None:
        with pytest.raises(ValidationError, match="river_turn_probability"):
            GenerationConfig(river_turn_probability=1.5)


class TestWorldConfig:
    def test_defaults(self) -> None:
        config = WorldConfig()
        assert config.seed is None
        assert config.generation == GenerationConfig()


class TestLoadConfig:
    def test_load_from_file(self, temp_dir) -> None:
        path = temp_dir / "world.toml"
        path.write_text(
            """
seed = 77

[generation]
chunk_size = 16
river_sources_max = 3
"""
        )

        config = load_config(path)

        assert config.seed == 77
        assert config.generation.chunk_size == 16
        assert config.generation.river_sources_max == 3
        assert config.generation.river_segment_length == 8

    def test_missing_file(self, temp_dir) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(temp_dir / "nope.toml")

    def test_invalid_values(self, temp_dir) -> None:
        path = temp_dir / "bad.toml"
        path.write_text("[generation]\nriver_min_width = 5\n")
        with pytest.raises(ValidationError):
            load_config(path)


class TestFindConfig:
    def test_bundled_configs_listed(self) -> None:
        names = list_configs()
        assert "default" in names
        assert "wide_rivers" in names

    def test_find_by_name(self) -> None:
        path = find_config("default")
        assert path.name == "default.toml"
        assert load_config(path).generation == GenerationConfig()

    def test_find_by_path(self, temp_dir) -> None:
        path = temp_dir / "custom.toml"
        path.write_text("seed = 1\n")
        assert find_config(str(path)) == path

    def test_unknown_name(self) -> None:
        with pytest.raises(FileNotFoundError, match="not found"):
            find_config("does_not_exist")

    def test_bundled_wide_rivers(self) -> None:
        config = load_config(find_config("wide_rivers"))
        assert config.seed == 1234
        assert config.generation.chunk_size == 32
