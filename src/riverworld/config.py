"""World generation configuration loading from TOML files."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

# Origin-chunk river sources are placed at 5..size-5 along an edge.
MIN_CHUNK_SIZE = 10


class GenerationConfig(BaseModel):
    """River carving constants, consumed verbatim by the generator."""

    chunk_size: int = Field(default=10, description="Chunk edge length in tiles")
    river_min_width: int = Field(default=1, description="Minimum river width in tiles")
    river_max_width: int = Field(default=2, description="Maximum river width in tiles")
    river_fork_probability: float = Field(
        default=0.08, description="Chance per segment that a river forks"
    )
    river_convergence_probability: float = Field(
        default=0.02, description="Chance that two rivers merge (not used by carving)"
    )
    river_turn_probability: float = Field(
        default=0.15, description="Chance per segment that a river turns 45 degrees"
    )
    river_sources_min: int = Field(default=1, description="Minimum origin river sources")
    river_sources_max: int = Field(default=1, description="Maximum origin river sources")
    river_segment_length: int = Field(
        default=8, description="Steps carved per cursor before fork/turn rolls"
    )
    river_meander_amount: float = Field(
        default=0.3, description="Maximum per-axis jitter added to each step"
    )

    @model_validator(mode="after")
    def _check_ranges(self) -> "GenerationConfig":
        if self.chunk_size < MIN_CHUNK_SIZE:
            raise ValueError(f"chunk_size must be at least {MIN_CHUNK_SIZE}")
        if not 1 <= self.river_min_width <= self.river_max_width:
            raise ValueError("river widths must satisfy 1 <= min <= max")
        if not 1 <= self.river_sources_min <= self.river_sources_max:
            raise ValueError("river sources must satisfy 1 <= min <= max")
        if self.river_segment_length < 1:
            raise ValueError("river_segment_length must be positive")
        for name in (
            "river_fork_probability",
            "river_convergence_probability",
            "river_turn_probability",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        return self


class WorldConfig(BaseModel):
    """Complete configuration for a world."""

    seed: int | None = Field(default=None, description="World seed (random if unset)")
    generation: GenerationConfig = Field(default_factory=GenerationConfig)


def load_config(config_path: Path) -> WorldConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed WorldConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If TOML is malformed.
        pydantic.ValidationError: If values are out of range.
    """
    with open(config_path, "rb") as f:
        data = tomllib.load(f)
    return WorldConfig.model_validate(data)


def _configs_dir() -> Path:
    return Path(__file__).parent.parent.parent / "configs"


def find_config(name: str) -> Path:
    """Find a config file by name.

    Searches in the following order:
    1. Exact path if name contains path separator or ends in .toml
    2. configs/{name}.toml
    3. configs/{name}

    Raises:
        FileNotFoundError: If config file is not found.
    """
    if "/" in name or name.endswith(".toml"):
        path = Path(name)
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {name}")

    configs_dir = _configs_dir()

    config_path = configs_dir / f"{name}.toml"
    if config_path.exists():
        return config_path

    config_path = configs_dir / name
    if config_path.exists():
        return config_path

    raise FileNotFoundError(
        f"Config '{name}' not found in {configs_dir}. "
        f"Available configs: {list_configs()}"
    )


def list_configs() -> list[str]:
    """List available config names."""
    configs_dir = _configs_dir()
    if not configs_dir.exists():
        return []
    return sorted(p.stem for p in configs_dir.glob("*.toml"))
