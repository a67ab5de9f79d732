"""Configuration models and YAML loading."""

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, model_validator


PolicyName = Literal["full", "simple"]


class GameSettings(BaseModel):
    """Player-facing settings: how long the target word and its subwords are."""
    min_word_length: int = Field(default=3, ge=3, le=10)
    max_word_length: int = Field(default=7, ge=3, le=10)

    @model_validator(mode="after")
    def _check_lengths(self) -> "GameSettings":
        if self.min_word_length > self.max_word_length:
            raise ValueError(
                f"min_word_length ({self.min_word_length}) exceeds "
                f"max_word_length ({self.max_word_length})"
            )
        return self


class GenerationConfig(BaseModel):
    """Knobs for the generation pipeline."""
    grid_width: int = Field(default=15, ge=3)
    grid_height: int = Field(default=15, ge=3)
    max_arrangements: int = Field(default=50_000, ge=1)
    max_subwords: int = Field(default=1500, ge=1)
    max_placed_words: int = Field(default=12, ge=1)
    policy: PolicyName = "full"
    padding: int = Field(default=0, ge=0, le=1)
    use_oracle_subwords: bool = False


class DictionaryConfig(BaseModel):
    """
    Word list files; None selects the bundled lists. `frequency_words` is how
    many wordfreq words the bundled large list takes in.
    """
    small: Optional[Path] = None
    large: Optional[Path] = None
    frequency_words: int = Field(default=50_000, ge=0)


class AppConfig(BaseModel):
    """Configuration for an engine instance."""
    settings: GameSettings = Field(default_factory=GameSettings)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    dictionaries: DictionaryConfig = Field(default_factory=DictionaryConfig)
    seed: Optional[int] = None

    @model_validator(mode="after")
    def _check_grid_fits_target(self) -> "AppConfig":
        longest = self.settings.max_word_length
        if min(self.generation.grid_width, self.generation.grid_height) < longest:
            raise ValueError(
                f"Grid {self.generation.grid_width}x{self.generation.grid_height} "
                f"cannot hold a {longest}-letter word"
            )
        return self


def load_config(config_path: str | Path) -> AppConfig:
    """Load engine configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return AppConfig(**data)
