"""Puzzle generation engine for crossletters."""

from .models import (
    BLANK,
    Direction,
    Cell,
    Placement,
    GuessTier,
    WordStatus,
    FoundWord,
    GuessOutcome,
    ValidationError,
)
from .config import GameSettings, GenerationConfig, DictionaryConfig, AppConfig, load_config
from .subwords import SubwordExtractor, iter_arrangements, order_candidates, common_subwords
from .morphology import filter_inflections, is_redundant, reduced_roots
from .grid import PlacementGrid, render_grid, verify_grid
from .placement import (
    AdjacencyPolicy,
    SimpleBlankAdjacency,
    FullSequenceValidation,
    GridPlacer,
    make_policy,
)
from .state import PuzzleState
from .guesses import GuessValidator, MIN_GUESS_LENGTH
from .puzzle import PuzzleEngine

__all__ = [
    # Models
    "BLANK",
    "Direction",
    "Cell",
    "Placement",
    "GuessTier",
    "WordStatus",
    "FoundWord",
    "GuessOutcome",
    "ValidationError",
    # Configuration
    "GameSettings",
    "GenerationConfig",
    "DictionaryConfig",
    "AppConfig",
    "load_config",
    # Subwords
    "SubwordExtractor",
    "iter_arrangements",
    "order_candidates",
    "common_subwords",
    # Morphology
    "filter_inflections",
    "is_redundant",
    "reduced_roots",
    # Grid
    "PlacementGrid",
    "render_grid",
    "verify_grid",
    # Placement
    "AdjacencyPolicy",
    "SimpleBlankAdjacency",
    "FullSequenceValidation",
    "GridPlacer",
    "make_policy",
    # Play
    "PuzzleState",
    "GuessValidator",
    "MIN_GUESS_LENGTH",
    "PuzzleEngine",
]
