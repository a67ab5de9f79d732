"""
Grid placement: lay candidate words into a letter grid, crossword style.

The first word is dropped near the middle of an empty grid; every later word
must cross a letter already on the grid at right angles. Whether a crossing
is acceptable is decided by an adjacency policy:

1. SimpleBlankAdjacency - new letters may not touch other letters sideways
2. FullSequenceValidation - every run of letters the crossing touches must
   be a dictionary word
"""

import logging
import random
from typing import Dict, Iterable, Iterator, List, Optional, Type

from ..dictionary import WordOracle
from .grid import Overlay, PlacementGrid
from .models import Direction, Placement, perpendicular
from .morphology import is_redundant

logger = logging.getLogger(__name__)

# Placement stops once this many words are on the grid
MAX_PLACED_WORDS = 12


class AdjacencyPolicy:
    """Decides whether a structurally valid attempt may be committed."""

    name = ""

    def accepts(self, grid: PlacementGrid, placement: Placement, overlay: Overlay) -> bool:
        raise NotImplementedError


class SimpleBlankAdjacency(AdjacencyPolicy):
    """Every freshly written letter must have blank cells on both sides of the word's line."""

    name = "simple"

    def accepts(self, grid: PlacementGrid, placement: Placement, overlay: Overlay) -> bool:
        for x, y in overlay:
            if placement.direction == "H":
                sides = ((x, y - 1), (x, y + 1))
            else:
                sides = ((x - 1, y), (x + 1, y))
            if any(not grid.is_blank(sx, sy) for sx, sy in sides):
                return False
        return True


class FullSequenceValidation(AdjacencyPolicy):
    """
    With the word written in, every run of two or more letters touching the
    word's rectangle (grown by one cell) must be a dictionary word.
    """

    name = "full"

    def __init__(self, dictionary: WordOracle):
        self.dictionary = dictionary

    def accepts(self, grid: PlacementGrid, placement: Placement, overlay: Overlay) -> bool:
        (x0, y0), (x1, y1) = placement.cell_at(0), placement.end
        for text, start, direction in grid.runs_touching(x0 - 1, y0 - 1, x1 + 1, y1 + 1, overlay):
            if not self.dictionary.is_word(text):
                logger.debug("Rejected %s: would form '%s' at %s %s", placement.word, text, start, direction)
                return False
        return True


POLICIES: Dict[str, Type[AdjacencyPolicy]] = {
    SimpleBlankAdjacency.name: SimpleBlankAdjacency,
    FullSequenceValidation.name: FullSequenceValidation,
}


def make_policy(name: str, dictionary: Optional[WordOracle] = None) -> AdjacencyPolicy:
    """
    Build an adjacency policy by name.

    Raises:
        ValueError: If the name is unknown or the full policy has no dictionary
    """
    if name == SimpleBlankAdjacency.name:
        return SimpleBlankAdjacency()
    if name == FullSequenceValidation.name:
        if dictionary is None:
            raise ValueError("The full sequence policy needs a dictionary")
        return FullSequenceValidation(dictionary)
    raise ValueError(f"Unknown adjacency policy '{name}' (expected one of {sorted(POLICIES)})")


class GridPlacer:
    """
    Places an ordered candidate list into a grid.

    Deterministic for a given seed. Each candidate is tried once: the first
    acceptable crossing is committed, otherwise the word is skipped.

    Attributes:
        policy: Adjacency policy judging each attempt
        max_words: Stop once this many words are placed
        padding: Blank border (0 or 1) added around the cropped grid
        seed: Seed for the placer's random choices
    """

    def __init__(
        self,
        policy: AdjacencyPolicy,
        max_words: int = MAX_PLACED_WORDS,
        padding: int = 0,
        seed: Optional[int] = None
    ):
        self.policy = policy
        self.max_words = max_words
        self.padding = padding
        self.seed = seed
        self._rng = random.Random(seed)

    def order_candidates(self, candidates: Iterable[str]) -> List[str]:
        """Longest words first, shuffled within each length."""
        by_length: Dict[int, List[str]] = {}
        for word in dict.fromkeys(candidates):
            by_length.setdefault(len(word), []).append(word)

        ordered: List[str] = []
        for length in sorted(by_length, reverse=True):
            group = by_length[length]
            self._rng.shuffle(group)
            ordered.extend(group)
        return ordered

    def place(self, candidates: Iterable[str], grid_width: int, grid_height: int) -> PlacementGrid:
        """Place the candidates into a new grid and crop it."""
        grid = PlacementGrid.empty(grid_width, grid_height)
        for _ in self.iter_place(grid, candidates):
            pass
        return grid

    def iter_place(self, grid: PlacementGrid, candidates: Iterable[str]) -> Iterator[Optional[Placement]]:
        """
        Place candidates one at a time, yielding after each attempt.

        Yields the committed placement, or None when the candidate was
        skipped. The grid is cropped once the candidates are exhausted or the
        word limit is reached; a consumer that stops early gets no crop.
        """
        for word in self.order_candidates(candidates):
            if len(grid.placements) >= self.max_words:
                break

            if not grid.placements:
                placement = self._place_anchor(grid, word)
            elif is_redundant(word, grid.placements):
                logger.debug("Skipping %s: inflection of a placed word", word)
                placement = None
            else:
                placement = self._place_crossing(grid, word)

            yield placement

        grid.crop(self.padding)
        logger.info("Placed %d words: %s", len(grid.placements), ", ".join(grid.placements))

    def _place_anchor(self, grid: PlacementGrid, word: str) -> Optional[Placement]:
        """Drop the first word near the middle of the empty grid."""
        first: Direction = "H" if self._rng.random() < 0.5 else "V"
        for direction in (first, perpendicular(first)):
            if direction == "H":
                if len(word) > grid.width or grid.height == 0:
                    continue
                y = min(grid.height - 1, grid.height // 4 + self._rng.randrange(max(1, grid.height // 2)))
                x = self._rng.randint(0, grid.width - len(word))
            else:
                if len(word) > grid.height or grid.width == 0:
                    continue
                x = min(grid.width - 1, grid.width // 4 + self._rng.randrange(max(1, grid.width // 2)))
                y = self._rng.randint(0, grid.height - len(word))

            placement = Placement(word=word, x=x, y=y, direction=direction)
            if grid.place(placement):
                return placement

        logger.debug("Anchor %s does not fit a %dx%d grid", word, grid.width, grid.height)
        return None

    def _place_crossing(self, grid: PlacementGrid, word: str) -> Optional[Placement]:
        """Try to cross the word through a letter already on the grid."""
        # Rarest letters first: fewer cells to try
        letters = sorted(dict.fromkeys(word), key=grid.occupancy)

        for letter in letters:
            keyed = [(grid.neighbor_count(x, y), self._rng.random(), (x, y)) for x, y in grid.positions_of(letter)]
            keyed.sort()

            for _, _, (x, y) in keyed:
                direction = perpendicular(grid.orientation_at(x, y))
                for index, char in enumerate(word):
                    if char != letter:
                        continue
                    if direction == "H":
                        placement = Placement(word=word, x=x - index, y=y, direction=direction)
                    else:
                        placement = Placement(word=word, x=x, y=y - index, direction=direction)

                    overlay = grid.attempt(placement)
                    if overlay is None or not self.policy.accepts(grid, placement, overlay):
                        continue

                    grid.commit(placement, overlay)
                    return placement

        logger.debug("No crossing found for %s", word)
        return None
