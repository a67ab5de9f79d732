"""The puzzle state: one generated grid plus the player's progress."""

from typing import Dict, List, Optional, Set

from pydantic import BaseModel, Field

from .grid import PlacementGrid, render_grid
from .models import Cell, FoundWord, WordStatus


class PuzzleState(BaseModel):
    """
    One generated puzzle and the player's progress through it.

    Created once per puzzle and replaced wholesale on regeneration; after
    creation only `found_words` and `revealed` change.

    Attributes:
        target_word: The word whose letters form the pool
        candidates: Ordered candidate set handed to the placer
        grid: The cropped placement grid
        found_words: Accepted guesses keyed by word
        revealed: Cells currently showing their letter
        seed: Seed the puzzle was generated with, if any
    """

    target_word: str = Field(..., min_length=1, pattern=r'^[A-Z]+$')
    candidates: List[str] = Field(default_factory=list)
    grid: PlacementGrid
    found_words: Dict[str, FoundWord] = Field(default_factory=dict)
    revealed: Set[Cell] = Field(default_factory=set)
    seed: Optional[int] = None

    @property
    def letters(self) -> List[str]:
        """The letter pool the player spells guesses from."""
        return list(self.target_word)

    @property
    def candidate_set(self) -> Set[str]:
        """Words a guess must be one of to be recorded."""
        return set(self.candidates)

    @property
    def placed_words(self) -> List[str]:
        return self.grid.placed_words

    @property
    def score(self) -> int:
        return sum(len(word) * 10 for word in self.found_words)

    @property
    def is_complete(self) -> bool:
        """Whether every word on the grid has been found."""
        return all(word in self.found_words for word in self.grid.placements)

    def add_found_word(self, found: FoundWord) -> bool:
        """Record a found word. Returns False if it was already found."""
        if found.word in self.found_words:
            return False
        self.found_words[found.word] = found
        return True

    def show_word(self, word: str) -> WordStatus:
        """
        Reveal every cell of a placed word.

        Returns:
            ALREADY_IN_GRID if all its cells were showing already,
            SHOWN_FIRST_TIME if any cell was newly revealed,
            NOT_IN_GRID if the word is not placed
        """
        placement = self.grid.placements.get(word)
        if placement is None:
            return WordStatus.NOT_IN_GRID

        cells = set(placement.cells())
        was_revealed = cells <= self.revealed
        self.revealed |= cells
        return WordStatus.ALREADY_IN_GRID if was_revealed else WordStatus.SHOWN_FIRST_TIME

    def reveal_temporarily(self, word: str) -> None:
        """Show a placed word's letters, e.g. while a hint is displayed."""
        placement = self.grid.placements.get(word)
        if placement is not None:
            self.revealed |= set(placement.cells())

    def hide(self, word: str) -> None:
        """
        Hide a placed word's letters again, keeping every cell that belongs
        to a word the player has already found.
        """
        placement = self.grid.placements.get(word)
        if placement is None:
            return

        keep: Set[Cell] = set()
        for found in self.found_words:
            found_placement = self.grid.placements.get(found)
            if found_placement is not None:
                keep.update(found_placement.cells())

        self.revealed -= set(placement.cells()) - keep

    def word_at(self, x: int, y: int) -> Optional[str]:
        """The first placed word covering (x, y) that has not been found yet."""
        for word, placement in self.grid.placements.items():
            if word in self.found_words:
                continue
            if placement.covers(x, y):
                return word
        return None

    def render(self, solution: bool = False) -> str:
        """Draw the grid, hiding unrevealed letters unless `solution` is set."""
        return render_grid(self.grid, None if solution else self.revealed)

    def get_state(self) -> Dict:
        """
        Get a summary of the puzzle as a dictionary.

        Useful for logging and the CLI.
        """
        return {
            "target_word": self.target_word,
            "num_candidates": len(self.candidates),
            "placed_words": self.placed_words,
            "grid_size": (self.grid.width, self.grid.height),
            "found_words": sorted(self.found_words),
            "score": self.score,
            "is_complete": self.is_complete,
        }
