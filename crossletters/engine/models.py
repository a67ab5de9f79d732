"""Data models shared across the puzzle engine."""

from enum import Enum
from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, Field


BLANK = "_"

# Type aliases
Direction = Literal["H", "V"]
Cell = Tuple[int, int]


def perpendicular(direction: Optional[str]) -> Direction:
    """The direction crossing `direction`; a cell with no recorded direction is crossed vertically."""
    return "V" if direction == "H" else "H"


class Placement(BaseModel):
    """Where a word sits on the grid: its first letter and its direction."""
    word: str = Field(..., min_length=1, pattern=r'^[A-Z]+$')
    x: int
    y: int
    direction: Direction

    @property
    def end(self) -> Cell:
        """The cell holding the last letter."""
        return self.cell_at(len(self.word) - 1)

    def cell_at(self, index: int) -> Cell:
        if self.direction == "H":
            return (self.x + index, self.y)
        return (self.x, self.y + index)

    def cells(self) -> List[Cell]:
        return [self.cell_at(i) for i in range(len(self.word))]

    def covers(self, x: int, y: int) -> bool:
        if self.direction == "H":
            return y == self.y and self.x <= x < self.x + len(self.word)
        return x == self.x and self.y <= y < self.y + len(self.word)

    def shifted(self, dx: int, dy: int) -> "Placement":
        return self.model_copy(update={"x": self.x + dx, "y": self.y + dy})


class GuessTier(str, Enum):
    """How a guess was accepted, in priority order."""
    IN_GRID = "IN_GRID"
    IN_SMALL_DICTIONARY = "IN_SMALL_DICTIONARY"
    IN_LARGE_DICTIONARY = "IN_LARGE_DICTIONARY"
    NOT_A_WORD = "NOT_A_WORD"


class WordStatus(str, Enum):
    """Outcome of showing a word in the grid."""
    ALREADY_IN_GRID = "ALREADY_IN_GRID"
    SHOWN_FIRST_TIME = "SHOWN_FIRST_TIME"
    NOT_IN_GRID = "NOT_IN_GRID"


class FoundWord(BaseModel):
    """A guess the player got right."""
    word: str
    tier: GuessTier


class GuessOutcome(BaseModel):
    """Result of submitting a guess."""
    guess: str
    tier: GuessTier
    accepted: bool = False
    already_found: bool = False
    status: Optional[WordStatus] = None  # Only set for IN_GRID guesses


class ValidationError(BaseModel):
    """A single grid consistency problem."""
    code: str
    message: str
    word: Optional[str] = None
    cell: Optional[Cell] = None
