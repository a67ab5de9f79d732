"""The letter grid, its placement table, and the caches derived from them."""

import logging
from typing import Dict, Iterator, List, Optional, Set, Tuple

from pydantic import BaseModel, Field, PrivateAttr, model_validator

from .models import BLANK, Cell, Direction, Placement, ValidationError

logger = logging.getLogger(__name__)

# Speculative writes for one placement attempt: fresh cell -> letter
Overlay = Dict[Cell, str]

# A maximal run of letters: (text, first cell, direction)
Run = Tuple[str, Cell, Direction]


class PlacementGrid(BaseModel):
    """
    A fixed-size letter matrix together with the words placed on it.

    The matrices are indexed [y][x]. `orientations` records the direction of
    the first word that wrote each cell. The letter index (letter -> cells)
    and the coverage map (cell -> directions of the words crossing it) are
    caches over the matrix and the placement table; they are updated on every
    commit and rebuilt after a crop or a reload.

    Attributes:
        width: Number of columns
        height: Number of rows
        letters: Letter matrix, BLANK for empty cells
        orientations: Direction of the first word written into each cell
        placements: Placed word -> its placement
        cropped: Whether the grid has been shrunk to its occupied region
    """

    width: int = Field(..., ge=0)
    height: int = Field(..., ge=0)
    letters: List[List[str]]
    orientations: List[List[Optional[Direction]]]
    placements: Dict[str, Placement] = Field(default_factory=dict)
    min_x: Optional[int] = None
    min_y: Optional[int] = None
    max_x: Optional[int] = None
    max_y: Optional[int] = None
    cropped: bool = False

    _char_index: Dict[str, List[Cell]] = PrivateAttr(default_factory=dict)
    _coverage: Dict[Cell, Set[str]] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_shape(self) -> "PlacementGrid":
        if len(self.letters) != self.height or any(len(row) != self.width for row in self.letters):
            raise ValueError(f"Letter matrix does not match {self.width}x{self.height}")
        if len(self.orientations) != self.height or any(len(row) != self.width for row in self.orientations):
            raise ValueError(f"Orientation matrix does not match {self.width}x{self.height}")
        return self

    def model_post_init(self, __context) -> None:
        """Build the caches from the matrix and the placement table."""
        self._rebuild_caches()

    @classmethod
    def empty(cls, width: int, height: int) -> "PlacementGrid":
        """Create a blank grid of the given size."""
        return cls(
            width=width,
            height=height,
            letters=[[BLANK] * width for _ in range(height)],
            orientations=[[None] * width for _ in range(height)],
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def placed_words(self) -> List[str]:
        return list(self.placements)

    @property
    def bounds(self) -> Optional[Tuple[int, int, int, int]]:
        """(min_x, min_y, max_x, max_y) of the occupied cells, None if empty."""
        if self.min_x is None:
            return None
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def letter_at(self, x: int, y: int, overlay: Optional[Overlay] = None) -> str:
        """The letter at a cell, reading through `overlay`. Off-grid cells are blank."""
        if overlay and (x, y) in overlay:
            return overlay[(x, y)]
        if not self.in_bounds(x, y):
            return BLANK
        return self.letters[y][x]

    def is_blank(self, x: int, y: int, overlay: Optional[Overlay] = None) -> bool:
        return self.letter_at(x, y, overlay) == BLANK

    def orientation_at(self, x: int, y: int) -> Optional[Direction]:
        return self.orientations[y][x]

    def positions_of(self, letter: str) -> List[Cell]:
        """Cells currently holding `letter`."""
        return list(self._char_index.get(letter, []))

    def occupancy(self, letter: str) -> int:
        return len(self._char_index.get(letter, []))

    def neighbor_count(self, x: int, y: int) -> int:
        """Number of occupied cells orthogonally adjacent to (x, y)."""
        return sum(
            1 for nx, ny in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1))
            if not self.is_blank(nx, ny)
        )

    def read(self, placement: Placement) -> str:
        """Read the letters a placement covers off the grid."""
        return "".join(self.letter_at(x, y) for x, y in placement.cells())

    def occupied_cells(self) -> List[Cell]:
        return [
            (x, y)
            for y, row in enumerate(self.letters)
            for x, letter in enumerate(row)
            if letter != BLANK
        ]

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def attempt(self, placement: Placement) -> Optional[Overlay]:
        """
        Check whether a word can be written at `placement` without breaking
        the grid's structure, and return the writes it would make.

        The word must lie on the grid, agree with every letter already
        there, have a blank (or off-grid) cell immediately before and after
        it, not run along a word already covering one of its cells in the
        same direction, and add at least one new letter.

        Returns:
            Overlay of fresh cells to letters, or None if the placement is
            structurally impossible
        """
        if self.cropped:
            raise ValueError("Cannot place words on a cropped grid")

        cells = placement.cells()
        if not all(self.in_bounds(x, y) for x, y in cells):
            return None

        before = placement.cell_at(-1)
        after = placement.cell_at(len(placement.word))
        if not self.is_blank(*before) or not self.is_blank(*after):
            return None

        overlay: Overlay = {}
        for (x, y), letter in zip(cells, placement.word):
            current = self.letters[y][x]
            if current == BLANK:
                overlay[(x, y)] = letter
            elif current != letter:
                return None
            elif placement.direction in self._coverage.get((x, y), ()):
                return None

        if not overlay:
            return None
        return overlay

    def commit(self, placement: Placement, overlay: Overlay) -> None:
        """Apply an attempt's overlay and record the placement."""
        if self.cropped:
            raise ValueError("Cannot place words on a cropped grid")
        if placement.word in self.placements:
            raise ValueError(f"'{placement.word}' is already placed")

        for (x, y), letter in overlay.items():
            self.letters[y][x] = letter
            self.orientations[y][x] = placement.direction
            self._char_index.setdefault(letter, []).append((x, y))

        for cell in placement.cells():
            self._coverage.setdefault(cell, set()).add(placement.direction)

        self.placements[placement.word] = placement
        self._extend_bounds(placement)
        logger.debug("Placed %s at (%d, %d) %s", placement.word, placement.x, placement.y, placement.direction)

    def place(self, placement: Placement) -> bool:
        """Attempt and commit in one step, without any adjacency policy."""
        overlay = self.attempt(placement)
        if overlay is None:
            return False
        self.commit(placement, overlay)
        return True

    def crop(self, padding: int = 0) -> None:
        """
        Shrink the grid to the rectangle holding every letter, surrounded by
        `padding` blank cells, and shift all placements to match.

        Raises:
            ValueError: If the grid was already cropped
        """
        if self.cropped:
            raise ValueError("Grid has already been cropped")

        occupied = self.occupied_cells()
        if occupied:
            min_x = min(x for x, _ in occupied)
            min_y = min(y for _, y in occupied)
            max_x = max(x for x, _ in occupied)
            max_y = max(y for _, y in occupied)
        else:
            min_x = min_y = 0
            max_x = max_y = -1

        new_width = max_x - min_x + 1 + 2 * padding
        new_height = max_y - min_y + 1 + 2 * padding
        dx = padding - min_x
        dy = padding - min_y

        letters = [[BLANK] * new_width for _ in range(new_height)]
        orientations: List[List[Optional[Direction]]] = [[None] * new_width for _ in range(new_height)]
        for x, y in occupied:
            letters[y + dy][x + dx] = self.letters[y][x]
            orientations[y + dy][x + dx] = self.orientations[y][x]

        self.width = new_width
        self.height = new_height
        self.letters = letters
        self.orientations = orientations
        self.placements = {word: p.shifted(dx, dy) for word, p in self.placements.items()}
        self.cropped = True
        self._rebuild_caches()
        logger.debug("Cropped grid to %dx%d", new_width, new_height)

    def _extend_bounds(self, placement: Placement) -> None:
        (x0, y0), (x1, y1) = placement.cell_at(0), placement.end
        self.min_x = x0 if self.min_x is None else min(self.min_x, x0)
        self.min_y = y0 if self.min_y is None else min(self.min_y, y0)
        self.max_x = x1 if self.max_x is None else max(self.max_x, x1)
        self.max_y = y1 if self.max_y is None else max(self.max_y, y1)

    def _rebuild_caches(self) -> None:
        self._char_index = {}
        for x, y in self.occupied_cells():
            self._char_index.setdefault(self.letters[y][x], []).append((x, y))

        self._coverage = {}
        self.min_x = self.min_y = self.max_x = self.max_y = None
        for placement in self.placements.values():
            for cell in placement.cells():
                self._coverage.setdefault(cell, set()).add(placement.direction)
            self._extend_bounds(placement)

    # ------------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------------

    def _line_runs(self, cells: List[Cell], direction: Direction, overlay: Optional[Overlay]) -> Iterator[Run]:
        """Maximal runs of two or more letters along one row or column."""
        text = ""
        start: Optional[Cell] = None
        for x, y in cells + [(-1, -1)]:  # sentinel flushes the last run
            letter = self.letter_at(x, y, overlay)
            if letter != BLANK:
                if not text:
                    start = (x, y)
                text += letter
            else:
                if len(text) >= 2:
                    yield (text, start, direction)
                text = ""

    def runs_touching(
        self,
        x0: int,
        y0: int,
        x1: int,
        y1: int,
        overlay: Optional[Overlay] = None
    ) -> List[Run]:
        """Every maximal run of 2+ letters that has a cell inside the rectangle."""
        runs: List[Run] = []
        for y in range(max(0, y0), min(self.height - 1, y1) + 1):
            row = [(x, y) for x in range(self.width)]
            for text, (sx, sy), direction in self._line_runs(row, "H", overlay):
                if sx <= x1 and sx + len(text) - 1 >= x0:
                    runs.append((text, (sx, sy), direction))
        for x in range(max(0, x0), min(self.width - 1, x1) + 1):
            column = [(x, y) for y in range(self.height)]
            for text, (sx, sy), direction in self._line_runs(column, "V", overlay):
                if sy <= y1 and sy + len(text) - 1 >= y0:
                    runs.append((text, (sx, sy), direction))
        return runs

    def words_on_grid(self) -> Set[str]:
        """Extract all horizontal and vertical runs (2+ letters) from the grid."""
        return {
            text for text, _, _ in
            self.runs_touching(0, 0, self.width - 1, self.height - 1)
        }


def render_grid(
    grid: PlacementGrid,
    revealed: Optional[Set[Cell]] = None,
    hidden: str = "#",
    blank: str = "."
) -> str:
    """
    Render the grid to a string.

    When `revealed` is given, letters outside it are drawn as `hidden`.
    """
    lines = []
    for y, row in enumerate(grid.letters):
        line = ""
        for x, letter in enumerate(row):
            if letter == BLANK:
                line += blank
            elif revealed is not None and (x, y) not in revealed:
                line += hidden
            else:
                line += letter
        lines.append(line)
    return "\n".join(lines)


def verify_grid(grid: PlacementGrid) -> List[ValidationError]:
    """
    Check that the letter matrix and the placement table agree.

    Reports placements running off the grid, placements whose letters differ
    from the grid, placements disagreeing on a shared cell, and letters that
    belong to no placement.
    """
    errors: List[ValidationError] = []
    implied: Dict[Cell, Tuple[str, str]] = {}

    for word, placement in grid.placements.items():
        for (x, y), letter in zip(placement.cells(), word):
            if (x, y) in implied and implied[(x, y)][0] != letter:
                other_letter, other_word = implied[(x, y)]
                errors.append(ValidationError(
                    code="GRID_CONFLICT",
                    message=f"Cell conflict at {(x, y)}: '{other_letter}' from '{other_word}' vs '{letter}' from '{word}'",
                    word=word,
                    cell=(x, y),
                ))
            implied.setdefault((x, y), (letter, word))

            if not grid.in_bounds(x, y):
                errors.append(ValidationError(
                    code="OUT_OF_BOUNDS",
                    message=f"'{word}' runs off the grid at {(x, y)}",
                    word=word,
                    cell=(x, y),
                ))
            elif grid.letters[y][x] != letter:
                errors.append(ValidationError(
                    code="PLACEMENT_MISMATCH",
                    message=f"Grid holds '{grid.letters[y][x]}' at {(x, y)} but '{word}' needs '{letter}'",
                    word=word,
                    cell=(x, y),
                ))

    for cell in grid.occupied_cells():
        if cell not in implied:
            x, y = cell
            errors.append(ValidationError(
                code="ORPHAN_LETTER",
                message=f"Letter '{grid.letters[y][x]}' at {cell} belongs to no placed word",
                cell=cell,
            ))

    return errors
