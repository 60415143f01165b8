from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import InvalidConfiguration
from .results import NotFound
from .score import PlayerScore, ScoreCard
from .space import Space

Coord = Tuple[int, int]  # (col, row); row 0 is the top row


@dataclass
class Board:
    """A width x height grid of spaces with its own win detection.

    Index codes follow a phone keypad turned upside down: the bottom-left
    space is 1 and codes grow left-to-right, then bottom-to-top.
    """
    width: int
    height: int
    grid: List[Space] = field(default_factory=list)  # row-major, length == width * height

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1:
            raise InvalidConfiguration(f'Invalid board size {self.width}x{self.height}')
        if not self.grid:
            self.grid = [Space() for _ in range(self.width * self.height)]
        elif len(self.grid) != self.width * self.height:
            raise InvalidConfiguration(
                f'Board grid has {len(self.grid)} spaces, expected {self.width * self.height}'
            )

    def index(self, col: int, row: int) -> int:
        """Calculates the 1D grid index for a given column and row."""
        return row * self.width + col

    def space_at(self, col: int, row: int) -> Space:
        return self.grid[self.index(col, row)]

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates, top row first."""
        for row in range(self.height):
            for col in range(self.width):
                yield (col, row)

    def rows(self) -> Iterator[List[Space]]:
        for row in range(self.height):
            start = row * self.width
            yield self.grid[start:start + self.width]

    def index_code(self, col: int, row: int) -> int:
        return self.width * (self.height - 1) + col - row * self.width + 1

    def coordinates_from_index_code(self, code: int) -> Union[Coord, NotFound]:
        for coord in self.coords():
            if self.index_code(*coord) == code:
                return coord
        return NotFound()

    @property
    def space_index_code_length(self) -> int:
        """Number of digits needed to type any space code on this board."""
        return len(str(self.width * self.height))

    @property
    def is_full(self) -> bool:
        return all(space.mark is not None for space in self.grid)

    def _lines(self) -> Iterator[List[Space]]:
        yield from self.rows()
        for col in range(self.width):
            yield [self.space_at(col, row) for row in range(self.height)]
        if self.width == self.height:
            size = self.width
            yield [self.space_at(i, i) for i in range(size)]
            yield [self.space_at(size - 1 - i, i) for i in range(size)]

    @staticmethod
    def _line_owner(line: Sequence[Space]) -> Optional[str]:
        first = line[0].mark
        if first is None:
            return None
        if all(space.mark == first for space in line):
            return first
        return None

    @property
    def score_card(self) -> ScoreCard:
        """One point per completed row, column or diagonal, recomputed on every call."""
        contributions = []
        for line in self._lines():
            owner = self._line_owner(line)
            if owner is not None:
                contributions.append(PlayerScore(owner, 1))
        return ScoreCard.from_contributions(contributions)

    @property
    def is_done(self) -> bool:
        return self.is_full or self.score_card.highest_score is not None
