from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Success:
    """The mark was placed."""


@dataclass(frozen=True)
class AlreadyPlayed:
    """The space already holds the acting player's own mark."""


@dataclass(frozen=True)
class AlreadyRevealedMark:
    """The acting player discovered an opponent's mark."""
    mark: str


@dataclass(frozen=True)
class NotFound:
    """A board or space code that maps to nothing."""


@dataclass(frozen=True)
class BoardIsDone:
    """The selected board is already won or full."""


@dataclass(frozen=True)
class BoardIndex:
    """A validated, 0-based board index."""
    index: int


PlayResult = Union[Success, AlreadyPlayed, AlreadyRevealedMark, NotFound]
SelectResult = Union[BoardIndex, NotFound, BoardIsDone]


def consumes_turn(result: PlayResult) -> bool:
    """Whether the driver should advance the turn after this play."""
    return isinstance(result, (Success, AlreadyRevealedMark))
