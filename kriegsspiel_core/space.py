from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Set

Mark = str  # single-character player symbol

BLANK = ' '


@dataclass
class Space:
    """A single cell: its mark (if played) and the players who have seen it."""
    mark: Optional[Mark] = None
    known_to: Set[Mark] = field(default_factory=set)

    def is_known_to_player(self, player: Mark) -> bool:
        return player in self.known_to

    def reveal_to(self, player: Mark) -> None:
        self.known_to.add(player)

    def display_for(self, player: Optional[Mark]) -> str:
        """Returns the mark if `player` may see it, otherwise a blank.

        Passing None reveals the true content (used once the game is over).
        """
        if self.mark is None:
            return BLANK
        if player is None or self.is_known_to_player(player):
            return self.mark
        return BLANK
