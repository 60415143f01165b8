from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple


@dataclass(frozen=True)
class PlayerScore:
    player: str
    score: int


@dataclass(frozen=True)
class ScoreCard:
    """Per-player point totals, summed across every contribution merged in.

    Entries keep the order in which each player first scored.
    """
    scores: Tuple[PlayerScore, ...] = ()

    @classmethod
    def from_contributions(cls, contributions: Iterable[PlayerScore]) -> 'ScoreCard':
        totals: Dict[str, int] = {}
        for entry in contributions:
            totals[entry.player] = totals.get(entry.player, 0) + entry.score
        return cls(tuple(PlayerScore(p, s) for p, s in totals.items()))

    def merge(self, other: 'ScoreCard') -> 'ScoreCard':
        return ScoreCard.from_contributions(self.scores + other.scores)

    def __add__(self, other: 'ScoreCard') -> 'ScoreCard':
        return self.merge(other)

    def add_score(self, player: str, amount: int = 1) -> 'ScoreCard':
        return self.merge(ScoreCard((PlayerScore(player, amount),)))

    def score_for(self, player: str) -> int:
        for entry in self.scores:
            if entry.player == player:
                return entry.score
        return 0

    def as_dict(self) -> Dict[str, int]:
        return {entry.player: entry.score for entry in self.scores}

    @property
    def highest_score(self) -> Optional[PlayerScore]:
        """The single leading entry, or None when empty or tied for first."""
        if not self.scores:
            return None
        best = max(entry.score for entry in self.scores)
        leaders = [entry for entry in self.scores if entry.score == best]
        if len(leaders) != 1:
            return None
        return leaders[0]
