from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Set, Tuple

from .board import Board
from .errors import InvalidConfiguration
from .results import (
    AlreadyPlayed,
    AlreadyRevealedMark,
    BoardIndex,
    BoardIsDone,
    NotFound,
    PlayResult,
    SelectResult,
    Success,
)
from .score import ScoreCard

logger = logging.getLogger(__name__)

BoardSize = Tuple[int, int]  # (width, height)


def validate_symbols(players: Sequence[str]) -> None:
    """Rejects symbols that are not distinct, unambiguous single characters."""
    for symbol in players:
        if len(symbol) != 1:
            raise InvalidConfiguration(f'Player symbol {symbol!r} must be a single character')
        # Digits would collide with index codes typed at the prompt.
        if symbol.isspace() or symbol.isdigit():
            raise InvalidConfiguration(f'Player symbol {symbol!r} is ambiguous')
    if len(set(players)) != len(players):
        raise InvalidConfiguration('Player symbols must be distinct')


def validate_players(players: Sequence[str]) -> None:
    """Rejects player lists a game cannot be started with."""
    if len(players) < 2:
        raise InvalidConfiguration('At least two players are required')
    validate_symbols(players)


@dataclass
class GameState:
    """Represents one game: players, resignations, whose turn it is and every board."""
    players: List[str]
    boards: List[Board]
    resigned: Set[str] = field(default_factory=set)
    current_turn_index: int = 0  # index into active_players, not players

    def __post_init__(self) -> None:
        self._set_turn_index(self.current_turn_index)

    @classmethod
    def new(
        cls,
        players: Sequence[str],
        board_sizes: Sequence[BoardSize],
        randomize: bool = False,
        rng: Optional[random.Random] = None,
    ) -> 'GameState':
        validate_players(players)
        if not board_sizes:
            raise InvalidConfiguration('At least one board is required')
        boards = [Board(width=w, height=h) for (w, h) in board_sizes]
        order = list(players)
        if randomize:
            (rng or random.Random()).shuffle(order)
        logger.debug('New game: players=%s boards=%s', order, list(board_sizes))
        return cls(players=order, boards=boards)

    # ---------- Turn order ----------

    @property
    def active_players(self) -> List[str]:
        return [p for p in self.players if p not in self.resigned]

    @property
    def current_turn_player(self) -> Optional[str]:
        active = self.active_players
        if not active:
            return None
        return active[self.current_turn_index]

    def _set_turn_index(self, index: int) -> None:
        count = len(self.active_players)
        self.current_turn_index = index % count if count else 0

    def next_turn(self) -> None:
        self._set_turn_index(self.current_turn_index + 1)
        logger.debug('Turn passes to %s', self.current_turn_player)

    def resign(self, player: str) -> None:
        if player not in self.players:
            logger.warning('Ignoring resignation of unknown player %r', player)
            return
        if player in self.resigned:
            return
        current = self.current_turn_player
        self.resigned.add(player)
        active = self.active_players
        if current in active:
            # Someone else left; the same player keeps the turn.
            self._set_turn_index(active.index(current))
        else:
            # The player to move left; the next one in order now sits at their slot.
            self._set_turn_index(self.current_turn_index)
        logger.info('Player %s resigned; %s to move', player, self.current_turn_player)

    # ---------- Moves ----------

    def select_board(self, code: int) -> SelectResult:
        """Validates a 1-based board code and returns its 0-based index."""
        if code < 1 or code > len(self.boards):
            return NotFound()
        index = code - 1
        if self.boards[index].is_done:
            return BoardIsDone()
        return BoardIndex(index)

    def play_space(self, board_index: int, space_code: int) -> PlayResult:
        if board_index < 0 or board_index >= len(self.boards):
            return NotFound()
        coord = self.boards[board_index].coordinates_from_index_code(space_code)
        if isinstance(coord, NotFound):
            return coord
        return self.play_space_at(board_index, *coord)

    def play_space_at(self, board_index: int, col: int, row: int) -> PlayResult:
        if board_index < 0 or board_index >= len(self.boards):
            return NotFound()
        board = self.boards[board_index]
        if not (0 <= col < board.width and 0 <= row < board.height):
            return NotFound()
        player = self.current_turn_player
        if player is None:
            return NotFound()
        space = board.space_at(col, row)
        if space.mark == player:
            return AlreadyPlayed()
        space.reveal_to(player)
        if space.mark is not None:
            logger.debug('%s discovered %s at board %d (%d, %d)', player, space.mark, board_index + 1, col, row)
            return AlreadyRevealedMark(space.mark)
        space.mark = player
        logger.debug('%s marked board %d (%d, %d)', player, board_index + 1, col, row)
        return Success()

    # ---------- Boards and scoring ----------

    def active_board_indices(self) -> Iterator[int]:
        for i, board in enumerate(self.boards):
            if not board.is_done:
                yield i

    @property
    def single_active_board_index(self) -> Optional[int]:
        active = list(self.active_board_indices())
        if len(active) != 1:
            return None
        return active[0]

    @property
    def score_card(self) -> ScoreCard:
        total = ScoreCard()
        for board in self.boards:
            total = total.merge(board.score_card)
        return total

    @property
    def is_game_over(self) -> bool:
        if len(self.active_players) <= 1:
            return True
        return all(board.is_done for board in self.boards)

    @property
    def winner(self) -> Optional[str]:
        if not self.is_game_over:
            return None
        active = self.active_players
        if len(active) == 1:
            return active[0]
        leader = self.score_card.highest_score
        return leader.player if leader is not None else None

    @property
    def game_state_text(self) -> str:
        if self.is_game_over:
            winner = self.winner
            if winner is None:
                return 'Game over: tie game.'
            return f'Game over: {winner} wins!'
        return f"{self.current_turn_player}'s turn."

