from __future__ import annotations

# Facade module that re-exports the Kriegsspiel core.
# Single-responsibility modules live under kriegsspiel_core/*.

from kriegsspiel_core.space import BLANK, Mark, Space
from kriegsspiel_core.board import Board, Coord
from kriegsspiel_core.score import PlayerScore, ScoreCard
from kriegsspiel_core.results import (
    AlreadyPlayed,
    AlreadyRevealedMark,
    BoardIndex,
    BoardIsDone,
    NotFound,
    PlayResult,
    SelectResult,
    Success,
    consumes_turn,
)
from kriegsspiel_core.errors import InvalidConfiguration, PersistenceError
from kriegsspiel_core.state import BoardSize, GameState, validate_players, validate_symbols
from kriegsspiel_core.persistence import (
    board_from_json,
    board_to_json,
    json_to_state,
    load_state,
    save_state,
    state_to_json,
)
from kriegsspiel_core.render import render_board, render_code_legend, render_state


def main() -> None:
    # CLI driver delegated to kriegsspiel_core.cli
    from kriegsspiel_core.cli import main as _main
    raise SystemExit(_main())


if __name__ == '__main__':
    main()
