from __future__ import annotations

import argparse
import enum
import logging
import os
import sys
import time
from typing import Callable, List, Optional, Tuple, Union

from .errors import InvalidConfiguration, PersistenceError
from .persistence import DEFAULT_STATE_FILE, load_state, save_state, state_file_exists
from .render import render_code_legend, render_state
from .results import (
    AlreadyPlayed,
    AlreadyRevealedMark,
    BoardIndex,
    BoardIsDone,
    NotFound,
    PlayResult,
    consumes_turn,
)
from .state import GameState

logger = logging.getLogger(__name__)

MIN_BOARD_SIDE = 2
MAX_BOARD_SIDE = 10
RESIGN_COMMANDS = ('r', 'resign')
QUIT_COMMANDS = ('q', 'quit')

Reader = Callable[[str], str]
Writer = Callable[[str], None]


class TurnOutcome(enum.Enum):
    PLAYED = 'played'
    RESIGNED = 'resigned'
    QUIT = 'quit'


def parse_board_size(text: str) -> Tuple[int, int]:
    """Parses 'WxH' (or a single 'N' for NxN) into (width, height)."""
    parts = text.lower().split('x')
    try:
        if len(parts) == 1:
            width = height = int(parts[0])
        elif len(parts) == 2:
            width, height = int(parts[0]), int(parts[1])
        else:
            raise ValueError(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f'board size must look like 3x3, got {text!r}')
    for side in (width, height):
        if not MIN_BOARD_SIDE <= side <= MAX_BOARD_SIDE:
            raise argparse.ArgumentTypeError(
                f'board sides must be between {MIN_BOARD_SIDE} and {MAX_BOARD_SIDE}, got {text!r}'
            )
    return width, height


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Kriegsspiel (blind) tic-tac-toe on one or more boards')
    parser.add_argument('--players', default='XO', help='Player symbols, one character each (e.g. XO or XOZ)')
    parser.add_argument('--random', action='store_true', help='Shuffle the turn order once at the start')
    parser.add_argument('--boards', nargs='+', type=parse_board_size, default=[(3, 3)],
                        help='Board sizes as WxH, one per board (default: 3x3)')
    parser.add_argument('--file', default=DEFAULT_STATE_FILE, help='Shared game state file')
    parser.add_argument('--new', action='store_true', help='Start a new game, replacing the state file')
    parser.add_argument('--as', dest='as_player', default=None,
                        help='Play only as this symbol and wait for your turns (shared-file multiplayer)')
    parser.add_argument('--poll-interval', type=float,
                        default=float(os.getenv('KRIEGSSPIEL_POLL_INTERVAL', '1.0')),
                        help='Seconds between reloads of the state file while waiting')
    parser.add_argument('--log-level', default=os.getenv('KRIEGSSPIEL_LOG_LEVEL', 'WARNING'),
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], type=str.upper)
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _command(text: str) -> Optional[TurnOutcome]:
    if text in RESIGN_COMMANDS:
        return TurnOutcome.RESIGNED
    if text in QUIT_COMMANDS:
        return TurnOutcome.QUIT
    return None


def prompt_board(state: GameState, read: Reader = input, write: Writer = print) -> Union[int, TurnOutcome]:
    """Asks for a board until a playable one is chosen; skips the question when only one is left."""
    single = state.single_active_board_index
    if single is not None:
        return single
    while True:
        text = read(f'Choose a board (1-{len(state.boards)}), r to resign, q to quit: ').strip().lower()
        cmd = _command(text)
        if cmd is not None:
            return cmd
        try:
            code = int(text)
        except ValueError:
            write('Could not parse. Try again.')
            continue
        result = state.select_board(code)
        if isinstance(result, BoardIndex):
            return result.index
        if isinstance(result, BoardIsDone):
            write(f'Board {code} is already done.')
        else:
            write(f'There is no board {code}.')


def prompt_space(
    state: GameState,
    board_index: int,
    read: Reader = input,
    write: Writer = print,
) -> Union[PlayResult, TurnOutcome]:
    """Asks for a space code until the play consumes the turn."""
    board = state.boards[board_index]
    digits = board.space_index_code_length
    while True:
        text = read(f'Board {board_index + 1}: enter a {digits}-digit space code: ').strip().lower()
        cmd = _command(text)
        if cmd is not None:
            return cmd
        if not text.isdigit() or len(text) > digits:
            write('Could not parse. Try again.')
            continue
        result = state.play_space(board_index, int(text))
        if isinstance(result, NotFound):
            write(f'There is no space {text} on board {board_index + 1}.')
            continue
        if isinstance(result, AlreadyPlayed):
            write('You already played there.')
            continue
        return result


def _apply_command(state: GameState, player: Optional[str], outcome: TurnOutcome) -> TurnOutcome:
    if outcome is TurnOutcome.RESIGNED and player is not None:
        state.resign(player)
    return outcome


def take_turn(state: GameState, read: Reader = input, write: Writer = print) -> TurnOutcome:
    """Runs one turn for the current player, advancing the turn when the play consumes it."""
    player = state.current_turn_player
    board_choice = prompt_board(state, read, write)
    if isinstance(board_choice, TurnOutcome):
        return _apply_command(state, player, board_choice)
    write(render_code_legend(state.boards[board_choice]))
    played = prompt_space(state, board_choice, read, write)
    if isinstance(played, TurnOutcome):
        return _apply_command(state, player, played)
    if isinstance(played, AlreadyRevealedMark):
        write(f'That space already belongs to {played.mark}. Your turn is over.')
    else:
        write('Marked.')
    if consumes_turn(played):
        state.next_turn()
    return TurnOutcome.PLAYED


def wait_for_turn(
    path: str,
    player: str,
    interval: float,
    sleep: Optional[Callable[[float], None]] = None,
    write: Writer = print,
) -> GameState:
    """Reloads the shared state file until it is `player`'s turn, they have left, or the game has ended."""
    announced = False
    while True:
        state = load_state(path)
        if state.is_game_over or state.current_turn_player == player or player in state.resigned:
            return state
        if not announced:
            write(f'Waiting for {state.current_turn_player} to move...')
            announced = True
        (sleep or time.sleep)(interval)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def _ignored_new_game_flags(args: argparse.Namespace) -> List[str]:
    """Names the new-game flags set away from their defaults."""
    parser = build_parser()
    return [
        f'--{name}'
        for name in ('players', 'boards', 'random')
        if getattr(args, name) != parser.get_default(name)
    ]


def _load_or_create(args: argparse.Namespace, write: Writer = print) -> GameState:
    if args.new or not state_file_exists(args.file):
        state = GameState.new(list(args.players), args.boards, randomize=args.random)
        save_state(args.file, state)
        return state
    ignored = _ignored_new_game_flags(args)
    if ignored:
        logger.warning('Existing game in %s; ignoring %s', args.file, ' '.join(ignored))
        write(f'Joining the existing game in {args.file}; {" ".join(ignored)} only apply with --new.')
    return load_state(args.file)


def run(args: argparse.Namespace, read: Reader = input, write: Writer = print) -> int:
    state = _load_or_create(args, write)
    me = args.as_player
    if me is not None and me not in state.players:
        raise InvalidConfiguration(f'{me!r} is not a player in this game ({"".join(state.players)})')

    while not state.is_game_over:
        if me is not None:
            if me in state.resigned:
                write('You have resigned from this game.')
                return 0
            state = wait_for_turn(args.file, me, args.poll_interval, write=write)
            if state.is_game_over or me in state.resigned:
                continue
        else:
            read(f'Pass to {state.current_turn_player} and press Enter...')
        write(render_state(state, state.current_turn_player))
        player = state.current_turn_player
        outcome = take_turn(state, read, write)
        logger.debug('Turn by %s ended: %s', player, outcome.value)
        if outcome is TurnOutcome.QUIT:
            return 0
        save_state(args.file, state)

    write(render_state(state, None))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.log_level)
    try:
        return run(args)
    except (InvalidConfiguration, PersistenceError, FileNotFoundError) as e:
        print(f'error: {e}', file=sys.stderr)
        return 2
    except (EOFError, KeyboardInterrupt):
        print()
        return 0


if __name__ == '__main__':
    sys.exit(main())
