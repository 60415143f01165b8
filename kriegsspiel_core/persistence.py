from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, Dict, List

from .board import Board
from .errors import PersistenceError
from .space import Space
from .state import GameState, validate_symbols

logger = logging.getLogger(__name__)

DEFAULT_STATE_FILE = os.getenv('KRIEGSSPIEL_STATE', 'kriegsspiel.json')
FORMAT_VERSION = 1


def space_to_json(s: Space) -> Dict[str, Any]:
    return {"mark": s.mark, "knownTo": sorted(s.known_to)}


def space_from_json(obj: Dict[str, Any]) -> Space:
    if not isinstance(obj, dict):
        raise PersistenceError(f'expected a space object, got {obj!r}')
    mark = obj.get("mark")
    return Space(
        mark=str(mark) if mark is not None else None,
        known_to=set(str(p) for p in obj.get("knownTo", [])),
    )


def board_to_json(b: Board) -> Dict[str, Any]:
    return {
        "width": int(b.width),
        "height": int(b.height),
        "spaces": [[space_to_json(s) for s in row] for row in b.rows()],
    }


def board_from_json(obj: Dict[str, Any]) -> Board:
    if not isinstance(obj, dict):
        raise PersistenceError(f'expected a board object, got {obj!r}')
    width = int(obj["width"])
    height = int(obj["height"])
    rows = obj["spaces"]
    if not isinstance(rows, list) or len(rows) != height:
        raise PersistenceError(f'expected {height} rows of spaces')
    grid: List[Space] = []
    for row in rows:
        if not isinstance(row, list) or len(row) != width:
            raise PersistenceError(f'expected rows of {width} spaces')
        grid.extend(space_from_json(s) for s in row)
    return Board(width=width, height=height, grid=grid)


def state_to_json(s: GameState) -> Dict[str, Any]:
    return {
        "version": FORMAT_VERSION,
        "players": list(s.players),
        "currentTurnIndex": int(s.current_turn_index),
        "resigned": sorted(s.resigned),
        "boards": [board_to_json(b) for b in s.boards],
    }


def json_to_state(obj: Dict[str, Any]) -> GameState:
    try:
        if not isinstance(obj["players"], list):
            raise PersistenceError('players must be a list')
        players = [str(p) for p in obj["players"]]
        validate_symbols(players)
        boards_in = obj["boards"]
        if not isinstance(boards_in, list):
            raise PersistenceError('boards must be a list')
        boards = [board_from_json(b) for b in boards_in]
        return GameState(
            players=players,
            boards=boards,
            resigned=set(str(p) for p in obj.get("resigned", [])),
            current_turn_index=int(obj.get("currentTurnIndex", 0)),
        )
    except PersistenceError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise PersistenceError(f'bad state: {e}') from e


def _ensure_state_dir(path: str) -> None:
    """Ensures the directory for the state file exists before writing."""
    directory = os.path.dirname(path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


def state_file_exists(path: str) -> bool:
    return os.path.isfile(path)


def save_state(path: str, state: GameState) -> None:
    """Replaces the state file as a whole; the last writer wins."""
    _ensure_state_dir(path)
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(prefix='.kriegsspiel-', suffix='.tmp', dir=directory)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            json.dump(state_to_json(state), f, indent=2)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
    logger.info('Saved game to %s', path)


def load_state(path: str) -> GameState:
    with open(path, 'r', encoding='utf-8') as f:
        try:
            obj = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise PersistenceError(f'{path} is not valid JSON: {e}') from e
    if not isinstance(obj, dict):
        raise PersistenceError(f'{path} does not hold a game document')
    logger.debug('Loaded game from %s', path)
    return json_to_state(obj)
