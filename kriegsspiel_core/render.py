from __future__ import annotations

from typing import List, Optional

from .board import Board
from .score import ScoreCard
from .state import GameState


def _grid_lines(cells: List[List[str]], cell_width: int) -> List[str]:
    """Draws rows of already-formatted cell text inside box-drawing borders."""
    cols = len(cells[0]) if cells else 0
    bar = '─' * (cell_width + 2)
    top = '┌' + '┬'.join([bar] * cols) + '┐'
    mid = '├' + '┼'.join([bar] * cols) + '┤'
    bottom = '└' + '┴'.join([bar] * cols) + '┘'
    lines = [top]
    for i, row in enumerate(cells):
        if i:
            lines.append(mid)
        lines.append('│' + '│'.join(f' {c:^{cell_width}} ' for c in row) + '│')
    lines.append(bottom)
    return lines


def render_board(board: Board, player: Optional[str], title: Optional[str] = None) -> str:
    """Shows each space as `player` knows it; player=None reveals every mark."""
    cells = [[space.display_for(player) for space in row] for row in board.rows()]
    lines = _grid_lines(cells, 1)
    if title:
        lines.insert(0, title)
    return '\n'.join(lines)


def render_code_legend(board: Board) -> str:
    """Same grid, labelled with the index code to type for each space."""
    width = board.space_index_code_length
    cells = [
        [str(board.index_code(col, row)).zfill(width) for col in range(board.width)]
        for row in range(board.height)
    ]
    return '\n'.join(_grid_lines(cells, width))


def render_scores(score_card: ScoreCard, players: Optional[List[str]] = None) -> str:
    names = list(players) if players is not None else [e.player for e in score_card.scores]
    return '  '.join(f'{p}: {score_card.score_for(p)}' for p in names)


def render_state(state: GameState, player: Optional[str]) -> str:
    """Full text view of the game for one player; everything is revealed once it is over."""
    viewer = None if state.is_game_over else player
    blocks: List[str] = []
    for i, board in enumerate(state.boards):
        title = f'Board {i + 1}'
        if board.is_done:
            title += ' (done)'
        blocks.append(render_board(board, viewer, title))
    blocks.append('Score  ' + render_scores(state.score_card, state.players))
    if state.resigned:
        blocks.append('Resigned: ' + ', '.join(p for p in state.players if p in state.resigned))
    blocks.append(state.game_state_text)
    return '\n\n'.join(blocks)
