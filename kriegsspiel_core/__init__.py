"""
Kriegsspiel tic-tac-toe core Python package.

Blind, multi-board tic-tac-toe: players only see the spaces they have
played or discovered. The rules engine is pure logic; rendering,
persistence and the terminal driver sit on top of it.
Modules:
- space.py: Space
- board.py: Board, Coord
- score.py: ScoreCard, PlayerScore
- results.py: tagged outcomes for board selection and space play
- state.py: GameState, InvalidConfiguration
- persistence.py: JSON codecs and shared state file
- render.py: box-drawing text views
- cli.py: argparse driver and interactive loop
"""
