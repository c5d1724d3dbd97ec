"""chessrules - a rules engine for standard chess.

Quick start::

    from chessrules import GameState, PieceKind, parse_square

    game = GameState.new()
    for move in game.legal_moves(parse_square("e2")):
        print(move)
"""

from chessrules.core import (
    Board,
    GamePhase,
    GameResult,
    Move,
    MoveGenerator,
    Piece,
    PieceKind,
    Player,
    Position,
    Rules,
    Square,
    enemy_of,
    parse_square,
    square_name,
)
from chessrules.game import GameController, GameEndReason, GameState

__version__ = "0.1.0"

__all__ = [
    "Board",
    "GameController",
    "GameEndReason",
    "GamePhase",
    "GameResult",
    "GameState",
    "Move",
    "MoveGenerator",
    "Piece",
    "PieceKind",
    "Player",
    "Position",
    "Rules",
    "Square",
    "__version__",
    "enemy_of",
    "parse_square",
    "square_name",
]
