"""Core domain layer - pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import MoveGenerator, Position, parse_square

    pos = Position()
    gen = MoveGenerator(pos)
    for move in gen.legal_moves(parse_square("g1")):
        print(move)
"""

from chessrules.core.board import Board
from chessrules.core.enums import GamePhase, GameResult, PieceKind, Player, enemy_of
from chessrules.core.move import MAX_CANDIDATES, Move, MoveList
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import EMPTY, EMPTY_PIECE, Occupant, Piece
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.types import Square, parse_square, square_name

__all__ = [
    # Enums
    "GamePhase",
    "GameResult",
    "PieceKind",
    "Player",
    "enemy_of",
    # Types / helpers
    "Square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "EMPTY",
    "EMPTY_PIECE",
    "MAX_CANDIDATES",
    "Move",
    "MoveGenerator",
    "MoveList",
    "Occupant",
    "Piece",
    "Position",
    "Rules",
]
