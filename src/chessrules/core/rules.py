"""High-level chess rules: check, checkmate, stalemate, results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import GamePhase, GameResult, Player
from chessrules.core.move import MoveList
from chessrules.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from chessrules.core.position import Position


_RESULT_BY_WINNER: dict[Player, GameResult] = {
    Player.WHITE: GameResult.WHITE_WINS,
    Player.BLACK: GameResult.BLACK_WINS,
    Player.NONE: GameResult.DRAW,
}


class Rules:
    """Static rule-checker that operates on a :class:`Position`."""

    @staticmethod
    def is_in_check(position: Position, player: Player | None = None) -> bool:
        """Is *player* (default: side to move) in check?"""
        if player is None:
            player = position.current_player
        return MoveGenerator(position).is_in_check(player)

    @staticmethod
    def all_legal_moves(position: Position) -> MoveList:
        """Every legal move of the side to move, square by square."""
        gen = MoveGenerator(position)
        moves: MoveList = []
        for sq in position.board.squares_of(position.current_player):
            moves.extend(gen.legal_moves(sq))
        return moves

    @staticmethod
    def has_legal_moves(position: Position) -> bool:
        """Stops at the first owned square with a legal move."""
        gen = MoveGenerator(position)
        for sq in position.board.squares_of(position.current_player):
            if gen.legal_moves(sq):
                return True
        return False

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        return not Rules.has_legal_moves(position)

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        return not Rules.has_legal_moves(position)

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Result as recorded by the position's phase and winner."""
        if position.phase != GamePhase.ENDED:
            return GameResult.IN_PROGRESS
        return _RESULT_BY_WINNER[position.winner]
