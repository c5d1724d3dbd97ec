"""Game state machine - the host-facing facade over a :class:`Position`."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from chessrules.core.enums import GamePhase, GameResult, PieceKind, Player
from chessrules.core.move import Move, MoveList
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.types import Square
from chessrules.game.interfaces import GameEndReason

_LOGGER = logging.getLogger(__name__)


@dataclass
class GameState:
    """Manages the game lifecycle: turn, promotion, termination.

    States::

        AWAITING_MOVE --move--> AWAITING_MOVE (next player) | ENDED
        AWAITING_MOVE --pawn reaches back rank--> AWAITING_PROMOTION
        AWAITING_PROMOTION --promote(kind)--> AWAITING_MOVE | ENDED
        any --resign / declare_draw / set_winner--> ENDED

    ENDED is terminal: :meth:`apply_move` and :meth:`promote` refuse to act
    once the game is over.

    This is a pure data/logic class - no threading, no UI. Moves passed to
    :meth:`apply_move` are trusted to come from :meth:`legal_moves`.
    """

    position: Position = field(default_factory=Position)
    end_reason: GameEndReason = GameEndReason.NONE

    @classmethod
    def new(cls) -> GameState:
        """A game in the standard starting position."""
        return cls()

    def clone(self) -> GameState:
        """Independent deep copy."""
        return GameState(position=self.position.copy(), end_reason=self.end_reason)

    # ── Queries ──────────────────────────────────────────────────────────

    def piece_at(self, sq: tuple[int, int]) -> Piece:
        """Kind and owner on *sq*; out-of-range squares read as empty."""
        return self.position.board.piece_at(sq)

    def legal_moves(self, sq: tuple[int, int]) -> MoveList:
        """Legal moves of the piece on *sq*, empty for empty/invalid squares."""
        return MoveGenerator(self.position).legal_moves(sq)

    def all_legal_moves(self) -> MoveList:
        """Every legal move of the side to move."""
        return Rules.all_legal_moves(self.position)

    def is_square_attacked_by(self, sq: tuple[int, int], player: Player) -> bool:
        return MoveGenerator(self.position).is_square_attacked_by(sq, player)

    @property
    def current_player(self) -> Player:
        return self.position.current_player

    @property
    def phase(self) -> GamePhase:
        return self.position.phase

    @property
    def winner(self) -> Player:
        return self.position.winner

    @property
    def last_move(self) -> Move | None:
        return self.position.last_move

    @property
    def ply(self) -> int:
        return self.position.ply

    @property
    def promotion_square(self) -> Square | None:
        return self.position.promotion_square

    @property
    def result(self) -> GameResult:
        return Rules.game_result(self.position)

    @property
    def is_game_over(self) -> bool:
        return self.position.phase == GamePhase.ENDED

    @property
    def is_in_check(self) -> bool:
        return Rules.is_in_check(self.position)

    # ── Transitions ──────────────────────────────────────────────────────

    def apply_move(self, move: Move) -> bool:
        """Apply a move obtained from :meth:`legal_moves`.

        Returns False (and leaves the game untouched) when the game has
        ended or a promotion is still pending.
        """
        phase = self.position.phase
        if phase != GamePhase.AWAITING_MOVE:
            _LOGGER.warning("Refusing move %s in phase %s", move, phase.name)
            return False

        mover = self.position.current_player
        self.position.apply_and_advance(move)
        _LOGGER.debug("Ply %d: %s played %s", self.position.ply, mover, move)
        self._after_transition()
        return True

    def promote(self, kind: PieceKind) -> bool:
        """Resolve the pending promotion. Fails unless a promotion is pending
        and *kind* is a queen, rook, bishop or knight."""
        if self.is_game_over:
            _LOGGER.warning("Refusing promotion to %s: game is over", kind.name)
            return False
        if not self.position.promote(kind):
            return False
        self._after_transition()
        return True

    def resign(self, color: Player) -> None:
        """*color* gives up; the enemy wins."""
        self._force_end(color.enemy, GameEndReason.RESIGNATION)

    def declare_draw(self) -> None:
        self._force_end(Player.NONE, GameEndReason.DRAW_DECLARED)

    def set_winner(self, player: Player) -> None:
        """End the game with *player* as winner, bypassing detection."""
        self._force_end(player, GameEndReason.WINNER_DECLARED)

    # ── Internal ─────────────────────────────────────────────────────────

    def _force_end(self, winner: Player, reason: GameEndReason) -> None:
        self.position.declare_winner(winner)
        self.end_reason = reason
        _LOGGER.info("Game over (%s), winner: %s", reason.name.lower(), winner)

    def _after_transition(self) -> None:
        phase = self.position.phase
        if phase == GamePhase.AWAITING_PROMOTION:
            _LOGGER.debug("Promotion pending on %s", self.position.promotion_square)
        elif phase == GamePhase.ENDED:
            winner = self.position.winner
            self.end_reason = (
                GameEndReason.CHECKMATE
                if winner != Player.NONE
                else GameEndReason.STALEMATE
            )
            _LOGGER.info(
                "Game over (%s), winner: %s", self.end_reason.name.lower(), winner
            )
