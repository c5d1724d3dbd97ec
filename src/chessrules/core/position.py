"""Position - complete game value (board + turn metadata) with move application."""

from __future__ import annotations

import logging

from chessrules.core.board import Board
from chessrules.core.enums import GamePhase, PieceKind, Player
from chessrules.core.move import Move
from chessrules.core.piece import EMPTY
from chessrules.core.rules import Rules
from chessrules.core.types import Square

_LOGGER = logging.getLogger(__name__)

_PROMOTION_RANK: dict[Player, int] = {Player.WHITE: 7, Player.BLACK: 0}
_NON_PROMOTABLE: frozenset[PieceKind] = frozenset(
    {PieceKind.NONE, PieceKind.KING, PieceKind.PAWN}
)


class Position:
    """Full game state: board, side to move, ply, last move, phase, winner.

    A plain copyable aggregate. The legality filter works on a
    :meth:`copy` and never touches the live position.

    Moves are applied through two explicit entry points:

    * :meth:`apply_to_clone` - board mutation only, for speculative copies;
    * :meth:`apply_and_advance` - board mutation, then turn advance and
      checkmate/stalemate detection.
    """

    __slots__ = (
        "board",
        "current_player",
        "ply",
        "last_move",
        "phase",
        "promotion_square",
        "winner",
    )

    def __init__(
        self,
        board: Board | None = None,
        current_player: Player = Player.WHITE,
        ply: int = 0,
        last_move: Move | None = None,
        phase: GamePhase = GamePhase.AWAITING_MOVE,
        promotion_square: Square | None = None,
        winner: Player = Player.NONE,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.current_player = current_player
        self.ply = ply
        self.last_move = last_move
        self.phase = phase
        self.promotion_square = promotion_square
        self.winner = winner

    # ── Move application ─────────────────────────────────────────────────

    def apply_to_clone(self, move: Move) -> None:
        """Apply *move* without advancing the turn or detecting game end."""
        self._apply(move)

    def apply_and_advance(self, move: Move) -> None:
        """Apply *move*; unless a promotion is now pending, pass the turn."""
        self._apply(move)
        if self.phase == GamePhase.AWAITING_MOVE:
            self._finish_turn()

    def _apply(self, move: Move) -> None:
        board = self.board
        ply = self.ply
        from_sq = Square(*move.from_sq)
        to_sq = Square(*move.to_sq)

        if move.is_castling:
            king = board[from_sq]
            rank = from_sq.rank
            # c-file destination is queenside
            rook_from, rook_to = (0, 3) if to_sq.file == 2 else (7, 5)
            rook = board[rook_from, rank]

            board[from_sq] = EMPTY
            board[rook_from, rank] = EMPTY
            board[to_sq] = king.moved_at(ply)
            board[rook_to, rank] = rook.moved_at(ply)
        elif move.is_en_passant:
            pawn = board[from_sq]
            board[from_sq] = EMPTY
            board[to_sq] = pawn.moved_at(ply)
            # The captured pawn sits beside the origin, one rank behind to_sq.
            board[to_sq.file, from_sq.rank] = EMPTY
        else:
            piece = board[from_sq]
            board[from_sq] = EMPTY
            board[to_sq] = piece.moved_at(ply)
            if (
                piece.kind == PieceKind.PAWN
                and to_sq.rank == _PROMOTION_RANK.get(piece.owner)
            ):
                self.phase = GamePhase.AWAITING_PROMOTION
                self.promotion_square = to_sq

        self.ply += 1
        self.last_move = move

    # ── Promotion ────────────────────────────────────────────────────────

    def promote(self, kind: PieceKind) -> bool:
        """Resolve a pending promotion. Returns False without mutating on bad calls."""
        if self.phase != GamePhase.AWAITING_PROMOTION:
            return False
        if self.promotion_square is None:
            return False
        if kind in _NON_PROMOTABLE:
            return False

        sq = self.promotion_square
        self.board[sq] = self.board[sq].promoted_to(kind)
        self.promotion_square = None
        self.phase = GamePhase.AWAITING_MOVE
        _LOGGER.debug("Promoted %s on %s to %s", self.current_player, sq, kind.name)
        self._finish_turn()
        return True

    # ── Termination ──────────────────────────────────────────────────────

    def declare_winner(self, player: Player) -> None:
        """Force the game to end with *player* as winner (NONE for a draw)."""
        self.phase = GamePhase.ENDED
        self.winner = player
        self.promotion_square = None

    def declare_draw(self) -> None:
        self.declare_winner(Player.NONE)

    def _finish_turn(self) -> None:
        self.current_player = self.current_player.enemy
        if Rules.has_legal_moves(self):
            return
        if Rules.is_in_check(self):
            self.winner = self.current_player.enemy
        self.phase = GamePhase.ENDED

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Independent deep copy."""
        return Position(
            board=self.board.copy(),
            current_player=self.current_player,
            ply=self.ply,
            last_move=self.last_move,
            phase=self.phase,
            promotion_square=self.promotion_square,
            winner=self.winner,
        )

    @property
    def is_ended(self) -> bool:
        return self.phase == GamePhase.ENDED

    def __repr__(self) -> str:
        return (
            f"Position(current_player={self.current_player}, ply={self.ply}, "
            f"phase={self.phase.name}, winner={self.winner})\n{self.board!r}"
        )
