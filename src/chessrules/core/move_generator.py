"""Candidate move generation, attack detection and legality filtering."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.enums import PieceKind, Player
from chessrules.core.move import Move, MoveList
from chessrules.core.types import Square

if TYPE_CHECKING:
    from chessrules.core.position import Position


ROOK_DIRS: tuple[tuple[int, int], ...] = ((0, 1), (0, -1), (-1, 0), (1, 0))
BISHOP_DIRS: tuple[tuple[int, int], ...] = ((1, 1), (-1, -1), (-1, 1), (1, -1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS
KING_OFFSETS: tuple[tuple[int, int], ...] = QUEEN_DIRS

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
)

SLIDE_REACH = 7

_PAWN_DIRECTION: dict[Player, int] = {Player.WHITE: 1, Player.BLACK: -1}
_PAWN_START_RANK: dict[Player, int] = {Player.WHITE: 1, Player.BLACK: 6}

_KING_START_FILE = 4
# rook file -> king destination file
_CASTLING_TARGETS: tuple[tuple[int, int], ...] = ((0, 2), (7, 6))

# piece kind -> (directions, maximum steps along each)
_STEP_PATTERNS: dict[PieceKind, tuple[tuple[tuple[int, int], ...], int]] = {
    PieceKind.QUEEN: (QUEEN_DIRS, SLIDE_REACH),
    PieceKind.BISHOP: (BISHOP_DIRS, SLIDE_REACH),
    PieceKind.KNIGHT: (KNIGHT_OFFSETS, 1),
    PieceKind.ROOK: (ROOK_DIRS, SLIDE_REACH),
}


class MoveGenerator:
    """Generates moves for single squares of a :class:`Position`.

    Two modes share the same per-piece procedures:

    * normal generation - real candidates, each passed through the
      legality filter before it is returned;
    * attack probing - destinations a side threatens, no legality
      filtering, no castling or en passant. With quiet probes enabled,
      empty squares the piece could move to are reported too, flagged as
      captures, so the attack oracle can see attacked empty squares.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, sq: tuple[int, int]) -> MoveList:
        """Legal moves of the piece on *sq*; empty for empty or invalid squares."""
        return self.generate(sq)

    def generate(
        self,
        sq: tuple[int, int],
        probing_attacks: bool = False,
        include_quiet_probes: bool = False,
    ) -> MoveList:
        origin = Square(*sq)
        occupant = self._board[origin]
        kind = occupant.kind
        owner = occupant.owner
        moves: MoveList = []

        if kind == PieceKind.KING:
            self._gen_king(origin, owner, moves, probing_attacks, include_quiet_probes)
        elif kind == PieceKind.PAWN:
            self._gen_pawn(origin, owner, moves, probing_attacks, include_quiet_probes)
        elif kind in _STEP_PATTERNS:
            directions, reach = _STEP_PATTERNS[kind]
            self._gen_steps(
                origin,
                owner,
                directions,
                reach,
                moves,
                probing_attacks,
                include_quiet_probes,
            )

        return moves

    # -- Attack detection ---------------------------------------------------

    def is_square_attacked_by(self, sq: tuple[int, int], player: Player) -> bool:
        """Is *sq* attacked by any piece of *player*?"""
        target = Square(*sq)
        for origin in self._board.squares_of(player):
            for move in self.generate(
                origin, probing_attacks=True, include_quiet_probes=True
            ):
                if move.is_capture and move.to_sq == target:
                    return True
        return False

    def is_in_check(self, player: Player) -> bool:
        """Is *player*'s king attacked by the enemy? False without a king."""
        king_sq = self._board.king_square(player)
        if king_sq is None:
            return False
        return self.is_square_attacked_by(king_sq, player.enemy)

    # -- Legality filter ----------------------------------------------------

    def is_legal(self, move: Move) -> bool:
        """Would *move* leave the mover's own king unattacked?"""
        mover = self._board[move.from_sq].owner
        clone = self._pos.copy()
        clone.apply_to_clone(move)
        return not MoveGenerator(clone).is_in_check(mover)

    # -- Special move eligibility -------------------------------------------

    def is_castling_possible(self, king_sq: tuple[int, int], rook_file: int) -> bool:
        board = self._board
        king_sq = Square(*king_sq)
        king = board[king_sq]
        rook = board[rook_file, king_sq.rank]

        if king.kind != PieceKind.KING or rook.kind != PieceKind.ROOK:
            return False
        if king.has_moved or rook.has_moved:
            return False
        if rook.owner != king.owner or king_sq.file != _KING_START_FILE:
            return False
        if self.is_in_check(king.owner):
            return False

        low, high = sorted((king_sq.file, rook_file))
        for file in range(low + 1, high):
            if not board.is_empty((file, king_sq.rank)):
                return False

        # The origin is covered by the in-check test above.
        step = 1 if rook_file > king_sq.file else -1
        enemy = king.owner.enemy
        transit = king_sq.offset(step, 0)
        destination = king_sq.offset(2 * step, 0)
        return not (
            self.is_square_attacked_by(transit, enemy)
            or self.is_square_attacked_by(destination, enemy)
        )

    def en_passant_target_file(self, pawn_sq: tuple[int, int]) -> int | None:
        """File of the enemy pawn *pawn_sq* may capture en passant, if any.

        Only the immediately preceding ply is consulted.
        """
        pos = self._pos
        last = pos.last_move
        if pos.ply <= 0 or last is None:
            return None

        pawn_file, pawn_rank = pawn_sq
        pawn = self._board[pawn_sq]
        landed = self._board[last.to_sq]
        if pawn.kind != PieceKind.PAWN or landed.kind != PieceKind.PAWN:
            return None
        if landed.owner != pawn.owner.enemy:
            return None

        to_file, to_rank = last.to_sq
        if to_rank != pawn_rank:
            return None
        if abs(to_rank - last.from_sq[1]) != 2:
            return None
        if abs(to_file - pawn_file) != 1:
            return None
        return to_file

    # -- Piece-specific generators (private) -------------------------------

    def _add(self, moves: MoveList, move: Move, probing_attacks: bool) -> None:
        if not Square(*move.to_sq).is_valid:
            return
        if not probing_attacks and not self.is_legal(move):
            return
        moves.append(move)

    def _gen_steps(
        self,
        sq: Square,
        owner: Player,
        directions: tuple[tuple[int, int], ...],
        reach: int,
        moves: MoveList,
        probing_attacks: bool,
        include_quiet_probes: bool,
    ) -> None:
        board = self._board
        enemy = owner.enemy
        for df, dr in directions:
            for i in range(1, reach + 1):
                to_sq = sq.offset(df * i, dr * i)
                if not to_sq.is_valid:
                    break
                target = board[to_sq]
                if target.kind == PieceKind.NONE:
                    if not probing_attacks or include_quiet_probes:
                        self._add(
                            moves,
                            Move(sq, to_sq, is_capture=include_quiet_probes),
                            probing_attacks,
                        )
                    continue
                if target.owner == enemy:
                    self._add(moves, Move(sq, to_sq, is_capture=True), probing_attacks)
                break

    def _gen_king(
        self,
        sq: Square,
        owner: Player,
        moves: MoveList,
        probing_attacks: bool,
        include_quiet_probes: bool,
    ) -> None:
        self._gen_steps(
            sq, owner, KING_OFFSETS, 1, moves, probing_attacks, include_quiet_probes
        )
        if probing_attacks:
            return
        for rook_file, king_file in _CASTLING_TARGETS:
            if self.is_castling_possible(sq, rook_file):
                self._add(
                    moves,
                    Move(sq, Square(king_file, sq.rank), is_castling=True),
                    probing_attacks,
                )

    def _gen_pawn(
        self,
        sq: Square,
        owner: Player,
        moves: MoveList,
        probing_attacks: bool,
        include_quiet_probes: bool,
    ) -> None:
        board = self._board
        direction = _PAWN_DIRECTION.get(owner)
        if direction is None:
            return

        if not probing_attacks:
            one_step = sq.offset(0, direction)
            if one_step.is_valid and board.is_empty(one_step):
                self._add(moves, Move(sq, one_step), probing_attacks)
                two_step = sq.offset(0, 2 * direction)
                if sq.rank == _PAWN_START_RANK[owner] and board.is_empty(two_step):
                    self._add(moves, Move(sq, two_step), probing_attacks)

        enemy = owner.enemy
        for df in (1, -1):
            cap_sq = sq.offset(df, direction)
            if probing_attacks or board.is_owned_by(cap_sq, enemy):
                self._add(moves, Move(sq, cap_sq, is_capture=True), probing_attacks)

        if not probing_attacks and not include_quiet_probes:
            ep_file = self.en_passant_target_file(sq)
            if ep_file is not None:
                self._add(
                    moves,
                    Move(
                        sq,
                        Square(ep_file, sq.rank + direction),
                        is_capture=True,
                        is_en_passant=True,
                    ),
                    probing_attacks,
                )
