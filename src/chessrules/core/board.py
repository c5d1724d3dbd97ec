"""Board - occupant placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from chessrules.core.enums import PieceKind, Player
from chessrules.core.piece import EMPTY, Occupant, Piece
from chessrules.core.types import ALL_SQUARES, Square, is_valid_square

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


class Board:
    """Mutable 8x8 grid of occupants, indexed ``[file][rank]``.

    Reads outside the board return the empty occupant and writes outside
    the board are ignored, so move generation never has to bounds-check.
    """

    __slots__ = ("_cells",)

    def __init__(self) -> None:
        self._cells: list[list[Occupant]] = [[EMPTY] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def occupant_at(self, sq: tuple[int, int]) -> Occupant:
        file, rank = sq
        if not is_valid_square(file, rank):
            return EMPTY
        return self._cells[file][rank]

    def set_occupant(self, sq: tuple[int, int], occupant: Occupant) -> None:
        file, rank = sq
        if not is_valid_square(file, rank):
            return
        self._cells[file][rank] = occupant

    __getitem__ = occupant_at
    __setitem__ = set_occupant

    def piece_at(self, sq: tuple[int, int]) -> Piece:
        return self.occupant_at(sq).piece

    def is_empty(self, sq: tuple[int, int]) -> bool:
        return self.occupant_at(sq).kind == PieceKind.NONE

    def is_owned_by(self, sq: tuple[int, int], player: Player) -> bool:
        occupant = self.occupant_at(sq)
        return occupant.kind != PieceKind.NONE and occupant.owner == player

    # -- Query helpers ------------------------------------------------------

    def squares_of(self, player: Player) -> Iterator[Square]:
        """Squares occupied by *player*, file-major order."""
        for sq in ALL_SQUARES:
            occupant = self._cells[sq.file][sq.rank]
            if occupant.kind != PieceKind.NONE and occupant.owner == player:
                yield sq

    def king_square(self, player: Player) -> Square | None:
        """Square of *player*'s king, or ``None`` if there is none."""
        for sq in self.squares_of(player):
            if self._cells[sq.file][sq.rank].kind == PieceKind.KING:
                return sq
        return None

    # -- Mutation / copying -------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._cells = [column.copy() for column in self._cells]
        return b

    def clear(self) -> None:
        self._cells = [[EMPTY] * 8 for _ in range(8)]

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, kind in enumerate(_BACK_RANK):
            b[f, 0] = Occupant(kind, Player.WHITE)
            b[f, 1] = Occupant(PieceKind.PAWN, Player.WHITE)
            b[f, 6] = Occupant(PieceKind.PAWN, Player.BLACK)
            b[f, 7] = Occupant(kind, Player.BLACK)
        return b

    @classmethod
    def from_pieces(cls, pieces: Mapping[tuple[int, int], Piece]) -> Board:
        """Custom setup; every placed piece counts as never moved."""
        b = cls()
        for sq, piece in pieces.items():
            if not is_valid_square(*sq):
                raise ValueError(f"Square off the board: {sq!r}")
            b[sq] = Occupant.of(piece)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = [str(self._cells[file][rank].piece) for file in range(8)]
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
