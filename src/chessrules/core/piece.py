"""Piece view and board occupant value objects."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chessrules.core.enums import PieceKind, Player

_CHARS: dict[PieceKind, str] = {
    PieceKind.NONE: ".",
    PieceKind.KING: "k",
    PieceKind.QUEEN: "q",
    PieceKind.BISHOP: "b",
    PieceKind.KNIGHT: "n",
    PieceKind.ROOK: "r",
    PieceKind.PAWN: "p",
}

_UNICODE: dict[tuple[Player, PieceKind], str] = {
    (Player.WHITE, PieceKind.PAWN): "♙",
    (Player.WHITE, PieceKind.KNIGHT): "♘",
    (Player.WHITE, PieceKind.BISHOP): "♗",
    (Player.WHITE, PieceKind.ROOK): "♖",
    (Player.WHITE, PieceKind.QUEEN): "♕",
    (Player.WHITE, PieceKind.KING): "♔",
    (Player.BLACK, PieceKind.PAWN): "♟",
    (Player.BLACK, PieceKind.KNIGHT): "♞",
    (Player.BLACK, PieceKind.BISHOP): "♝",
    (Player.BLACK, PieceKind.ROOK): "♜",
    (Player.BLACK, PieceKind.QUEEN): "♛",
    (Player.BLACK, PieceKind.KING): "♚",
}


@dataclass(frozen=True, slots=True)
class Piece:
    """What a host sees on a square: kind and owner."""

    kind: PieceKind
    owner: Player

    @property
    def is_empty(self) -> bool:
        return self.kind == PieceKind.NONE

    def __str__(self) -> str:
        """Board-diagram character (uppercase = white, lowercase = black)."""
        char = _CHARS[self.kind]
        return char.upper() if self.owner == Player.WHITE else char

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞. Empty squares give a space."""
        return _UNICODE.get((self.owner, self.kind), " ")


@dataclass(frozen=True, slots=True)
class Occupant:
    """Internal board cell.

    ``last_moved_ply`` is the ply at which this occupant last moved, or
    ``None`` if it never moved. It is the only memory castling needs.
    """

    kind: PieceKind
    owner: Player
    last_moved_ply: int | None = None

    @property
    def is_empty(self) -> bool:
        return self.kind == PieceKind.NONE

    @property
    def has_moved(self) -> bool:
        return self.last_moved_ply is not None

    @property
    def piece(self) -> Piece:
        return Piece(self.kind, self.owner)

    def moved_at(self, ply: int) -> Occupant:
        return replace(self, last_moved_ply=ply)

    def promoted_to(self, kind: PieceKind) -> Occupant:
        return replace(self, kind=kind)

    @classmethod
    def of(cls, piece: Piece) -> Occupant:
        """A never-moved occupant for *piece*."""
        if piece.kind == PieceKind.NONE:
            return EMPTY
        return cls(piece.kind, piece.owner)


EMPTY = Occupant(PieceKind.NONE, Player.NONE)
EMPTY_PIECE = Piece(PieceKind.NONE, Player.NONE)
