"""Core enumerations for the chess rules domain."""

from __future__ import annotations

from enum import IntEnum, auto


class Player(IntEnum):
    """Side owning a piece. ``NONE`` marks empty squares and undecided games."""

    NONE = 0
    WHITE = 1
    BLACK = 2

    @property
    def enemy(self) -> Player:
        return _ENEMY[self]

    def __str__(self) -> str:
        return self.name.lower()


_ENEMY: dict[Player, Player] = {
    Player.NONE: Player.NONE,
    Player.WHITE: Player.BLACK,
    Player.BLACK: Player.WHITE,
}


def enemy_of(player: Player) -> Player:
    """White <-> Black; ``NONE`` stays ``NONE``."""
    return _ENEMY[player]


class PieceKind(IntEnum):
    """Piece kinds. ``NONE`` is the kind of an empty square."""

    NONE = 0
    KING = 1
    QUEEN = 2
    BISHOP = 3
    KNIGHT = 4
    ROOK = 5
    PAWN = 6


class GamePhase(IntEnum):
    """Finite-state-machine states for a game."""

    AWAITING_MOVE = auto()
    AWAITING_PROMOTION = auto()
    ENDED = auto()


class GameResult(IntEnum):
    """Outcome of a game, derived from phase and winner."""

    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3
