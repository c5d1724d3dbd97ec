"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import PieceKind, Player
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.game.state import GameState

PositionFactory = Callable[..., Position]


@pytest.fixture
def game() -> GameState:
    """A fresh game in the standard starting position."""
    return GameState.new()


@pytest.fixture
def setup_position() -> PositionFactory:
    """Build a custom position from ``{square: "K"}`` style placements.

    Uppercase letters are white, lowercase black: K Q B N R P.
    """
    kinds = {
        "k": PieceKind.KING,
        "q": PieceKind.QUEEN,
        "b": PieceKind.BISHOP,
        "n": PieceKind.KNIGHT,
        "r": PieceKind.ROOK,
        "p": PieceKind.PAWN,
    }

    def _factory(
        placements: dict[tuple[int, int], str],
        current_player: Player = Player.WHITE,
        ply: int = 0,
    ) -> Position:
        pieces = {
            sq: Piece(
                kinds[char.lower()],
                Player.WHITE if char.isupper() else Player.BLACK,
            )
            for sq, char in placements.items()
        }
        return Position(
            board=Board.from_pieces(pieces), current_player=current_player, ply=ply
        )

    return _factory
