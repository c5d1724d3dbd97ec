"""Abstract interfaces for the game layer.

Follows Dependency Inversion: the high-level GameController depends on
these ABCs, not on concrete player implementations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chessrules.core.enums import Player

if TYPE_CHECKING:
    from chessrules.core.enums import PieceKind
    from chessrules.core.move import Move
    from chessrules.core.position import Position
    from chessrules.game.state import GameState


class GameEndReason(IntEnum):
    """Why a game reached the ENDED phase."""

    NONE = 0
    CHECKMATE = auto()
    STALEMATE = auto()
    RESIGNATION = auto()
    DRAW_DECLARED = auto()
    WINNER_DECLARED = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """A participant bound to one side.

    After every completed ply the controller asks the side to move for a
    decision. Agents answer with a value and the controller applies it.
    Humans answer ``None``; their move arrives later through
    :meth:`IGameController.submit_move`.
    """

    __slots__ = ("color", "name")

    def __init__(self, color: Player, name: str) -> None:
        self.color = color
        self.name = name

    @property
    @abstractmethod
    def is_human(self) -> bool: ...

    @abstractmethod
    def choose_move(self, state: GameState) -> Move | None:
        """The move to play in *state*, or None if the host supplies it."""

    @abstractmethod
    def choose_promotion(self, state: GameState) -> PieceKind | None:
        """Replacement kind for the pawn on ``state.promotion_square``."""

    def cancel(self) -> None:
        """Abort a selection in progress."""


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        position: Position | None = None,
    ) -> None:
        """Set up a new game."""

    @abstractmethod
    def submit_move(self, move: Move) -> bool:
        """Submit a move. Returns True if legal and applied."""

    @abstractmethod
    def submit_promotion(self, kind: PieceKind) -> bool:
        """Resolve a pending promotion. Returns True on success."""

    @abstractmethod
    def resign(self, color: Player) -> None:
        """Player of *color* resigns."""

    @abstractmethod
    def declare_draw(self) -> None:
        """End the game as a draw (agreement, host decision)."""
