"""Players: a host-driven human and a callback-driven agent."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chessrules.core.enums import PieceKind, Player
from chessrules.game.interfaces import IPlayer

if TYPE_CHECKING:
    from chessrules.core.move import Move
    from chessrules.game.state import GameState

MoveChooser = Callable[["GameState"], "Move | None"]
PromotionChooser = Callable[["GameState"], PieceKind]


class HumanPlayer(IPlayer):
    """Never decides on its own; the host forwards the person's input."""

    __slots__ = ()

    def __init__(self, color: Player, name: str = "") -> None:
        super().__init__(color, name or f"{color.name.lower()} player")

    @property
    def is_human(self) -> bool:
        return True

    def choose_move(self, state: GameState) -> Move | None:
        return None

    def choose_promotion(self, state: GameState) -> PieceKind | None:
        return None


class AIPlayer(IPlayer):
    """An agent whose decisions come from plain callables.

    Scoring and search live outside the rules engine. The controller calls
    *choose_move* with the live :class:`GameState` whenever this side is to
    move and applies the returned move, which should be one of
    ``state.all_legal_moves()``. Returning ``None`` hands control back to
    the host. Without *choose_promotion* every pawn becomes a queen.

    Args:
        color: Side the agent plays.
        choose_move: ``(GameState) -> Move | None``.
        name: Display name.
        choose_promotion: ``(GameState) -> PieceKind``.
        on_cancel: ``() -> None``, called to abort a running selection.
    """

    __slots__ = ("_choose_move", "_choose_promotion", "_on_cancel")

    def __init__(
        self,
        color: Player,
        choose_move: MoveChooser,
        name: str = "Engine",
        choose_promotion: PromotionChooser | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(color, name)
        self._choose_move = choose_move
        self._choose_promotion = choose_promotion
        self._on_cancel = on_cancel

    @property
    def is_human(self) -> bool:
        return False

    def choose_move(self, state: GameState) -> Move | None:
        return self._choose_move(state)

    def choose_promotion(self, state: GameState) -> PieceKind | None:
        if self._choose_promotion is None:
            return PieceKind.QUEEN
        return self._choose_promotion(state)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
