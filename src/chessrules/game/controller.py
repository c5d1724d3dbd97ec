"""GameController - the central orchestrator of a game.

Coordinates: Players, GameState, MoveGenerator.
Emits events via simple callbacks so hosts / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessrules.core.enums import GamePhase, GameResult, PieceKind, Player
from chessrules.core.move import Move
from chessrules.core.position import Position
from chessrules.core.types import Square
from chessrules.game.interfaces import IGameController, IPlayer
from chessrules.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, "GameState"], None]
PromotionCallback = Callable[[PieceKind, Square, "GameState"], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion: list[PromotionCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full game: validates submitted moves, resolves
    promotions, switches turns, notifies listeners.

    Unlike :class:`GameState`, the controller does not trust its input:
    submitted moves must belong to the side to move and match one of the
    moves returned by ``legal_moves``. Answers from agents go through the
    same checks.

    Agents are driven by a loop in :meth:`_prompt_current_player`. A move
    submitted from inside a chooser or an event handler is applied at once,
    and the outermost loop prompts the next side, so the stack stays flat
    however long the game runs.
    """

    __slots__ = ("_state", "_players", "_prompting", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self._players: dict[Player, IPlayer] = {}
        self._prompting = False
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.current_player)

    def player(self, color: Player) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        position: Position | None = None,
    ) -> None:
        self._players = {Player.WHITE: white, Player.BLACK: black}
        start = position.copy() if position is not None else Position()
        self._state = GameState(position=start)
        _LOGGER.debug("New game: %s vs %s", white.name, black.name)

        if self._state.is_game_over:
            self._emit_game_over(self._state.result)
            return
        self._emit_phase(self._state.phase)
        self._prompt_current_player()

    def submit_move(self, move: Move) -> bool:
        if not self._play(move):
            return False
        self._prompt_current_player()
        return True

    def submit_promotion(self, kind: PieceKind) -> bool:
        if not self._promote(kind):
            return False
        self._prompt_current_player()
        return True

    def resign(self, color: Player) -> None:
        if self._state.is_game_over:
            return
        self._cancel_agent()
        self._state.resign(color)
        self._emit_game_over(self._state.result)

    def declare_draw(self) -> None:
        if self._state.is_game_over:
            return
        self._cancel_agent()
        self._state.declare_draw()
        self._emit_game_over(GameResult.DRAW)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _play(self, move: Move) -> bool:
        """Validate and apply *move* without prompting anyone."""
        state = self._state
        if state.phase != GamePhase.AWAITING_MOVE:
            return False

        mover = state.piece_at(move.from_sq).owner
        if mover != state.current_player or move not in state.legal_moves(
            move.from_sq
        ):
            _LOGGER.warning("Rejected illegal move %s for %s", move, state.current_player)
            return False

        state.apply_move(move)
        self._emit_move(move)

        if state.is_game_over:
            self._emit_game_over(state.result)
        elif state.phase == GamePhase.AWAITING_PROMOTION:
            self._emit_phase(GamePhase.AWAITING_PROMOTION)
        return True

    def _promote(self, kind: PieceKind) -> bool:
        state = self._state
        square = state.promotion_square
        if square is None or not state.promote(kind):
            return False

        for cb in self.events.on_promotion:
            cb(kind, square, state)

        if state.is_game_over:
            self._emit_game_over(state.result)
        else:
            self._emit_phase(GamePhase.AWAITING_MOVE)
        return True

    def _prompt_current_player(self) -> None:
        """Ask the side to move for decisions until nobody answers.

        Nested calls return immediately; the outermost call keeps looping
        while the game makes progress.
        """
        if self._prompting:
            return
        self._prompting = True
        try:
            while not self._state.is_game_over:
                cp = self.current_player
                if cp is None:
                    break
                before = (self._state.ply, self._state.phase)
                self._ask(cp)
                if (self._state.ply, self._state.phase) == before:
                    break
        finally:
            self._prompting = False

    def _ask(self, player: IPlayer) -> None:
        state = self._state
        if state.phase == GamePhase.AWAITING_PROMOTION:
            kind = player.choose_promotion(state)
            if kind is not None:
                self._promote(kind)
            return
        move = player.choose_move(state)
        if move is not None:
            self._play(move)

    def _cancel_agent(self) -> None:
        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._state)

    def _emit_game_over(self, result: GameResult) -> None:
        self._emit_phase(GamePhase.ENDED)
        for cb in self.events.on_game_over:
            cb(result)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
