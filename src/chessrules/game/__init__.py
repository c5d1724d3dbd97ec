"""Game management layer - state machine, players, controller.

Quick start::

    from chessrules.core import Player
    from chessrules.game import GameController, HumanPlayer

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Player.WHITE, "Alice"),
        black=HumanPlayer(Player.BLACK, "Bob"),
    )
"""

from chessrules.game.controller import GameController, GameEvents
from chessrules.game.interfaces import GameEndReason, IGameController, IPlayer
from chessrules.game.player import AIPlayer, HumanPlayer
from chessrules.game.state import GameState

__all__ = [
    # Interfaces
    "GameEndReason",
    "IGameController",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "GameState",
    "HumanPlayer",
]
