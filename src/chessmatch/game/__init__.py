"""Game layer: drives a single :class:`~chessmatch.core.ChessMatch`.

Quick start::

    from chessmatch.game import MatchController

    ctrl = MatchController()
    ctrl.events.on_game_over.append(print)
    ctrl.submit_move("f2", "f3")
"""

from chessmatch.game.controller import MatchController, MatchEvents

__all__ = [
    "MatchController",
    "MatchEvents",
]
