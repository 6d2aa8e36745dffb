"""Rejection reasons raised by the game state machine.

All of these are recoverable: the state that raised them is left untouched,
and :class:`~domino_duel.core.engine.GameEngine` turns them into a
``Rejected`` outcome for the presentation layer.
"""

from __future__ import annotations


class DominoError(ValueError):
    """Base class for an intent the rules refuse."""


class InvalidMove(DominoError):
    """The tile is not held by the acting seat or cannot go where asked."""


class OutOfTurn(DominoError):
    """The acting seat does not hold the turn, or no game is in progress."""


class EmptyPool(DominoError):
    """A draw was attempted with no tiles left in the pool."""
