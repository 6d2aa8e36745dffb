"""Game state machine and turn tracking.

Immutable game state for a heads-up double-six game between a human and
the computer. Each play, draw or pass produces a new GameState, so the
engine can compare snapshots and discard a rejected intent by simply
keeping the old value.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

import numpy as np

from domino_duel.core.board import Board, Side
from domino_duel.core.dealing import HAND_SIZE, deal, shuffle
from domino_duel.core.errors import EmptyPool, InvalidMove, OutOfTurn
from domino_duel.core.tiles import OrientedTile, Tile, create_tile_set, pip_total


class Seat(Enum):
    """The two players. The human always opens."""

    HUMAN = "human"
    COMPUTER = "computer"

    @property
    def opponent(self) -> Seat:
        return Seat.COMPUTER if self is Seat.HUMAN else Seat.HUMAN


class Status(Enum):
    """Lifecycle of a single game."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    ENDED = "ended"


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a game.

    Attributes:
        board: The chain laid so far.
        human_hand: The human's tiles in deal/draw order.
        computer_hand: The computer's tiles in deal/draw order.
        pool: Undealt tiles; draws take from the end.
        turn: Whose turn it is.
        status: Lifecycle status.
        winner: The winning seat once ended, or None (also for a drawn
            blocked game).
        score_delta: Points awarded to the winner when the game ended.
        blocked: True if the game ended because neither seat could move.
    """

    board: Board = Board()
    human_hand: tuple[Tile, ...] = ()
    computer_hand: tuple[Tile, ...] = ()
    pool: tuple[Tile, ...] = ()
    turn: Seat = Seat.HUMAN
    status: Status = Status.NOT_STARTED
    winner: Seat | None = None
    score_delta: int = 0
    blocked: bool = False

    @classmethod
    def new_game(
        cls,
        rng: np.random.Generator,
        hand_size: int = HAND_SIZE,
    ) -> GameState:
        """Shuffle a fresh set, deal both hands and start with the human.

        Args:
            rng: Randomness for the shuffle.
            hand_size: Tiles dealt to each seat.

        Returns:
            An in-progress GameState with an empty board.
        """
        pool = shuffle(create_tile_set(), rng)
        human, computer, pool = deal(pool, hand_size)
        return cls(
            human_hand=human,
            computer_hand=computer,
            pool=pool,
            turn=Seat.HUMAN,
            status=Status.IN_PROGRESS,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_in_progress(self) -> bool:
        return self.status is Status.IN_PROGRESS

    def hand(self, seat: Seat) -> tuple[Tile, ...]:
        """Return the tiles held by *seat*."""
        return self.human_hand if seat is Seat.HUMAN else self.computer_hand

    def can_place(self, tile: Tile, side: Side) -> bool:
        """Return True if *tile* may be laid on *side* of the board."""
        return self.board.can_place(tile, side)

    def playable_tiles(self, seat: Seat) -> tuple[Tile, ...]:
        """Return the tiles *seat* could lay right now, in hand order."""
        return tuple(
            tile for tile in self.hand(seat) if self.board.playable_sides(tile)
        )

    def has_playable(self, seat: Seat) -> bool:
        return bool(self.playable_tiles(seat))

    def is_blocked(self) -> bool:
        """True when the pool is empty and neither seat can lay a tile."""
        return (
            not self.pool
            and not self.has_playable(Seat.HUMAN)
            and not self.has_playable(Seat.COMPUTER)
        )

    def hand_pips(self, seat: Seat) -> int:
        """Return the pip total of *seat*'s hand."""
        return pip_total(self.hand(seat))

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def require_turn(self, seat: Seat) -> None:
        """Raise OutOfTurn unless *seat* may act in a running game."""
        if not self.is_in_progress():
            raise OutOfTurn("No game is in progress.")
        if seat is not self.turn:
            raise OutOfTurn(f"It is {self.turn.value}'s turn, not {seat.value}'s.")

    def _with_hand(self, seat: Seat, hand: tuple[Tile, ...]) -> GameState:
        if seat is Seat.HUMAN:
            return replace(self, human_hand=hand)
        return replace(self, computer_hand=hand)

    def place(
        self, seat: Seat, tile: Tile, side: Side
    ) -> tuple[GameState, OrientedTile]:
        """Lay a tile from *seat*'s hand on *side*.

        Ends the game with *seat* as winner if the hand empties, otherwise
        passes the turn.

        Args:
            seat: The acting seat.
            tile: A tile held by that seat.
            side: Which end to extend.

        Returns:
            The new state and the tile as oriented on the board.

        Raises:
            OutOfTurn: If *seat* does not hold the turn or the game is over.
            InvalidMove: If the tile is not held or does not fit that side.
        """
        self.require_turn(seat)
        hand = self.hand(seat)
        if tile not in hand:
            raise InvalidMove(f"Tile {tile} is not in the {seat.value}'s hand.")

        board, oriented = self.board.place(tile, side)
        new_hand = tuple(t for t in hand if t != tile)
        state = replace(self._with_hand(seat, new_hand), board=board)

        if not new_hand:
            return state.end_game(seat), oriented
        return replace(state, turn=seat.opponent), oriented

    def draw(self, seat: Seat) -> tuple[GameState, Tile]:
        """Move the last pool tile into *seat*'s hand. The turn is kept.

        Raises:
            OutOfTurn: If *seat* does not hold the turn or the game is over.
            EmptyPool: If there is nothing left to draw.
        """
        self.require_turn(seat)
        if not self.pool:
            raise EmptyPool("The pool is empty.")
        tile = self.pool[-1]
        state = self._with_hand(seat, self.hand(seat) + (tile,))
        return replace(state, pool=self.pool[:-1]), tile

    def yield_turn(self, seat: Seat) -> GameState:
        """Hand the turn over because *seat* has nothing that fits.

        Used after a draw leaves the hand unplayable, whether or not the
        pool still has tiles.

        Raises:
            OutOfTurn: If *seat* does not hold the turn or the game is over.
            InvalidMove: If *seat* has a legal placement.
        """
        self.require_turn(seat)
        if self.has_playable(seat):
            raise InvalidMove(f"The {seat.value} has a legal placement.")
        return replace(self, turn=seat.opponent)

    def pass_turn(self, seat: Seat) -> GameState:
        """Hand the turn to the opponent without laying a tile.

        Only allowed once the pool is exhausted and *seat* has no legal
        placement.

        Raises:
            OutOfTurn: If *seat* does not hold the turn or the game is over.
            InvalidMove: If *seat* could still draw or play.
        """
        self.require_turn(seat)
        if self.pool:
            raise InvalidMove("Cannot pass while tiles remain in the pool.")
        return self.yield_turn(seat)

    def end_game(self, winner: Seat) -> GameState:
        """Freeze the game with *winner* scoring the loser's pip total."""
        return replace(
            self,
            status=Status.ENDED,
            winner=winner,
            score_delta=self.hand_pips(winner.opponent),
            blocked=False,
        )

    def end_blocked(self) -> GameState:
        """Freeze a blocked game; the lighter hand wins the other's pips.

        Equal pip totals end the game with no winner and no points.
        """
        human, computer = self.hand_pips(Seat.HUMAN), self.hand_pips(Seat.COMPUTER)
        if human == computer:
            return replace(
                self, status=Status.ENDED, winner=None, score_delta=0, blocked=True
            )
        winner = Seat.HUMAN if human < computer else Seat.COMPUTER
        return replace(self.end_game(winner), blocked=True)
