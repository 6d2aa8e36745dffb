"""Game engine driving a human-vs-computer match.

``GameEngine`` owns the current :class:`GameState`, the running scores and
the pending computer step. The presentation layer talks to it through a
handful of intents (play, draw, pass, new game) and gets back an outcome
value with a status message; it never touches the state directly.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

import numpy as np

from domino_duel.core.ai import choose_move
from domino_duel.core.board import Side
from domino_duel.core.config import EngineConfig
from domino_duel.core.errors import DominoError, InvalidMove
from domino_duel.core.game_state import GameState, Seat, Status
from domino_duel.core.scheduler import Handle, ManualScheduler, Scheduler
from domino_duel.core.tiles import OrientedTile, Tile

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Placed:
    """A tile was laid and the game goes on.

    Attributes:
        seat: Who laid it.
        side: The end it went on.
        tile: The tile as oriented on the board.
        board: The whole chain after the placement.
        human_hand: The human's hand after the placement.
        message: Status line for display.
    """

    seat: Seat
    side: Side
    tile: OrientedTile
    board: tuple[OrientedTile, ...]
    human_hand: tuple[Tile, ...]
    message: str


@dataclass(frozen=True)
class Drew:
    """A tile moved from the pool into a hand.

    Attributes:
        seat: Who drew.
        tile: The drawn tile, or None when the computer drew (hidden).
        turn_retained: False when the draw handed the turn over.
        message: Status line for display.
    """

    seat: Seat
    tile: Tile | None
    turn_retained: bool
    message: str


@dataclass(frozen=True)
class Passed:
    """A seat handed over the turn without laying a tile."""

    seat: Seat
    message: str


@dataclass(frozen=True)
class Rejected:
    """An intent was refused; nothing changed.

    Attributes:
        reason: Why the intent was refused.
        error: The rule violation behind it.
        message: Status line for display.
    """

    reason: str
    error: DominoError
    message: str


@dataclass(frozen=True)
class GameEnded:
    """The game is over.

    Attributes:
        winner: The winning seat, or None for a drawn blocked game.
        score_delta: Points added to the winner's score.
        blocked: True if neither seat could move.
        message: Status line for display.
    """

    winner: Seat | None
    score_delta: int
    blocked: bool
    message: str


Outcome = Placed | Drew | Passed | Rejected | GameEnded


@dataclass(frozen=True)
class GameSnapshot:
    """What the presentation layer may see of the game.

    The computer's tiles are hidden; only their count is exposed.
    """

    board: tuple[OrientedTile, ...]
    left_end: int | None
    right_end: int | None
    human_hand: tuple[Tile, ...]
    computer_hand_size: int
    pool_size: int
    turn: Seat
    status: Status
    winner: Seat | None
    scores: Mapping[Seat, int]
    message: str


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


@dataclass
class GameEngine:
    """Rules engine for a human playing against the computer.

    Attributes:
        config: Engine settings.
        scheduler: Runs the delayed computer steps. Defaults to a
            :class:`ManualScheduler` that the host drains itself.
    """

    config: EngineConfig = field(default_factory=EngineConfig)
    scheduler: Scheduler = field(default_factory=ManualScheduler)

    def __post_init__(self) -> None:
        self._rng = np.random.default_rng(self.config.seed)
        self._state = GameState()
        self._scores = {Seat.HUMAN: 0, Seat.COMPUTER: 0}
        self._message = "Press New Game to start."
        self._generation = 0
        self._pending: Handle | None = None
        self._listeners: list[Callable[[Outcome], object]] = []

    # -- inspection ---------------------------------------------------------

    @property
    def game_state(self) -> GameState:
        """The full current state, including the computer's hand."""
        return self._state

    @property
    def scores(self) -> dict[Seat, int]:
        return dict(self._scores)

    def get_state(self) -> GameSnapshot:
        """Return the publicly visible view of the game."""
        state = self._state
        return GameSnapshot(
            board=state.board.tiles,
            left_end=state.board.left_end,
            right_end=state.board.right_end,
            human_hand=state.human_hand,
            computer_hand_size=len(state.computer_hand),
            pool_size=len(state.pool),
            turn=state.turn,
            status=state.status,
            winner=state.winner,
            scores=self.scores,
            message=self._message,
        )

    def add_listener(self, callback: Callable[[Outcome], object]) -> None:
        """Register *callback* to receive every outcome the engine produces."""
        self._listeners.append(callback)

    # -- intents ------------------------------------------------------------

    def start_new_game(self) -> GameSnapshot:
        """Deal a new game, cancelling any computer step still pending."""
        self._cancel_pending()
        self._generation += 1
        self._state = GameState.new_game(self._rng, self.config.hand_size)
        self._message = "New game started. You go first."
        logger.info(
            "Game %d started: human=%s computer=%d tiles pool=%d",
            self._generation,
            " ".join(str(t) for t in self._state.human_hand),
            len(self._state.computer_hand),
            len(self._state.pool),
        )
        return self.get_state()

    def load(self, state: GameState) -> GameSnapshot:
        """Resume play from an arbitrary state, e.g. a prepared position.

        Any pending computer step is dropped; if the loaded state is the
        computer's turn, a fresh step is scheduled.
        """
        self._cancel_pending()
        self._generation += 1
        self._state = state
        logger.info("Game %d loaded: turn=%s", self._generation, state.turn.value)
        if state.is_in_progress() and state.turn is Seat.COMPUTER:
            self._schedule_computer()
        return self.get_state()

    def attempt_human_play(
        self,
        tile_id: Tile | str | tuple[int, int],
        side: Side | None = None,
    ) -> Outcome:
        """Lay one of the human's tiles, trying the left end then the right.

        Args:
            tile_id: The tile, as a Tile, an ``"a-b"`` id or an ``(a, b)``
                pair in either order.
            side: Restrict the attempt to this end.

        Returns:
            ``Placed``, ``GameEnded`` or ``Rejected``. A rejection leaves
            the state untouched and the human keeps the turn.
        """
        state = self._state
        try:
            state.require_turn(Seat.HUMAN)
            tile = _resolve_tile(tile_id)
            if tile not in state.human_hand:
                raise InvalidMove(f"Tile {tile} is not in your hand.")
            sides = (side,) if side is not None else (Side.LEFT, Side.RIGHT)
            legal = [s for s in sides if state.can_place(tile, s)]
            if not legal:
                raise InvalidMove(f"Tile {tile} has no legal placement.")
            new_state, oriented = state.place(Seat.HUMAN, tile, legal[0])
        except DominoError as exc:
            return self._reject(exc)

        return self._after_placement(new_state, Seat.HUMAN, legal[0], oriented)

    def attempt_human_draw(self) -> Outcome:
        """Draw one tile for the human.

        The human keeps the turn if any held tile can now be played;
        otherwise the turn passes to the computer.
        """
        try:
            new_state, tile = self._state.draw(Seat.HUMAN)
        except DominoError as exc:
            return self._reject(exc)

        if new_state.has_playable(Seat.HUMAN):
            self._state = new_state
            return self._emit(
                Drew(Seat.HUMAN, tile, True, f"You drew {tile}.")
            )

        self._state = new_state.yield_turn(Seat.HUMAN)
        drew = self._emit(
            Drew(
                Seat.HUMAN,
                tile,
                False,
                f"You drew {tile} and cannot play. Computer's turn.",
            )
        )
        ended = self._hand_over(self._state)
        return ended or drew

    def attempt_human_pass(self) -> Outcome:
        """Give up the turn when the pool is empty and nothing fits."""
        try:
            new_state = self._state.pass_turn(Seat.HUMAN)
        except DominoError as exc:
            return self._reject(exc)
        self._state = new_state
        passed = self._emit(Passed(Seat.HUMAN, "You cannot play. Computer's turn."))
        ended = self._hand_over(new_state)
        return ended or passed

    def computer_turn(self) -> Outcome | None:
        """Run one computer step.

        Draws (and schedules another step) while nothing fits and the pool
        has tiles, passes when the pool is exhausted, otherwise lays the
        heaviest playable tile.

        Returns:
            The outcome, or None if it is not the computer's turn.
        """
        self._cancel_pending()
        state = self._state
        if not state.is_in_progress() or state.turn is not Seat.COMPUTER:
            logger.debug("Computer step ignored: turn=%s status=%s",
                         state.turn.value, state.status.value)
            return None

        move = choose_move(state, Seat.COMPUTER)
        if move is None:
            if state.pool:
                self._state, _ = state.draw(Seat.COMPUTER)
                drew = self._emit(
                    Drew(Seat.COMPUTER, None, True, "The computer drew a tile.")
                )
                self._schedule_computer()
                return drew
            self._state = state.pass_turn(Seat.COMPUTER)
            passed = self._emit(
                Passed(
                    Seat.COMPUTER,
                    "The computer cannot play and the pool is empty. Your turn.",
                )
            )
            ended = self._hand_over(self._state)
            return ended or passed

        tile, side = move
        new_state, oriented = state.place(Seat.COMPUTER, tile, side)
        return self._after_placement(new_state, Seat.COMPUTER, side, oriented)

    # -- internals ----------------------------------------------------------

    def _after_placement(
        self,
        new_state: GameState,
        seat: Seat,
        side: Side,
        oriented: OrientedTile,
    ) -> Outcome:
        if new_state.status is Status.ENDED:
            return self._finish(new_state)

        self._state = new_state
        who = "You" if seat is Seat.HUMAN else "The computer"
        placed = self._emit(
            Placed(
                seat=seat,
                side=side,
                tile=oriented,
                board=new_state.board.tiles,
                human_hand=new_state.human_hand,
                message=f"{who} placed {oriented} on the {side.value}.",
            )
        )
        ended = self._hand_over(new_state)
        return ended or placed

    def _hand_over(self, new_state: GameState) -> GameEnded | None:
        """Commit a state whose turn just changed hands.

        Ends a blocked game when configured to. A human left with nothing
        to play and nothing to draw is passed automatically, which cannot
        cycle because the computer then has a playable tile. Schedules the
        computer if the turn is now its own.
        """
        if self.config.end_blocked_games:
            if new_state.is_blocked():
                return self._finish(new_state.end_blocked())
            if (
                new_state.turn is Seat.HUMAN
                and not new_state.pool
                and not new_state.has_playable(Seat.HUMAN)
            ):
                new_state = new_state.pass_turn(Seat.HUMAN)
                self._state = new_state
                self._emit(
                    Passed(
                        Seat.HUMAN,
                        "You cannot play and the pool is empty. Computer's turn.",
                    )
                )
        self._state = new_state
        if new_state.turn is Seat.COMPUTER:
            self._schedule_computer()
        return None

    def _finish(self, ended_state: GameState) -> GameEnded:
        self._cancel_pending()
        self._state = ended_state
        winner = ended_state.winner
        if winner is not None:
            self._scores[winner] += ended_state.score_delta

        if winner is None:
            message = "The game is blocked and tied."
        elif winner is Seat.HUMAN:
            message = f"You win! +{ended_state.score_delta} points."
        else:
            message = f"The computer wins. +{ended_state.score_delta} points."
        if ended_state.blocked:
            message = f"Blocked game. {message}"

        logger.info(
            "Game %d ended: winner=%s delta=%d blocked=%s scores=%s",
            self._generation,
            winner.value if winner else None,
            ended_state.score_delta,
            ended_state.blocked,
            {seat.value: score for seat, score in self._scores.items()},
        )
        return self._emit(
            GameEnded(winner, ended_state.score_delta, ended_state.blocked, message)
        )

    def _reject(self, exc: DominoError) -> Rejected:
        logger.debug("Intent rejected: %s", exc)
        return self._emit(Rejected(str(exc), exc, str(exc)))

    def _emit(self, outcome: Outcome) -> Outcome:
        self._message = outcome.message
        if not isinstance(outcome, (Rejected, GameEnded)):
            logger.debug("%s", outcome.message)
        for listener in self._listeners:
            listener(outcome)
        return outcome

    def _schedule_computer(self) -> None:
        self._cancel_pending()
        generation = self._generation
        self._pending = self.scheduler.schedule(
            self.config.computer_delay,
            lambda: self._scheduled_step(generation),
        )

    def _scheduled_step(self, generation: int) -> None:
        if generation != self._generation:
            logger.debug("Dropping computer step from game %d", generation)
            return
        self._pending = None
        self.computer_turn()

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None


def _resolve_tile(tile_id: Tile | str | tuple[int, int]) -> Tile:
    """Turn a presentation-side tile reference into a Tile.

    Raises:
        InvalidMove: If the reference does not name a valid tile.
    """
    if isinstance(tile_id, Tile):
        return tile_id
    try:
        if isinstance(tile_id, str):
            return Tile.parse(tile_id)
        x, y = tile_id
        return Tile.of(int(x), int(y))
    except (TypeError, ValueError) as exc:
        raise InvalidMove(f"Unknown tile {tile_id!r}.") from exc
