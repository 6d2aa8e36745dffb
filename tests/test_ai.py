"""Tests for the computer's move selection."""

from __future__ import annotations

import pytest

from domino_duel.core.ai import choose_move, choose_side
from domino_duel.core.board import Board, Side
from domino_duel.core.game_state import GameState, Seat, Status
from domino_duel.core.tiles import OrientedTile, Tile


def _state(computer: tuple[Tile, ...], board: Board) -> GameState:
    return GameState(
        board=board,
        human_hand=(Tile(0, 0),),
        computer_hand=computer,
        turn=Seat.COMPUTER,
        status=Status.IN_PROGRESS,
    )


BOARD_3_5 = Board((OrientedTile(3, 1), OrientedTile(1, 5)), 3, 5)
BOARD_5_3 = Board((OrientedTile(5, 1), OrientedTile(1, 3)), 5, 3)
BOARD_4_4 = Board((OrientedTile(4, 4),), 4, 4)


class TestChooseSide:
    """Tests for side preference."""

    def test_empty_board_is_left(self) -> None:
        assert choose_side(Board(), Tile(2, 6)) is Side.LEFT

    def test_only_left(self) -> None:
        assert choose_side(BOARD_3_5, Tile(0, 3)) is Side.LEFT

    def test_only_right(self) -> None:
        assert choose_side(BOARD_3_5, Tile(5, 6)) is Side.RIGHT

    def test_both_prefers_higher_end_right(self) -> None:
        assert choose_side(BOARD_3_5, Tile(3, 5)) is Side.RIGHT

    def test_both_prefers_higher_end_left(self) -> None:
        assert choose_side(BOARD_5_3, Tile(3, 5)) is Side.LEFT

    def test_both_equal_ends_prefers_left(self) -> None:
        assert choose_side(BOARD_4_4, Tile(4, 6)) is Side.LEFT

    def test_unplayable_raises(self) -> None:
        with pytest.raises(ValueError, match="fits neither end"):
            choose_side(BOARD_3_5, Tile(0, 0))


class TestChooseMove:
    """Tests for the highest-pip heuristic."""

    def test_nothing_playable(self) -> None:
        state = _state((Tile(0, 0), Tile(2, 2)), BOARD_3_5)
        assert choose_move(state) is None

    def test_heaviest_playable(self) -> None:
        hand = (Tile(0, 3), Tile(6, 6), Tile(5, 6), Tile(1, 5))
        move = choose_move(_state(hand, BOARD_3_5))
        # [6|6] is heavier but does not fit.
        assert move == (Tile(5, 6), Side.RIGHT)

    def test_tie_goes_to_first_in_hand(self) -> None:
        hand = (Tile(2, 5), Tile(3, 4), Tile(1, 6))
        assert choose_move(_state(hand, Board())) == (Tile(2, 5), Side.LEFT)
        hand = (Tile(3, 4), Tile(2, 5))
        assert choose_move(_state(hand, Board())) == (Tile(3, 4), Side.LEFT)

    def test_opening_plays_heaviest(self) -> None:
        hand = (Tile(0, 1), Tile(6, 6), Tile(4, 5))
        assert choose_move(_state(hand, Board())) == (Tile(6, 6), Side.LEFT)

    def test_for_human_seat(self) -> None:
        state = _state((Tile(6, 6),), BOARD_3_5)
        assert choose_move(state, Seat.HUMAN) is None
