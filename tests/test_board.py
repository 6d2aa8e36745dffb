"""Tests for the board chain: legality, orientation and invariants."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from domino_duel.core.board import Board, Side
from domino_duel.core.errors import DominoError, InvalidMove
from domino_duel.core.tiles import OrientedTile, Tile, create_tile_set

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _board(*pairs: tuple[int, int]) -> Board:
    """Build a consistent board from oriented (left, right) pairs."""
    tiles = tuple(OrientedTile(left, right) for left, right in pairs)
    board = Board(tiles, tiles[0].left, tiles[-1].right)
    assert board.is_consistent()
    return board


# ---------------------------------------------------------------------------
# can_place
# ---------------------------------------------------------------------------


class TestCanPlace:
    """Tests for the legality predicate."""

    def test_empty_board_accepts_anything(self) -> None:
        board = Board()
        for tile in create_tile_set():
            assert board.can_place(tile, Side.LEFT)
            assert board.can_place(tile, Side.RIGHT)

    def test_matches_left_end(self) -> None:
        board = _board((3, 4), (4, 5))
        assert board.can_place(Tile(1, 3), Side.LEFT)
        assert board.can_place(Tile(3, 6), Side.LEFT)
        assert not board.can_place(Tile(1, 2), Side.LEFT)

    def test_matches_right_end(self) -> None:
        board = _board((3, 4), (4, 5))
        assert board.can_place(Tile(2, 5), Side.RIGHT)
        assert not board.can_place(Tile(1, 3), Side.RIGHT)

    def test_playable_sides(self) -> None:
        board = _board((3, 5))
        assert board.playable_sides(Tile(3, 5)) == (Side.LEFT, Side.RIGHT)
        assert board.playable_sides(Tile(0, 3)) == (Side.LEFT,)
        assert board.playable_sides(Tile(5, 6)) == (Side.RIGHT,)
        assert board.playable_sides(Tile(1, 2)) == ()

    def test_pure(self) -> None:
        board = _board((3, 5))
        board.can_place(Tile(3, 3), Side.LEFT)
        assert board == _board((3, 5))

    @given(
        a=st.integers(0, 6),
        b=st.integers(0, 6),
        left=st.integers(0, 6),
        right=st.integers(0, 6),
    )
    def test_hypothesis_matches_iff_pip_equals_end(
        self, a: int, b: int, left: int, right: int
    ) -> None:
        board = Board((OrientedTile(left, right),), left, right)
        tile = Tile.of(a, b)
        assert board.can_place(tile, Side.LEFT) == (left in (a, b))
        assert board.can_place(tile, Side.RIGHT) == (right in (a, b))


# ---------------------------------------------------------------------------
# place
# ---------------------------------------------------------------------------


class TestPlace:
    """Tests for placement and orientation."""

    def test_first_tile_as_is(self) -> None:
        board, oriented = Board().place(Tile(2, 5), Side.RIGHT)
        assert oriented == OrientedTile(2, 5)
        assert board.left_end == 2
        assert board.right_end == 5
        assert board.tiles == (OrientedTile(2, 5),)

    def test_right_end_flips_when_needed(self) -> None:
        board = _board((3, 1), (1, 5))
        new, oriented = board.place(Tile(2, 5), Side.RIGHT)
        assert oriented == OrientedTile(5, 2)
        assert new.tiles[-1] == OrientedTile(5, 2)
        assert new.right_end == 2
        assert new.left_end == 3

    def test_right_end_no_flip(self) -> None:
        board = _board((3, 5))
        new, oriented = board.place(Tile(5, 6), Side.RIGHT)
        assert oriented == OrientedTile(5, 6)
        assert new.right_end == 6

    def test_left_end_no_flip(self) -> None:
        board = _board((3, 5))
        new, oriented = board.place(Tile(1, 3), Side.LEFT)
        assert oriented == OrientedTile(1, 3)
        assert new.tiles[0] == OrientedTile(1, 3)
        assert new.left_end == 1
        assert new.right_end == 5

    def test_left_end_flips_when_needed(self) -> None:
        board = _board((3, 5))
        new, oriented = board.place(Tile(3, 6), Side.LEFT)
        assert oriented == OrientedTile(6, 3)
        assert new.left_end == 6

    def test_double_on_end(self) -> None:
        board = _board((3, 5))
        new, oriented = board.place(Tile(5, 5), Side.RIGHT)
        assert oriented == OrientedTile(5, 5)
        assert new.right_end == 5

    def test_matching_pip_faces_chain(self) -> None:
        board = _board((4, 4))
        for tile in (Tile(0, 4), Tile(4, 6)):
            left, lo = board.place(tile, Side.LEFT)
            right, ro = board.place(tile, Side.RIGHT)
            assert lo.right == 4 and left.left_end == tile.other_value(4)
            assert ro.left == 4 and right.right_end == tile.other_value(4)
            assert left.is_consistent() and right.is_consistent()

    def test_illegal_raises(self) -> None:
        board = _board((3, 5))
        with pytest.raises(InvalidMove, match="cannot be placed"):
            board.place(Tile(1, 2), Side.LEFT)

    def test_invalid_move_is_value_error(self) -> None:
        assert issubclass(InvalidMove, DominoError)
        assert issubclass(InvalidMove, ValueError)

    def test_original_board_unchanged(self) -> None:
        board = _board((3, 5))
        board.place(Tile(5, 6), Side.RIGHT)
        assert board.tiles == (OrientedTile(3, 5),)

    def test_identity_preserved(self) -> None:
        board = _board((3, 5))
        _, oriented = board.place(Tile(3, 6), Side.LEFT)
        assert oriented.tile == Tile(3, 6)


# ---------------------------------------------------------------------------
# Chain invariant
# ---------------------------------------------------------------------------


class TestChainInvariant:
    """The chain stays consistent through any sequence of legal plays."""

    def test_empty_is_consistent(self) -> None:
        assert Board().is_consistent()

    def test_detects_broken_chain(self) -> None:
        broken = Board((OrientedTile(1, 2), OrientedTile(3, 4)), 1, 4)
        assert not broken.is_consistent()

    def test_detects_stale_end(self) -> None:
        stale = Board((OrientedTile(1, 2),), 1, 5)
        assert not stale.is_consistent()

    @given(
        order=st.permutations(list(create_tile_set())),
        prefer_right=st.lists(st.booleans(), min_size=28, max_size=28),
    )
    @settings(max_examples=100)
    def test_hypothesis_invariant_holds_after_every_placement(
        self, order: list[Tile], prefer_right: list[bool]
    ) -> None:
        board = Board()
        placed: list[Tile] = []
        for tile, right_first in zip(order, prefer_right):
            sides = board.playable_sides(tile)
            if not sides:
                continue
            side = sides[-1] if right_first else sides[0]
            board, _ = board.place(tile, side)
            placed.append(tile)
            assert board.is_consistent()
            assert board.left_end == board.tiles[0].left
            assert board.right_end == board.tiles[-1].right
        assert sorted(t.tile for t in board.tiles) == sorted(placed)
