"""The chain of tiles laid on the table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from domino_duel.core.errors import InvalidMove
from domino_duel.core.tiles import OrientedTile, Tile


class Side(Enum):
    """The two open ends of the chain."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Board:
    """Immutable chain of oriented tiles.

    Every placement returns a new Board. For each neighbouring pair the
    right pip of the first equals the left pip of the second, and the
    ends are the outward pips of the first and last tiles.

    Attributes:
        tiles: The oriented tiles from left to right.
        left_end: Exposed pip at the left end, or None when empty.
        right_end: Exposed pip at the right end, or None when empty.
    """

    tiles: tuple[OrientedTile, ...] = ()
    left_end: int | None = None
    right_end: int | None = None

    def is_empty(self) -> bool:
        return not self.tiles

    def end(self, side: Side) -> int | None:
        """Return the exposed pip on *side*."""
        return self.left_end if side is Side.LEFT else self.right_end

    def can_place(self, tile: Tile, side: Side) -> bool:
        """Return True if *tile* may be laid on *side*.

        Any tile fits an empty board. Otherwise one of the tile's pips must
        equal the end value on that side.
        """
        if self.is_empty():
            return True
        end = self.end(side)
        assert end is not None
        return tile.contains_value(end)

    def playable_sides(self, tile: Tile) -> tuple[Side, ...]:
        """Return the sides *tile* can legally go on, left first."""
        return tuple(side for side in Side if self.can_place(tile, side))

    def place(self, tile: Tile, side: Side) -> tuple[Board, OrientedTile]:
        """Lay *tile* on *side*, flipping it so the touching pips match.

        On an empty board the tile goes down as-is and sets both ends.

        Args:
            tile: The tile to lay.
            side: Which end to extend.

        Returns:
            The new board and the tile in the orientation it was laid.

        Raises:
            InvalidMove: If the tile matches neither pip of that end.
        """
        if not self.can_place(tile, side):
            raise InvalidMove(
                f"Tile {tile} cannot be placed on the {side.value} end "
                f"({self.end(side)})."
            )

        if self.is_empty():
            oriented = OrientedTile.from_tile(tile)
            return Board((oriented,), oriented.left, oriented.right), oriented

        # The matching pip faces the chain; the other one becomes the new end.
        if side is Side.LEFT:
            oriented = OrientedTile(tile.other_value(self.left_end), self.left_end)
            board = Board((oriented,) + self.tiles, oriented.left, self.right_end)
        else:
            oriented = OrientedTile(self.right_end, tile.other_value(self.right_end))
            board = Board(self.tiles + (oriented,), self.left_end, oriented.right)
        return board, oriented

    def is_consistent(self) -> bool:
        """Check the chain invariant (neighbours touch, ends match)."""
        if self.is_empty():
            return self.left_end is None and self.right_end is None
        for first, second in zip(self.tiles, self.tiles[1:]):
            if first.right != second.left:
                return False
        return (
            self.left_end == self.tiles[0].left
            and self.right_end == self.tiles[-1].right
        )

    def __str__(self) -> str:
        if self.is_empty():
            return "(empty)"
        return "".join(str(t) for t in self.tiles)
