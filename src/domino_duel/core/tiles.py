"""Tile representation and domino set generation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Tile:
    """A domino tile as canonical unordered pair (a <= b).

    The canonical form is the tile's identity: ``[5|2]`` and ``[2|5]`` are
    the same physical piece, and both are represented as ``Tile(2, 5)``.
    How the tile lies on the board is tracked separately by
    :class:`OrientedTile`.

    Attributes:
        a: The lower (or equal) pip value, 0-6.
        b: The higher (or equal) pip value, 0-6.

    Raises:
        ValueError: If the tile values are outside [0, 6] or not in
            canonical order (a <= b).
    """

    a: int
    b: int

    def __post_init__(self) -> None:
        if not (0 <= self.a <= self.b <= 6):
            raise ValueError(f"Invalid tile: ({self.a}, {self.b})")

    @classmethod
    def of(cls, x: int, y: int) -> Tile:
        """Build a tile from two pips given in any order.

        Args:
            x: One pip value.
            y: The other pip value.

        Returns:
            The canonical Tile holding both values.
        """
        return cls(min(x, y), max(x, y))

    @classmethod
    def parse(cls, tile_id: str) -> Tile:
        """Parse an id string such as ``"2-5"`` (either order).

        Raises:
            ValueError: If the string is not two pip values joined by ``-``.
        """
        parts = tile_id.strip().split("-")
        if len(parts) != 2 or not all(p.strip().isdigit() for p in parts):
            raise ValueError(f"Invalid tile id: {tile_id!r}")
        return cls.of(int(parts[0]), int(parts[1]))

    @property
    def id(self) -> str:
        """Stable identifier ``"a-b"`` used by presentation layers."""
        return f"{self.a}-{self.b}"

    def is_double(self) -> bool:
        """Return True if the tile is a double (both ends equal)."""
        return self.a == self.b

    def values(self) -> tuple[int, int]:
        """Return the two pip values as a tuple ``(a, b)``."""
        return (self.a, self.b)

    def contains_value(self, v: int) -> bool:
        """Return True if ``a == v`` or ``b == v``."""
        return self.a == v or self.b == v

    def other_value(self, v: int) -> int:
        """Given one end value, return the other end.

        For doubles, returns the same value.

        Args:
            v: One of the tile's pip values.

        Returns:
            The other pip value on the tile.

        Raises:
            ValueError: If ``v`` is not one of the tile's values.
        """
        if v == self.a:
            return self.b
        if v == self.b:
            return self.a
        raise ValueError(f"Value {v} not in tile {self}")

    def pip_count(self) -> int:
        """Return the total pip count (sum of both ends)."""
        return self.a + self.b

    def __str__(self) -> str:
        return f"[{self.a}|{self.b}]"

    def __repr__(self) -> str:
        return f"Tile({self.a}, {self.b})"


@dataclass(frozen=True)
class OrientedTile:
    """A tile as laid on the board, with its left and right pips fixed.

    Attributes:
        left: The pip facing the left end of the chain.
        right: The pip facing the right end of the chain.
    """

    left: int
    right: int

    def __post_init__(self) -> None:
        if not (0 <= self.left <= 6 and 0 <= self.right <= 6):
            raise ValueError(f"Invalid tile: ({self.left}, {self.right})")

    @classmethod
    def from_tile(cls, tile: Tile) -> OrientedTile:
        """Lay a tile as-is (lower pip on the left)."""
        return cls(*tile.values())

    @property
    def tile(self) -> Tile:
        """The underlying tile identity, independent of orientation."""
        return Tile.of(self.left, self.right)

    def __str__(self) -> str:
        return f"[{self.left}|{self.right}]"


def create_tile_set() -> tuple[Tile, ...]:
    """Enumerate the double-six set in deterministic order.

    Tiles come out as ``(0,0), (0,1), ..., (0,6), (1,1), ..., (6,6)``.

    Returns:
        A tuple of the 28 tiles where ``0 <= a <= b <= 6``.
    """
    return tuple(Tile(a, b) for a in range(7) for b in range(a, 7))


def generate_full_set() -> frozenset[Tile]:
    """Generate the complete double-six domino set (28 tiles).

    Returns:
        A frozenset containing all 28 tiles where ``0 <= a <= b <= 6``.
    """
    return frozenset(create_tile_set())


def pip_total(tiles: Iterable[Tile]) -> int:
    """Return the sum of every pip on the given tiles."""
    return sum(tile.pip_count() for tile in tiles)
