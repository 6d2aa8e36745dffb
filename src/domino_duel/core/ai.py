"""Move selection for the computer seat.

The heuristic is deliberately shallow: dump the heaviest playable tile.
There is no lookahead and no attempt to block the opponent.
"""

from __future__ import annotations

from domino_duel.core.board import Board, Side
from domino_duel.core.game_state import GameState, Seat
from domino_duel.core.tiles import Tile


def choose_side(board: Board, tile: Tile) -> Side:
    """Pick the end to lay *tile* on.

    When both ends accept the tile, prefer the end with the higher value
    (left on a tie). An empty board always takes the tile on the left.

    Raises:
        ValueError: If the tile fits neither end.
    """
    sides = board.playable_sides(tile)
    if not sides:
        raise ValueError(f"Tile {tile} fits neither end of {board}.")
    if len(sides) == 1 or board.is_empty():
        return sides[0]
    assert board.left_end is not None and board.right_end is not None
    return Side.LEFT if board.left_end >= board.right_end else Side.RIGHT


def choose_move(state: GameState, seat: Seat = Seat.COMPUTER) -> tuple[Tile, Side] | None:
    """Return the tile and side *seat* should play, or None if it cannot.

    Picks the playable tile with the highest pip count. ``sorted`` is
    stable, so equally heavy tiles keep their hand order and the first
    one wins.
    """
    playable = state.playable_tiles(seat)
    if not playable:
        return None
    ranked = sorted(playable, key=lambda t: t.pip_count(), reverse=True)
    tile = ranked[0]
    return tile, choose_side(state.board, tile)
