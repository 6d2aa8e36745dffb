"""Shuffling and dealing the pool."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from domino_duel.core.tiles import Tile

HAND_SIZE = 7


def shuffle(tiles: Sequence[Tile], rng: np.random.Generator) -> tuple[Tile, ...]:
    """Return a uniformly random permutation of *tiles* (Fisher-Yates).

    Walks from the last index down to 1, swapping each position with a
    uniformly chosen index in ``[0, i]``. The input is not modified.

    Args:
        tiles: The tiles to shuffle.
        rng: Source of randomness; seed it for reproducible deals.

    Returns:
        The shuffled tiles as a new tuple.
    """
    order = list(tiles)
    for i in range(len(order) - 1, 0, -1):
        j = int(rng.integers(0, i + 1))
        order[i], order[j] = order[j], order[i]
    return tuple(order)


def deal(
    pool: Sequence[Tile],
    hand_size: int = HAND_SIZE,
) -> tuple[tuple[Tile, ...], tuple[Tile, ...], tuple[Tile, ...]]:
    """Deal two hands from the end of a shuffled pool.

    Tiles are popped one at a time from the end, alternating human then
    computer, ``hand_size`` times each.

    Args:
        pool: The shuffled pool.
        hand_size: Tiles per hand.

    Returns:
        ``(human_hand, computer_hand, remaining_pool)``.

    Raises:
        ValueError: If the pool cannot cover both hands.
    """
    if len(pool) < 2 * hand_size:
        raise ValueError(
            f"Pool of {len(pool)} tiles cannot deal two hands of {hand_size}."
        )
    remaining = list(pool)
    human: list[Tile] = []
    computer: list[Tile] = []
    for _ in range(hand_size):
        human.append(remaining.pop())
        computer.append(remaining.pop())
    return tuple(human), tuple(computer), tuple(remaining)
