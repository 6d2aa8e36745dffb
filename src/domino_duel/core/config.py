"""Engine settings."""

from __future__ import annotations

from dataclasses import dataclass

from domino_duel.core.dealing import HAND_SIZE


@dataclass(frozen=True)
class EngineConfig:
    """Tunable settings for :class:`~domino_duel.core.engine.GameEngine`.

    Attributes:
        computer_delay: Seconds to wait before each computer step.
        hand_size: Tiles dealt to each seat (two hands must fit in 28).
        seed: Seed for the shuffle; None draws fresh entropy.
        end_blocked_games: End the game when the pool is empty and neither
            seat can move. When False, turns keep switching through passes.

    Raises:
        ValueError: On a negative delay or an impossible hand size.
    """

    computer_delay: float = 1.5
    hand_size: int = HAND_SIZE
    seed: int | None = None
    end_blocked_games: bool = True

    def __post_init__(self) -> None:
        if self.computer_delay < 0:
            raise ValueError(f"computer_delay must be >= 0, got {self.computer_delay}.")
        if not (1 <= self.hand_size <= 14):
            raise ValueError(f"hand_size must be in [1, 14], got {self.hand_size}.")
