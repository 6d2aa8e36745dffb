"""Text console for playing against the computer.

Usage::

    domino-duel --seed 7 --delay 0.5

Commands at the prompt: ``play 2-5 [left|right]``, ``draw``, ``pass``,
``new``, ``quit``.
"""

from __future__ import annotations

import argparse
import logging
import time
from collections.abc import Callable, Iterable

from domino_duel.core.board import Side
from domino_duel.core.config import EngineConfig
from domino_duel.core.engine import GameEngine, GameSnapshot, Outcome
from domino_duel.core.game_state import Seat, Status
from domino_duel.core.scheduler import ManualScheduler

logger = logging.getLogger(__name__)

HELP = "Commands: play A-B [left|right], draw, pass, new, quit"


def render(snapshot: GameSnapshot) -> str:
    """Format a snapshot as a few lines of text."""
    board = "".join(str(t) for t in snapshot.board) or "(empty)"
    hand = " ".join(f"{t}" for t in snapshot.human_hand) or "(none)"
    lines = [
        f"Board: {board}",
        f"Ends: {snapshot.left_end} / {snapshot.right_end}",
        f"Your hand: {hand}",
        f"Computer: {'[?|?] ' * snapshot.computer_hand_size}".rstrip()
        + f" ({snapshot.computer_hand_size})",
        f"Pool: {snapshot.pool_size}",
        f"Score: you {snapshot.scores[Seat.HUMAN]}"
        f" - computer {snapshot.scores[Seat.COMPUTER]}",
    ]
    if snapshot.status is Status.IN_PROGRESS:
        lines.append(f"Turn: {snapshot.turn.value}")
    return "\n".join(lines)


def run_console(
    engine: GameEngine,
    scheduler: ManualScheduler,
    commands: Iterable[str],
    out: Callable[[str], object] = print,
    sleep: Callable[[float], object] = time.sleep,
) -> None:
    """Drive *engine* from text *commands* until they run out or ``quit``.

    Computer steps queued on *scheduler* are run after each command, with
    *sleep* standing in for the thinking delay.
    """

    def show(outcome: Outcome) -> None:
        out(outcome.message)

    engine.add_listener(show)
    out(render(engine.start_new_game()))
    out(engine.get_state().message)
    out(HELP)

    for raw in commands:
        words = raw.strip().lower().split()
        if not words:
            continue
        verb, args = words[0], words[1:]

        if verb in ("quit", "exit", "q"):
            break
        if verb == "new":
            out(render(engine.start_new_game()))
            out(engine.get_state().message)
            continue
        if verb == "draw":
            engine.attempt_human_draw()
        elif verb == "pass":
            engine.attempt_human_pass()
        elif verb == "play" and args:
            side = None
            if len(args) > 1:
                try:
                    side = Side(args[1])
                except ValueError:
                    out(f"Unknown side {args[1]!r}. Use left or right.")
                    continue
            engine.attempt_human_play(args[0], side)
        else:
            out(HELP)
            continue

        while scheduler.pending():
            sleep(engine.config.computer_delay)
            scheduler.run_pending()
        out(render(engine.get_state()))


def _read_lines(prompt: str = "> ") -> Iterable[str]:
    while True:
        try:
            yield input(prompt)
        except EOFError:
            return


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="domino-duel", description="Play dominoes against the computer."
    )
    parser.add_argument("--seed", type=int, default=None, help="shuffle seed")
    parser.add_argument(
        "--delay",
        type=float,
        default=EngineConfig.computer_delay,
        help="seconds the computer waits before moving",
    )
    parser.add_argument(
        "--no-block-end",
        action="store_true",
        help="keep passing instead of ending a blocked game",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config = EngineConfig(
            computer_delay=args.delay,
            seed=args.seed,
            end_blocked_games=not args.no_block_end,
        )
    except ValueError as exc:
        logger.error("Invalid settings: %s", exc)
        return 2

    scheduler = ManualScheduler()
    engine = GameEngine(config=config, scheduler=scheduler)
    run_console(engine, scheduler, _read_lines())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
