"""Tests for the deferred-call schedulers and engine settings."""

from __future__ import annotations

import asyncio

import pytest

from domino_duel.core.config import EngineConfig
from domino_duel.core.scheduler import AsyncioScheduler, ManualScheduler


class TestManualScheduler:
    """Tests for the host-driven queue."""

    def test_runs_in_order(self) -> None:
        scheduler = ManualScheduler()
        calls: list[int] = []
        scheduler.schedule(1.0, lambda: calls.append(1))
        scheduler.schedule(0.5, lambda: calls.append(2))
        assert scheduler.pending() == 2
        assert scheduler.run_pending() == 2
        assert calls == [1, 2]
        assert scheduler.pending() == 0

    def test_cancelled_calls_skipped(self) -> None:
        scheduler = ManualScheduler()
        calls: list[str] = []
        handle = scheduler.schedule(1.0, lambda: calls.append("x"))
        handle.cancel()
        assert scheduler.pending() == 0
        assert scheduler.run_pending() == 0
        assert calls == []

    def test_run_pending_leaves_new_calls_queued(self) -> None:
        scheduler = ManualScheduler()
        calls: list[str] = []

        def first() -> None:
            calls.append("first")
            scheduler.schedule(1.0, lambda: calls.append("second"))

        scheduler.schedule(1.0, first)
        scheduler.run_pending()
        assert calls == ["first"]
        assert scheduler.pending() == 1
        assert scheduler.run_all() == 1
        assert calls == ["first", "second"]

    def test_run_all_limit(self) -> None:
        scheduler = ManualScheduler()

        def forever() -> None:
            scheduler.schedule(0.0, forever)

        scheduler.schedule(0.0, forever)
        with pytest.raises(RuntimeError, match="still busy"):
            scheduler.run_all(limit=10)


class TestAsyncioScheduler:
    """Tests for the event-loop wrapper."""

    def test_call_later_and_cancel(self) -> None:
        async def scenario() -> list[str]:
            calls: list[str] = []
            scheduler = AsyncioScheduler()
            scheduler.schedule(0.01, lambda: calls.append("ran"))
            handle = scheduler.schedule(0.01, lambda: calls.append("cancelled"))
            handle.cancel()
            await asyncio.sleep(0.05)
            return calls

        assert asyncio.run(scenario()) == ["ran"]

    def test_requires_loop_at_construction(self) -> None:
        with pytest.raises(RuntimeError):
            AsyncioScheduler()

    def test_explicit_loop(self) -> None:
        loop = asyncio.new_event_loop()
        try:
            calls: list[str] = []
            AsyncioScheduler(loop).schedule(0.0, lambda: calls.append("ran"))
            loop.run_until_complete(asyncio.sleep(0.02))
            assert calls == ["ran"]
        finally:
            loop.close()


class TestEngineConfig:
    """Tests for settings validation."""

    def test_defaults(self) -> None:
        config = EngineConfig()
        assert config.computer_delay == 1.5
        assert config.hand_size == 7
        assert config.seed is None
        assert config.end_blocked_games is True

    def test_negative_delay(self) -> None:
        with pytest.raises(ValueError, match="computer_delay"):
            EngineConfig(computer_delay=-1)

    @pytest.mark.parametrize("size", [0, 15])
    def test_bad_hand_size(self, size: int) -> None:
        with pytest.raises(ValueError, match="hand_size"):
            EngineConfig(hand_size=size)
