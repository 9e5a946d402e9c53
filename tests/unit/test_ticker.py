"""
Unit tests for elapsed-time tickers.
"""
import asyncio

import pytest

from minesweeper import (
    AsyncioTicker,
    GameSession,
    GameState,
    ManualTicker,
    RevealResult,
)


class TestManualTicker:
    """Test the owner-driven ticker."""

    def test_not_running_before_start(self) -> None:
        """A new ticker is idle."""
        ticker = ManualTicker()
        assert ticker.running is False
        assert ticker.advance(2) == 0

    def test_advance_fires_once_per_second(self) -> None:
        """advance(n) delivers n ticks."""
        ticks = []
        ticker = ManualTicker()
        ticker.start(lambda: ticks.append(1))
        assert ticker.advance(3) == 3
        assert len(ticks) == 3

    def test_cancel_is_idempotent(self) -> None:
        """Cancelling twice, or before start, is harmless."""
        ticker = ManualTicker()
        ticker.cancel()
        ticker.start(lambda: None)
        ticker.cancel()
        ticker.cancel()
        assert ticker.running is False

    def test_restart_replaces_callback(self) -> None:
        """Starting again does not leave the old callback running."""
        first, second = [], []
        ticker = ManualTicker()
        ticker.start(lambda: first.append(1))
        ticker.start(lambda: second.append(1))
        ticker.advance(2)
        assert first == []
        assert len(second) == 2

    def test_callback_cancelling_stops_advance(self) -> None:
        """A callback that cancels stops the remaining ticks."""
        ticks = []
        ticker = ManualTicker()

        def on_tick() -> None:
            ticks.append(1)
            ticker.cancel()

        ticker.start(on_tick)
        assert ticker.advance(5) == 1
        assert len(ticks) == 1


class TestAsyncioTicker:
    """Test the event-loop ticker."""

    def test_fires_repeatedly_until_cancelled(self) -> None:
        """Ticks arrive on the loop and stop after cancel."""
        ticks = []

        async def run() -> None:
            ticker = AsyncioTicker(interval=0.01)
            ticker.start(lambda: ticks.append(1))
            await asyncio.sleep(0.1)
            ticker.cancel()
            count = len(ticks)
            await asyncio.sleep(0.05)
            assert len(ticks) == count
            assert ticker.running is False

        asyncio.run(run())
        assert len(ticks) >= 2

    def test_cancel_before_start_is_harmless(self) -> None:
        """Cancelling an idle ticker does nothing."""
        ticker = AsyncioTicker()
        ticker.cancel()
        assert ticker.running is False

    def test_start_without_loop_leaves_ticker_idle(self) -> None:
        """Starting outside an event loop fails and schedules nothing."""
        ticker = AsyncioTicker()
        with pytest.raises(RuntimeError):
            ticker.start(lambda: None)
        assert ticker.running is False

    def test_session_without_loop_is_not_half_started(self) -> None:
        """A failed initialize leaves the session unstarted."""
        session = GameSession(ticker=AsyncioTicker(), autostart=False)
        with pytest.raises(RuntimeError):
            session.initialize()
        assert session.started is False
        assert session.on_cell_activate(0, 0) == RevealResult.IGNORED
        assert session.snapshot().revealed_count == 0

    def test_restart_keeps_a_single_timer(self) -> None:
        """Re-initializing a running game leaves one timer scheduled."""
        ticks = []

        async def run() -> None:
            ticker = AsyncioTicker(interval=0.01)
            session = GameSession(ticker=ticker)
            session.subscribe(lambda snapshot: ticks.append(snapshot))
            await asyncio.sleep(0.03)
            session.initialize()
            session.initialize()
            assert ticker.running is True
            session.close()
            assert ticker.running is False
            count = len(ticks)
            await asyncio.sleep(0.05)
            assert len(ticks) == count
            assert session.elapsed_seconds == 0

        asyncio.run(run())

    def test_session_stops_ticker_on_loss(self) -> None:
        """A finished game leaves no timer scheduled."""

        async def run() -> None:
            ticker = AsyncioTicker(interval=0.01)
            session = GameSession(ticker=ticker)
            await asyncio.sleep(0.05)
            row, col = next(
                (cell.row, cell.col)
                for line in session.snapshot().board.cells
                for cell in line
                if cell.is_mine
            )
            session.on_cell_activate(row, col)
            assert session.state == GameState.LOST
            assert ticker.running is False
            elapsed = session.elapsed_seconds
            await asyncio.sleep(0.05)
            assert session.elapsed_seconds == elapsed
            assert elapsed >= 1

        asyncio.run(run())
