"""
Elapsed-time tickers for a game session.

A ticker calls its callback once per elapsed second until cancelled.
Cancelling is always safe, including on a ticker that never started.
"""
import asyncio
from abc import ABC, abstractmethod
from typing import Callable, Optional

TickCallback = Callable[[], None]


# ============================================================================
# Ticker Interface
# ============================================================================

class Ticker(ABC):
    """Abstract base class for cancellable repeating timers."""

    def __init__(self) -> None:
        self._callback: Optional[TickCallback] = None

    @property
    def running(self) -> bool:
        """Check if the ticker will fire again."""
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        """
        Start firing ``callback`` once per second.

        A running ticker is cancelled first, so at most one timer is
        ever active.
        """
        self.cancel()
        self._schedule()
        self._callback = callback

    def cancel(self) -> None:
        """Stop the ticker. Does nothing if it is not running."""
        self._unschedule()
        self._callback = None

    @abstractmethod
    def _schedule(self) -> None:
        """Arrange for the next tick."""
        pass

    @abstractmethod
    def _unschedule(self) -> None:
        """Drop any pending tick."""
        pass


# ============================================================================
# Implementations
# ============================================================================

class ManualTicker(Ticker):
    """
    Ticker driven by its owner.

    Seconds pass only when ``advance`` is called, which keeps tests
    deterministic and lets a blocking terminal loop catch up on
    wall-clock time between commands.
    """

    def advance(self, seconds: int = 1) -> int:
        """
        Fire the callback once per second while the ticker runs.

        Returns:
            Number of ticks delivered.
        """
        fired = 0
        for _ in range(seconds):
            if self._callback is None:
                break
            self._callback()
            fired += 1
        return fired

    def _schedule(self) -> None:
        pass

    def _unschedule(self) -> None:
        pass


class AsyncioTicker(Ticker):
    """Ticker backed by ``loop.call_later`` on the running event loop."""

    def __init__(
        self,
        interval: float = 1.0,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        """
        Initialize the ticker.

        Args:
            interval: Seconds between ticks.
            loop: Event loop to schedule on; defaults to the running loop
                at ``start`` time.
        """
        super().__init__()
        self.interval = interval
        self._loop = loop
        self._handle: Optional[asyncio.TimerHandle] = None

    def _schedule(self) -> None:
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self.interval, self._fire)

    def _unschedule(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        callback = self._callback
        if callback is None:
            return
        callback()
        # The callback may have cancelled or restarted the ticker.
        if self._callback is callback and self._handle is None:
            self._schedule()
