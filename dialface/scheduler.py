# Copyright (c) 2025-2026 Luc Vincent. All Rights Reserved.
"""
Phase-aligned tick scheduler for DialFace.
Requests one redraw per interval, locked to wall-clock interval boundaries.
"""

import logging
import time
from typing import Callable, Optional

from .interfaces import TimerFacility, TimerHandle

logger = logging.getLogger(__name__)


def wall_clock_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


class TickScheduler:
    """
    Fires ``on_tick`` on every wall-clock interval boundary while running.

    Each rearm computes its delay from the current clock rather than from the
    previous fire, so late callbacks and skipped wake-ups never accumulate
    drift. At most one timer is pending at any time.
    """

    def __init__(
        self,
        timer: TimerFacility,
        on_tick: Callable[[], None],
        interval_ms: int = 1000,
        clock_ms: Callable[[], int] = wall_clock_ms,
        name: str = "tick",
    ):
        """
        Initialize the scheduler.

        Args:
            timer: One-shot timer facility.
            on_tick: Called once per fire, before rearming.
            interval_ms: Boundary spacing in milliseconds.
            clock_ms: Wall-clock source in milliseconds.
            name: Label used in log messages.
        """
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")

        self._timer = timer
        self._on_tick = on_tick
        self._interval_ms = interval_ms
        self._clock_ms = clock_ms
        self._name = name
        self._handle: Optional[TimerHandle] = None
        self._running = False

    @property
    def interval_ms(self) -> int:
        return self._interval_ms

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_armed(self) -> bool:
        """True while a timer is pending."""
        return self._handle is not None

    def next_delay_ms(self, now_ms: int) -> int:
        """Delay from ``now_ms`` to the next interval boundary (never zero)."""
        return self._interval_ms - (now_ms % self._interval_ms)

    def start(self) -> None:
        """Start ticking; a no-op if already running."""
        if self._running:
            return
        self._running = True
        logger.debug(f"{self._name} scheduler started")
        self._arm()

    def stop(self) -> None:
        """Stop ticking and cancel the pending timer, if any."""
        self._running = False
        self._cancel()

    def update(self, should_run: bool) -> None:
        """Start or stop to match ``should_run``."""
        if should_run:
            self.start()
        else:
            self.stop()

    def _arm(self) -> None:
        self._cancel()
        delay = self.next_delay_ms(self._clock_ms())
        self._handle = self._timer.schedule_once(delay, self._fire)
        logger.debug(f"{self._name} timer armed for {delay} ms")

    def _cancel(self) -> None:
        if self._handle is None:
            return
        handle = self._handle
        self._handle = None
        self._timer.cancel(handle)
        logger.debug(f"{self._name} timer cancelled")

    def _fire(self) -> None:
        self._handle = None
        if not self._running:
            return
        try:
            self._on_tick()
        finally:
            # on_tick may have stopped us, or raised
            if self._running and self._handle is None:
                self._arm()
