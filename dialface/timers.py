# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""One-shot timers delivered through the pygame event queue."""

import itertools
import logging
from typing import Callable, Dict, Optional, Tuple

import pygame

logger = logging.getLogger(__name__)


class PygameTimerFacility:
    """Runs one-shot callbacks from the pygame event loop.

    All pending callbacks share a single pygame timer event, armed for the
    earliest due time. The host forwards events to ``handle_event``, which
    runs every callback that has come due. Cancelling a handle guarantees its
    callback never runs, even if its event is already queued.
    """

    def __init__(
        self,
        event_type: Optional[int] = None,
        ticks_ms: Callable[[], int] = pygame.time.get_ticks,
    ):
        """Initialize the facility.

        Args:
            event_type: pygame event type to use; a new custom type if None.
            ticks_ms: Monotonic millisecond clock.
        """
        self.event_type = event_type if event_type is not None else pygame.event.custom_type()
        self._ticks_ms = ticks_ms
        self._ids = itertools.count(1)
        self._pending: Dict[int, Tuple[int, Callable[[], None]]] = {}

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def schedule_once(self, delay_ms: int, callback: Callable[[], None]) -> int:
        """Run ``callback`` once after ``delay_ms``; returns a cancel handle."""
        handle = next(self._ids)
        due = self._ticks_ms() + max(0, int(delay_ms))
        self._pending[handle] = (due, callback)
        self._rearm()
        return handle

    def cancel(self, handle: int) -> None:
        """Cancel a pending callback; unknown or fired handles are ignored."""
        if self._pending.pop(handle, None) is None:
            return
        self._rearm()

    def cancel_all(self) -> None:
        self._pending.clear()
        self._rearm()

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Run due callbacks if ``event`` is our timer event.

        Returns:
            True if the event was consumed.
        """
        if event.type != self.event_type:
            return False

        now = self._ticks_ms()
        due = sorted(
            (due_ms, handle) for handle, (due_ms, _) in self._pending.items() if due_ms <= now
        )
        for _, handle in due:
            # A callback may cancel another due callback
            entry = self._pending.pop(handle, None)
            if entry is not None:
                entry[1]()

        self._rearm()
        return True

    def _rearm(self) -> None:
        if not self._pending:
            pygame.time.set_timer(self.event_type, 0)
            pygame.event.clear(self.event_type)
            return

        next_due = min(due_ms for due_ms, _ in self._pending.values())
        # A zero delay disables a pygame timer
        delay = max(1, next_due - self._ticks_ms())
        pygame.time.set_timer(self.event_type, delay, loops=1)
