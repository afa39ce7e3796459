# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Collaborator interfaces the face engine is given by its host."""

from typing import Any, Callable, Optional, Protocol

from .models import Color, TimeSnapshot, Typeface

TimerHandle = Any


class Surface(Protocol):
    """Drawing target for one frame."""

    def draw_background(self, color: Color) -> None: ...

    def draw_text(self, text: str, x: float, y: float, color: Color,
                  size: float, typeface: Typeface, anti_alias: bool) -> None: ...

    def measure_text(self, text: str, size: float, typeface: Typeface) -> float: ...


class ClockSource(Protocol):
    """Wall-clock time in the current time zone."""

    def now(self) -> TimeSnapshot: ...

    def set_time_zone(self, zone_id: Optional[str]) -> None: ...


class TimerFacility(Protocol):
    """One-shot timers delivered on the caller's thread."""

    def schedule_once(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle: ...

    def cancel(self, handle: TimerHandle) -> None: ...
