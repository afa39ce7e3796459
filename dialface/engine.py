# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Face engine - the mode/visibility state machine.
Consumes host notifications and decides when to redraw and what to draw.
"""

import logging
from functools import wraps
from typing import Callable, List, Optional

from .appearance import select_style
from .config import DialFaceConfig
from .events import (
    AmbientModeChanged,
    CapabilitiesChanged,
    FaceEvent,
    SurfaceSizeChanged,
    TimeTick,
    TimeZoneChanged,
    VisibilityChanged,
    WindowInsetsApplied,
)
from .interfaces import ClockSource, Surface, TimerFacility
from .models import (
    CapabilityFlags,
    DialGeometry,
    FaceState,
    GlyphPlacement,
    RenderMode,
    StyleSet,
    VisibilityState,
)
from .renderer import FaceRenderer
from .scheduler import TickScheduler, wall_clock_ms

logger = logging.getLogger(__name__)


def _unless_destroyed(handler: Callable) -> Callable:
    """Drop notifications that arrive after destroy()."""
    @wraps(handler)
    def wrapper(self, *args, **kwargs):
        if self._destroyed:
            logger.debug(f"Ignoring {handler.__name__} after destroy")
            return None
        return handler(self, *args, **kwargs)
    return wrapper


class FaceEngine:
    """
    Owns the face session: state machine, scheduler and render pipeline.

    States are HIDDEN, VISIBLE_INTERACTIVE and VISIBLE_AMBIENT. Only
    VISIBLE_INTERACTIVE runs the per-second scheduler; every notification
    that does not change the state it targets is a no-op.
    """

    def __init__(
        self,
        surface: Surface,
        clock: ClockSource,
        timer: TimerFacility,
        config: DialFaceConfig,
        clock_ms: Callable[[], int] = wall_clock_ms,
    ):
        """
        Initialize the engine in the HIDDEN state.

        Args:
            surface: Drawing target.
            clock: Clock source consulted once per frame.
            timer: One-shot timer facility for the scheduler.
            config: Theme, text and clock settings.
            clock_ms: Wall-clock milliseconds used to phase-align ticks.
        """
        self._config = config
        self._clock = clock
        self._renderer = FaceRenderer(surface)
        self._scheduler = TickScheduler(
            timer,
            self.invalidate,
            interval_ms=config.clock.interactive_update_rate_ms,
            clock_ms=clock_ms,
            name="interactive",
        )

        self._visibility = VisibilityState.HIDDEN
        self._mode = RenderMode.INTERACTIVE
        self._caps = CapabilityFlags(low_bit_ambient=config.display.low_bit_ambient)
        self._is_round = config.display.round
        self._geometry: Optional[DialGeometry] = None
        self._listening_for_time_zone = False
        self._destroyed = False
        self._frame_count = 0

        self._handlers = {
            VisibilityChanged: lambda e: self.on_visibility_changed(e.visible),
            AmbientModeChanged: lambda e: self.on_ambient_mode_changed(e.ambient),
            SurfaceSizeChanged: lambda e: self.on_surface_size_changed(e.width, e.height),
            CapabilitiesChanged: lambda e: self.on_capabilities_changed(e.low_bit_ambient),
            TimeZoneChanged: lambda e: self.on_time_zone_changed(e.zone_id),
            WindowInsetsApplied: lambda e: self.on_window_insets_applied(e.is_round),
            TimeTick: lambda e: self.on_time_tick(),
        }

    # State

    @property
    def state(self) -> FaceState:
        if self._visibility is VisibilityState.HIDDEN:
            return FaceState.HIDDEN
        if self._mode is RenderMode.AMBIENT:
            return FaceState.VISIBLE_AMBIENT
        return FaceState.VISIBLE_INTERACTIVE

    @property
    def render_mode(self) -> RenderMode:
        return self._mode

    @property
    def visibility(self) -> VisibilityState:
        return self._visibility

    @property
    def capabilities(self) -> CapabilityFlags:
        return self._caps

    @property
    def geometry(self) -> Optional[DialGeometry]:
        return self._geometry

    @property
    def scheduler(self) -> TickScheduler:
        return self._scheduler

    @property
    def frame_count(self) -> int:
        """Number of frames drawn so far."""
        return self._frame_count

    @property
    def is_listening_for_time_zone(self) -> bool:
        return self._listening_for_time_zone

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def current_style(self) -> StyleSet:
        text = self._config.text
        base_size = text.text_size_round if self._is_round else text.text_size
        return select_style(
            self._mode,
            self._caps,
            self._config.theme,
            text,
            base_size,
            show_seconds=self._config.clock.show_seconds,
        )

    # Notifications

    def dispatch(self, event: FaceEvent) -> None:
        """Route a tagged notification to its handler.

        Raises:
            TypeError: If the event is not one of the known variants.
        """
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unknown face event: {event!r}")
        handler(event)

    @_unless_destroyed
    def on_visibility_changed(self, visible: bool) -> None:
        visibility = VisibilityState.VISIBLE if visible else VisibilityState.HIDDEN
        if visibility is self._visibility:
            return

        self._visibility = visibility
        if visible:
            self._register_time_zone_listener()
            # Time zone may have changed while we weren't visible
            self._resync_clock()
        else:
            self._unregister_time_zone_listener()

        logger.info(f"Face state: {self.state.value}")

        # Whether the timer should be running depends on visibility and mode
        self._update_timer()
        if visible:
            self.invalidate()

    @_unless_destroyed
    def on_ambient_mode_changed(self, ambient: bool) -> None:
        mode = RenderMode.AMBIENT if ambient else RenderMode.INTERACTIVE
        if mode is self._mode:
            return

        self._mode = mode
        logger.info(f"Render mode: {mode.value} (face state: {self.state.value})")

        self.invalidate()
        self._update_timer()

    @_unless_destroyed
    def on_surface_size_changed(self, width: int, height: int) -> None:
        geometry = DialGeometry.from_surface(width, height)
        if geometry == self._geometry:
            return

        self._geometry = geometry
        logger.debug(f"Surface resized to {width}x{height}")
        self.invalidate()

    @_unless_destroyed
    def on_capabilities_changed(self, low_bit_ambient: bool) -> None:
        caps = CapabilityFlags(low_bit_ambient=low_bit_ambient)
        if caps == self._caps:
            return

        self._caps = caps
        logger.info(f"Display capabilities: low_bit_ambient={low_bit_ambient}")
        if self._mode is RenderMode.AMBIENT:
            self.invalidate()

    @_unless_destroyed
    def on_time_zone_changed(self, zone_id: Optional[str] = None) -> None:
        if not self._listening_for_time_zone:
            logger.debug("Time zone change ignored while hidden")
            return

        self._clock.set_time_zone(zone_id or self._config.clock.timezone)
        logger.info(f"Time zone changed: {zone_id or 'default'}")
        self.invalidate()

    @_unless_destroyed
    def on_window_insets_applied(self, is_round: bool) -> None:
        if is_round == self._is_round:
            return

        self._is_round = is_round
        logger.debug(f"Screen shape: {'round' if is_round else 'square'}")
        self.invalidate()

    @_unless_destroyed
    def on_time_tick(self) -> None:
        self.invalidate()

    # Drawing

    def invalidate(self) -> Optional[List[GlyphPlacement]]:
        """Draw one frame now if the face is visible.

        Returns:
            The placements drawn, or None if no frame was produced.
        """
        if self._destroyed or self._visibility is VisibilityState.HIDDEN:
            return None
        if self._geometry is None:
            logger.debug("No surface size yet, skipping frame")
            return None

        snapshot = self._clock.now()
        placements = self._renderer.draw(snapshot, self._geometry, self.current_style())
        self._frame_count += 1
        return placements

    # Lifecycle

    def destroy(self) -> None:
        """Stop all timers and listeners. The engine ignores later events."""
        if self._destroyed:
            return
        self._scheduler.stop()
        self._unregister_time_zone_listener()
        self._destroyed = True
        logger.info("Face engine destroyed")

    def _update_timer(self) -> None:
        self._scheduler.update(self.state is FaceState.VISIBLE_INTERACTIVE)

    def _resync_clock(self) -> None:
        self._clock.set_time_zone(self._config.clock.timezone)
        snapshot = self._clock.now()
        logger.debug(
            f"Clock resynchronized: {snapshot.hour:02d}:{snapshot.minute:02d}:{snapshot.second:02d}"
        )

    def _register_time_zone_listener(self) -> None:
        if self._listening_for_time_zone:
            return
        self._listening_for_time_zone = True
        logger.debug("Listening for time zone changes")

    def _unregister_time_zone_listener(self) -> None:
        if not self._listening_for_time_zone:
            return
        self._listening_for_time_zone = False
        logger.debug("Stopped listening for time zone changes")
