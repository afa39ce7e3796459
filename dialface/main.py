#!/usr/bin/env python3
# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
DialFace - Main Application.
Opens a window and feeds its events to the face engine.
"""

import argparse
import logging
import signal
import sys
import time
from pathlib import Path
from typing import Callable, Optional, Tuple

import pygame

from .clock_source import SystemClockSource
from .config import VALID_LOG_LEVELS, DialFaceConfig, load_config, save_config, validate_config
from .engine import FaceEngine
from .events import (
    AmbientModeChanged,
    CapabilitiesChanged,
    SurfaceSizeChanged,
    TimeTick,
    TimeZoneChanged,
    VisibilityChanged,
    WindowInsetsApplied,
)
from .interfaces import ClockSource, Surface
from .models import RenderMode, VisibilityState
from .scheduler import TickScheduler, wall_clock_ms
from .surface import PygameSurface
from .timers import PygameTimerFacility

# Initialize logging early
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)
logger = logging.getLogger(__name__)

TIME_TICK_INTERVAL_MS = 60 * 1000


def setup_file_logging(log_dir: str) -> None:
    """Set up file logging in addition to console."""
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(log_path / 'dialface.log')
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))
    logging.getLogger().addHandler(file_handler)


def local_utc_offset() -> int:
    """Current local UTC offset in seconds, after re-reading TZ."""
    if hasattr(time, 'tzset'):
        time.tzset()
    return time.localtime().tm_gmtoff


class DialFaceApp:
    """Main DialFace application."""

    def __init__(self, config: DialFaceConfig, start_ambient: bool = False):
        """
        Initialize DialFace.

        Args:
            config: Loaded configuration.
            start_ambient: Start in ambient mode instead of interactive.
        """
        self.config = config
        self.start_ambient = start_ambient
        self.engine: Optional[FaceEngine] = None
        self.timer: Optional[PygameTimerFacility] = None
        self.time_ticker: Optional[TickScheduler] = None
        self._surface: Optional[Surface] = None
        # With a forced start mode, focus changes must not undo it
        self._follow_focus = not start_ambient
        self._utc_offset = local_utc_offset()
        self._running = False

        # Set up signal handlers
        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

    def _signal_handler(self, signum, frame):
        """Handle shutdown signals."""
        logger.info(f"Received signal {signum}, initiating shutdown...")
        self.stop()

    def _open_window(self) -> pygame.Surface:
        display = self.config.display
        flags = pygame.FULLSCREEN if display.fullscreen else pygame.RESIZABLE
        window = pygame.display.set_mode((display.width, display.height), flags)
        pygame.display.set_caption("DialFace")
        return window

    def _init_engine(
        self,
        surface: Surface,
        clock: ClockSource,
        timer: PygameTimerFacility,
        size: Tuple[int, int],
        clock_ms: Callable[[], int] = wall_clock_ms,
    ) -> None:
        """Build the engine and minute ticker and send the initial window state."""
        self.timer = timer
        self._surface = surface
        self.engine = FaceEngine(
            surface=surface,
            clock=clock,
            timer=timer,
            config=self.config,
            clock_ms=clock_ms,
        )
        self.time_ticker = TickScheduler(
            timer,
            self._on_time_tick,
            interval_ms=TIME_TICK_INTERVAL_MS,
            clock_ms=clock_ms,
            name="time tick",
        )

        width, height = size
        self.engine.dispatch(WindowInsetsApplied(is_round=self.config.display.round))
        self.engine.dispatch(CapabilitiesChanged(low_bit_ambient=self.config.display.low_bit_ambient))
        self.engine.dispatch(SurfaceSizeChanged(width, height))
        if not self._follow_focus:
            self.engine.dispatch(AmbientModeChanged(True))

    def _set_visible(self, visible: bool) -> None:
        self.engine.dispatch(VisibilityChanged(visible))
        # No host timer may stay armed while the face is hidden
        self.time_ticker.update(self.engine.visibility is VisibilityState.VISIBLE)

    def _on_time_tick(self) -> None:
        if self.engine.is_listening_for_time_zone:
            offset = local_utc_offset()
            if offset != self._utc_offset:
                self._utc_offset = offset
                self.engine.dispatch(TimeZoneChanged())
        self.engine.dispatch(TimeTick())

    def _handle_event(self, event: pygame.event.Event) -> None:
        """Map one pygame event onto face notifications."""
        if self.timer.handle_event(event):
            return

        if event.type == pygame.QUIT:
            self.stop()
        elif event.type in (pygame.WINDOWSHOWN, pygame.WINDOWRESTORED):
            self._set_visible(True)
        elif event.type in (pygame.WINDOWHIDDEN, pygame.WINDOWMINIMIZED):
            self._set_visible(False)
        elif event.type in (pygame.WINDOWFOCUSLOST, pygame.WINDOWFOCUSGAINED):
            if self._follow_focus:
                self.engine.dispatch(AmbientModeChanged(event.type == pygame.WINDOWFOCUSLOST))
        elif event.type == pygame.WINDOWSIZECHANGED:
            self._surface.target = pygame.display.get_surface()
            self.engine.dispatch(SurfaceSizeChanged(event.x, event.y))
        elif event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_ESCAPE, pygame.K_q):
                self.stop()
            elif event.key == pygame.K_a:
                interactive = self.engine.render_mode is RenderMode.INTERACTIVE
                self.engine.dispatch(AmbientModeChanged(interactive))

    def run(self) -> int:
        """Run the event loop until quit. Returns a process exit code."""
        try:
            pygame.init()
            window = self._open_window()
        except pygame.error as e:
            logger.error(f"Failed to open display: {e}")
            return 1

        self._init_engine(
            PygameSurface(window),
            SystemClockSource(self.config.clock.timezone),
            PygameTimerFacility(),
            window.get_size(),
        )
        self._set_visible(True)
        self._running = True
        logger.info("DialFace running")

        try:
            while self._running:
                frames_before = self.engine.frame_count
                for event in [pygame.event.wait(250)] + pygame.event.get():
                    if event.type == pygame.NOEVENT:
                        continue
                    self._handle_event(event)
                if self.engine.frame_count != frames_before:
                    pygame.display.flip()
        finally:
            self.cleanup()
        return 0

    def stop(self) -> None:
        """Request the event loop to exit."""
        self._running = False

    def cleanup(self) -> None:
        """Stop timers and shut pygame down."""
        logger.info("Shutting down...")
        if self.time_ticker:
            self.time_ticker.stop()
        if self.engine:
            self.engine.destroy()
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="DialFace - digital clock glyphs around a dial",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Keys:
  a         Toggle ambient mode
  q, Esc    Quit

The window enters ambient mode when it loses focus, unless started with
--ambient.
        """
    )
    parser.add_argument("--config", "-c", help="Path to config.yaml")
    parser.add_argument("--width", type=int, help="Window width in pixels")
    parser.add_argument("--height", type=int, help="Window height in pixels")
    parser.add_argument("--square", action="store_true", help="Use the square-screen text size")
    parser.add_argument("--ambient", action="store_true", help="Start in ambient mode")
    parser.add_argument("--low-bit", action="store_true", help="Disable anti-aliasing in ambient mode")
    parser.add_argument("--show-seconds", action="store_true", help="Show the seconds glyph")
    parser.add_argument("--timezone", help="IANA time zone id (default: local time)")
    parser.add_argument("--log-dir", help="Also write logs to this directory")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--write-config", metavar="PATH",
                        help="Save the effective configuration to PATH and exit")
    return parser


def apply_overrides(config: DialFaceConfig, args: argparse.Namespace) -> DialFaceConfig:
    """Apply command-line flags on top of the loaded configuration."""
    if args.width:
        config.display.width = args.width
    if args.height:
        config.display.height = args.height
    if args.square:
        config.display.round = False
    if args.low_bit:
        config.display.low_bit_ambient = True
    if args.show_seconds:
        config.clock.show_seconds = True
    if args.timezone:
        config.clock.timezone = args.timezone
    if args.log_dir:
        config.logging.directory = args.log_dir
    if args.debug:
        config.logging.level = "DEBUG"
    return config


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    config = apply_overrides(load_config(args.config), args)

    level = str(config.logging.level).upper()
    if level in VALID_LOG_LEVELS:
        logging.getLogger().setLevel(level)
    if config.logging.directory:
        setup_file_logging(config.logging.directory)

    errors = validate_config(config)
    for error in errors:
        logger.warning(f"Config warning: {error}")

    if args.write_config:
        save_config(config, args.write_config)
        return 0

    app = DialFaceApp(config, start_ambient=args.ambient)
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
