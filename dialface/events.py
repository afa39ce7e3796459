# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""Notifications delivered to the face engine by its host."""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class VisibilityChanged:
    visible: bool


@dataclass(frozen=True)
class AmbientModeChanged:
    ambient: bool


@dataclass(frozen=True)
class SurfaceSizeChanged:
    width: int
    height: int


@dataclass(frozen=True)
class CapabilitiesChanged:
    low_bit_ambient: bool


@dataclass(frozen=True)
class TimeZoneChanged:
    """The host's time zone changed; None means re-read the default zone."""
    zone_id: Optional[str] = None


@dataclass(frozen=True)
class WindowInsetsApplied:
    """Screen shape became known; round screens use the larger text size."""
    is_round: bool


@dataclass(frozen=True)
class TimeTick:
    """Once-a-minute tick from the host."""


FaceEvent = Union[
    VisibilityChanged,
    AmbientModeChanged,
    SurfaceSizeChanged,
    CapabilitiesChanged,
    TimeZoneChanged,
    WindowInsetsApplied,
    TimeTick,
]
