# Copyright (c) 2025 Luc Vincent. All Rights Reserved.
"""
Clock source - time zone aware wall-clock reads.
"""

import logging
from datetime import datetime, tzinfo
from typing import Callable, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .models import TimeSnapshot

logger = logging.getLogger(__name__)


class SystemClockSource:
    """
    Reads the system clock in a configurable time zone.

    A zone id of None means the host's local time.
    """

    def __init__(
        self,
        zone_id: Optional[str] = None,
        now_fn: Callable[[Optional[tzinfo]], datetime] = datetime.now,
    ):
        """
        Initialize the clock source.

        Args:
            zone_id: IANA time zone id (e.g., 'America/New_York'), or None.
            now_fn: Returns the current datetime for a tzinfo (or local time
                for None); replaceable for tests.
        """
        self._now_fn = now_fn
        self._zone_id: Optional[str] = None
        self._tz: Optional[tzinfo] = None
        self.set_time_zone(zone_id)

    @property
    def zone_id(self) -> Optional[str]:
        return self._zone_id

    def set_time_zone(self, zone_id: Optional[str]) -> None:
        """Switch time zone; unknown ids fall back to UTC."""
        if not zone_id:
            self._zone_id = None
            self._tz = None
            return

        try:
            self._tz = ZoneInfo(zone_id)
            self._zone_id = zone_id
        except (ZoneInfoNotFoundError, ValueError) as e:
            logger.warning(f"Invalid timezone '{zone_id}', using UTC: {e}")
            self._tz = ZoneInfo('UTC')
            self._zone_id = 'UTC'

    def now_datetime(self) -> datetime:
        return self._now_fn(self._tz)

    def now(self) -> TimeSnapshot:
        return TimeSnapshot.from_datetime(self.now_datetime())
