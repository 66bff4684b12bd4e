"""House clock in the local timezone.

Provides the current local time, with an optional offset from the system
clock and the ability to freeze time, and the house timezone name read
once from the system.
"""
from datetime import datetime, timedelta, timezone, tzinfo
from threading import RLock
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from ..core.errors import TimezoneUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE_FILE = "/etc/timezone"


class HouseClock:
    """Wall clock for the house, in its local timezone."""

    def __init__(
        self,
        start_time: Optional[datetime] = None,
        timezone_file: str = DEFAULT_TIMEZONE_FILE,
        timezone_name: Optional[str] = None,
        paused: bool = False,
    ):
        """Initialize the clock.

        Args:
            start_time: Initial time (default: current system time)
            timezone_file: File holding the house timezone name
            timezone_name: Timezone name, bypassing the timezone file
            paused: Whether to start frozen at start_time
        """
        self._lock = RLock()
        self._timezone_file = timezone_file
        self._timezone_name = timezone_name
        self._tzinfo: Optional[tzinfo] = None
        self._offset = timedelta(0)
        if start_time is not None:
            self._offset = start_time - datetime.now(timezone.utc)
        self._paused_at: Optional[datetime] = None
        if paused:
            self._paused_at = start_time or self._wall_now()

    def timezone_name(self) -> str:
        """Get the house timezone name, reading it on first access.

        Raises:
            TimezoneUnavailableError: The timezone file cannot be read
        """
        with self._lock:
            if not self._timezone_name:
                try:
                    with open(self._timezone_file, "r", encoding="utf-8") as f:
                        name = f.readline().strip()
                except OSError as e:
                    raise TimezoneUnavailableError(
                        f"cannot read timezone from {self._timezone_file}: {e}"
                    ) from e
                if not name:
                    raise TimezoneUnavailableError(f"{self._timezone_file} is empty")
                self._timezone_name = name
                logger.debug(f"Obtained house timezone: {name}")
            return self._timezone_name

    def tzinfo(self) -> tzinfo:
        """Get the house timezone."""
        with self._lock:
            if self._tzinfo is None:
                name = self.timezone_name()
                try:
                    self._tzinfo = ZoneInfo(name)
                except (ZoneInfoNotFoundError, ValueError) as e:
                    raise TimezoneUnavailableError(f"unknown timezone {name}") from e
            return self._tzinfo

    def _wall_now(self) -> datetime:
        return datetime.now(timezone.utc) + self._offset

    def now(self) -> datetime:
        """Get the current local time.

        Returns:
            Timezone-aware datetime in the house timezone
        """
        with self._lock:
            current = self._paused_at or self._wall_now()
            return current.astimezone(self.tzinfo())

    def set_time(self, new_time: datetime) -> None:
        """Jump to a specific time.

        Args:
            new_time: The time to jump to (timezone-aware)
        """
        with self._lock:
            self._offset = new_time - datetime.now(timezone.utc)
            if self._paused_at is not None:
                self._paused_at = new_time

    def pause(self) -> None:
        """Freeze the clock."""
        with self._lock:
            if self._paused_at is None:
                self._paused_at = self._wall_now()

    def resume(self) -> None:
        """Let the clock run again from where it was frozen."""
        with self._lock:
            if self._paused_at is not None:
                self._offset = self._paused_at - datetime.now(timezone.utc)
                self._paused_at = None

    def is_paused(self) -> bool:
        """Check if clock is frozen."""
        with self._lock:
            return self._paused_at is not None

    def __repr__(self) -> str:
        """String representation."""
        status = "paused" if self.is_paused() else "running"
        return f"HouseClock({self._timezone_name or self._timezone_file}, {status})"
