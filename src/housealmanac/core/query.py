"""Read-only views built on the daylight estimator."""
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from .daylight import Daylight
from .timebase import Timebase

ONE_DAY = timedelta(days=1)


def _local_date(now: datetime, delta: timedelta):
  # Elapsed time, not wall-clock time: a DST change does not shift the day.
  return (now.astimezone(timezone.utc) + delta).astimezone(now.tzinfo).date()


def _epoch(dt: datetime) -> int:
  return int(dt.timestamp())


def today(daylight: Daylight, now: datetime) -> Tuple[int, int]:
  """Sunrise and sunset of the local date of now, as epoch seconds."""
  sunrise, sunset = daylight.sunrise_sunset(now.date(), now.tzinfo)
  return _epoch(sunrise), _epoch(sunset)


def tonight(daylight: Daylight, now: datetime) -> Tuple[int, int]:
  """The sunset and the following sunrise around now, as epoch seconds.

  Once today's sunrise has passed, that is today's sunset and tomorrow's
  sunrise. Before it, yesterday's sunset and today's sunrise.
  """
  sunrise, sunset = daylight.sunrise_sunset(now.date(), now.tzinfo)
  if sunrise.timestamp() < now.timestamp():
    next_sunrise, _ = daylight.sunrise_sunset(_local_date(now, ONE_DAY), now.tzinfo)
    return _epoch(sunset), _epoch(next_sunrise)
  _, last_sunset = daylight.sunrise_sunset(_local_date(now, -ONE_DAY), now.tzinfo)
  return _epoch(last_sunset), _epoch(sunrise)


def format_entry(month: int, day: int, hour: int, minute: int) -> str:
  return f"{month + 1:02d}/{day:02d} {hour:02d}:{minute:02d}"


def full_year(daylight: Daylight, timebase: Optional[Timebase] = None) -> Tuple[List[str], List[str]]:
  """Every day of the fixed calendar as "MM/DD HH:MM" sunrise and sunset lists."""
  timebase = timebase or Timebase()
  sunrises, sunsets = [], []
  for month, day in timebase.days():
    sunrises.append(format_entry(month, day, *daylight.sunrise(month, day)))
    sunsets.append(format_entry(month, day, *daylight.sunset(month, day)))
  return sunrises, sunsets
