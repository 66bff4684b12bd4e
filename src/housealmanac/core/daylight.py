from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Sequence, Tuple
import logging

from ..model.almanac import AlmanacTable, DayTimePoint
from .dst import crosses, is_before
from .errors import InvalidDateError

logger = logging.getLogger(__name__)

ANCHOR_DAY = 15
DAYS_PER_MONTH = 30  # Interpolation treats every month as 30 days.
DST_SHIFT = 60


def _tdiv(n: int, d: int) -> int:
  # Integer division truncating toward zero.
  q = abs(n) // abs(d)
  return q if (n < 0) == (d < 0) else -q


@dataclass(frozen=True)
class DstAdjustment:
  """Shift of one anchor so both sides of a DST change use the same offset."""
  index: int
  marker: DayTimePoint

  def apply(self, lower: int, upper: int, month: int, day: int) -> Tuple[int, int]:
    # Slot 0 loses an hour (spring), slot 1 gains one (fall).
    shift = -DST_SHIFT if self.index == 0 else DST_SHIFT
    if is_before(self.marker, month, day):
      logger.debug("Day %d/%02d is before the DST change on %d/%02d", month + 1, day, self.marker.month, self.marker.day)
      return lower, upper + shift
    logger.debug("Day %d/%02d is after the DST change on %d/%02d", month + 1, day, self.marker.month, self.marker.day)
    return lower - shift, upper


def dst_adjustments(dst: Sequence[Optional[DayTimePoint]], lower_rel: int, upper_rel: int) -> list:
  """Candidate adjustments for an interval, in marker order."""
  return [DstAdjustment(i, m) for i, m in enumerate(dst) if crosses(m, lower_rel, upper_rel)]


def bracket(month: int, day: int) -> Tuple[int, int, int, int]:
  """Return (lower, upper, lower_rel, upper_rel) anchor months around a date.

  lower/upper index the table (0-11); the relative months may be -1
  (previous December) or 12 (next January).
  """
  if day > ANCHOR_DAY:
    if month >= 11:
      return month, 0, month, 12
    return month, month + 1, month, month + 1
  if month > 0:
    return month - 1, month, month - 1, month
  return 11, month, -1, month


def estimate(monthly: Sequence[DayTimePoint], month: int, day: int,
             dst: Sequence[Optional[DayTimePoint]] = (None, None)) -> Tuple[int, int]:
  """Estimate a time of day from twelve monthly anchors.

  Args:
    monthly: Twelve anchors, index 0 for January
    month: Zero-based month of the date
    day: Day of the month
    dst: The spring and fall DST markers

  Returns:
    (hour, minute)
  """
  if not 0 <= month < 12:
    raise InvalidDateError(f"month index {month} out of range")
  if not 1 <= day <= 31:
    raise InvalidDateError(f"day {day} out of range")

  if day == ANCHOR_DAY:
    return monthly[month].hour, monthly[month].minute

  m1c, m2c, m1r, m2r = bracket(month, day)
  time1 = monthly[m1c].minutes
  time2 = monthly[m2c].minutes

  # Only the first crossing counts.
  candidates = dst_adjustments(dst, m1r, m2r)
  if candidates:
    first = candidates[0]
    logger.debug("Interval [%d/15, %d/15] ([%d/15, %d/15]) crosses DST change on %d/%02d",
                 m1c + 1, m2c + 1, m1r, m2r, first.marker.month, first.marker.day)
    time1, time2 = first.apply(time1, time2, month, day)

  # Linear interpolation, divided only once at the end.
  a = time2 - time1
  b = DAYS_PER_MONTH * time1 - a * (m1r * DAYS_PER_MONTH + ANCHOR_DAY)
  result = _tdiv(a * (month * DAYS_PER_MONTH + (day - 1)) + b, DAYS_PER_MONTH)

  hour = _tdiv(result, 60)
  minute = result - hour * 60
  logger.debug("day = %d/%02d, time1 = %d/15 %d:%02d, time2 = %d/15 %d:%02d, a = %d, b = %d, result = %d:%02d",
               month + 1, day, m1c + 1, time1 // 60, time1 % 60, m2c + 1, time2 // 60, time2 % 60, a, b, hour, minute)
  return hour, minute


@dataclass
class Daylight:
  table: AlmanacTable

  def sunrise(self, month: int, day: int) -> Tuple[int, int]:
    return estimate(self.table.sunrises, month, day, self.table.dst)

  def sunset(self, month: int, day: int) -> Tuple[int, int]:
    return estimate(self.table.sunsets, month, day, self.table.dst)

  def sunrise_sunset(self, d: date, tz: Optional[tzinfo] = None) -> Tuple[datetime, datetime]:
    # Wall-clock arithmetic normalizes estimates that fall outside 0:00-23:59.
    midnight = datetime(d.year, d.month, d.day, tzinfo=tz)
    rh, rm = self.sunrise(d.month - 1, d.day)
    sh, sm = self.sunset(d.month - 1, d.day)
    return midnight + timedelta(hours=rh, minutes=rm), midnight + timedelta(hours=sh, minutes=sm)
