"""DST transition tests against monthly anchors.

Month numbers here are zero-based and relative to the current year: -1 is
December of the previous year and 12 is January of the next one.
"""
from typing import Optional

from ..model.almanac import DayTimePoint

ANCHOR_DAY = 15


def is_before(marker: Optional[DayTimePoint], month: int, day: int) -> bool:
  """True when (month, day) falls strictly before the marker's date."""
  if marker is None:
    return False
  marker_month = marker.month - 1
  if month != marker_month:
    return month < marker_month
  return day < marker.day


def crosses(marker: Optional[DayTimePoint], month_a: int, month_b: int) -> bool:
  """True when the marker sits between the anchors of month_a and month_b."""
  if marker is None:
    return False
  return is_before(marker, month_a, ANCHOR_DAY) != is_before(marker, month_b, ANCHOR_DAY)
