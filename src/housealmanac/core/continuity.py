from typing import Optional, Sequence, Tuple

import numpy as np

from ..model.almanac import DayTimePoint
from .timebase import Timebase


def minutes_series(estimates: Sequence[Tuple[int, int]]) -> np.ndarray:
  return np.array([h * 60 + m for h, m in estimates], dtype=np.int64)


def daily_jumps(minutes: np.ndarray) -> np.ndarray:
  # jumps[i] is the change from day i-1 to day i; day 0 follows the last day.
  return minutes - np.roll(minutes, 1)


def dst_mask(dst: Sequence[Optional[DayTimePoint]], timebase: Optional[Timebase] = None) -> np.ndarray:
  """True for the days on which a DST change takes effect."""
  timebase = timebase or Timebase()
  changes = {(m.month - 1, m.day) for m in dst if m is not None}
  return np.array([d in changes for d in timebase.days()], dtype=bool)


def worst_jump(minutes: np.ndarray, dst: Sequence[Optional[DayTimePoint]] = (), timebase: Optional[Timebase] = None) -> Tuple[int, int]:
  """Largest day-to-day change outside DST change days.

  Returns:
    (index of the day, change in minutes)
  """
  jumps = np.abs(daily_jumps(minutes))
  jumps[dst_mask(dst, timebase)] = 0
  idx = int(np.argmax(jumps))
  return idx, int(jumps[idx])
